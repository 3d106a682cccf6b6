from __future__ import annotations

from pathlib import Path

import pytest

from povrounding import _config
from povrounding.settings import RoundingSettings

from helpers import L_SHAPE, SQUARE, polygon_points


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep tests away from ~/.povrounding."""
    config_dir = tmp_path / "config"
    monkeypatch.setattr(_config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(_config, "CONFIG_FILE", config_dir / "povrounding.cfg")
    return config_dir / "povrounding.cfg"


@pytest.fixture
def square_points():
    return polygon_points(SQUARE)


@pytest.fixture
def l_shape_points():
    return polygon_points(L_SHAPE)


@pytest.fixture
def settings() -> RoundingSettings:
    return RoundingSettings(depth=6.0, radius=1.0, factor=0.76, smoothness=4)
