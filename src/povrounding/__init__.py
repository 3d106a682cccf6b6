"""povrounding – extrude 2D outlines into POV-Ray solids with rounded edges."""

from __future__ import annotations

from .errors import (
    DegenerateControlPointError,
    DiscontinuousCurveError,
    FontLookupError,
    MalformedOutlineError,
    RoundingError,
    SettingsError,
    UnsupportedPathSyntaxError,
)
from .rounding import RoundedSolid, round_outline
from .settings import RoundingSettings

__all__ = [
    "DegenerateControlPointError",
    "DiscontinuousCurveError",
    "FontLookupError",
    "MalformedOutlineError",
    "RoundedSolid",
    "RoundingError",
    "RoundingSettings",
    "SettingsError",
    "UnsupportedPathSyntaxError",
    "__version__",
    "round_outline",
]

__version__ = "0.1.0"
