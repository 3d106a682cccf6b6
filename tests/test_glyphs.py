from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from povrounding import round_outline
from povrounding.errors import FontLookupError
from povrounding.outline.glyphs import resolve_font, text_outline
from povrounding.rounding.segments import segment_curves


def _square_glyph():
    pen = TTGlyphPen(None)
    pen.moveTo((100, 0))
    pen.lineTo((100, 700))
    pen.lineTo((600, 700))
    pen.lineTo((600, 0))
    pen.closePath()
    return pen.glyph()


def build_font(path: Path, family: str = "Boxy", style: str = "Regular", mac_style: int = 0) -> Path:
    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder([".notdef", "A", "space"])
    fb.setupCharacterMap({ord("A"): "A", ord(" "): "space"})
    fb.setupGlyf({".notdef": TTGlyphPen(None).glyph(), "A": _square_glyph(), "space": TTGlyphPen(None).glyph()})
    fb.setupHorizontalMetrics({".notdef": (500, 0), "A": (700, 100), "space": (300, 0)})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": family, "styleName": style})
    fb.setupOS2(sTypoAscender=800, usWinAscent=800, usWinDescent=200)
    fb.setupPost()
    fb.font["head"].macStyle = mac_style
    fb.save(str(path))
    return path


@pytest.fixture
def font_file(tmp_path):
    return build_font(tmp_path / "Boxy-Regular.ttf")


def test_single_glyph_is_centred(font_file):
    points = text_outline("A", font_file, size=64)
    xy = np.array([p.location for p in points])
    assert xy[:, 0].min() == pytest.approx(-16.0)
    assert xy[:, 0].max() == pytest.approx(16.0)
    assert xy[:, 1].min() == pytest.approx(-25.6)
    assert xy[:, 1].max() == pytest.approx(19.2)
    assert points[-1].kind.closes


def test_glyph_rounds_with_convex_corners(font_file, settings):
    solid = round_outline(text_outline("A", font_file), settings, name="Letter")
    assert solid.quad_count == 4
    assert solid.convex_junctions == 4


def test_space_adds_advance_only(font_file):
    points = text_outline("A A", font_file, size=64)
    assert len(segment_curves(points)) == 2
    xy = np.array([p.location for p in points])
    assert xy[:, 0].max() - xy[:, 0].min() == pytest.approx((700 + 300 + 500) * 0.064)


def test_multiline_text(font_file):
    points = text_outline("A\nA", font_file, size=64)
    curves = segment_curves(points)
    assert len(curves) == 2
    assert curves[0].start[1] < curves[1].start[1]


def test_missing_glyph(font_file):
    with pytest.raises(FontLookupError):
        text_outline("B", font_file)


def test_blank_text(font_file):
    with pytest.raises(ValueError):
        text_outline("  ", font_file)


def test_bold_variant_must_exist(font_file):
    with pytest.raises(FontLookupError):
        resolve_font(font_file, bold=True)


def test_bold_variant_found_next_to_regular(tmp_path, font_file):
    bold = build_font(tmp_path / "Boxy-Bold.ttf", style="Bold", mac_style=1)
    assert resolve_font(font_file, bold=True) == bold


def test_family_lookup_from_font_path(tmp_path, monkeypatch):
    fonts = tmp_path / "fonts"
    fonts.mkdir()
    expected = build_font(fonts / "Boxy-Regular.ttf")
    monkeypatch.setenv("POVROUNDING_FONT_PATH", str(fonts))
    assert resolve_font("boxy") == expected


def test_unknown_family(tmp_path, monkeypatch):
    monkeypatch.setenv("POVROUNDING_FONT_PATH", str(tmp_path))
    with pytest.raises(FontLookupError):
        resolve_font("No Such Family Anywhere")


def test_missing_font_file(tmp_path):
    with pytest.raises(FontLookupError):
        resolve_font(tmp_path / "absent.ttf")


def test_corrupt_font_file(tmp_path):
    broken = tmp_path / "Broken.ttf"
    broken.write_bytes(b"this is not a font")
    with pytest.raises(FontLookupError, match="not a readable font"):
        text_outline("A", broken)
