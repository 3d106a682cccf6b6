from __future__ import annotations

import os
import sys
from functools import lru_cache
from pathlib import Path
from typing import Iterator, List, Sequence

from fontTools.pens.basePen import BasePen
from fontTools.pens.reverseContourPen import ReverseContourPen
from fontTools.pens.transformPen import TransformPen
from fontTools.ttLib import TTFont, TTLibError

from povrounding.errors import FontLookupError
from povrounding.rounding.points import TypedPoint

from .builder import OutlineBuilder

FONT_SUFFIXES = {".ttf", ".otf", ".ttc"}

_BOLD = 0x01
_ITALIC = 0x02


def font_directories() -> List[Path]:
    home = Path.home()
    dirs = [
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
        home / ".fonts",
        home / ".local" / "share" / "fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        home / "Library" / "Fonts",
    ]
    if sys.platform.startswith("win"):
        dirs.append(Path(os.environ.get("WINDIR", r"C:\Windows")) / "Fonts")
    extra = os.environ.get("POVROUNDING_FONT_PATH")
    if extra:
        dirs[:0] = [Path(p) for p in extra.split(os.pathsep) if p]
    return dirs


def _font_files(directories: Sequence[Path]) -> Iterator[Path]:
    for directory in directories:
        if not directory.is_dir():
            continue
        for path in sorted(directory.rglob("*")):
            if path.suffix.lower() in FONT_SUFFIXES and path.is_file():
                yield path


def _describe(path: Path) -> tuple[str, int] | None:
    """Return (family, style bits) of a font file, or None if it cannot be read."""

    try:
        font = TTFont(str(path), lazy=True, fontNumber=0)
    except (TTLibError, OSError):
        return None
    try:
        name = font["name"]
        family = name.getDebugName(16) or name.getDebugName(1)
        style = int(font["head"].macStyle) & (_BOLD | _ITALIC)
    except (KeyError, TTLibError):
        return None
    finally:
        font.close()
    if not family:
        return None
    return family, style


@lru_cache(maxsize=64)
def _find_font(family: str, style: int, directories: tuple[Path, ...]) -> Path | None:
    wanted = family.strip().casefold()
    for path in _font_files(directories):
        description = _describe(path)
        if description is None:
            continue
        found_family, found_style = description
        if found_family.casefold() == wanted and found_style == style:
            return path
    return None


def resolve_font(font: str | Path, bold: bool = False, italic: bool = False) -> Path:
    """Find a font file from a path or a family name and the requested style."""

    style = (_BOLD if bold else 0) | (_ITALIC if italic else 0)
    candidate = Path(font)
    if candidate.is_file():
        if not style:
            return candidate
        description = _describe(candidate)
        if description is not None and description[1] == style:
            return candidate
        if description is not None:
            found = _find_font(description[0], style, (candidate.parent,))
            if found is not None:
                return found
        raise FontLookupError(f"No {_style_name(style)} variant of {candidate} was found next to it.")

    if candidate.suffix.lower() in FONT_SUFFIXES:
        raise FontLookupError(f"Font file {candidate} does not exist.")

    found = _find_font(str(font), style, tuple(font_directories()))
    if found is None:
        raise FontLookupError(f"Font family '{font}' ({_style_name(style)}) is not installed.")
    return found


def _style_name(style: int) -> str:
    names = [label for bit, label in ((_BOLD, "bold"), (_ITALIC, "italic")) if style & bit]
    return " ".join(names) or "regular"


class TypedPointPen(BasePen):
    """fontTools pen that feeds glyph contours into an OutlineBuilder.

    Quadratic TrueType curves are elevated to cubics by ``BasePen``.
    """

    def __init__(self, glyphSet, builder: OutlineBuilder) -> None:
        super().__init__(glyphSet)
        self.builder = builder

    def _moveTo(self, pt) -> None:
        self.builder.move_to(pt)

    def _lineTo(self, pt) -> None:
        self.builder.line_to(pt)

    def _curveToOne(self, pt1, pt2, pt3) -> None:
        self.builder.curve_to(pt1, pt2, pt3)

    def _closePath(self) -> None:
        self.builder.close_figure()

    def _endPath(self) -> None:
        self.builder.close_figure()


def text_outline(
    text: str,
    font: str | Path,
    size: float = 64.0,
    bold: bool = False,
    italic: bool = False,
) -> List[TypedPoint]:
    """Outline a line (or lines) of text, centred on the origin with y pointing down.

    ``size`` is the em size in output units. Kerning is not applied.
    """

    if not text or not text.strip():
        raise ValueError("text must contain at least one visible character.")
    if size <= 0:
        raise ValueError("size must be positive.")

    font_path = resolve_font(font, bold=bold, italic=italic)
    try:
        tt = TTFont(str(font_path), fontNumber=0)
    except TTLibError as exc:
        raise FontLookupError(f"{font_path} is not a readable font: {exc}") from exc
    try:
        return _layout(tt, text, float(size))
    finally:
        tt.close()


def _layout(tt: TTFont, text: str, size: float) -> List[TypedPoint]:
    glyph_set = tt.getGlyphSet()
    cmap = tt.getBestCmap() or {}
    scale = size / float(tt["head"].unitsPerEm)
    hhea = tt["hhea"]
    ascent = float(hhea.ascent) * scale
    descent = -float(hhea.descent) * scale
    line_height = ascent + descent + float(hhea.lineGap) * scale
    # Outer contours must wind counter-clockwise once y is flipped.
    reverse = "CFF " in tt or "CFF2" in tt

    lines = text.split("\n")
    builder = OutlineBuilder()
    top = -(line_height * (len(lines) - 1) + ascent + descent) / 2.0
    for row, line in enumerate(lines):
        names = []
        for char in line:
            glyph_name = cmap.get(ord(char))
            if glyph_name is None:
                raise FontLookupError(f"Font has no glyph for {char!r}.")
            names.append(glyph_name)
        width = sum(glyph_set[name].width for name in names) * scale
        pen_x = -width / 2.0
        baseline = top + row * line_height + ascent
        for name in names:
            glyph = glyph_set[name]
            target = TypedPointPen(glyph_set, builder)
            if reverse:
                target = ReverseContourPen(target)
            glyph.draw(TransformPen(target, (scale, 0, 0, -scale, pen_x, baseline)))
            pen_x += glyph.width * scale

    points = builder.points()
    if not points:
        raise ValueError("text produced no outline.")
    return points


__all__ = ["TypedPointPen", "font_directories", "resolve_font", "text_outline"]
