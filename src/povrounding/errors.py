from __future__ import annotations

from typing import Sequence


def _format_point(location: Sequence[float]) -> str:
    return f"({float(location[0]):g}, {float(location[1]):g})"


class RoundingError(ValueError):
    """Base class for outlines the rounding engine cannot process."""


class MalformedOutlineError(RoundingError):
    """Raised when a typed point stream cannot be grouped into closed curves."""

    def __init__(self, message: str, index: int | None = None) -> None:
        self.index = index
        if index is not None:
            message = f"{message} (point {index})"
        super().__init__(message)


class DiscontinuousCurveError(RoundingError):
    """Raised when consecutive quads of a curve do not share an endpoint."""

    def __init__(self, end: Sequence[float], start: Sequence[float]) -> None:
        self.location = (float(end[0]), float(end[1]))
        super().__init__(
            f"Curve is discontinuous: quad ends at {_format_point(end)} "
            f"but the next quad starts at {_format_point(start)}."
        )


class DegenerateControlPointError(RoundingError):
    """Raised when two coincident points leave the offset direction undefined."""

    def __init__(self, location: Sequence[float]) -> None:
        self.location = (float(location[0]), float(location[1]))
        super().__init__(
            f"Cannot compute an outward normal at {_format_point(location)}: "
            "two control points coincide."
        )


class UnsupportedPathSyntaxError(RoundingError):
    """Raised when polygon or SVG path text does not match the supported grammar."""

    def __init__(self, message: str, offset: int) -> None:
        self.offset = offset
        super().__init__(f"{message} at index {offset}.")


class SettingsError(RoundingError):
    """Raised when rounding settings are out of range."""


class FontLookupError(LookupError):
    """Raised when a font or one of its glyphs cannot be found."""


__all__ = [
    "DegenerateControlPointError",
    "DiscontinuousCurveError",
    "FontLookupError",
    "MalformedOutlineError",
    "RoundingError",
    "SettingsError",
    "UnsupportedPathSyntaxError",
]
