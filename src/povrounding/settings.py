from __future__ import annotations

from dataclasses import dataclass, replace

from povrounding.errors import SettingsError

CIRCULAR_FACTOR = 0.55228475


@dataclass(frozen=True)
class RoundingSettings:
    """Controls the extrusion and the shape of the rounded edges."""

    depth: float = 6.0
    radius: float = 1.0
    factor: float = 0.76
    smoothness: int = 4
    skip_front: bool = False
    skip_back: bool = False
    extra_code: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "depth", float(self.depth))
        object.__setattr__(self, "radius", float(self.radius))
        object.__setattr__(self, "factor", float(self.factor))
        object.__setattr__(self, "smoothness", int(self.smoothness))
        for flag in ("skip_front", "skip_back"):
            if not isinstance(getattr(self, flag), bool):
                raise SettingsError(f"{flag} must be true or false, not {getattr(self, flag)!r}.")
        validate_settings(self)

    def with_overrides(self, **overrides: object) -> "RoundingSettings":
        values = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **values)


def validate_settings(settings: RoundingSettings) -> None:
    if not settings.depth > 0:
        raise SettingsError("depth must be positive.")
    if settings.radius < 0:
        raise SettingsError("radius must not be negative.")
    if 2 * settings.radius > settings.depth:
        raise SettingsError("depth must be at least twice the rounding radius.")
    if not 0.0 <= settings.factor <= 1.0:
        raise SettingsError("factor must be within [0, 1].")
    if settings.smoothness < 1:
        raise SettingsError("smoothness must be >= 1.")


__all__ = ["CIRCULAR_FACTOR", "RoundingSettings", "validate_settings"]
