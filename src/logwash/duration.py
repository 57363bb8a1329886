"""Relative duration formatting over a descending unit table."""

from __future__ import annotations

from collections.abc import Sequence

from .models import DEFAULT_DURATION_SPEC, DurationUnit


def format_duration(
    duration: float,
    spec: Sequence[DurationUnit] = DEFAULT_DURATION_SPEC,
    unit_width: int = 7,
) -> str:
    """Render *duration* seconds using the longest unit it fills at least once.

    With ``unit_width == 1`` the unit is its one-character abbreviation
    (``" 3d"``); otherwise the count is right-justified to three digits and
    followed by the unit word left-justified to ``unit_width``
    (``"  3 days   "``). Negative durations are shown as zero.
    """
    if not spec:
        raise ValueError("duration spec must not be empty")
    duration = max(0.0, float(duration))
    unit, rest = spec[0], spec[1:]
    ratio = duration / unit.seconds_per_unit
    if rest and ratio < 1:
        return format_duration(duration, rest, unit_width)

    count = round(ratio)
    if unit_width == 1:
        return f"{count:3d}{unit.abbreviation}"
    word = unit.singular if count == 1 else unit.plural
    return f"{count:3d} {word:<{unit_width}}"


def duration_field_width(unit_width: int) -> int:
    """Width of a rendered duration, not counting the three-digit count."""
    return 1 if unit_width == 1 else unit_width + 1
