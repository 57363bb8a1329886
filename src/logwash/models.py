"""Pydantic models for log entries, margin settings and wash results."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from rich.text import Text

from .constants import (
    DEFAULT_ABBREV,
    DEFAULT_CUTOFF_LENGTH,
    DEFAULT_GRAPH_GLYPHS,
    DEFAULT_INFINITE_LENGTH,
    DEFAULT_MARGIN_UNIT_WIDTH,
    DEFAULT_MARGIN_WIDTH,
)


class LogStyle(str, Enum):
    ONELINE = "oneline"
    LONG = "long"
    CHERRY = "cherry"
    MODULE = "module"
    REFLOG = "reflog"
    BISECT_VISUALIZE = "bisect_visualize"
    BISECT_LOG = "bisect_log"


class Signature(str, Enum):
    GOOD = "good"
    BAD = "bad"
    UNTRUSTED = "untrusted"
    NONE = "none"


class CherryMarker(str, Enum):
    EQUIVALENT = "equivalent"
    UNMATCHED = "unmatched"


class SideMarker(str, Enum):
    INCOMING = "incoming"
    OUTGOING = "outgoing"


class DurationUnit(BaseModel):
    model_config = ConfigDict(frozen=True)

    abbreviation: str = Field(..., min_length=1, max_length=1)
    singular: str = Field(..., min_length=1)
    plural: str = Field(..., min_length=1)
    seconds_per_unit: int = Field(..., ge=1)


DEFAULT_DURATION_SPEC: tuple[DurationUnit, ...] = (
    DurationUnit(abbreviation="Y", singular="year", plural="years", seconds_per_unit=round(60 * 60 * 24 * 365.2425)),
    DurationUnit(abbreviation="M", singular="month", plural="months", seconds_per_unit=round(60 * 60 * 24 * 30.436875)),
    DurationUnit(abbreviation="w", singular="week", plural="weeks", seconds_per_unit=60 * 60 * 24 * 7),
    DurationUnit(abbreviation="d", singular="day", plural="days", seconds_per_unit=60 * 60 * 24),
    DurationUnit(abbreviation="h", singular="hour", plural="hours", seconds_per_unit=60 * 60),
    DurationUnit(abbreviation="m", singular="minute", plural="minutes", seconds_per_unit=60),
    DurationUnit(abbreviation="s", singular="second", plural="seconds", seconds_per_unit=1),
)


class MarginSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_width: int = Field(default=DEFAULT_MARGIN_WIDTH, ge=8)
    unit_width: int = Field(default=DEFAULT_MARGIN_UNIT_WIDTH, ge=1)
    duration_spec: tuple[DurationUnit, ...] = DEFAULT_DURATION_SPEC

    @field_validator("duration_spec")
    @classmethod
    def _spec_descends_to_seconds(cls, value: tuple[DurationUnit, ...]) -> tuple[DurationUnit, ...]:
        if not value:
            raise ValueError("duration_spec must not be empty")
        weights = [unit.seconds_per_unit for unit in value]
        if any(later >= earlier for earlier, later in zip(weights, weights[1:])):
            raise ValueError("duration_spec must be strictly descending by seconds_per_unit")
        if weights[-1] != 1:
            raise ValueError("duration_spec must end with a 1-second unit")
        return value

    @model_validator(mode="after")
    def _unit_width_fits_names(self) -> "MarginSpec":
        if self.unit_width == 1:
            return self
        longest = max(max(len(unit.singular), len(unit.plural)) for unit in self.duration_spec)
        if self.unit_width < longest:
            raise ValueError(
                f"unit_width must be 1 or at least {longest} (the longest unit name)"
            )
        return self


class LogSettings(BaseModel):
    cutoff_length: int = Field(default=DEFAULT_CUTOFF_LENGTH, ge=1)
    infinite_length: int = Field(default=DEFAULT_INFINITE_LENGTH, ge=1)
    abbrev: int = Field(default=DEFAULT_ABBREV, ge=4, le=40)
    unicode_graph: bool = False
    graph_glyphs: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_GRAPH_GLYPHS))
    show_margin: bool = True
    margin: MarginSpec = Field(default_factory=MarginSpec)

    @field_validator("graph_glyphs")
    @classmethod
    def _single_character_glyphs(cls, value: dict[str, str]) -> dict[str, str]:
        for source, glyph in value.items():
            if len(source) != 1 or len(glyph) != 1:
                raise ValueError("graph_glyphs must map single characters to single characters")
        return value

    def glyph_table(self) -> dict[str, str] | None:
        return self.graph_glyphs if self.unicode_graph else None


class LogEntry(BaseModel):
    """One parsed history record."""

    model_config = ConfigDict(frozen=True)

    style: LogStyle
    hash: str | None = None
    message: str | None = None
    refs: str | None = None
    graph: str | None = None
    author: str | None = None
    date: str | None = None
    signature: Signature | None = None
    cherry_marker: CherryMarker | None = None
    side_marker: SideMarker | None = None
    reflog_selector: str | None = None
    reflog_subject: str | None = None


class WashedLine(BaseModel):
    """A single display line produced by a wash pass."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal["entry", "continuation", "passthrough", "more", "separator"]
    text: Text = Field(exclude=True)
    entry_hash: str | None = None

    @property
    def plain(self) -> str:
        return self.text.plain


class WashResult(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    style: LogStyle
    entries: list[LogEntry] = Field(default_factory=list)
    lines: list[WashedLine] = Field(default_factory=list)
    produced_count: int = 0
    cutoff: int | None = None
    show_more: bool = False

    def to_payload(self) -> dict[str, Any]:
        payload = self.model_dump(mode="json")
        payload["status"] = "success"
        payload["count"] = self.produced_count
        payload["lines"] = [
            {"kind": line.kind, "entry_hash": line.entry_hash, "text": line.plain}
            for line in self.lines
        ]
        return payload
