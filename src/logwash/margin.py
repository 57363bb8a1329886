"""Author and relative-date margin rendering."""

from __future__ import annotations

import logging
import time
from typing import Callable

from rich.text import Text

from .duration import duration_field_width, format_duration
from .models import LogEntry, MarginSpec

logger = logging.getLogger(__name__)

COUNT_WIDTH = 3


def author_width(spec: MarginSpec, log_view: bool = True) -> int:
    """Columns left for the author after the separator, duration and fringe."""
    overhead = 1 + COUNT_WIDTH + duration_field_width(spec.unit_width)
    if log_view:
        overhead += 1
    return max(1, spec.total_width - overhead)


def render_margin(
    author: str | None,
    date: str | None,
    spec: MarginSpec | None = None,
    *,
    log_view: bool = True,
    now_fn: Callable[[], float] | None = None,
) -> Text:
    """Render the fixed-width margin for one line.

    Lines without an author get a blank margin so the column stays
    aligned. In the log view one trailing fringe column is reserved.
    """
    spec = spec or MarginSpec()
    if author is None:
        margin = Text(" " * (spec.total_width - 1), style="default")
        margin.append(" ", style="log.fringe")
        return margin

    width = author_width(spec, log_view)
    author_text = Text(author, style="log.author")
    author_text.truncate(width, overflow="ellipsis", pad=True)

    margin = Text()
    margin.append_text(author_text)
    margin.append(" ")
    margin.append(_render_age(date, spec, now_fn or time.time), style="log.date")
    if log_view:
        margin.append(" ", style="log.fringe")
    return margin


def render_entry_margin(
    entry: LogEntry,
    spec: MarginSpec | None = None,
    *,
    log_view: bool = True,
    now_fn: Callable[[], float] | None = None,
) -> Text:
    return render_margin(entry.author, entry.date, spec, log_view=log_view, now_fn=now_fn)


def _render_age(date: str | None, spec: MarginSpec, now_fn: Callable[[], float]) -> str:
    blank = " " * (COUNT_WIDTH + duration_field_width(spec.unit_width))
    if not date or not date.strip():
        return blank
    try:
        timestamp = float(date.strip())
    except ValueError:
        logger.debug("Unparsable author date %r; leaving duration blank.", date)
        return blank
    return format_duration(abs(int(now_fn() - timestamp)), spec.duration_spec, spec.unit_width)
