"""Core washer turning raw log output into entries and display lines."""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Collection
from dataclasses import dataclass, field
from typing import Callable

from rich.text import Text

from .ansi import normalize_ansi
from .constants import DEFAULT_ABBREV, SHOW_MORE_TEXT
from .errors import ErrorCode, LogWashError
from .grammar import Grammar, LineMatch, grammar_for
from .graph import translate_graph
from .models import LogEntry, LogSettings, LogStyle, Signature, WashedLine, WashResult
from .pagination import PaginationState
from .refs import format_ref_labels
from .reflog import decode_reflog_subject

logger = logging.getLogger(__name__)

SIGNATURE_STYLES = {
    Signature.GOOD: "log.signature.good",
    Signature.BAD: "log.signature.bad",
    Signature.UNTRUSTED: "log.signature.untrusted",
    Signature.NONE: "log.signature.none",
}


@dataclass
class _WashPass:
    """Cursor and counters owned by a single pass."""

    style: LogStyle
    grammar: Grammar
    texts: list[Text]
    state: PaginationState
    cursor: int = 0
    entries: list[LogEntry] = field(default_factory=list)
    lines: list[WashedLine] = field(default_factory=list)
    skipped: int = 0
    hash_width: int = DEFAULT_ABBREV

    @property
    def at_end(self) -> bool:
        return self.cursor >= len(self.texts)

    def current(self) -> Text:
        return self.texts[self.cursor]

    def emit(self, kind: str, text: Text, entry_hash: str | None = None) -> None:
        self.lines.append(WashedLine(kind=kind, text=text, entry_hash=entry_hash))


class LogWasher:
    """Parse one style of log output into :class:`LogEntry` records."""

    def __init__(
        self,
        settings: LogSettings | None = None,
        resolve_short_hash: Callable[[str], str] | None = None,
        remotes: Collection[str] = (),
    ) -> None:
        self.settings = settings or LogSettings()
        self._resolve_short_hash = resolve_short_hash or self._truncate_hash
        self._remotes = tuple(remotes)

    def wash(
        self,
        raw: str,
        style: LogStyle | str,
        *,
        cutoff: int | None = None,
        log_view: bool = True,
    ) -> WashResult:
        """Wash *raw* using the grammar for *style*.

        In the log view the pass stops after *cutoff* entries (default
        from settings) and ends with a show-more line when records beyond
        the cutoff were left unread. Outside the log view there is no
        cutoff.
        """
        started = time.perf_counter()
        grammar = grammar_for(style)
        texts = normalize_ansi(raw)
        if grammar.style is LogStyle.CHERRY:
            texts.reverse()

        if cutoff is not None and cutoff < 1:
            raise LogWashError(
                ErrorCode.INVALID_INPUT,
                f"Cutoff must be at least 1, got {cutoff}",
                "Pass a positive entry count.",
                {"cutoff": cutoff},
            )
        if log_view:
            cutoff = self.settings.cutoff_length if cutoff is None else cutoff
        else:
            cutoff = None
        state = PaginationState(cutoff=cutoff)
        state.reset()
        ctx = _WashPass(
            style=grammar.style,
            grammar=grammar,
            texts=texts,
            state=state,
            hash_width=self.settings.abbrev,
        )

        while not ctx.at_end:
            if state.exhausted:
                state.truncated = self._has_primary_record(ctx)
                logger.debug(
                    "Cutoff %s reached; %d remaining lines not washed.",
                    cutoff,
                    len(texts) - ctx.cursor,
                )
                break
            self._wash_line(ctx)

        if state.show_more:
            ctx.emit("more", Text(SHOW_MORE_TEXT, style="log.more"))
        elif ctx.style is not LogStyle.CHERRY:
            ctx.emit("separator", Text(""))

        result = WashResult(
            style=ctx.style,
            entries=ctx.entries,
            lines=ctx.lines,
            produced_count=state.produced_count,
            cutoff=cutoff,
            show_more=state.show_more,
        )
        _log_wash_pass(ctx, result, time.perf_counter() - started)
        return result

    def _wash_line(self, ctx: _WashPass) -> None:
        line = ctx.current()
        match = ctx.grammar.match(line.plain)
        if match is None:
            logger.debug("Line %d does not match %s grammar; passing through.", ctx.cursor, ctx.style.value)
            ctx.skipped += 1
            ctx.emit("passthrough", line)
            ctx.cursor += 1
            return
        if match.is_empty:
            ctx.emit("passthrough", line)
            ctx.cursor += 1
            return
        if match.hash is None:
            ctx.emit("passthrough", self._compose(ctx, line, match, None))
            ctx.cursor += 1
            return

        entry_hash = match.hash
        if ctx.style is LogStyle.BISECT_LOG:
            entry_hash = self._resolve_short_hash(entry_hash)
        ctx.hash_width = len(entry_hash)
        ctx.emit("entry", self._compose(ctx, line, match, entry_hash), entry_hash)
        ctx.cursor += 1

        message = match.message
        if ctx.style is LogStyle.LONG:
            body = self._consume_continuation(ctx, entry_hash)
            message = "\n".join(body) if body else message

        ctx.entries.append(self._build_entry(ctx.style, match, entry_hash, message))
        ctx.state.record()

    def _consume_continuation(self, ctx: _WashPass, entry_hash: str) -> list[str]:
        """Attach following non-commit lines to the current long record."""
        body: list[str] = []
        while not ctx.at_end:
            line = ctx.current()
            match = ctx.grammar.match(line.plain)
            if match is None or match.hash is not None:
                return body
            ctx.emit("continuation", self._compose(ctx, line, match, None), entry_hash)
            if match.message is not None:
                body.append(match.message)
            ctx.cursor += 1
        if not body:
            logger.debug("Record %s ended at end of input before any body lines.", entry_hash)
        return body

    def _has_primary_record(self, ctx: _WashPass) -> bool:
        for line in ctx.texts[ctx.cursor :]:
            match = ctx.grammar.match(line.plain)
            if match is not None and match.hash is not None:
                return True
        return False

    def _build_entry(
        self,
        style: LogStyle,
        match: LineMatch,
        entry_hash: str,
        message: str | None,
    ) -> LogEntry:
        return LogEntry(
            style=style,
            hash=entry_hash,
            message=message,
            refs=match.get("refs"),
            graph=match.get("graph"),
            author=match.get("author"),
            date=match.get("date"),
            signature=match.signature,
            cherry_marker=match.cherry_marker,
            side_marker=match.side_marker,
            reflog_selector=match.get("selector"),
            reflog_subject=match.get("subject"),
        )

    def _compose(
        self,
        ctx: _WashPass,
        line: Text,
        match: LineMatch,
        entry_hash: str | None,
    ) -> Text:
        """Build the display line from the captured pieces in column order."""
        display = Text()
        cherry_marker = match.cherry_marker
        if cherry_marker is not None:
            display.append(match.get("cherry") or "", style=f"log.cherry.{cherry_marker.value}")
            display.append(" ")
        side_marker = match.side_marker
        if side_marker is not None:
            display.append(match.get("side") or "", style=f"log.side.{side_marker.value}")
            display.append(" ")

        if entry_hash is not None:
            display.append(entry_hash, style="log.hash")
            display.append(" ")
        else:
            display.append(" " * (ctx.hash_width + 1))

        graph = _capture(line, match, "graph")
        if graph is not None:
            graph = translate_graph(graph, self.settings.glyph_table())
            graph.stylize_before("log.graph")
            display.append_text(graph)

        refs = match.get("refs")
        if refs:
            display.append_text(format_ref_labels(refs, self._remotes))
            display.append(" ")

        subject = match.get("subject")
        if subject:
            display.append(f"{match.get('selector') or '':<2} ", style="log.reflog.selector")
            display.append_text(decode_reflog_subject(subject).render())
            display.append(" ")

        message = _capture(line, match, "message")
        if message is not None:
            signature = match.signature
            message.stylize_before(SIGNATURE_STYLES[signature] if signature else "log.message")
            display.append_text(message)
        return display

    def _truncate_hash(self, placeholder: str) -> str:
        return placeholder[: self.settings.abbrev]


def _capture(line: Text, match: LineMatch, name: str) -> Text | None:
    span = match.span(name)
    if span is None or span[0] == span[1]:
        return None
    return line[span[0] : span[1]]


def _log_wash_pass(ctx: _WashPass, result: WashResult, elapsed_seconds: float) -> None:
    payload = {
        "event_type": "wash_pass",
        "style": ctx.style.value,
        "lines": len(ctx.texts),
        "entries": result.produced_count,
        "skipped": ctx.skipped,
        "cutoff": result.cutoff,
        "show_more": result.show_more,
        "elapsed_ms": round(elapsed_seconds * 1000, 3),
    }
    logger.info("wash_pass %s", json.dumps(payload, ensure_ascii=True, sort_keys=True))
