"""Line grammars for each log style."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import ErrorCode, LogWashError
from .models import CherryMarker, LogStyle, SideMarker, Signature

GRAPH = r"(?P<graph>(?:[-_/|\\*o.] *)+ *)?"
HASH = r"[0-9a-fA-F]+"
REFS = r"\([^()]+\)"

SIGNATURES = {
    "G": Signature.GOOD,
    "B": Signature.BAD,
    "U": Signature.UNTRUSTED,
    "X": Signature.UNTRUSTED,
    "Y": Signature.UNTRUSTED,
    "R": Signature.UNTRUSTED,
    "N": Signature.NONE,
    "E": Signature.NONE,
}
CHERRY_MARKERS = {"-": CherryMarker.EQUIVALENT, "+": CherryMarker.UNMATCHED}
SIDE_MARKERS = {">": SideMarker.INCOMING, "<": SideMarker.OUTGOING}

FIELDS = (
    "hash",
    "message",
    "refs",
    "graph",
    "author",
    "date",
    "gpg",
    "cherry",
    "side",
    "selector",
    "subject",
)


@dataclass(frozen=True)
class LineMatch:
    """Optional fields captured from one raw line, with their columns."""

    groups: dict[str, str | None]
    spans: dict[str, tuple[int, int]]

    def get(self, name: str) -> str | None:
        return self.groups.get(name)

    def span(self, name: str) -> tuple[int, int] | None:
        return self.spans.get(name)

    @property
    def hash(self) -> str | None:
        return self.groups.get("hash")

    @property
    def message(self) -> str | None:
        return self.groups.get("message")

    @property
    def is_empty(self) -> bool:
        return all(value is None for value in self.groups.values())

    @property
    def signature(self) -> Signature | None:
        gpg = self.groups.get("gpg")
        return SIGNATURES.get(gpg[0]) if gpg else None

    @property
    def cherry_marker(self) -> CherryMarker | None:
        cherry = self.groups.get("cherry")
        return CHERRY_MARKERS.get(cherry) if cherry else None

    @property
    def side_marker(self) -> SideMarker | None:
        side = self.groups.get("side")
        return SIDE_MARKERS.get(side) if side else None


@dataclass(frozen=True)
class Grammar:
    style: LogStyle
    pattern: re.Pattern[str]

    def match(self, line: str) -> LineMatch | None:
        found = self.pattern.match(line)
        if found is None:
            return None
        captured = found.groupdict()
        groups = {name: captured.get(name) for name in FIELDS}
        spans = {
            name: found.span(name)
            for name in self.pattern.groupindex
            if found.group(name) is not None
        }
        return LineMatch(groups=groups, spans=spans)


GRAMMARS: dict[LogStyle, Grammar] = {
    LogStyle.ONELINE: Grammar(
        LogStyle.ONELINE,
        re.compile(
            "^" + GRAPH + r"(?:(?P<hash>" + HASH + r") "
            r"(?:(?P<refs>" + REFS + r") )?"
            r"(?:(?P<gpg>[BGUNXYRE])?\[(?P<author>[^\]]*)\]\[(?P<date>[^\]]*)\])?"
            r"(?P<message>.*))?$"
        ),
    ),
    LogStyle.LONG: Grammar(
        LogStyle.LONG,
        re.compile(
            "^" + GRAPH + r"(?:commit (?P<hash>" + HASH + r")"
            r"(?: (?P<refs>" + REFS + r"))?"
            r"|(?P<message>.+))?$"
        ),
    ),
    LogStyle.CHERRY: Grammar(
        LogStyle.CHERRY,
        re.compile(r"^(?P<cherry>[-+]) (?P<hash>" + HASH + r") (?P<message>.*)$"),
    ),
    LogStyle.MODULE: Grammar(
        LogStyle.MODULE,
        re.compile(r"^(?:(?P<side>[<>]) )?(?P<hash>" + HASH + r") (?P<message>.*)$"),
    ),
    LogStyle.REFLOG: Grammar(
        LogStyle.REFLOG,
        re.compile(
            r"^(?P<hash>[^ ]+) \[(?P<author>[^\]]*)\] \[(?P<date>[^\]]*)\]"
            r"(?: [^@]+@\{(?P<selector>[^}]+)\} "
            r"(?P<subject>merge(?= )|[^:]+)?:? ?(?P<message>.*))?$"
        ),
    ),
    LogStyle.BISECT_VISUALIZE: Grammar(
        LogStyle.BISECT_VISUALIZE,
        re.compile(
            "^" + GRAPH + r"(?P<hash>" + HASH + r") "
            r"(?:(?P<refs>" + REFS + r") )?"
            r"(?P<message>.+)$"
        ),
    ),
    LogStyle.BISECT_LOG: Grammar(
        LogStyle.BISECT_LOG,
        re.compile(r"^# (?P<refs>bad:|good:|skip:) \[(?P<hash>[^\]]+)\] (?P<message>.+)$"),
    ),
}


def _check_grammar_table(table: dict[LogStyle, Grammar]) -> None:
    missing = [style.value for style in LogStyle if style not in table]
    if missing:
        raise RuntimeError(f"No grammar defined for log styles: {', '.join(missing)}")


_check_grammar_table(GRAMMARS)


def grammar_for(style: LogStyle | str) -> Grammar:
    """Return the grammar for *style*; unknown styles are a caller defect."""
    try:
        return GRAMMARS[LogStyle(style)]
    except (KeyError, ValueError) as exc:
        allowed = ", ".join(member.value for member in LogStyle)
        raise LogWashError(
            ErrorCode.UNKNOWN_STYLE,
            f"No grammar is defined for style {style!r}",
            f"Use one of: {allowed}.",
            {"style": str(style)},
        ) from exc
