"""Reflog subject decoding and label classification."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from rich.text import Text

REFLOG_SUBJECT_PATTERN = re.compile(
    r"^(?P<command>[^ :]+):?"
    r"(?P<options>(?: +-[^ :(]+)+)?"
    r"(?: *\((?P<type>[^)]+)\))?"
    r"(?::? *(?P<rest>.*))?$"
)
SUBJECT_COLUMN_WIDTH = 16


class ReflogLabel(str, Enum):
    """Style tags for reflog operations."""

    COMMIT = "reflog.commit"
    AMEND = "reflog.amend"
    MERGE = "reflog.merge"
    CHECKOUT = "reflog.checkout"
    RESET = "reflog.reset"
    REBASE = "reflog.rebase"
    CHERRY_PICK = "reflog.cherry_pick"
    REMOTE = "reflog.remote"
    OTHER = "reflog.other"


REFLOG_LABELS: dict[str, ReflogLabel] = {
    "commit": ReflogLabel.COMMIT,
    "amend": ReflogLabel.AMEND,
    "merge": ReflogLabel.MERGE,
    "checkout": ReflogLabel.CHECKOUT,
    "branch": ReflogLabel.CHECKOUT,
    "reset": ReflogLabel.RESET,
    "rebase": ReflogLabel.REBASE,
    "cherry-pick": ReflogLabel.CHERRY_PICK,
    "initial": ReflogLabel.COMMIT,
    "pull": ReflogLabel.REMOTE,
    "clone": ReflogLabel.REMOTE,
}


@dataclass(frozen=True)
class ReflogSubject:
    command: str
    options: str | None
    type: str | None
    rest: str | None
    label: str
    text: str
    style: ReflogLabel

    def render(self, width: int = SUBJECT_COLUMN_WIDTH) -> Text:
        """Return the display text padded to *width* and styled by label."""
        return Text(self.text.ljust(width), style=self.style.value)


def decode_reflog_subject(subject: str) -> ReflogSubject:
    """Split a reflog subject into command, options and parenthesized type.

    >>> decode_reflog_subject("commit (amend): fixed typo").label
    'amend'
    """
    stripped = subject.strip()
    match = REFLOG_SUBJECT_PATTERN.match(stripped)
    if match is None:
        command, options, type_, rest = stripped, None, None, None
    else:
        command = match.group("command")
        options = (match.group("options") or "").strip() or None
        if options is not None:
            options = " ".join(options.split())
        type_ = match.group("type")
        rest = match.group("rest") or None

    if command == "commit":
        label = type_ or command
        text = label
    else:
        label = command
        text = " ".join(part for part in (command, options, type_) if part)
    return ReflogSubject(
        command=command,
        options=options,
        type=type_,
        rest=rest,
        label=label,
        text=text,
        style=REFLOG_LABELS.get(label, ReflogLabel.OTHER),
    )
