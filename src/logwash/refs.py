"""Ref decoration parsing and labelling."""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass
from enum import Enum

from rich.text import Text


class RefKind(str, Enum):
    HEAD = "ref.head"
    LOCAL = "ref.local"
    REMOTE = "ref.remote"
    TAG = "ref.tag"
    BISECT = "ref.bisect"
    OTHER = "ref.other"


@dataclass(frozen=True)
class RefLabel:
    name: str
    kind: RefKind


FULL_NAMESPACES: tuple[tuple[str, RefKind], ...] = (
    ("refs/heads/", RefKind.LOCAL),
    ("refs/remotes/", RefKind.REMOTE),
    ("refs/tags/", RefKind.TAG),
    ("refs/bisect/", RefKind.BISECT),
)
BISECT_WORDS = {"bad:", "good:", "skip:"}


def parse_ref_labels(refs: str, remotes: Collection[str] = ()) -> list[RefLabel]:
    """Split a decoration like ``(HEAD -> main, tag: v1)`` into labels.

    Both short and ``--decorate=full`` forms are understood. Without a
    ``refs/`` prefix a name is a remote branch only when its first path
    component is one of *remotes*.
    """
    body = refs.strip()
    if body.startswith("(") and body.endswith(")"):
        body = body[1:-1]
    labels: list[RefLabel] = []
    for part in (item.strip() for item in body.split(",")):
        if not part:
            continue
        if part in BISECT_WORDS:
            labels.append(RefLabel(part, RefKind.BISECT))
            continue
        if part.startswith("HEAD -> "):
            labels.append(RefLabel("HEAD", RefKind.HEAD))
            part = part[len("HEAD -> "):]
        if part.startswith("tag: "):
            part = part[len("tag: "):]
            labels.append(RefLabel(_short_name(part), RefKind.TAG))
            continue
        labels.append(_classify(part, remotes))
    return labels


def format_ref_labels(refs: str, remotes: Collection[str] = ()) -> Text:
    """Render parsed labels space separated, each in its own style."""
    text = Text()
    for index, label in enumerate(parse_ref_labels(refs, remotes)):
        if index:
            text.append(" ")
        text.append(label.name, style=label.kind.value)
    return text


def _classify(name: str, remotes: Collection[str]) -> RefLabel:
    if name == "HEAD":
        return RefLabel(name, RefKind.HEAD)
    for prefix, kind in FULL_NAMESPACES:
        if name.startswith(prefix):
            return RefLabel(name[len(prefix):], kind)
    if "/" in name and name.split("/", 1)[0] in remotes:
        return RefLabel(name, RefKind.REMOTE)
    if name.startswith("refs/"):
        return RefLabel(name, RefKind.OTHER)
    return RefLabel(name, RefKind.LOCAL)


def _short_name(name: str) -> str:
    return name[len("refs/tags/"):] if name.startswith("refs/tags/") else name
