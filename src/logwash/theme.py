"""Rich theme resolving the style tags attached by the washer."""

from __future__ import annotations

from rich.theme import Theme

from .refs import RefKind
from .reflog import ReflogLabel

STYLES: dict[str, str] = {
    "log.hash": "grey62",
    "log.graph": "default",
    "log.message": "default",
    "log.author": "dark_orange3",
    "log.date": "grey62",
    "log.fringe": "default",
    "log.more": "bold underline cyan",
    "log.signature.good": "green",
    "log.signature.bad": "bold red",
    "log.signature.untrusted": "cyan",
    "log.signature.none": "default",
    "log.cherry.equivalent": "magenta",
    "log.cherry.unmatched": "cyan",
    "log.side.incoming": "green",
    "log.side.outgoing": "red",
    "log.reflog.selector": "grey62",
    RefKind.HEAD.value: "bold magenta",
    RefKind.LOCAL.value: "bold green",
    RefKind.REMOTE.value: "bold blue",
    RefKind.TAG.value: "bold yellow",
    RefKind.BISECT.value: "bold red",
    RefKind.OTHER.value: "bold",
    ReflogLabel.COMMIT.value: "green",
    ReflogLabel.AMEND.value: "magenta",
    ReflogLabel.MERGE.value: "green",
    ReflogLabel.CHECKOUT.value: "blue",
    ReflogLabel.RESET.value: "red",
    ReflogLabel.REBASE.value: "magenta",
    ReflogLabel.CHERRY_PICK.value: "green",
    ReflogLabel.REMOTE.value: "cyan",
    ReflogLabel.OTHER.value: "cyan",
}

LOG_THEME = Theme(STYLES)
