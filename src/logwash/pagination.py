"""Entry cutoff bookkeeping and the policy for growing the cutoff."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import DEFAULT_CUTOFF_LENGTH, DEFAULT_INFINITE_LENGTH


def should_show_more(produced_count: int, cutoff: int | None) -> bool:
    """Return whether a pass that produced *produced_count* entries was cut off."""
    return cutoff is not None and produced_count == cutoff


def grow_cutoff(
    cutoff: int = DEFAULT_CUTOFF_LENGTH,
    arg: int | bool | None = None,
    infinite_length: int = DEFAULT_INFINITE_LENGTH,
) -> int:
    """Return the cutoff to use for the next pass.

    With no *arg* the cutoff doubles, with an integer it grows by that
    amount, and with ``True`` it jumps to *infinite_length*.
    """
    if arg is None or arg is False:
        return cutoff * 2
    if arg is True:
        return infinite_length
    return max(1, cutoff + int(arg))


@dataclass
class PaginationState:
    """Counter for one wash pass."""

    cutoff: int | None = DEFAULT_CUTOFF_LENGTH
    produced_count: int = 0
    truncated: bool = False

    def reset(self) -> None:
        self.produced_count = 0
        self.truncated = False

    def record(self) -> None:
        self.produced_count += 1

    @property
    def exhausted(self) -> bool:
        return self.cutoff is not None and self.produced_count >= self.cutoff

    @property
    def show_more(self) -> bool:
        """True when the cutoff was hit and primary records were left unread."""
        return self.truncated and should_show_more(self.produced_count, self.cutoff)
