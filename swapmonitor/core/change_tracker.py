"""In-memory change detection across polls.

Nothing is persisted: a restarted monitor starts with an empty mapping,
so its first frame never highlights anything.
"""

from __future__ import annotations

from collections.abc import Iterable

from swapmonitor.models.swaps import SwapRecord, SwapView


def diff_states(
    records: Iterable[SwapRecord], previous: dict[str, str]
) -> list[SwapView]:
    """Mark each record as changed or not, updating *previous* in place.

    A record is changed iff its swap was already in *previous* with a
    different state.  *previous* is overwritten with the current state of
    every record, in input order.
    """
    views: list[SwapView] = []
    for record in records:
        prior = previous.get(record.swap_id)
        changed = prior is not None and prior != record.state
        previous[record.swap_id] = record.state
        views.append(SwapView.from_record(record, changed=changed))
    return views


class ChangeTracker:
    """Remembers the last rendered state of every swap seen so far.

    The mapping only grows; swaps never disappear from an append-only log.
    """

    def __init__(self) -> None:
        self._states: dict[str, str] = {}

    def diff(self, records: Iterable[SwapRecord]) -> list[SwapView]:
        return diff_states(records, self._states)

