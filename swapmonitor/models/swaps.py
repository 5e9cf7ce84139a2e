"""Swap state models: one row per state transition, latest-wins views.

The ASB writes one ``swap_states`` row every time a swap changes state.
The table is append-only: rows are never updated or deleted.  The
monitor only ever reads it.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class SwapRecord(BaseModel):
    """A single transition row from the ``swap_states`` table."""

    model_config = ConfigDict(frozen=True)

    swap_id: str
    state: str
    entered_at: str  # sortable text timestamp, as written by the ASB


class SwapView(BaseModel):
    """The latest state of one swap, as shown on a single tick.

    ``changed`` is True when this process saw the swap on an earlier tick
    in a different state.
    """

    model_config = ConfigDict(frozen=True)

    swap_id: str
    state: str
    entered_at: str
    changed: bool = False

    @classmethod
    def from_record(cls, record: SwapRecord, *, changed: bool) -> SwapView:
        return cls(
            swap_id=record.swap_id,
            state=record.state,
            entered_at=record.entered_at,
            changed=changed,
        )
