"""Result of the startup revision reconciliation.

``Store.ready`` resolves to a :class:`ReconciliationResult` instead of
raising, so an ignored handle never produces an unretrieved-exception
warning and an awaited one can be inspected at leisure.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class ReconciliationOutcome(str, Enum):  # noqa: UP042
    """Terminal states of the reconciliation state machine."""

    DISABLED = "DISABLED"    # check_revision=False, nothing fetched
    UNCHANGED = "UNCHANGED"  # no baseline, or server revision not ahead
    EVICTED = "EVICTED"      # server revision advanced, stale collections dropped
    FAILED = "FAILED"        # system fetch failed, local state left as it was


class ReconciliationResult(BaseModel):
    """What reconciliation did, and why."""

    model_config = ConfigDict(frozen=True)

    outcome: ReconciliationOutcome
    persisted_revision: int | None = None
    current_revision: int | None = None
    evicted: tuple[str, ...] = ()
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is not ReconciliationOutcome.FAILED
