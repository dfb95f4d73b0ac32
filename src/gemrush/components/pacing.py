from __future__ import annotations

from dataclasses import dataclass

from gemrush.constants import (
    CASCADE_SETTLE_DELAY,
    INVALID_SWAP_REVERT_DELAY,
    MATCH_HIGHLIGHT_DELAY,
    MATCH_REMOVAL_DELAY,
)


@dataclass(frozen=True, slots=True)
class Pacing:
    """Visual pacing delays (seconds) between controller steps.

    A delay of zero runs the step synchronously, so ``Pacing.instant()``
    resolves a whole turn inside the tap that started it.
    """
    match_highlight: float = MATCH_HIGHLIGHT_DELAY
    match_removal: float = MATCH_REMOVAL_DELAY
    cascade_settle: float = CASCADE_SETTLE_DELAY
    invalid_revert: float = INVALID_SWAP_REVERT_DELAY

    @classmethod
    def instant(cls) -> Pacing:
        return cls(match_highlight=0.0, match_removal=0.0, cascade_settle=0.0, invalid_revert=0.0)
