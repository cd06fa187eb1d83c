from datetime import datetime, timezone
from typing import Callable, Optional

from app.schemas.vote import RevealStatus


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RevealClock:
    """
    Decides when tallies may be shown.

    The ledger computes results whenever asked; hiding them before the reveal
    time, and optionally freezing votes after it, is this collaborator's job.
    """

    def __init__(self, reveal_at: Optional[datetime], lock_after_reveal: bool = False,
                 now: Callable[[], datetime] = _utc_now):
        if reveal_at is not None and reveal_at.tzinfo is None:
            reveal_at = reveal_at.replace(tzinfo=timezone.utc)
        self.reveal_at = reveal_at
        self.lock_after_reveal = lock_after_reveal
        self._now = now

    def results_visible(self) -> bool:
        if self.reveal_at is None:
            return True
        return self._now() >= self.reveal_at

    def voting_locked(self) -> bool:
        return self.lock_after_reveal and self.results_visible()

    def status(self) -> RevealStatus:
        return RevealStatus(
            reveal_at=self.reveal_at,
            results_visible=self.results_visible(),
            voting_locked=self.voting_locked(),
        )
