"""Reset an activity's draw state back to its pre-draw baseline."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from raffle.errors import NotFoundError
from raffle.locks import activity_lock
from raffle.repositories.activity_repository import ActivityRepository
from raffle.repositories.participant_repository import ParticipantRepository
from raffle.repositories.prize_repository import PrizeRepository
from raffle.repositories.winner_record_repository import WinnerRecordRepository
from raffle.services.transactions import run_in_transaction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResetOutcome:
    records_cleared: int


class ResetService:
    """Clear winner flags, restore prize stock and purge draw history."""

    def __init__(
        self,
        *,
        max_retries: int = 3,
        lock_timeout: float = 10,
        activities: ActivityRepository | None = None,
        participants: ParticipantRepository | None = None,
        prizes: PrizeRepository | None = None,
        winner_records: WinnerRecordRepository | None = None,
    ) -> None:
        self._max_retries = max_retries
        self._lock_timeout = lock_timeout
        self._activities = activities or ActivityRepository()
        self._participants = participants or ParticipantRepository()
        self._prizes = prizes or PrizeRepository()
        self._winner_records = winner_records or WinnerRecordRepository()

    def reset(self, session: Session, activity_id: int) -> ResetOutcome:
        """Reset ``activity_id``. Running it again right after is a no-op."""

        with activity_lock(activity_id, timeout=self._lock_timeout):
            outcome = run_in_transaction(
                session,
                lambda s: self._reset_once(s, activity_id),
                attempts=self._max_retries,
                operation="Reset",
            )

        logger.info("Reset activity=%s records_cleared=%d", activity_id, outcome.records_cleared)
        return outcome

    def _reset_once(self, session: Session, activity_id: int) -> ResetOutcome:
        if self._activities.get_for_update(session, activity_id) is None:
            raise NotFoundError(message=f"Activity {activity_id} not found", details={"resource": "activity"})

        # Records go first; they reference the rows restored below.
        cleared = self._winner_records.delete_by_activity(session, activity_id)

        for participant in self._participants.list_by_activity(session, activity_id):
            if participant.is_winner:
                participant.is_winner = False

        for prize in self._prizes.list_by_activity(session, activity_id):
            if prize.remaining_quantity != prize.quantity:
                prize.remaining_quantity = prize.quantity

        session.flush()
        return ResetOutcome(records_cleared=cleared)
