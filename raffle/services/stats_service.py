"""Activity statistics (read-only aggregation)."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from raffle.errors import NotFoundError
from raffle.repositories.activity_repository import ActivityRepository
from raffle.repositories.participant_repository import ParticipantRepository
from raffle.repositories.prize_repository import PrizeRepository
from raffle.repositories.winner_record_repository import WinnerRecordRepository


@dataclass(frozen=True)
class ActivityStats:
    total_participants: int
    available_participants: int
    total_prizes: int
    remaining_prizes: int
    total_winners: int


class StatsService:
    def __init__(self) -> None:
        self._activities = ActivityRepository()
        self._participants = ParticipantRepository()
        self._prizes = PrizeRepository()
        self._records = WinnerRecordRepository()

    def stats(self, session: Session, activity_id: int) -> ActivityStats:
        if self._activities.get_by_id(session, activity_id) is None:
            raise NotFoundError(message=f"Activity {activity_id} not found", details={"resource": "activity"})

        prizes = self._prizes.list_by_activity(session, activity_id)
        return ActivityStats(
            total_participants=self._participants.count_by_activity(session, activity_id),
            available_participants=self._participants.count_by_activity(session, activity_id, available_only=True),
            total_prizes=sum(p.quantity for p in prizes),
            remaining_prizes=sum(p.remaining_quantity for p in prizes),
            total_winners=self._records.count_by_activity(session, activity_id),
        )
