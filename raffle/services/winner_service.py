"""Read side of the draw history."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from raffle.errors import NotFoundError
from raffle.models.winner_record import WinnerRecord
from raffle.repositories.activity_repository import ActivityRepository
from raffle.repositories.winner_record_repository import WinnerRecordRepository


class WinnerService:
    """Winner listings and round numbering."""

    def __init__(
        self,
        activities: ActivityRepository | None = None,
        winner_records: WinnerRecordRepository | None = None,
    ) -> None:
        self._activities = activities or ActivityRepository()
        self._records = winner_records or WinnerRecordRepository()

    def _require_activity(self, session: Session, activity_id: int) -> None:
        if self._activities.get_by_id(session, activity_id) is None:
            raise NotFoundError(message=f"Activity {activity_id} not found", details={"resource": "activity"})

    def list_winners(self, session: Session, activity_id: int) -> Sequence[WinnerRecord]:
        """All records of the activity, newest first. Unknown activities have none."""

        return self._records.list_by_activity(session, activity_id)

    def list_winners_by_round(self, session: Session, activity_id: int, round_no: int) -> Sequence[WinnerRecord]:
        return self._records.list_by_activity(session, activity_id, round_no=round_no)

    def next_round(self, session: Session, activity_id: int) -> int:
        """``max(round) + 1`` over the activity's records, or 1 when there are none.

        Advisory only: the draw service accepts whatever round it is given.
        """

        self._require_activity(session, activity_id)
        latest = self._records.max_round(session, activity_id)
        return 1 if latest is None else latest + 1
