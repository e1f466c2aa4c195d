"""Service layer for prizes."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from sqlalchemy.orm import Session

from raffle.errors import ConflictError, NotFoundError
from raffle.locks import activity_lock
from raffle.models.prize import Prize
from raffle.repositories.activity_repository import ActivityRepository
from raffle.repositories.prize_repository import PrizeRepository
from raffle.repositories.winner_record_repository import WinnerRecordRepository


class PrizeService:
    """Prize use-cases. Stock only changes through draws and resets.

    Changes that depend on the draw history (quantity edits, deletes) run
    under the activity lock so they cannot interleave with a draw.
    """

    def __init__(self, *, lock_timeout: float = 10) -> None:
        self._activities = ActivityRepository()
        self._repo = PrizeRepository()
        self._records = WinnerRecordRepository()
        self._lock_timeout = lock_timeout

    def _require_activity(self, session: Session, activity_id: int) -> None:
        if self._activities.get_by_id(session, activity_id) is None:
            raise NotFoundError(message=f"Activity {activity_id} not found", details={"resource": "activity"})

    def list_prizes(self, session: Session, activity_id: int) -> Sequence[Prize]:
        self._require_activity(session, activity_id)
        return self._repo.list_by_activity(session, activity_id)

    def get_prize(self, session: Session, activity_id: int, prize_id: int) -> Prize:
        prize = self._repo.get_in_activity(session, activity_id, prize_id)
        if prize is None:
            raise NotFoundError(message=f"Prize {prize_id} not found", details={"resource": "prize"})
        return prize

    def create_prize(
        self,
        session: Session,
        activity_id: int,
        *,
        name: str,
        quantity: int,
        level: int = 1,
        image_url: str | None = None,
    ) -> Prize:
        self._require_activity(session, activity_id)
        return self._repo.create(session, activity_id, name=name, quantity=quantity, level=level, image_url=image_url)

    def update_prize(self, session: Session, activity_id: int, prize_id: int, changes: Mapping[str, object]) -> Prize:
        """Edit a prize.

        ``remaining_quantity`` is never taken from the caller. A quantity
        change is only allowed before the prize has been awarded, and then
        resets the remaining count to the new quantity.
        """

        body_id = changes.get("id")
        body_activity_id = changes.get("activity_id")
        if (body_id is not None and body_id != prize_id) or (
            body_activity_id is not None and body_activity_id != activity_id
        ):
            raise NotFoundError(
                message=f"Prize id {body_id} / activity {body_activity_id} does not match the path",
                details={"resource": "prize"},
            )

        with activity_lock(activity_id, timeout=self._lock_timeout):
            prize = self.get_prize(session, activity_id, prize_id)

            quantity = changes.get("quantity")
            if quantity is not None and quantity != prize.quantity:
                won = self._records.count_by_prize(session, prize.id)
                if won:
                    raise ConflictError(
                        message=f"Prize {prize_id} has been awarded; reset the activity before changing its quantity",
                        details={"winner_records": won},
                    )
                prize.quantity = int(quantity)  # type: ignore[call-overload]
                prize.remaining_quantity = prize.quantity

            for field in ("name", "level", "image_url"):
                if field in changes:
                    setattr(prize, field, changes[field])

            session.commit()
        return prize

    def delete_prize(self, session: Session, activity_id: int, prize_id: int) -> None:
        with activity_lock(activity_id, timeout=self._lock_timeout):
            prize = self.get_prize(session, activity_id, prize_id)
            won = self._records.count_by_prize(session, prize.id)
            if won:
                raise ConflictError(
                    message=f"Prize {prize_id} has been awarded and cannot be deleted; reset the activity first",
                    details={"winner_records": won},
                )
            self._repo.delete(session, prize)
            session.commit()
