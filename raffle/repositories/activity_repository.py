"""Repository layer for Activity persistence."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from raffle.models.activity import Activity
from raffle.models.participant import Participant
from raffle.models.prize import Prize
from raffle.models.winner_record import WinnerRecord


class ActivityRepository:
    """CRUD operations for Activity."""

    def list_activities(self, session: Session) -> Sequence[Activity]:
        stmt = select(Activity).order_by(Activity.created_at.desc(), Activity.id.desc())
        return list(session.scalars(stmt).all())

    def get_by_id(self, session: Session, activity_id: int) -> Activity | None:
        return session.get(Activity, activity_id)

    def get_for_update(self, session: Session, activity_id: int) -> Activity | None:
        """Load the activity row with a row lock held until the transaction ends.

        SQLite ignores ``FOR UPDATE``; it serializes writers on its own.
        """

        stmt = (
            select(Activity)
            .where(Activity.id == activity_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return session.scalars(stmt).one_or_none()

    def create(self, session: Session, **fields: object) -> Activity:
        activity = Activity(**fields)
        session.add(activity)
        session.flush()  # assign PK
        return activity

    def delete(self, session: Session, activity_id: int) -> None:
        """Delete an activity together with everything it owns.

        History goes first because it restricts deletion of the prizes and
        participants it references.
        """

        session.execute(delete(WinnerRecord).where(WinnerRecord.activity_id == activity_id))
        session.execute(delete(Participant).where(Participant.activity_id == activity_id))
        session.execute(delete(Prize).where(Prize.activity_id == activity_id))
        session.execute(delete(Activity).where(Activity.id == activity_id))
