"""Service layer for activity management."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from sqlalchemy.orm import Session

from raffle.errors import NotFoundError
from raffle.locks import activity_lock, discard_activity_lock
from raffle.models.activity import Activity
from raffle.repositories.activity_repository import ActivityRepository

_UPDATABLE = ("name", "description", "theme_type", "status")


class ActivityService:
    """Activity use-cases."""

    def __init__(self, repository: ActivityRepository | None = None, *, lock_timeout: float = 10) -> None:
        self._repo = repository or ActivityRepository()
        self._lock_timeout = lock_timeout

    def list_activities(self, session: Session) -> Sequence[Activity]:
        return self._repo.list_activities(session)

    def get_activity(self, session: Session, activity_id: int) -> Activity:
        activity = self._repo.get_by_id(session, activity_id)
        if activity is None:
            raise NotFoundError(message=f"Activity {activity_id} not found", details={"resource": "activity"})
        return activity

    def create_activity(self, session: Session, **fields: object) -> Activity:
        return self._repo.create(session, **fields)

    def update_activity(self, session: Session, activity_id: int, changes: Mapping[str, object]) -> Activity:
        """Apply descriptive changes; ``status`` is advisory and freely settable.

        A body ``id`` that names a different activity is treated as not found.
        """

        body_id = changes.get("id")
        if body_id is not None and body_id != activity_id:
            raise NotFoundError(
                message=f"Activity id {body_id} does not match {activity_id}",
                details={"resource": "activity"},
            )

        activity = self.get_activity(session, activity_id)
        for field in _UPDATABLE:
            if field in changes:
                setattr(activity, field, changes[field])
        session.flush()
        return activity

    def delete_activity(self, session: Session, activity_id: int) -> None:
        """Delete the activity with its prizes, participants and history."""

        with activity_lock(activity_id, timeout=self._lock_timeout):
            self.get_activity(session, activity_id)
            self._repo.delete(session, activity_id)
            session.commit()
        discard_activity_lock(activity_id)
