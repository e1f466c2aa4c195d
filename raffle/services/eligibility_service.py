"""Resolve which participants of an activity can still be drawn."""

from __future__ import annotations

from sqlalchemy.orm import Session

from raffle.errors import NotFoundError
from raffle.models.participant import Participant
from raffle.repositories.activity_repository import ActivityRepository
from raffle.repositories.participant_repository import ParticipantRepository


class EligibilityService:
    """Computes the draw pool: participants not yet marked as winners."""

    def __init__(
        self,
        activities: ActivityRepository | None = None,
        participants: ParticipantRepository | None = None,
    ) -> None:
        self._activities = activities or ActivityRepository()
        self._participants = participants or ParticipantRepository()

    def available_participants(self, session: Session, activity_id: int) -> list[Participant]:
        """Return the current pool for ``activity_id``.

        Always queried fresh from the database; earlier draws change it.
        """

        if self._activities.get_by_id(session, activity_id) is None:
            raise NotFoundError(message=f"Activity {activity_id} not found", details={"resource": "activity"})
        return self.pool(session, activity_id)

    def pool(self, session: Session, activity_id: int) -> list[Participant]:
        """Pool query without the existence check, for callers that already did it."""

        return self._participants.list_available(session, activity_id)
