"""Service layer for participants."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from sqlalchemy.orm import Session

from raffle.errors import ConflictError, NotFoundError
from raffle.locks import activity_lock
from raffle.models.participant import Participant
from raffle.repositories.activity_repository import ActivityRepository
from raffle.repositories.participant_repository import ParticipantRepository
from raffle.repositories.winner_record_repository import WinnerRecordRepository
from raffle.services.eligibility_service import EligibilityService


class ParticipantService:
    """Participant use-cases.

    New participants always start as non-winners of the activity they were
    added to; there is no way to set ``is_winner`` from here.
    """

    def __init__(self, *, lock_timeout: float = 10) -> None:
        self._activities = ActivityRepository()
        self._repo = ParticipantRepository()
        self._records = WinnerRecordRepository()
        self._eligibility = EligibilityService(activities=self._activities, participants=self._repo)
        self._lock_timeout = lock_timeout

    def _require_activity(self, session: Session, activity_id: int) -> None:
        if self._activities.get_by_id(session, activity_id) is None:
            raise NotFoundError(message=f"Activity {activity_id} not found", details={"resource": "activity"})

    def list_participants(self, session: Session, activity_id: int) -> Sequence[Participant]:
        self._require_activity(session, activity_id)
        return self._repo.list_by_activity(session, activity_id)

    def list_available(self, session: Session, activity_id: int) -> list[Participant]:
        return self._eligibility.available_participants(session, activity_id)

    def get_participant(self, session: Session, activity_id: int, participant_id: int) -> Participant:
        participant = self._repo.get_in_activity(session, activity_id, participant_id)
        if participant is None:
            raise NotFoundError(message=f"Participant {participant_id} not found", details={"resource": "participant"})
        return participant

    def create_participant(self, session: Session, activity_id: int, row: Mapping[str, object]) -> Participant:
        return self.import_participants(session, activity_id, [row])[0]

    def import_participants(
        self, session: Session, activity_id: int, rows: Iterable[Mapping[str, object]]
    ) -> list[Participant]:
        self._require_activity(session, activity_id)
        return self._repo.create_many(session, activity_id, rows)

    def delete_participant(self, session: Session, activity_id: int, participant_id: int) -> None:
        with activity_lock(activity_id, timeout=self._lock_timeout):
            participant = self.get_participant(session, activity_id, participant_id)
            if self._records.count_by_participant(session, participant.id):
                raise ConflictError(
                    message=f"Participant {participant_id} has won a prize and cannot be deleted; reset the activity first",
                    details={"resource": "participant"},
                )
            self._repo.delete(session, participant)
            session.commit()

    def clear_participants(self, session: Session, activity_id: int) -> int:
        with activity_lock(activity_id, timeout=self._lock_timeout):
            participants = self.list_participants(session, activity_id)
            won = self._records.count_by_activity(session, activity_id)
            if won:
                raise ConflictError(
                    message="Activity has winners; reset it before clearing participants",
                    details={"winner_records": won},
                )
            self._repo.delete_many(session, participants)
            session.commit()
        return len(participants)
