"""Repository layer for Participant persistence."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from raffle.models.participant import Participant


class ParticipantRepository:
    """CRUD operations for Participant."""

    def list_by_activity(self, session: Session, activity_id: int) -> Sequence[Participant]:
        stmt = (
            select(Participant)
            .where(Participant.activity_id == activity_id)
            .order_by(Participant.code.asc(), Participant.id.asc())
            .execution_options(populate_existing=True)
        )
        return list(session.scalars(stmt).all())

    def list_available(self, session: Session, activity_id: int) -> list[Participant]:
        """Participants of the activity that have not won yet, ordered by code."""

        stmt = (
            select(Participant)
            .where(Participant.activity_id == activity_id, Participant.is_winner.is_(False))
            .order_by(Participant.code.asc(), Participant.id.asc())
            .execution_options(populate_existing=True)
        )
        return list(session.scalars(stmt).all())

    def count_by_activity(self, session: Session, activity_id: int, *, available_only: bool = False) -> int:
        stmt = select(func.count(Participant.id)).where(Participant.activity_id == activity_id)
        if available_only:
            stmt = stmt.where(Participant.is_winner.is_(False))
        return int(session.scalar(stmt) or 0)

    def get_in_activity(self, session: Session, activity_id: int, participant_id: int) -> Participant | None:
        stmt = select(Participant).where(Participant.activity_id == activity_id, Participant.id == participant_id)
        return session.scalars(stmt).one_or_none()

    def create_many(self, session: Session, activity_id: int, rows: Iterable[Mapping[str, object]]) -> list[Participant]:
        """Insert participants; ``activity_id`` and ``is_winner`` are always forced."""

        participants = [
            Participant(
                activity_id=activity_id,
                name=str(row["name"]),
                code=row.get("code"),  # type: ignore[arg-type]
                department=row.get("department"),  # type: ignore[arg-type]
                is_winner=False,
            )
            for row in rows
        ]
        session.add_all(participants)
        session.flush()
        return participants

    def delete(self, session: Session, participant: Participant) -> None:
        session.delete(participant)
        session.flush()

    def delete_many(self, session: Session, participants: Iterable[Participant]) -> None:
        for participant in participants:
            session.delete(participant)
        session.flush()
