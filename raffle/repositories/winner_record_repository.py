"""Repository layer for WinnerRecord persistence."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session, joinedload

from raffle.models.winner_record import WinnerRecord


class WinnerRecordRepository:
    """Append, read and purge draw history."""

    def list_by_activity(self, session: Session, activity_id: int, round_no: int | None = None) -> Sequence[WinnerRecord]:
        stmt = (
            select(WinnerRecord)
            .options(joinedload(WinnerRecord.participant), joinedload(WinnerRecord.prize))
            .where(WinnerRecord.activity_id == activity_id)
        )
        if round_no is not None:
            stmt = stmt.where(WinnerRecord.round == round_no).order_by(WinnerRecord.id.asc())
        else:
            stmt = stmt.order_by(WinnerRecord.won_at.desc(), WinnerRecord.id.desc())
        return list(session.scalars(stmt).all())

    def count_by_activity(self, session: Session, activity_id: int) -> int:
        stmt = select(func.count(WinnerRecord.id)).where(WinnerRecord.activity_id == activity_id)
        return int(session.scalar(stmt) or 0)

    def count_by_prize(self, session: Session, prize_id: int) -> int:
        stmt = select(func.count(WinnerRecord.id)).where(WinnerRecord.prize_id == prize_id)
        return int(session.scalar(stmt) or 0)

    def count_by_participant(self, session: Session, participant_id: int) -> int:
        stmt = select(func.count(WinnerRecord.id)).where(WinnerRecord.participant_id == participant_id)
        return int(session.scalar(stmt) or 0)

    def max_round(self, session: Session, activity_id: int) -> int | None:
        stmt = select(func.max(WinnerRecord.round)).where(WinnerRecord.activity_id == activity_id)
        value = session.scalar(stmt)
        return int(value) if value is not None else None

    def add_many(self, session: Session, records: Sequence[WinnerRecord]) -> None:
        session.add_all(records)

    def delete_by_activity(self, session: Session, activity_id: int) -> int:
        result = session.execute(delete(WinnerRecord).where(WinnerRecord.activity_id == activity_id))
        return int(result.rowcount or 0)
