"""Repository layer for Prize persistence."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from raffle.models.prize import Prize


class PrizeRepository:
    """CRUD operations for Prize."""

    def list_by_activity(self, session: Session, activity_id: int) -> Sequence[Prize]:
        stmt = (
            select(Prize)
            .where(Prize.activity_id == activity_id)
            .order_by(Prize.level.asc(), Prize.id.asc())
            .execution_options(populate_existing=True)
        )
        return list(session.scalars(stmt).all())

    def get_by_id(self, session: Session, prize_id: int) -> Prize | None:
        return session.get(Prize, prize_id)

    def get_in_activity(self, session: Session, activity_id: int, prize_id: int) -> Prize | None:
        stmt = (
            select(Prize)
            .where(Prize.activity_id == activity_id, Prize.id == prize_id)
            .execution_options(populate_existing=True)
        )
        return session.scalars(stmt).one_or_none()

    def create(
        self,
        session: Session,
        activity_id: int,
        *,
        name: str,
        quantity: int,
        level: int = 1,
        image_url: str | None = None,
    ) -> Prize:
        prize = Prize(
            activity_id=activity_id,
            name=name,
            level=level,
            quantity=quantity,
            remaining_quantity=quantity,
            image_url=image_url,
        )
        session.add(prize)
        session.flush()
        return prize

    def delete(self, session: Session, prize: Prize) -> None:
        session.delete(prize)
        session.flush()
