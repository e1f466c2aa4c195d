"""Winner record ORM model (append-only draw history)."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from raffle.models.base import Base

if TYPE_CHECKING:
    from raffle.models.activity import Activity
    from raffle.models.participant import Participant
    from raffle.models.prize import Prize


class WinnerRecord(Base):
    """One participant winning one prize in one round."""

    __tablename__ = "winner_records"
    __table_args__ = (
        UniqueConstraint("activity_id", "participant_id", name="uq_winner_records_activity_participant"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    activity_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("activities.id", ondelete="CASCADE"), nullable=False, index=True
    )
    participant_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("participants.id", ondelete="RESTRICT"), nullable=False
    )
    prize_id: Mapped[int] = mapped_column(Integer, ForeignKey("prizes.id", ondelete="RESTRICT"), nullable=False)
    round: Mapped[int] = mapped_column(Integer, nullable=False, default=1, index=True)
    won_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.now)

    activity: Mapped[Activity] = relationship(back_populates="winner_records")
    participant: Mapped[Participant] = relationship()
    prize: Mapped[Prize] = relationship()
