"""Activity ORM model.

An activity is one raffle event. It owns its prizes, participants and
winner records; deleting it removes all three.
"""

from __future__ import annotations

from datetime import datetime
from enum import IntEnum
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from raffle.models.base import Base

if TYPE_CHECKING:
    from raffle.models.participant import Participant
    from raffle.models.prize import Prize
    from raffle.models.winner_record import WinnerRecord


class ActivityStatus(IntEnum):
    """Advisory lifecycle status, never enforced by the draw engine."""

    NOT_STARTED = 0
    IN_PROGRESS = 1
    FINISHED = 2


class Activity(Base):
    __tablename__ = "activities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    theme_type: Mapped[str] = mapped_column(String(50), nullable=False, default="wheel")
    status: Mapped[int] = mapped_column(Integer, nullable=False, default=int(ActivityStatus.NOT_STARTED))
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.now, server_default=func.now())

    prizes: Mapped[list[Prize]] = relationship(back_populates="activity", order_by="Prize.level")
    participants: Mapped[list[Participant]] = relationship(back_populates="activity", order_by="Participant.id")
    winner_records: Mapped[list[WinnerRecord]] = relationship(back_populates="activity")
