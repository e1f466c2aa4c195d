"""Prize ORM model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from raffle.models.base import Base

if TYPE_CHECKING:
    from raffle.models.activity import Activity


class Prize(Base):
    """A prize with a fixed baseline quantity and a mutable remaining count.

    ``remaining_quantity`` is only ever changed by the draw and reset
    services. ``version`` is bumped on every update so that two writers
    holding the same row state cannot both commit.
    """

    __tablename__ = "prizes"
    __table_args__ = (
        CheckConstraint(
            "remaining_quantity >= 0 AND remaining_quantity <= quantity",
            name="ck_prizes_remaining_within_quantity",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    activity_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("activities.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    remaining_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    activity: Mapped[Activity] = relationship(back_populates="prizes")

    __mapper_args__ = {"version_id_col": version}
