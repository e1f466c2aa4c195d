"""Pytest configuration and fixtures."""

from __future__ import annotations

import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

import pytest
from sqlalchemy import select
from sqlalchemy.orm import Session

from raffle import create_app, models  # noqa: F401
from raffle.db import create_app_engine, create_session_factory
from raffle.locks import activity_lock
from raffle.models.activity import Activity
from raffle.models.base import Base
from raffle.models.participant import Participant
from raffle.models.prize import Prize
from raffle.models.winner_record import WinnerRecord
from raffle.repositories.activity_repository import ActivityRepository
from raffle.repositories.participant_repository import ParticipantRepository
from raffle.repositories.prize_repository import PrizeRepository


@pytest.fixture
def engine():
    """In-memory database shared by every session of a test."""
    engine = create_app_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def file_engine(tmp_path):
    """File database, so separate sessions get separate connections."""
    engine = create_app_engine(f"sqlite:///{tmp_path / 'raffle.db'}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def session(session_factory) -> Iterator[Session]:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def app():
    app = create_app({"DATABASE_URL": "sqlite://", "TESTING": True, "DRAW_LOCK_TIMEOUT": 2})
    yield app
    app.extensions["engine"].dispose()


@pytest.fixture
def client(app):
    return app.test_client()


def make_activity(session: Session, name: str = "Annual party") -> Activity:
    activity = ActivityRepository().create(session, name=name)
    session.commit()
    return activity


def make_prize(session: Session, activity: Activity, quantity: int, name: str = "Grand prize", level: int = 1) -> Prize:
    prize = PrizeRepository().create(session, activity.id, name=name, quantity=quantity, level=level)
    session.commit()
    return prize


def make_participants(session: Session, activity: Activity, names: Sequence[str]) -> list[Participant]:
    rows = [{"name": name, "code": f"E{i:03d}", "department": "R&D"} for i, name in enumerate(names, start=1)]
    participants = ParticipantRepository().create_many(session, activity.id, rows)
    session.commit()
    return participants


def snapshot(session: Session, activity_id: int) -> tuple:
    """Column-level view of an activity's draw state, read straight from the database."""

    records = session.execute(
        select(WinnerRecord.id, WinnerRecord.participant_id, WinnerRecord.prize_id, WinnerRecord.round)
        .where(WinnerRecord.activity_id == activity_id)
        .order_by(WinnerRecord.id)
    ).all()
    flags = session.execute(
        select(Participant.id, Participant.is_winner)
        .where(Participant.activity_id == activity_id)
        .order_by(Participant.id)
    ).all()
    stock = session.execute(
        select(Prize.id, Prize.quantity, Prize.remaining_quantity)
        .where(Prize.activity_id == activity_id)
        .order_by(Prize.id)
    ).all()
    return (tuple(records), tuple(flags), tuple(stock))


def winner_ids(session: Session, activity_id: int) -> list[int]:
    return list(
        session.scalars(select(WinnerRecord.participant_id).where(WinnerRecord.activity_id == activity_id)).all()
    )


@contextmanager
def lock_held_elsewhere(activity_id: int) -> Iterator[None]:
    """Hold the activity lock from another thread for the duration of the block."""

    entered = threading.Event()
    release = threading.Event()

    def holder() -> None:
        with activity_lock(activity_id):
            entered.set()
            release.wait(5)

    thread = threading.Thread(target=holder)
    thread.start()
    try:
        assert entered.wait(5)
        yield
    finally:
        release.set()
        thread.join()
