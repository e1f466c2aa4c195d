from __future__ import annotations

import pytest

from conftest import make_activity, make_participants, make_prize
from raffle.errors import NotFoundError
from raffle.services.draw_service import DrawService
from raffle.services.stats_service import ActivityStats, StatsService
from raffle.services.winner_service import WinnerService


@pytest.fixture
def activity(session):
    activity = make_activity(session)
    make_participants(session, activity, [f"P{i}" for i in range(10)])
    return activity


def test_next_round_defaults_to_one(session, activity):
    assert WinnerService().next_round(session, activity.id) == 1


def test_next_round_follows_highest_round(session, activity):
    prize = make_prize(session, activity, quantity=5)
    DrawService().draw(session, activity.id, prize.id, count=1, round_no=3)
    DrawService().draw(session, activity.id, prize.id, count=1, round_no=1)

    assert WinnerService().next_round(session, activity.id) == 4


def test_rounds_are_listed_independently(session, activity):
    prize = make_prize(session, activity, quantity=6)
    service = DrawService()
    r2 = service.draw(session, activity.id, prize.id, count=2, round_no=2)
    r1 = service.draw(session, activity.id, prize.id, count=1, round_no=1)
    r2b = service.draw(session, activity.id, prize.id, count=1, round_no=2)

    winners = WinnerService()
    round_two = winners.list_winners_by_round(session, activity.id, 2)
    round_one = winners.list_winners_by_round(session, activity.id, 1)

    assert sorted(r.participant_id for r in round_two) == sorted(w.id for w in r2.winners + r2b.winners)
    assert [r.participant_id for r in round_one] == [r1.winners[0].id]
    assert list(winners.list_winners_by_round(session, activity.id, 9)) == []


def test_list_winners_newest_first_and_expanded(session, activity):
    prize = make_prize(session, activity, quantity=3)
    DrawService().draw(session, activity.id, prize.id, count=1)
    DrawService().draw(session, activity.id, prize.id, count=1)

    records = WinnerService().list_winners(session, activity.id)

    assert len(records) == 2
    assert records[0].id > records[1].id
    assert records[0].participant.name.startswith("P")
    assert records[0].prize.id == prize.id


def test_winner_listing_unknown_activity_is_empty(session):
    assert list(WinnerService().list_winners(session, 404)) == []
    assert list(WinnerService().list_winners_by_round(session, 404, 1)) == []


def test_next_round_unknown_activity(session):
    with pytest.raises(NotFoundError):
        WinnerService().next_round(session, 404)


def test_stats(session, activity):
    first = make_prize(session, activity, quantity=2, name="First")
    make_prize(session, activity, quantity=5, name="Second", level=2)
    DrawService().draw(session, activity.id, first.id, count=2)

    assert StatsService().stats(session, activity.id) == ActivityStats(
        total_participants=10,
        available_participants=8,
        total_prizes=7,
        remaining_prizes=5,
        total_winners=2,
    )


def test_stats_unknown_activity(session):
    with pytest.raises(NotFoundError):
        StatsService().stats(session, 77)
