"""Draw executor: pick winners for a prize and record them atomically."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from raffle.errors import (
    InsufficientInventoryError,
    InsufficientParticipantsError,
    InvalidArgumentError,
    NotFoundError,
)
from raffle.locks import activity_lock
from raffle.models.participant import Participant
from raffle.models.prize import Prize
from raffle.models.winner_record import WinnerRecord
from raffle.repositories.activity_repository import ActivityRepository
from raffle.repositories.prize_repository import PrizeRepository
from raffle.repositories.winner_record_repository import WinnerRecordRepository
from raffle.services.eligibility_service import EligibilityService
from raffle.services.transactions import run_in_transaction

logger = logging.getLogger(__name__)

# One generator per process, seeded from OS entropy and never reseeded.
_RNG = random.Random()


@dataclass(frozen=True)
class DrawOutcome:
    prize: Prize
    winners: list[Participant]


class DrawService:
    """Select winners without replacement and commit the result as one unit.

    Preconditions are checked in a fixed order and the first failure aborts
    the draw before anything is changed:

    1. the activity exists,
    2. the prize exists and belongs to the activity,
    3. the prize has at least ``count`` remaining,
    4. the eligible pool has at least ``count`` participants,
    5. ``count`` is at least 1.

    Draws (and resets) on the same activity are serialized; the whole
    check-select-commit sequence is re-run if a concurrent writer changed a
    prize or participant underneath it.
    """

    def __init__(
        self,
        *,
        rng: random.Random | None = None,
        max_retries: int = 3,
        lock_timeout: float = 10,
        activities: ActivityRepository | None = None,
        prizes: PrizeRepository | None = None,
        winner_records: WinnerRecordRepository | None = None,
        eligibility: EligibilityService | None = None,
    ) -> None:
        self._rng = rng or _RNG
        self._max_retries = max_retries
        self._lock_timeout = lock_timeout
        self._activities = activities or ActivityRepository()
        self._prizes = prizes or PrizeRepository()
        self._winner_records = winner_records or WinnerRecordRepository()
        self._eligibility = eligibility or EligibilityService(activities=self._activities)

    def draw(self, session: Session, activity_id: int, prize_id: int, count: int = 1, round_no: int = 1) -> DrawOutcome:
        """Draw ``count`` winners of ``prize_id`` into round ``round_no``.

        The round is stored as given; it is not checked against earlier rounds.
        """

        with activity_lock(activity_id, timeout=self._lock_timeout):
            outcome = run_in_transaction(
                session,
                lambda s: self._draw_once(s, activity_id, prize_id, int(count), int(round_no)),
                attempts=self._max_retries,
                operation="Draw",
            )

        logger.info(
            "Drew %d winner(s) activity=%s prize=%s round=%s remaining=%s",
            len(outcome.winners),
            activity_id,
            prize_id,
            round_no,
            outcome.prize.remaining_quantity,
        )
        return outcome

    def _draw_once(self, session: Session, activity_id: int, prize_id: int, count: int, round_no: int) -> DrawOutcome:
        if self._activities.get_for_update(session, activity_id) is None:
            raise NotFoundError(message=f"Activity {activity_id} not found", details={"resource": "activity"})

        prize = self._prizes.get_in_activity(session, activity_id, prize_id)
        if prize is None:
            raise NotFoundError(message=f"Prize {prize_id} not found", details={"resource": "prize"})

        if prize.remaining_quantity < count:
            logger.info("Draw rejected: prize %s has %d left, %d requested", prize_id, prize.remaining_quantity, count)
            raise InsufficientInventoryError(remaining=prize.remaining_quantity)

        pool = self._eligibility.pool(session, activity_id)
        if len(pool) < count:
            logger.info("Draw rejected: activity %s has %d eligible, %d requested", activity_id, len(pool), count)
            raise InsufficientParticipantsError(available=len(pool))

        if count < 1:
            raise InvalidArgumentError(message="count must be at least 1", details={"count": count})

        winners = self._select(pool, count)

        won_at = datetime.now()
        records = []
        for participant in winners:
            participant.is_winner = True
            records.append(
                WinnerRecord(
                    activity_id=activity_id,
                    participant_id=participant.id,
                    prize_id=prize.id,
                    round=round_no,
                    won_at=won_at,
                )
            )
        self._winner_records.add_many(session, records)
        prize.remaining_quantity -= count

        return DrawOutcome(prize=prize, winners=winners)

    def _select(self, pool: list[Participant], count: int) -> list[Participant]:
        # Uniform permutation of the whole pool, then take the head.
        shuffled = list(pool)
        self._rng.shuffle(shuffled)
        return shuffled[:count]
