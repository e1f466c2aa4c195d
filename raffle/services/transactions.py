"""Commit helper shared by the draw and reset services."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from raffle.errors import ConcurrencyConflictError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_in_transaction(session: Session, work: Callable[[Session], T], *, attempts: int, operation: str) -> T:
    """Run ``work`` and commit its changes as one unit.

    ``work`` re-reads everything it needs, so a version conflict at commit
    time is handled by rolling back and running it again from scratch.
    Business errors raised by ``work`` roll back and propagate untouched.
    """

    attempts = max(1, int(attempts))
    for attempt in range(1, attempts + 1):
        try:
            result = work(session)
            session.commit()
        except StaleDataError:
            session.rollback()
            logger.warning("%s hit a concurrent update (attempt %d/%d)", operation, attempt, attempts)
            continue
        except Exception:
            session.rollback()
            raise
        return result

    raise ConcurrencyConflictError(
        message=f"{operation} kept colliding with concurrent updates, please retry",
        details={"attempts": attempts},
    )
