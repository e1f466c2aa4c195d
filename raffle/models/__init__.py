"""ORM models."""

from raffle.models.activity import Activity, ActivityStatus
from raffle.models.participant import Participant
from raffle.models.prize import Prize
from raffle.models.winner_record import WinnerRecord

__all__ = ["Activity", "ActivityStatus", "Participant", "Prize", "WinnerRecord"]
