"""Schemas for draw history and statistics."""

from __future__ import annotations

from marshmallow import Schema, fields

from raffle.schemas.participant import ParticipantSchema
from raffle.schemas.prize import PrizeSchema


class WinnerRecordSchema(Schema):
    """A winner record expanded with its participant and prize."""

    id = fields.Int(required=True)
    activity_id = fields.Int(data_key="activityId")
    participant_id = fields.Int(data_key="participantId")
    prize_id = fields.Int(data_key="prizeId")
    round = fields.Int()
    won_at = fields.DateTime(data_key="wonAt")
    participant = fields.Nested(ParticipantSchema)
    prize = fields.Nested(PrizeSchema)


class ActivityStatsSchema(Schema):
    total_participants = fields.Int(data_key="totalParticipants")
    available_participants = fields.Int(data_key="availableParticipants")
    total_prizes = fields.Int(data_key="totalPrizes")
    remaining_prizes = fields.Int(data_key="remainingPrizes")
    total_winners = fields.Int(data_key="totalWinners")
