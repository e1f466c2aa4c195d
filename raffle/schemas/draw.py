"""Schemas for the draw API."""

from __future__ import annotations

from marshmallow import Schema, fields

from raffle.schemas.prize import PrizeSchema


class DrawRequestSchema(Schema):
    """Draw payload.

    ``count`` is range-checked by the draw service so that missing
    activities and prizes are reported before a bad count.
    """

    activity_id = fields.Integer(required=True, data_key="activityId")
    prize_id = fields.Integer(required=True, data_key="prizeId")
    count = fields.Integer(required=False, load_default=1)
    round = fields.Integer(required=False, load_default=1)


class WinnerInfoSchema(Schema):
    id = fields.Int(required=True)
    name = fields.Str(required=True)
    code = fields.Str(allow_none=True)
    department = fields.Str(allow_none=True)


class DrawResponseSchema(Schema):
    prize = fields.Nested(PrizeSchema, required=True)
    winners = fields.List(fields.Nested(WinnerInfoSchema), required=True)
