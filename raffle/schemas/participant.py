"""Marshmallow schemas for Participant."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class ParticipantSchema(Schema):
    """Serialize Participant."""

    id = fields.Int(required=True)
    activity_id = fields.Int(data_key="activityId")
    name = fields.Str(required=True)
    code = fields.Str(allow_none=True)
    department = fields.Str(allow_none=True)
    is_winner = fields.Bool(data_key="isWinner")


class ParticipantCreateSchema(Schema):
    """Validate a participant payload.

    Unknown keys (``isWinner``, ``activityId`` from a client) are dropped.
    """

    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    code = fields.Str(load_default=None, allow_none=True, validate=validate.Length(max=50))
    department = fields.Str(load_default=None, allow_none=True, validate=validate.Length(max=100))
