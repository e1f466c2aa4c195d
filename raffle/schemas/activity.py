"""Marshmallow schemas for Activity."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from raffle.models.activity import ActivityStatus
from raffle.schemas.participant import ParticipantSchema
from raffle.schemas.prize import PrizeSchema


class ActivitySchema(Schema):
    """Serialize Activity."""

    id = fields.Int(required=True)
    name = fields.Str(required=True)
    description = fields.Str(allow_none=True)
    theme_type = fields.Str(data_key="themeType")
    status = fields.Int()
    created_at = fields.DateTime(data_key="createdAt")


class ActivityDetailSchema(ActivitySchema):
    """Activity with its prizes and participants."""

    prizes = fields.List(fields.Nested(PrizeSchema))
    participants = fields.List(fields.Nested(ParticipantSchema))


class ActivityCreateSchema(Schema):
    """Validate create Activity payload."""

    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    description = fields.Str(load_default=None, allow_none=True, validate=validate.Length(max=500))
    theme_type = fields.Str(data_key="themeType", load_default="wheel", validate=validate.Length(min=1, max=50))
    status = fields.Int(
        load_default=int(ActivityStatus.NOT_STARTED),
        validate=validate.OneOf([int(s) for s in ActivityStatus]),
    )


class ActivityUpdateSchema(Schema):
    """Validate update Activity payload. Every field is optional."""

    class Meta:
        unknown = EXCLUDE

    id = fields.Int()
    name = fields.Str(validate=validate.Length(min=1, max=100))
    description = fields.Str(allow_none=True, validate=validate.Length(max=500))
    theme_type = fields.Str(data_key="themeType", validate=validate.Length(min=1, max=50))
    status = fields.Int(validate=validate.OneOf([int(s) for s in ActivityStatus]))
