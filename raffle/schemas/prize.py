"""Marshmallow schemas for Prize."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class PrizeSchema(Schema):
    """Serialize Prize."""

    id = fields.Int(required=True)
    activity_id = fields.Int(data_key="activityId")
    name = fields.Str(required=True)
    level = fields.Int()
    quantity = fields.Int()
    remaining_quantity = fields.Int(data_key="remainingQuantity")
    image_url = fields.Str(data_key="imageUrl", allow_none=True)


class PrizeCreateSchema(Schema):
    """Validate create Prize payload.

    A client-sent ``remainingQuantity`` is ignored; it always starts at ``quantity``.
    """

    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    level = fields.Int(load_default=1)
    quantity = fields.Int(load_default=1, validate=validate.Range(min=1))
    image_url = fields.Str(data_key="imageUrl", load_default=None, allow_none=True, validate=validate.Length(max=500))


class PrizeUpdateSchema(Schema):
    """Validate update Prize payload.

    ``remainingQuantity`` is ignored like on create.
    """

    class Meta:
        unknown = EXCLUDE

    id = fields.Int()
    activity_id = fields.Int(data_key="activityId")
    name = fields.Str(validate=validate.Length(min=1, max=100))
    level = fields.Int()
    quantity = fields.Int(validate=validate.Range(min=1))
    image_url = fields.Str(data_key="imageUrl", allow_none=True, validate=validate.Length(max=500))
