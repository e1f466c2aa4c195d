"""Prize routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from raffle.db import get_session
from raffle.schemas.prize import PrizeCreateSchema, PrizeSchema, PrizeUpdateSchema
from raffle.services.prize_service import PrizeService
from raffle.utils.responses import ok

prizes_bp = Blueprint("prizes", __name__)

_prize_schema = PrizeSchema()
_prizes_schema = PrizeSchema(many=True)
_create_schema = PrizeCreateSchema()
_update_schema = PrizeUpdateSchema()


def _service() -> PrizeService:
    return PrizeService(lock_timeout=float(current_app.config["DRAW_LOCK_TIMEOUT"]))


@prizes_bp.get("/activities/<int:activity_id>/prizes")
def list_prizes(activity_id: int):
    """List prizes of an activity by level."""

    return ok(_prizes_schema.dump(_service().list_prizes(get_session(), activity_id)))


@prizes_bp.get("/activities/<int:activity_id>/prizes/<int:prize_id>")
def get_prize(activity_id: int, prize_id: int):
    return ok(_prize_schema.dump(_service().get_prize(get_session(), activity_id, prize_id)))


@prizes_bp.post("/activities/<int:activity_id>/prizes")
def create_prize(activity_id: int):
    payload = request.get_json(silent=True) or {}
    data = _create_schema.load(payload)

    prize = _service().create_prize(get_session(), activity_id, **data)
    return ok(_prize_schema.dump(prize), status_code=201)


@prizes_bp.put("/activities/<int:activity_id>/prizes/<int:prize_id>")
def update_prize(activity_id: int, prize_id: int):
    payload = request.get_json(silent=True) or {}
    data = _update_schema.load(payload)

    prize = _service().update_prize(get_session(), activity_id, prize_id, data)
    return ok(_prize_schema.dump(prize))


@prizes_bp.delete("/activities/<int:activity_id>/prizes/<int:prize_id>")
def delete_prize(activity_id: int, prize_id: int):
    _service().delete_prize(get_session(), activity_id, prize_id)
    return ok({"deleted": prize_id})
