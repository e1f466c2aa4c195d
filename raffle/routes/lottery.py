"""Draw engine routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from raffle.db import get_session
from raffle.schemas.draw import DrawRequestSchema, DrawResponseSchema
from raffle.schemas.winner import ActivityStatsSchema, WinnerRecordSchema
from raffle.services.draw_service import DrawService
from raffle.services.reset_service import ResetService
from raffle.services.stats_service import StatsService
from raffle.services.winner_service import WinnerService
from raffle.utils.responses import ok

lottery_bp = Blueprint("lottery", __name__)

_request_schema = DrawRequestSchema()
_response_schema = DrawResponseSchema()
_records_schema = WinnerRecordSchema(many=True)
_stats_schema = ActivityStatsSchema()
_winners = WinnerService()
_stats = StatsService()


def _draw_service() -> DrawService:
    return DrawService(
        max_retries=int(current_app.config["DRAW_MAX_RETRIES"]),
        lock_timeout=float(current_app.config["DRAW_LOCK_TIMEOUT"]),
    )


def _reset_service() -> ResetService:
    return ResetService(
        max_retries=int(current_app.config["DRAW_MAX_RETRIES"]),
        lock_timeout=float(current_app.config["DRAW_LOCK_TIMEOUT"]),
    )


@lottery_bp.post("/draw")
def draw():
    payload = request.get_json(silent=True) or {}
    data = _request_schema.load(payload)

    outcome = _draw_service().draw(
        get_session(),
        activity_id=int(data["activity_id"]),
        prize_id=int(data["prize_id"]),
        count=int(data["count"]),
        round_no=int(data["round"]),
    )
    return ok(_response_schema.dump({"prize": outcome.prize, "winners": outcome.winners}))


@lottery_bp.get("/winners/<int:activity_id>")
def list_winners(activity_id: int):
    records = _winners.list_winners(get_session(), activity_id)
    return ok(_records_schema.dump(records))


@lottery_bp.get("/winners/<int:activity_id>/round/<int:round_no>")
def list_winners_by_round(activity_id: int, round_no: int):
    records = _winners.list_winners_by_round(get_session(), activity_id, round_no)
    return ok(_records_schema.dump(records))


@lottery_bp.get("/rounds/<int:activity_id>/next")
def next_round(activity_id: int):
    return ok({"round": _winners.next_round(get_session(), activity_id)})


@lottery_bp.post("/reset/<int:activity_id>")
def reset(activity_id: int):
    outcome = _reset_service().reset(get_session(), activity_id)
    return ok({"message": "Draw results have been reset", "recordsCleared": outcome.records_cleared})


@lottery_bp.get("/stats/<int:activity_id>")
def stats(activity_id: int):
    return ok(_stats_schema.dump(_stats.stats(get_session(), activity_id)))
