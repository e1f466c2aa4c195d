"""Activity routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from raffle.db import get_session
from raffle.schemas.activity import (
    ActivityCreateSchema,
    ActivityDetailSchema,
    ActivitySchema,
    ActivityUpdateSchema,
)
from raffle.services.activity_service import ActivityService
from raffle.utils.responses import ok

activities_bp = Blueprint("activities", __name__)

_activity_schema = ActivitySchema()
_activities_schema = ActivitySchema(many=True)
_detail_schema = ActivityDetailSchema()
_create_schema = ActivityCreateSchema()
_update_schema = ActivityUpdateSchema()


def _service() -> ActivityService:
    return ActivityService(lock_timeout=float(current_app.config["DRAW_LOCK_TIMEOUT"]))


@activities_bp.get("/activities")
def list_activities():
    """List activities, newest first."""

    return ok(_activities_schema.dump(_service().list_activities(get_session())))


@activities_bp.get("/activities/<int:activity_id>")
def get_activity(activity_id: int):
    """Get an activity with its prizes and participants."""

    activity = _service().get_activity(get_session(), activity_id)
    return ok(_detail_schema.dump(activity))


@activities_bp.post("/activities")
def create_activity():
    payload = request.get_json(silent=True) or {}
    data = _create_schema.load(payload)

    activity = _service().create_activity(get_session(), **data)

    # Commit occurs in teardown if no exception.
    return ok(_activity_schema.dump(activity), status_code=201)


@activities_bp.put("/activities/<int:activity_id>")
def update_activity(activity_id: int):
    """Update name, description, theme or status."""

    payload = request.get_json(silent=True) or {}
    data = _update_schema.load(payload)

    activity = _service().update_activity(get_session(), activity_id, data)
    return ok(_activity_schema.dump(activity))


@activities_bp.delete("/activities/<int:activity_id>")
def delete_activity(activity_id: int):
    _service().delete_activity(get_session(), activity_id)
    return ok({"deleted": activity_id})
