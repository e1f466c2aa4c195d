"""Participant routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from raffle.db import get_session
from raffle.errors import ValidationError
from raffle.schemas.participant import ParticipantCreateSchema, ParticipantSchema
from raffle.services.participant_service import ParticipantService
from raffle.utils.responses import ok

participants_bp = Blueprint("participants", __name__)

_participant_schema = ParticipantSchema()
_participants_schema = ParticipantSchema(many=True)
_create_schema = ParticipantCreateSchema()
_import_schema = ParticipantCreateSchema(many=True)


def _service() -> ParticipantService:
    return ParticipantService(lock_timeout=float(current_app.config["DRAW_LOCK_TIMEOUT"]))


@participants_bp.get("/activities/<int:activity_id>/participants")
def list_participants(activity_id: int):
    return ok(_participants_schema.dump(_service().list_participants(get_session(), activity_id)))


@participants_bp.get("/activities/<int:activity_id>/participants/available")
def list_available_participants(activity_id: int):
    """Participants that can still be drawn."""

    return ok(_participants_schema.dump(_service().list_available(get_session(), activity_id)))


@participants_bp.get("/activities/<int:activity_id>/participants/<int:participant_id>")
def get_participant(activity_id: int, participant_id: int):
    participant = _service().get_participant(get_session(), activity_id, participant_id)
    return ok(_participant_schema.dump(participant))


@participants_bp.post("/activities/<int:activity_id>/participants")
def create_participant(activity_id: int):
    payload = request.get_json(silent=True) or {}
    data = _create_schema.load(payload)

    participant = _service().create_participant(get_session(), activity_id, data)
    return ok(_participant_schema.dump(participant), status_code=201)


@participants_bp.post("/activities/<int:activity_id>/participants/import")
def import_participants(activity_id: int):
    """Bulk-add participants from a JSON list."""

    payload = request.get_json(silent=True)
    if not isinstance(payload, list):
        raise ValidationError(message="Expected a JSON list of participants")
    rows = _import_schema.load(payload)

    imported = _service().import_participants(get_session(), activity_id, rows)
    return ok({"imported": len(imported)})


@participants_bp.delete("/activities/<int:activity_id>/participants/<int:participant_id>")
def delete_participant(activity_id: int, participant_id: int):
    _service().delete_participant(get_session(), activity_id, participant_id)
    return ok({"deleted": participant_id})


@participants_bp.delete("/activities/<int:activity_id>/participants")
def clear_participants(activity_id: int):
    deleted = _service().clear_participants(get_session(), activity_id)
    return ok({"deleted": deleted})
