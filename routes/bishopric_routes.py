from datetime import datetime, timezone

from flask import Blueprint, jsonify

from models.bishopric import Note, NoteForm
from routes.common import actor_id, body, not_found, run, services
from store.repository import parse_stored

bishopric_bp = Blueprint("bishopric", __name__, url_prefix="/api/bishopric-meetings")


def _note_out(doc, operation="get"):
    path = services().notes.path(doc["meetingId"])
    return parse_stored(Note, doc, path, operation).to_json()


@bishopric_bp.route("", methods=["GET"])
def list_meetings():
    meetings = run(services().bishopric_meetings.list())
    return jsonify({"meetings": [m.to_json() for m in meetings]})


@bishopric_bp.route("", methods=["POST"])
def create_meeting():
    svc, actor = services(), actor_id()

    async def _create():
        pending = svc.bishopric_meetings.create({"date": datetime.now(timezone.utc)}, actor)
        await pending
        return await svc.bishopric_meetings.get(pending.id)

    return jsonify({"meeting": run(_create()).to_json()}), 201


@bishopric_bp.route("/<meeting_id>/notes", methods=["GET"])
def list_notes(meeting_id):
    svc = services()

    async def _list():
        if await svc.bishopric_meetings.get(meeting_id) is None:
            return None
        return await svc.notes.list(meeting_id)

    notes = run(_list())
    if notes is None:
        return not_found()
    return jsonify({"notes": [_note_out(n, "list") for n in notes]})


@bishopric_bp.route("/<meeting_id>/notes", methods=["POST"])
def create_note(meeting_id):
    svc, actor = services(), actor_id()
    form = NoteForm.model_validate(body())

    async def _create():
        if await svc.bishopric_meetings.get(meeting_id) is None:
            return None
        pending = svc.notes.create(meeting_id, form.to_document(svc.config.ward_timezone), actor)
        await pending
        return await svc.notes.get(meeting_id, pending.id)

    note = run(_create())
    if note is None:
        return not_found()
    return jsonify({"note": _note_out(note)}), 201


@bishopric_bp.route("/<meeting_id>/notes/<note_id>", methods=["PUT"])
def update_note(meeting_id, note_id):
    svc, actor = services(), actor_id()
    form = NoteForm.model_validate(body())

    async def _update():
        await svc.notes.update(meeting_id, note_id, form.to_document(svc.config.ward_timezone), actor)
        return await svc.notes.get(meeting_id, note_id)

    return jsonify({"note": _note_out(run(_update()))})


@bishopric_bp.route("/<meeting_id>/notes/<note_id>", methods=["DELETE"])
def delete_note(meeting_id, note_id):
    svc, actor = services(), actor_id()

    async def _delete():
        await svc.notes.delete(meeting_id, note_id, actor)

    run(_delete())
    return jsonify({"deleted": note_id})
