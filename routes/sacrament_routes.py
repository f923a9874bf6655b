import io

from flask import Blueprint, jsonify, send_file

from agent import agenda_agent
from models.sacrament_meeting import SacramentMeetingForm
from routes.common import actor_id, body, not_found, run, services
from utils.pdf_export import agenda_filename, render_agenda_pdf

sacrament_bp = Blueprint("sacrament", __name__, url_prefix="/api/sacrament-meetings")


@sacrament_bp.route("", methods=["GET"])
def list_agendas():
    items = run(services().sacrament_meetings.list())
    return jsonify({"agendas": [m.to_json() for m in items]})


@sacrament_bp.route("/<meeting_id>", methods=["GET"])
def get_agenda(meeting_id):
    meeting = run(services().sacrament_meetings.get(meeting_id))
    if meeting is None:
        return not_found()
    return jsonify({"agenda": meeting.to_json()})


@sacrament_bp.route("", methods=["POST"])
def create_agenda():
    svc, actor = services(), actor_id()
    data = SacramentMeetingForm.model_validate(body()).to_document(svc.config.ward_timezone)

    async def _create():
        pending = svc.sacrament_meetings.create(data, actor)
        await pending
        return await svc.sacrament_meetings.get(pending.id)

    return jsonify({"agenda": run(_create()).to_json()}), 201


@sacrament_bp.route("/<meeting_id>", methods=["PUT"])
def update_agenda(meeting_id):
    svc, actor = services(), actor_id()
    data = SacramentMeetingForm.model_validate(body()).to_document(svc.config.ward_timezone)

    async def _update():
        await svc.sacrament_meetings.update(meeting_id, data, actor)
        return await svc.sacrament_meetings.get(meeting_id)

    return jsonify({"agenda": run(_update()).to_json()})


@sacrament_bp.route("/<meeting_id>", methods=["DELETE"])
def delete_agenda(meeting_id):
    svc, actor = services(), actor_id()

    async def _delete():
        await svc.sacrament_meetings.delete(meeting_id, actor)

    run(_delete())
    return jsonify({"deleted": meeting_id})


@sacrament_bp.route("/<meeting_id>/pdf", methods=["GET"])
def export_agenda_pdf(meeting_id):
    meeting = run(services().sacrament_meetings.get(meeting_id))
    if meeting is None:
        return not_found()
    return send_file(
        io.BytesIO(render_agenda_pdf(meeting)),
        mimetype="application/pdf",
        as_attachment=True,
        download_name=agenda_filename(meeting),
    )


@sacrament_bp.route("/suggestions", methods=["POST"])
def suggest_improvements():
    svc = services()
    actor_id()
    data = body()
    ward_needs = (data.get("wardNeeds") or "").strip()
    past_meetings = (data.get("pastMeetingData") or "").strip()
    if not ward_needs or not past_meetings:
        return jsonify({"error": "missing_info"}), 400

    async def _suggest():
        current = None
        if data.get("meetingId"):
            current = await svc.sacrament_meetings.get(data["meetingId"])
            if current is None:
                return None
        return await agenda_agent.suggest_agenda_improvements(svc.config, ward_needs, past_meetings, current)

    try:
        result = run(_suggest())
    except agenda_agent.AgendaSuggestionError:
        return jsonify({"error": "ai_failed"}), 502
    if result is None:
        return not_found()
    return jsonify(result)
