from flask import Blueprint, jsonify

from models.interview import Interview, InterviewForm
from routes.common import actor_id, body, not_found, run, services
from utils.calendar_links import interview_link

interview_bp = Blueprint("interview", __name__, url_prefix="/api/interviews")


def _out(interview: Interview):
    return {**interview.to_json(), "calendarLink": interview_link(interview)}


async def _write_then_get(repo, pending):
    await pending
    return await repo.get(pending.id)


@interview_bp.route("", methods=["GET"])
def list_interviews():
    items = run(services().interviews.list())
    return jsonify({"interviews": [_out(i) for i in items]})


@interview_bp.route("/<interview_id>", methods=["GET"])
def get_interview(interview_id):
    interview = run(services().interviews.get(interview_id))
    if interview is None:
        return not_found()
    return jsonify({"interview": _out(interview)})


@interview_bp.route("", methods=["POST"])
def create_interview():
    svc, actor = services(), actor_id()
    form = InterviewForm.model_validate(body())

    async def _create():
        return await _write_then_get(
            svc.interviews, svc.interviews.create(form.to_document(svc.config.ward_timezone), actor))

    return jsonify({"interview": _out(run(_create()))}), 201


@interview_bp.route("/<interview_id>", methods=["PUT"])
def replace_interview(interview_id):
    svc, actor = services(), actor_id()
    form = InterviewForm.model_validate(body())

    async def _update():
        return await _write_then_get(
            svc.interviews,
            svc.interviews.update(interview_id, form.to_document(svc.config.ward_timezone), actor))

    return jsonify({"interview": _out(run(_update()))})


@interview_bp.route("/<interview_id>", methods=["PATCH"])
def patch_interview(interview_id):
    svc, actor = services(), actor_id()
    data = body()

    async def _update():
        return await _write_then_get(svc.interviews, svc.interviews.update(interview_id, data, actor))

    return jsonify({"interview": _out(run(_update()))})


@interview_bp.route("/<interview_id>/toggle-status", methods=["POST"])
def toggle_interview_status(interview_id):
    svc, actor = services(), actor_id()

    async def _toggle():
        current = await svc.interviews.get(interview_id)
        if current is None:
            return None
        return await _write_then_get(
            svc.interviews, svc.interviews.update(interview_id, {"status": current.toggled_status()}, actor))

    interview = run(_toggle())
    if interview is None:
        return not_found()
    return jsonify({"interview": _out(interview)})


@interview_bp.route("/<interview_id>", methods=["DELETE"])
def delete_interview(interview_id):
    svc, actor = services(), actor_id()

    async def _delete():
        await svc.interviews.delete(interview_id, actor)

    run(_delete())
    return jsonify({"deleted": interview_id})
