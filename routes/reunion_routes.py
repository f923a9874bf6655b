from flask import Blueprint, jsonify, request

from models.reunion import Reunion, ReunionForm
from routes.common import actor_id, body, not_found, run, services
from utils.calendar_links import reunion_link

reunion_bp = Blueprint("reunion", __name__, url_prefix="/api/reuniones")


def _out(reunion: Reunion):
    return {**reunion.to_json(), "calendarLink": reunion_link(reunion)}


@reunion_bp.route("", methods=["GET"])
def list_reuniones():
    items = run(services().reuniones.list())
    return jsonify({"reuniones": [_out(r) for r in items]})


@reunion_bp.route("/<reunion_id>", methods=["GET"])
def get_reunion(reunion_id):
    reunion = run(services().reuniones.get(reunion_id))
    if reunion is None:
        return not_found()
    return jsonify({"reunion": _out(reunion)})


@reunion_bp.route("", methods=["POST"])
def create_reunion():
    svc, actor = services(), actor_id()
    form = ReunionForm.model_validate(body())

    async def _create():
        pending = svc.reuniones.create(form.to_document(svc.config.ward_timezone), actor)
        await pending
        return await svc.reuniones.get(pending.id)

    return jsonify({"reunion": _out(run(_create()))}), 201


@reunion_bp.route("/<reunion_id>", methods=["PUT", "PATCH"])
def update_reunion(reunion_id):
    svc, actor = services(), actor_id()
    if request.method == "PUT":
        data = ReunionForm.model_validate(body()).to_document(svc.config.ward_timezone)
    else:
        data = body()

    async def _update():
        await svc.reuniones.update(reunion_id, data, actor)
        return await svc.reuniones.get(reunion_id)

    return jsonify({"reunion": _out(run(_update()))})


@reunion_bp.route("/<reunion_id>", methods=["DELETE"])
def delete_reunion(reunion_id):
    svc, actor = services(), actor_id()

    async def _delete():
        await svc.reuniones.delete(reunion_id, actor)

    run(_delete())
    return jsonify({"deleted": reunion_id})
