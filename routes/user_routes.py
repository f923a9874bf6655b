from flask import Blueprint, jsonify

from models.user import ProfileUpdate, UserForm
from routes.common import actor_id, body, not_found, run, services

user_bp = Blueprint("user", __name__, url_prefix="/api/users")


@user_bp.route("", methods=["GET"])
def list_users():
    users = run(services().users.list())
    return jsonify({"users": [u.to_json() for u in users]})


@user_bp.route("/<uid>", methods=["GET"])
def get_user(uid):
    user = run(services().users.get(uid))
    if user is None:
        return not_found()
    return jsonify({"user": user.to_json()})


@user_bp.route("", methods=["POST"])
def create_user():
    """Store the profile of an account that already exists in the auth provider."""
    svc, actor = services(), actor_id()
    form = UserForm.model_validate(body())

    async def _create():
        if await svc.users.get(form.uid) is not None:
            return None
        profile = {"email": form.email, "name": form.name, "role": form.role, "isActive": True}
        await svc.users.create(profile, actor, doc_id=form.uid)
        return await svc.users.get(form.uid)

    user = run(_create())
    if user is None:
        return jsonify({"error": "already_exists"}), 409
    return jsonify({"user": user.to_json()}), 201


@user_bp.route("/<uid>", methods=["PATCH"])
def update_user(uid):
    svc, actor = services(), actor_id()
    changes = ProfileUpdate.model_validate(body()).model_dump(by_alias=True, exclude_none=True)
    if not changes:
        return jsonify({"error": "nothing_to_update"}), 400

    async def _update():
        await svc.users.update(uid, changes, actor)
        return await svc.users.get(uid)

    return jsonify({"user": run(_update()).to_json()})


@user_bp.route("/<uid>/activation", methods=["POST"])
def set_activation(uid):
    svc, actor = services(), actor_id()
    data = body()
    if not isinstance(data.get("isActive"), bool):
        return jsonify({"error": "isActive_required"}), 400

    async def _update():
        await svc.users.update(uid, {"isActive": data["isActive"]}, actor)
        return await svc.users.get(uid)

    return jsonify({"user": run(_update()).to_json()})


@user_bp.route("/<uid>", methods=["DELETE"])
def delete_user(uid):
    # profile only; the auth account is managed by the auth provider
    svc, actor = services(), actor_id()

    async def _delete():
        await svc.users.delete(uid, actor)

    run(_delete())
    return jsonify({"deleted": uid})
