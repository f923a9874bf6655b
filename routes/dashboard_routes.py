import asyncio

from flask import Blueprint, jsonify, request

from routes.common import actor_id, run, services

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api")


@dashboard_bp.route("/dashboard/stats", methods=["GET"])
def get_stats():
    svc = services()

    async def _stats():
        return await asyncio.gather(
            svc.users.list(),
            svc.interviews.list(),
            svc.sacrament_meetings.list(),
        )

    users, interviews, agendas = run(_stats())
    return jsonify({
        "users": len(users),
        "interviews": len(interviews),
        "pendingInterviews": sum(1 for i in interviews if i.status == "pending"),
        "agendas": len(agendas),
    })


@dashboard_bp.route("/logs", methods=["GET"])
def list_logs():
    entries = run(services().logs.list())
    return jsonify({"logs": [e.to_json() for e in entries]})


@dashboard_bp.route("/session/login", methods=["POST"])
def record_login():
    svc, actor = services(), actor_id()
    agent = request.headers.get("User-Agent", "")
    log_id = run(svc.accessor.audit.record(actor, "login", "session", actor, details=agent))
    return jsonify({"logged": log_id is not None})


@dashboard_bp.route("/errors/recent", methods=["GET"])
def recent_errors():
    return jsonify({"errors": services().errors.recent()})
