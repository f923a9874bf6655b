# routes/common.py
import asyncio
import logging
from typing import Any, Dict

from flask import current_app, jsonify, request
from pydantic import ValidationError

from services import Services
from store.errors import DocumentMissingError, FirestorePermissionError, ReadError, WriteFailedError

logger = logging.getLogger(__name__)

ACTOR_HEADER = "X-User-Id"


class ActorRequired(Exception):
    pass


def services() -> Services:
    return current_app.extensions["ward"]


def actor_id() -> str:
    """Id of the authenticated user making the request (set by the auth layer in front of us)."""
    actor = (request.headers.get(ACTOR_HEADER) or "").strip()
    if not actor:
        raise ActorRequired()
    return actor


def body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def run(coro):
    return asyncio.run(coro)


def not_found():
    return jsonify({"error": "not_found"}), 404


def register_error_handlers(app) -> None:
    @app.errorhandler(ActorRequired)
    def _actor_required(e):
        return jsonify({"error": "actor_required"}), 401

    @app.errorhandler(ValidationError)
    def _invalid(e: ValidationError):
        details = e.errors(include_url=False, include_context=False, include_input=False)
        return jsonify({"error": "invalid_input", "details": details}), 400

    @app.errorhandler(ReadError)
    def _read_failed(e: ReadError):
        logger.error("%s on %s failed: %r", e.operation, e.path, e.cause)
        return jsonify({"error": "read_failed"}), 500

    @app.errorhandler(FirestorePermissionError)
    def _permission(e: FirestorePermissionError):
        return jsonify({"error": "permission_denied", "path": e.path, "operation": e.operation}), 403

    @app.errorhandler(WriteFailedError)
    def _write_failed(e: WriteFailedError):
        if isinstance(e.cause, DocumentMissingError):
            return not_found()
        return jsonify({"error": "write_failed", "path": e.path, "operation": e.operation}), 502
