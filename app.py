# app.py
import logging
from typing import Optional

from flask import Flask
from flask_cors import CORS

from config import AppConfig, get_config
from routes.bishopric_routes import bishopric_bp
from routes.common import register_error_handlers
from routes.dashboard_routes import dashboard_bp
from routes.interview_routes import interview_bp
from routes.reunion_routes import reunion_bp
from routes.sacrament_routes import sacrament_bp
from routes.user_routes import user_bp
from services import build_services
from store.backend import DocumentStore


def create_app(config: Optional[AppConfig] = None, store: Optional[DocumentStore] = None) -> Flask:
    cfg = config or get_config()
    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = Flask(__name__)
    CORS(app, origins=cfg.cors_origins)
    app.extensions["ward"] = build_services(cfg, store=store)

    for bp in (interview_bp, reunion_bp, sacrament_bp, bishopric_bp, user_bp, dashboard_bp):
        app.register_blueprint(bp)
    register_error_handlers(app)
    return app


if __name__ == '__main__':
    create_app().run(debug=True)
