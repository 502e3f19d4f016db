"""
Flask application factory for the Idea Graph backend.
Sets up: Config, logging, CORS, JSON error handlers, API blueprint, and health endpoint.
"""

from __future__ import annotations

import os
from datetime import datetime, timezone
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS

from ideagraph.config import get_config, set_config, AppConfig
from ideagraph.idea_generator import IdeaGenerator
from ideagraph.logging_setup import configure_logging
from .errors import register_error_handlers


def create_app(
    config_object: AppConfig | None = None,
    idea_generator: Optional[IdeaGenerator] = None,
) -> Flask:
    """
    Flask application factory.

    Args:
        config_object: Configuration to install globally; loaded from the environment when omitted
        idea_generator: Generator used by the API instead of the global one
    """
    if config_object is not None:
        set_config(config_object)
    cfg = config_object or get_config()
    configure_logging(cfg.logging)

    app = Flask(__name__)

    # Core config
    app.config.update(
        SECRET_KEY=cfg.web.secret_key,
        MAX_CONTENT_LENGTH=cfg.web.max_content_length,
    )
    app.json.sort_keys = False

    if idea_generator is not None:
        app.extensions["idea_generator"] = idea_generator

    CORS(
        app,
        resources={r"/api/*": {"origins": cfg.web.cors_origins}},
        supports_credentials=True,
    )

    register_error_handlers(app)

    # Register API blueprint
    from .api import api_bp  # defer import until app exists
    app.register_blueprint(api_bp, url_prefix="/api")

    # Health endpoint
    @app.get("/health")
    def health():
        return jsonify(
            {
                "status": "ok",
                "time": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
                "model": cfg.llm.model,
            }
        )

    app.logger.info(
        "App initialized. Health at /health. model=%s api_base=%s",
        cfg.llm.model,
        cfg.llm.api_base,
    )

    return app


# Convenience for running via `flask run`
# Only create the app automatically when invoked by Flask CLI or explicitly requested.
if os.getenv("FLASK_RUN_FROM_CLI") == "true" or os.getenv("CREATE_FLASK_APP", "").lower() == "true":
    app = create_app()
else:
    app = None


def main() -> None:
    """Run the development server."""
    cfg = get_config()
    create_app(cfg).run(host=cfg.web.host, port=cfg.web.port, debug=cfg.web.debug)
