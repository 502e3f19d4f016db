"""
API blueprint for the Idea Graph backend.

Endpoints:
- GET /api/health
- GET /api/config          (API key redacted)
- POST /api/generate-ideas (real model call)
- POST /api/parse-reply    (parse a supplied model reply; no model call)
"""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from loguru import logger

from ideagraph.config import get_config
from ideagraph.idea_generator import IdeaGenerator, get_idea_generator
from ideagraph.models import GenerateIdeasRequest, ParseReplyRequest

api_bp = Blueprint("api", __name__)


def _generator() -> IdeaGenerator:
    # An app built with an explicit generator (tests, scripts) bypasses the global one
    return current_app.extensions.get("idea_generator") or get_idea_generator()


def _validation_context() -> dict:
    return {"max_topic_length": get_config().generation.max_topic_length}


@api_bp.get("/health")
def api_health():
    cfg = get_config()
    return jsonify(
        {
            "status": "ok",
            "model": cfg.llm.model,
            "provider": cfg.llm.provider,
            "apiKeyConfigured": bool(cfg.llm.api_key),
            "engineVersion": cfg.generation.engine_version,
        }
    )


@api_bp.get("/config")
def api_config():
    cfg = get_config().to_dict()
    # Redact secrets if present
    if cfg["llm"].get("api_key"):
        cfg["llm"]["api_key"] = "****"
    if cfg["web"].get("secret_key"):
        cfg["web"]["secret_key"] = "****"
    return jsonify(cfg)


@api_bp.post("/generate-ideas")
def api_generate_ideas():
    """
    Generate an idea graph for a topic.
    Body: { "topic": str }
    """
    payload = request.get_json(silent=True) or {}
    body = GenerateIdeasRequest.model_validate(payload, context=_validation_context())
    graph = _generator().generate_ideas(body.topic)
    logger.info(f"Generated {len(graph.nodes)} ideas for topic: {body.topic!r}")
    return jsonify({"ok": True, "graph": graph.to_dict()}), 201


@api_bp.post("/parse-reply")
def api_parse_reply():
    """
    Parse a model reply into an idea graph without calling the model.
    Body: { "topic": str, "text": str }
    """
    payload = request.get_json(silent=True) or {}
    body = ParseReplyRequest.model_validate(payload, context=_validation_context())
    graph = _generator().build_graph(body.topic, body.text)
    return jsonify({"ok": True, "graph": graph.to_dict()})
