"""
JSON error responses for the API.

Every error body has the same shape:
{
  "ok": false,
  "statusCode": int,
  "message": str | [str],
  "error": str,
  "path": str,
  "timestamp": str
}
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Union

from flask import Flask, jsonify, request
from loguru import logger
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from ideagraph.errors import (
    ConfigurationError,
    EmptyContentError,
    IdeaGenerationError,
    UpstreamError,
)

# Status returned to our own callers for each pipeline failure
PIPELINE_STATUS = {
    ConfigurationError: 500,
    UpstreamError: 502,
    EmptyContentError: 502,
}


def error_payload(status: int, message: Union[str, List[str]], error: str, **extra: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "ok": False,
        "statusCode": status,
        "message": message,
        "error": error,
        "path": request.path,
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    }
    payload.update(extra)
    return payload


def _validation_messages(exc: ValidationError) -> List[str]:
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        messages.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return messages


def handle_validation_error(exc: ValidationError):
    return jsonify(error_payload(400, _validation_messages(exc), "BadRequest")), 400


def handle_pipeline_error(exc: IdeaGenerationError):
    status = PIPELINE_STATUS.get(type(exc), 500)
    extra: Dict[str, Any] = {}
    if isinstance(exc, UpstreamError):
        extra = {"upstreamStatus": exc.status_code, "upstreamBody": exc.body}
        logger.error(f"Upstream failure on {request.path}: {exc.status_code} {exc.body}")
    elif isinstance(exc, ConfigurationError):
        logger.error(f"Configuration error on {request.path}: {exc}")
    else:
        logger.warning(f"{type(exc).__name__} on {request.path}: {exc}")
    return jsonify(error_payload(status, str(exc), type(exc).__name__, **extra)), status


def handle_http_exception(exc: HTTPException):
    status = exc.code or 500
    name = (exc.name or "Error").replace(" ", "")
    return jsonify(error_payload(status, exc.description or exc.name, name)), status


def handle_unexpected(exc: Exception):
    logger.exception(f"Unhandled exception on {request.path}: {exc}")
    return jsonify(error_payload(500, "Internal server error", "InternalServerError")), 500


def register_error_handlers(app: Flask) -> None:
    """Attach the shared JSON error handlers to the app."""
    app.register_error_handler(ValidationError, handle_validation_error)
    app.register_error_handler(IdeaGenerationError, handle_pipeline_error)
    app.register_error_handler(HTTPException, handle_http_exception)
    app.register_error_handler(Exception, handle_unexpected)
