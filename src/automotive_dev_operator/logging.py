"""Structured logging configuration for the Automotive Dev Operator."""

import json
import logging
import os
import sys
from typing import Any

CONTROLLER_NAME = "automotive-dev-operator"


def setup_structured_logging(level: str | int | None = None) -> None:
    """Configure structured JSON logging.

    Args:
        level: Log level name or number; defaults to LOG_LEVEL or INFO
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )


def log_resource_event(
    logger: logging.Logger,
    controller: str,
    resource_kind: str,
    resource_name: str,
    namespace: str,
    event: str,
    reason: str,
    message: str,
    uid: str | None = None,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """Log a structured resource event."""
    if not logger.isEnabledFor(level):
        return
    log_data = {
        "controller": controller,
        "resource": resource_kind,
        "name": resource_name,
        "namespace": namespace,
        "event": event,
        "reason": reason,
        "message": message,
    }
    if uid is not None:
        log_data["uid"] = uid
    log_data.update(sanitize_secrets(kwargs))
    logger.log(level, json.dumps(log_data, default=str))


def sanitize_secrets(log_data: dict[str, Any]) -> dict[str, Any]:
    """Remove secret fields from log data."""
    secret_fields = {"cookie-secret", "cookie_secret", "client_secret", "session_token", "password"}
    sanitized = log_data.copy()
    for field in secret_fields:
        if field in sanitized:
            sanitized[field] = "***REDACTED***"
    return sanitized
