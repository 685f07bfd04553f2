"""Main entry point for the Automotive Dev Operator."""

from __future__ import annotations

import os
from typing import Any

import kopf

from . import health
from . import logging as structured_logging
from . import handlers  # noqa: F401
from .tracing import initialize_tracing


@kopf.on.startup()
def configure(settings: kopf.OperatorSettings, **_: Any) -> None:
    """Configure the operator."""
    structured_logging.setup_structured_logging()
    initialize_tracing()

    # Use AnnotationsProgressStorage to avoid conflicts with status updates
    settings.persistence.progress_storage = kopf.AnnotationsProgressStorage()
    settings.persistence.diffbase_storage = kopf.AnnotationsDiffBaseStorage()

    settings.posting.level = 0
    settings.networking.request_timeout = 30.0
    settings.execution.max_workers = 4

    # Start metrics HTTP server with health check endpoints
    metrics_port = int(os.getenv("METRICS_PORT", "8080"))
    health.start_http_server(metrics_port)
