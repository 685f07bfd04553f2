"""Base handler class with common functionality for all CRD handlers."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable

import kopf

from .. import metrics
from ..logging import CONTROLLER_NAME, log_resource_event
from ..utils.errors import sanitize_exception
from ..utils.events import emit_reconcile_failed, emit_reconcile_started


class BaseHandler:
    """Base class for all CRD handlers with common functionality."""

    def __init__(self, kind: str):
        """Initialize base handler.

        Args:
            kind: The Kubernetes resource kind (e.g., "AutomotiveDevConfig")
        """
        self.kind = kind
        self.logger = logging.getLogger(__name__)

    def _log(
        self,
        level: int,
        meta: dict[str, Any],
        message: str,
        event: str,
        reason: str,
        **kwargs: Any,
    ) -> None:
        log_resource_event(
            self.logger,
            controller=CONTROLLER_NAME,
            resource_kind=self.kind,
            resource_name=meta.get("name", "unknown"),
            namespace=meta.get("namespace", "default"),
            uid=meta.get("uid", "unknown"),
            event=event,
            reason=reason,
            message=message,
            level=level,
            **kwargs,
        )

    def log_info(
        self,
        meta: dict[str, Any],
        message: str,
        event: str = "info",
        reason: str = "Info",
        **kwargs: Any,
    ) -> None:
        """Log an info-level structured log message."""
        self._log(logging.INFO, meta, message, event, reason, **kwargs)

    def log_error(
        self,
        meta: dict[str, Any],
        message: str,
        error: Exception | None = None,
        event: str = "error",
        reason: str = "Error",
        **kwargs: Any,
    ) -> None:
        """Log an error-level structured log message.

        Args:
            meta: Kubernetes resource metadata
            message: Log message
            error: Optional exception to include sanitized error details
            event: Event type (default: "error")
            reason: Reason for the event (default: "Error")
            **kwargs: Additional fields to include in the log
        """
        if error is not None:
            kwargs["error"] = sanitize_exception(error)
            kwargs["error_type"] = type(error).__name__
        self._log(logging.ERROR, meta, message, event, reason, **kwargs)

    def reconcile_with_metrics(
        self,
        body: Any,
        meta: dict[str, Any],
        reconcile_fn: Callable[[], None],
    ) -> None:
        """Execute reconciliation with metrics and error handling.

        Args:
            body: Resource body, used as the event target
            meta: Kubernetes resource metadata
            reconcile_fn: Function to execute for reconciliation
        """
        emit_reconcile_started(body)
        metrics.reconcile_total.labels(kind=self.kind, result="started").inc()

        start_time = time.time()
        try:
            reconcile_fn()
            metrics.reconcile_total.labels(kind=self.kind, result="success").inc()
        except Exception as e:
            sanitized_error = sanitize_exception(e)
            metrics.error_total.labels(kind=self.kind, error_type=type(e).__name__).inc()
            self.log_error(meta, "Reconciliation failed", error=e, reason="ReconciliationFailed")
            emit_reconcile_failed(body, f"Reconciliation failed: {sanitized_error}")
            metrics.reconcile_total.labels(kind=self.kind, result="error").inc()
            raise
        finally:
            duration = time.time() - start_time
            metrics.reconcile_duration_seconds.labels(kind=self.kind).observe(duration)

    def update_resource_status(
        self,
        patch: kopf.Patch,
        meta: dict[str, Any],
        phase: str,
        message: str,
        status_data: dict[str, Any] | None = None,
    ) -> None:
        """Update resource status with common fields.

        Args:
            patch: Kopf patch object
            meta: Kubernetes resource metadata
            phase: Status phase (Pending, Ready, Failed)
            message: Human-readable detail for the phase
            status_data: Additional status data to include
        """
        patch.status.update({
            "phase": phase,
            "message": message,
            "lastUpdated": datetime.now(timezone.utc).isoformat(),
            "observedGeneration": meta.get("generation", 0),
            **(status_data or {}),
        })
