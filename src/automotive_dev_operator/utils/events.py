"""Utilities for emitting Kubernetes events."""

from __future__ import annotations

from typing import Any

import kopf

from ..constants import (
    EVENT_REASON_OAUTH_SECRETS_FAILED,
    EVENT_REASON_OAUTH_SECRETS_READY,
    EVENT_REASON_RECONCILE_FAILED,
    EVENT_REASON_RECONCILE_STARTED,
    EVENT_REASON_VALIDATE_FAILED,
    EVENT_REASON_VALIDATE_SUCCEEDED,
)


def emit_event(
    body: Any,
    reason: str,
    message: str,
    type_: str = "Normal",
) -> None:
    """Emit a Kubernetes event.

    Args:
        body: Resource body the event refers to
        reason: Event reason
        message: Event message
        type_: Event type (Normal or Warning)
    """
    kopf.event(
        body,
        reason=reason,
        message=message,
        type=type_,
    )


def emit_reconcile_started(body: Any) -> None:
    """Emit reconcile started event."""
    emit_event(body, EVENT_REASON_RECONCILE_STARTED, "Reconciliation started")


def emit_reconcile_failed(body: Any, message: str) -> None:
    """Emit reconcile failed event."""
    emit_event(body, EVENT_REASON_RECONCILE_FAILED, message, type_="Warning")


def emit_validate_succeeded(body: Any) -> None:
    """Emit validation succeeded event."""
    emit_event(body, EVENT_REASON_VALIDATE_SUCCEEDED, "Validation succeeded")


def emit_validate_failed(body: Any, message: str) -> None:
    """Emit validation failed event."""
    emit_event(body, EVENT_REASON_VALIDATE_FAILED, message, type_="Warning")


def emit_oauth_secrets_ready(body: Any, namespace: str) -> None:
    emit_event(body, EVENT_REASON_OAUTH_SECRETS_READY, f"OAuth proxy secrets ready in {namespace}")


def emit_oauth_secrets_failed(body: Any, message: str) -> None:
    emit_event(body, EVENT_REASON_OAUTH_SECRETS_FAILED, message, type_="Warning")
