"""Error types and sanitization utilities for the operator."""

from __future__ import annotations

import re
from typing import Any


class OperatorError(Exception):
    """Base class for all operator errors."""


class SecretStoreError(OperatorError):
    """A Kubernetes secret store call failed."""

    def __init__(
        self,
        message: str,
        name: str | None = None,
        namespace: str | None = None,
        status: int | None = None,
    ):
        super().__init__(message)
        self.name = name
        self.namespace = namespace
        self.status = status


class NotFoundError(SecretStoreError):
    """The requested secret does not exist in the store."""


class TransientStoreError(SecretStoreError):
    """Any store failure other than not found (auth, network, conflict).

    Never retried at this layer; callers own their requeue policy.
    """


class GenerationError(OperatorError):
    """The entropy source could not supply random bytes."""


class SecretEnsureError(OperatorError):
    """Ensuring a single secret failed.

    Attributes:
        secret_name: Name of the secret being processed
        step: Step that failed (get, generate, create or update)
    """

    def __init__(self, secret_name: str, step: str, cause: Exception):
        super().__init__(f"failed to {step} secret {secret_name}: {cause}")
        self.secret_name = secret_name
        self.step = step


# Patterns that might expose sensitive information
SENSITIVE_PATTERNS = [
    r"bearer\s+([A-Za-z0-9\-\._~\+/]+=*)",
    r"authorization[:\s]+([^\s,;\)]+)",
]

# Fields to redact completely
SENSITIVE_FIELDS = {
    "cookie-secret",
    "cookie_secret",
    "client-secret",
    "client_secret",
    "session_token",
    "password",
    "credentials",
    "token",
}


def sanitize_error_message(message: str) -> str:
    """Sanitize error message to remove sensitive information.

    Args:
        message: Original error message

    Returns:
        Sanitized error message with sensitive data redacted
    """
    sanitized = message

    for pattern in SENSITIVE_PATTERNS:
        sanitized = re.sub(
            pattern,
            lambda m: m.group(0).replace(m.group(1), "[REDACTED]"),
            sanitized,
            flags=re.IGNORECASE,
        )

    # Replace field: value and "field": "value" patterns
    for field in SENSITIVE_FIELDS:
        sanitized = re.sub(
            rf"{re.escape(field)}[\"']?[:\s]+[\"']?([^\s,;\)\"'\}}]+)[\"']?",
            f"{field}: [REDACTED]",
            sanitized,
            flags=re.IGNORECASE,
        )

    return sanitized


def sanitize_exception(error: Exception) -> str:
    """Sanitize exception message.

    Args:
        error: Exception object

    Returns:
        Sanitized error message
    """
    return sanitize_error_message(str(error))


def sanitize_dict(data: dict[str, Any], sensitive_keys: set[str] | None = None) -> dict[str, Any]:
    """Sanitize dictionary by redacting sensitive fields.

    Args:
        data: Dictionary to sanitize
        sensitive_keys: Additional keys to redact (merged with SENSITIVE_FIELDS)

    Returns:
        Sanitized dictionary with sensitive values redacted
    """
    all_sensitive = SENSITIVE_FIELDS | (sensitive_keys or set())
    sanitized: dict[str, Any] = {}

    for key, value in data.items():
        key_lower = key.lower()
        if any(sensitive in key_lower for sensitive in all_sensitive):
            sanitized[key] = "[REDACTED]"
        elif isinstance(value, dict):
            sanitized[key] = sanitize_dict(value, sensitive_keys)
        elif isinstance(value, str):
            sanitized[key] = sanitize_error_message(value)
        else:
            sanitized[key] = value

    return sanitized
