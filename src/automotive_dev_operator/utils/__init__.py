"""Utility functions for the Automotive Dev Operator."""

from .client import get_core_v1_api
from .errors import (
    GenerationError,
    NotFoundError,
    OperatorError,
    SecretEnsureError,
    SecretStoreError,
    TransientStoreError,
    sanitize_exception,
)
from .events import emit_event
from .secrets import KubernetesSecretStore, Secret, SecretStore
from .tokens import generate_random_secret

__all__ = [
    "get_core_v1_api",
    "emit_event",
    "generate_random_secret",
    "sanitize_exception",
    "KubernetesSecretStore",
    "Secret",
    "SecretStore",
    "OperatorError",
    "SecretStoreError",
    "NotFoundError",
    "TransientStoreError",
    "GenerationError",
    "SecretEnsureError",
]
