"""Bootstrap of OAuth proxy cookie secrets.

Each secret in the catalog must exist and carry a non-empty ``cookie-secret``.
Missing secrets are created, secrets with an absent or empty value are
repaired, and an existing value is never replaced. Processing is sequential
and stops at the first failure.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Sequence

from . import metrics
from .constants import (
    COOKIE_SECRET_KEY,
    COOKIE_SECRET_LENGTH,
    KIND_SECRET,
    LABEL_COMPONENT,
    LABEL_NAME,
    LABEL_PART_OF,
    OAUTH_PROXY_BUILD_API_SECRET,
    OAUTH_PROXY_WEBUI_SECRET,
)
from .logging import CONTROLLER_NAME, log_resource_event
from .utils.errors import GenerationError, NotFoundError, SecretEnsureError, SecretStoreError
from .utils.secrets import Secret, SecretStore
from .utils.tokens import generate_random_secret

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SecretDescriptor:
    """A secret that must exist, and the labels it is created with."""

    name: str
    labels: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "labels", MappingProxyType(dict(self.labels)))


class EnsureAction(str, enum.Enum):
    """What ensuring a single secret did."""

    CREATED = "created"
    REPAIRED = "repaired"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class EnsureResult:
    name: str
    action: EnsureAction


DEFAULT_OAUTH_SECRETS: tuple[SecretDescriptor, ...] = (
    SecretDescriptor(
        name=OAUTH_PROXY_WEBUI_SECRET,
        labels={
            LABEL_NAME: "ado-webui",
            LABEL_PART_OF: "automotive-dev-operator",
        },
    ),
    SecretDescriptor(
        name=OAUTH_PROXY_BUILD_API_SECRET,
        labels={
            LABEL_NAME: "automotive-dev-operator",
            LABEL_COMPONENT: "build-api",
        },
    ),
)


def _new_cookie_secret(name: str) -> bytes:
    try:
        return generate_random_secret(COOKIE_SECRET_LENGTH).encode("utf-8")
    except GenerationError as e:
        raise SecretEnsureError(name, "generate", e) from e


def _log(namespace: str, name: str, event: str, message: str, level: int = logging.INFO) -> None:
    log_resource_event(
        logger,
        controller=CONTROLLER_NAME,
        resource_kind=KIND_SECRET,
        resource_name=name,
        namespace=namespace,
        event=event,
        reason="OAuthSecret",
        message=message,
        level=level,
    )


def ensure_oauth_secret(
    store: SecretStore,
    namespace: str,
    descriptor: SecretDescriptor,
) -> EnsureResult:
    """Ensure one secret exists with a non-empty cookie secret.

    Args:
        store: Secret store to read and write through
        namespace: Namespace holding the secret
        descriptor: Secret name and the labels used when creating it

    Returns:
        What was done for the secret

    Raises:
        SecretEnsureError: If fetching, generating or writing failed
    """
    name = descriptor.name
    try:
        secret = store.get(name, namespace)
    except NotFoundError:
        secret = Secret(
            name=name,
            namespace=namespace,
            labels=dict(descriptor.labels),
            data={COOKIE_SECRET_KEY: _new_cookie_secret(name)},
        )
        try:
            store.create(secret)
        except SecretStoreError as e:
            raise SecretEnsureError(name, "create", e) from e
        _log(namespace, name, "created", "Created OAuth secret with random cookie-secret")
        return EnsureResult(name, EnsureAction.CREATED)
    except SecretStoreError as e:
        raise SecretEnsureError(name, "get", e) from e

    if secret.data.get(COOKIE_SECRET_KEY):
        _log(
            namespace,
            name,
            "unchanged",
            "OAuth secret already exists with cookie-secret",
            level=logging.DEBUG,
        )
        return EnsureResult(name, EnsureAction.UNCHANGED)

    secret.data[COOKIE_SECRET_KEY] = _new_cookie_secret(name)
    try:
        store.update(secret)
    except SecretStoreError as e:
        raise SecretEnsureError(name, "update", e) from e
    _log(namespace, name, "updated", "Updated OAuth secret with random cookie-secret")
    return EnsureResult(name, EnsureAction.REPAIRED)


def ensure_oauth_secrets(
    store: SecretStore,
    namespace: str,
    catalog: Sequence[SecretDescriptor] = DEFAULT_OAUTH_SECRETS,
) -> list[EnsureResult]:
    """Ensure every secret in the catalog exists with a cookie secret.

    Descriptors are processed in order and the first failure aborts the pass;
    later descriptors are not touched.

    Args:
        store: Secret store to read and write through
        namespace: Namespace holding the secrets
        catalog: Secrets to ensure

    Returns:
        One result per descriptor, in catalog order

    Raises:
        SecretEnsureError: On the first descriptor that fails
    """
    results = []
    for descriptor in catalog:
        try:
            result = ensure_oauth_secret(store, namespace, descriptor)
        except SecretEnsureError as e:
            metrics.oauth_secret_operations_total.labels(
                secret=descriptor.name, action=e.step, result="error"
            ).inc()
            raise
        metrics.oauth_secret_operations_total.labels(
            secret=descriptor.name, action=result.action.value, result="success"
        ).inc()
        results.append(result)
    return results
