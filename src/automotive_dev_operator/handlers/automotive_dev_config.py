"""Handler for AutomotiveDevConfig CRD."""

from __future__ import annotations

import os
from typing import Any, Callable

import kopf

from ..builders.build_config import create_build_config_from_spec
from ..constants import (
    API_GROUP_VERSION,
    KIND_AUTOMOTIVE_DEV_CONFIG,
    NAMESPACE_ENV_VAR,
    PHASE_FAILED,
    PHASE_READY,
)
from ..oauth import DEFAULT_OAUTH_SECRETS, SecretDescriptor, ensure_oauth_secrets
from ..tracing import trace_span
from ..utils.client import get_core_v1_api
from ..utils.errors import SecretEnsureError, sanitize_exception
from ..utils.events import (
    emit_oauth_secrets_failed,
    emit_oauth_secrets_ready,
    emit_validate_failed,
    emit_validate_succeeded,
)
from ..utils.secrets import KubernetesSecretStore, SecretStore
from .base import BaseHandler

# Delay before kopf retries a failed secret bootstrap
RETRY_DELAY_SECONDS = 30


def _default_store() -> SecretStore:
    return KubernetesSecretStore(get_core_v1_api())


class AutomotiveDevConfigHandler(BaseHandler):
    """Handler for AutomotiveDevConfig resources."""

    def __init__(
        self,
        store_factory: Callable[[], SecretStore] = _default_store,
        catalog: tuple[SecretDescriptor, ...] = DEFAULT_OAUTH_SECRETS,
    ):
        """Initialize the handler.

        Args:
            store_factory: Builds the secret store on first use
            catalog: OAuth proxy secrets to ensure
        """
        super().__init__(KIND_AUTOMOTIVE_DEV_CONFIG)
        self._store_factory = store_factory
        self._store: SecretStore | None = None
        self.catalog = catalog

    @property
    def store(self) -> SecretStore:
        if self._store is None:
            self._store = self._store_factory()
        return self._store

    def secrets_namespace(self, meta: dict[str, Any]) -> str:
        """Namespace the OAuth secrets live in: the operator's own, else the resource's."""
        return os.getenv(NAMESPACE_ENV_VAR) or meta.get("namespace", "default")

    def reconcile(
        self,
        body: Any,
        spec: dict[str, Any],
        meta: dict[str, Any],
        patch: kopf.Patch,
    ) -> None:
        """Reconcile AutomotiveDevConfig resource."""
        name = meta.get("name", "unknown")

        with trace_span(
            "reconcile_automotive_dev_config",
            kind=self.kind,
            attributes={"automotivedevconfig.name": name},
        ):
            try:
                build_config = create_build_config_from_spec(spec)
            except ValueError as e:
                error_msg = str(e)
                self.log_error(meta, error_msg, reason="ValidationFailed")
                emit_validate_failed(body, error_msg)
                self.update_resource_status(patch, meta, PHASE_FAILED, error_msg)
                raise kopf.PermanentError(error_msg) from e

            emit_validate_succeeded(body)

            namespace = self.secrets_namespace(meta)
            with trace_span("ensure_oauth_secrets", kind=self.kind, attributes={"namespace": namespace}):
                try:
                    results = ensure_oauth_secrets(self.store, namespace, self.catalog)
                except SecretEnsureError as e:
                    error_msg = f"OAuth secrets not ready: {sanitize_exception(e)}"
                    self.log_error(
                        meta,
                        error_msg,
                        error=e,
                        reason="OAuthSecretsFailed",
                        secret=e.secret_name,
                        step=e.step,
                    )
                    emit_oauth_secrets_failed(body, error_msg)
                    self.update_resource_status(patch, meta, PHASE_FAILED, error_msg)
                    raise kopf.TemporaryError(error_msg, delay=RETRY_DELAY_SECONDS) from e

            emit_oauth_secrets_ready(body, namespace)
            self.log_info(
                meta,
                "OAuth secrets ready",
                event="oauth_secrets_ready",
                reason="OAuthSecretsReady",
                secrets={r.name: r.action.value for r in results},
                build_config=build_config,
            )
            self.update_resource_status(patch, meta, PHASE_READY, "AutomotiveDevConfig is ready")


# Global handler instance
_handler = AutomotiveDevConfigHandler()


@kopf.on.create(API_GROUP_VERSION, KIND_AUTOMOTIVE_DEV_CONFIG)
@kopf.on.update(API_GROUP_VERSION, KIND_AUTOMOTIVE_DEV_CONFIG)
@kopf.on.resume(API_GROUP_VERSION, KIND_AUTOMOTIVE_DEV_CONFIG)
def handle_automotive_dev_config(
    body: Any,
    spec: dict[str, Any],
    meta: dict[str, Any],
    patch: kopf.Patch,
    **kwargs: Any,
) -> None:
    """Handle AutomotiveDevConfig resource reconciliation."""
    _handler.reconcile_with_metrics(body, meta, lambda: _handler.reconcile(body, spec, meta, patch))
