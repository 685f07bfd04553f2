"""Kubernetes secret store adapter."""

from __future__ import annotations

import base64
import copy
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol, TypeVar

from kubernetes import client
from kubernetes.client.exceptions import ApiException
from urllib3.exceptions import HTTPError

from .. import metrics
from ..constants import FIELD_MANAGER, SECRET_TYPE_OPAQUE
from .errors import NotFoundError, TransientStoreError

_T = TypeVar("_T")


@dataclass
class Secret:
    """In-memory copy of a Kubernetes secret.

    ``data`` holds decoded bytes; base64 only exists on the wire.
    """

    name: str
    namespace: str
    labels: dict[str, str] = field(default_factory=dict)
    data: dict[str, bytes] = field(default_factory=dict)
    type: str = SECRET_TYPE_OPAQUE
    annotations: dict[str, str] = field(default_factory=dict)
    owner_references: list[Any] = field(default_factory=list)
    resource_version: str | None = None
    immutable: bool | None = None
    # Metadata as fetched, so a replace keeps fields not modelled here
    source_metadata: client.V1ObjectMeta | None = field(default=None, repr=False, compare=False)

    @classmethod
    def from_v1(cls, secret: client.V1Secret) -> Secret:
        """Build a Secret from a kubernetes client V1Secret."""
        meta = secret.metadata
        data: dict[str, bytes] = {}
        for key, value in (secret.data or {}).items():
            if value is None:
                data[key] = b""
            elif isinstance(value, str):
                data[key] = base64.b64decode(value)
            else:
                data[key] = value
        return cls(
            name=meta.name,
            namespace=meta.namespace,
            labels=dict(meta.labels or {}),
            data=data,
            type=secret.type or SECRET_TYPE_OPAQUE,
            annotations=dict(meta.annotations or {}),
            owner_references=list(meta.owner_references or []),
            resource_version=meta.resource_version,
            immutable=secret.immutable,
            source_metadata=meta,
        )

    def to_v1(self) -> client.V1Secret:
        """Convert to a kubernetes client V1Secret with base64 encoded data.

        Fetched secrets start from their original metadata, so finalizers,
        generate_name and the like survive a full replace.
        """
        if self.source_metadata is not None:
            metadata = copy.deepcopy(self.source_metadata)
        else:
            metadata = client.V1ObjectMeta()
        metadata.name = self.name
        metadata.namespace = self.namespace
        metadata.labels = self.labels or None
        metadata.annotations = self.annotations or None
        metadata.owner_references = self.owner_references or None
        metadata.resource_version = self.resource_version
        return client.V1Secret(
            api_version="v1",
            kind="Secret",
            metadata=metadata,
            type=self.type,
            immutable=self.immutable,
            data={k: base64.b64encode(v).decode("utf-8") for k, v in self.data.items()},
        )


class SecretStore(Protocol):
    """Synchronous get/create/update gateway for secrets."""

    def get(self, name: str, namespace: str) -> Secret:
        ...

    def create(self, secret: Secret) -> None:
        ...

    def update(self, secret: Secret) -> None:
        ...


class KubernetesSecretStore:
    """SecretStore backed by the Kubernetes CoreV1Api.

    No caching, retries or batching: every call goes to the API server and
    every failure is classified and raised.
    """

    def __init__(self, api: client.CoreV1Api):
        self.api = api

    def _call(
        self,
        operation: str,
        name: str,
        namespace: str,
        fn: Callable[[], _T],
    ) -> _T:
        start_time = time.time()
        try:
            result = fn()
            metrics.api_call_total.labels(api_type="k8s", operation=operation, result="success").inc()
            return result
        except ApiException as e:
            if e.status == 404 and operation == "get_secret":
                metrics.api_call_total.labels(api_type="k8s", operation=operation, result="not_found").inc()
                raise NotFoundError(
                    f"secret '{name}' not found in namespace '{namespace}'",
                    name=name,
                    namespace=namespace,
                    status=e.status,
                ) from e
            metrics.api_call_total.labels(api_type="k8s", operation=operation, result="error").inc()
            raise TransientStoreError(
                f"{operation} '{name}' in namespace '{namespace}' failed: ({e.status}) {e.reason}",
                name=name,
                namespace=namespace,
                status=e.status,
            ) from e
        except (HTTPError, OSError) as e:
            metrics.api_call_total.labels(api_type="k8s", operation=operation, result="error").inc()
            raise TransientStoreError(
                f"{operation} '{name}' in namespace '{namespace}' failed: {e}",
                name=name,
                namespace=namespace,
            ) from e
        finally:
            duration = time.time() - start_time
            metrics.api_call_duration_seconds.labels(api_type="k8s", operation=operation).observe(duration)

    def get(self, name: str, namespace: str) -> Secret:
        """Read a secret.

        Raises:
            NotFoundError: If the secret does not exist
            TransientStoreError: On any other failure
        """
        v1_secret = self._call(
            "get_secret",
            name,
            namespace,
            lambda: self.api.read_namespaced_secret(name=name, namespace=namespace),
        )
        return Secret.from_v1(v1_secret)

    def create(self, secret: Secret) -> None:
        """Create a secret. Already-exists is reported as TransientStoreError."""
        self._call(
            "create_secret",
            secret.name,
            secret.namespace,
            lambda: self.api.create_namespaced_secret(
                namespace=secret.namespace,
                body=secret.to_v1(),
                field_manager=FIELD_MANAGER,
            ),
        )

    def update(self, secret: Secret) -> None:
        """Replace a secret, guarded by its resource version."""
        self._call(
            "update_secret",
            secret.name,
            secret.namespace,
            lambda: self.api.replace_namespaced_secret(
                name=secret.name,
                namespace=secret.namespace,
                body=secret.to_v1(),
                field_manager=FIELD_MANAGER,
            ),
        )
