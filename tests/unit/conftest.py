"""Shared fixtures for unit tests."""

from __future__ import annotations

import copy
from unittest.mock import patch

import pytest

from automotive_dev_operator.utils.errors import NotFoundError
from automotive_dev_operator.utils.secrets import Secret


class InMemorySecretStore:
    """SecretStore fake that keeps secrets in a dict and records every call."""

    def __init__(self):
        self.secrets: dict[tuple[str, str], Secret] = {}
        self.calls: list[tuple[str, str]] = []
        self.failures: dict[tuple[str, str], Exception] = {}

    def add(self, secret: Secret) -> None:
        self.secrets[(secret.namespace, secret.name)] = copy.deepcopy(secret)

    def fail(self, operation: str, name: str, error: Exception) -> None:
        self.failures[(operation, name)] = error

    def _check(self, operation: str, name: str) -> None:
        self.calls.append((operation, name))
        if (operation, name) in self.failures:
            raise self.failures[(operation, name)]

    def get(self, name: str, namespace: str) -> Secret:
        self._check("get", name)
        if (namespace, name) not in self.secrets:
            raise NotFoundError(f"secret '{name}' not found", name=name, namespace=namespace, status=404)
        return copy.deepcopy(self.secrets[(namespace, name)])

    def create(self, secret: Secret) -> None:
        self._check("create", secret.name)
        self.secrets[(secret.namespace, secret.name)] = copy.deepcopy(secret)

    def update(self, secret: Secret) -> None:
        self._check("update", secret.name)
        self.secrets[(secret.namespace, secret.name)] = copy.deepcopy(secret)

    def writes(self) -> list[tuple[str, str]]:
        return [c for c in self.calls if c[0] in ("create", "update")]


@pytest.fixture
def store() -> InMemorySecretStore:
    return InMemorySecretStore()


@pytest.fixture
def mock_kopf_event():
    with patch("automotive_dev_operator.utils.events.kopf.event") as mock_event:
        yield mock_event
