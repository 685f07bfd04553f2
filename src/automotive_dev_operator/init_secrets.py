"""Standalone bootstrap of the OAuth proxy cookie secrets.

Run once before the operator's workloads start::

    ado-init-secrets --namespace automotive-dev-operator-system

The POD_NAMESPACE environment variable, when set, overrides --namespace.
Exits 0 when every secret is ready and 1 on the first failure.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Sequence

from . import logging as structured_logging
from .constants import DEFAULT_NAMESPACE, KIND_SECRET, NAMESPACE_ENV_VAR
from .oauth import DEFAULT_OAUTH_SECRETS, ensure_oauth_secrets
from .utils.client import get_core_v1_api
from .utils.errors import SecretEnsureError, sanitize_exception
from .utils.secrets import KubernetesSecretStore, SecretStore

logger = logging.getLogger("init-secrets")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ado-init-secrets",
        description="Ensure OAuth proxy secrets exist with random cookie secrets.",
    )
    parser.add_argument(
        "--namespace",
        default=DEFAULT_NAMESPACE,
        help=f"The namespace to create secrets in (default: {DEFAULT_NAMESPACE}, overridden by ${NAMESPACE_ENV_VAR})",
    )
    parser.add_argument(
        "--kubeconfig",
        default=None,
        help="Path to a kubeconfig file (default: in-cluster config, then ~/.kube/config)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def resolve_namespace(flag_value: str) -> str:
    """Return the target namespace; a non-empty POD_NAMESPACE wins over the flag."""
    return os.getenv(NAMESPACE_ENV_VAR) or flag_value


def run(namespace: str, store: SecretStore) -> int:
    """Ensure all OAuth secrets in ``namespace``; return the process exit code."""
    structured_logging.log_resource_event(
        logger,
        controller="init-secrets",
        resource_kind=KIND_SECRET,
        resource_name="*",
        namespace=namespace,
        event="started",
        reason="InitSecrets",
        message="Starting OAuth secrets initialization",
    )
    try:
        results = ensure_oauth_secrets(store, namespace, DEFAULT_OAUTH_SECRETS)
    except SecretEnsureError as e:
        structured_logging.log_resource_event(
            logger,
            controller="init-secrets",
            resource_kind=KIND_SECRET,
            resource_name=e.secret_name,
            namespace=namespace,
            event="failed",
            reason="InitSecretsFailed",
            message="failed to ensure OAuth secret",
            level=logging.ERROR,
            error=sanitize_exception(e),
            step=e.step,
        )
        return 1

    for result in results:
        structured_logging.log_resource_event(
            logger,
            controller="init-secrets",
            resource_kind=KIND_SECRET,
            resource_name=result.name,
            namespace=namespace,
            event="ready",
            reason="InitSecrets",
            message="OAuth secret ready",
            action=result.action.value,
        )
    logger.info("OAuth secrets initialization completed successfully")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    structured_logging.setup_structured_logging(logging.DEBUG if args.verbose else None)

    namespace = resolve_namespace(args.namespace)

    try:
        api = get_core_v1_api(args.kubeconfig)
    except Exception as e:
        logger.error(f"unable to create Kubernetes client: {sanitize_exception(e)}")
        return 1

    return run(namespace, KubernetesSecretStore(api))


if __name__ == "__main__":
    sys.exit(main())
