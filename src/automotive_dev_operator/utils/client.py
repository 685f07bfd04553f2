"""Kubernetes client construction."""

from __future__ import annotations

from kubernetes import client, config


def get_core_v1_api(kubeconfig: str | None = None) -> client.CoreV1Api:
    """Get a Kubernetes CoreV1Api client.

    In-cluster configuration is tried first unless an explicit kubeconfig
    path is given, then the local kubeconfig is used.

    Args:
        kubeconfig: Optional path to a kubeconfig file

    Returns:
        CoreV1Api instance
    """
    if kubeconfig:
        config.load_kube_config(config_file=kubeconfig)
    else:
        try:
            config.load_incluster_config()
        except config.ConfigException:
            config.load_kube_config()

    return client.CoreV1Api()
