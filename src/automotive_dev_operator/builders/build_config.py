"""Builder for AutomotiveDevConfig build configurations."""

from __future__ import annotations

from typing import Any

from ..constants import DEFAULT_PVC_SIZE, DEFAULT_SERVE_EXPIRY_HOURS


def create_build_config_from_spec(spec: dict[str, Any]) -> dict[str, Any]:
    """Create a build configuration dict from the AutomotiveDevConfig spec.

    Args:
        spec: AutomotiveDevConfig CRD spec

    Returns:
        Build configuration with defaults applied

    Raises:
        ValueError: If the build configuration is invalid
    """
    build_config = spec.get("buildConfig") or {}

    use_memory_volumes = bool(build_config.get("useMemoryVolumes", False))
    memory_volume_size = build_config.get("memoryVolumeSize") or None
    if use_memory_volumes and not memory_volume_size:
        raise ValueError("buildConfig.memoryVolumeSize is required when useMemoryVolumes is true")

    serve_expiry_hours = build_config.get("serveExpiryHours") or DEFAULT_SERVE_EXPIRY_HOURS
    if isinstance(serve_expiry_hours, bool) or not isinstance(serve_expiry_hours, int) or serve_expiry_hours <= 0:
        raise ValueError(f"buildConfig.serveExpiryHours must be a positive integer, got {serve_expiry_hours!r}")

    return {
        "use_memory_volumes": use_memory_volumes,
        "memory_volume_size": memory_volume_size,
        "pvc_size": build_config.get("pvcSize") or DEFAULT_PVC_SIZE,
        "runtime_class_name": build_config.get("runtimeClassName") or None,
        "serve_expiry_hours": serve_expiry_hours,
    }
