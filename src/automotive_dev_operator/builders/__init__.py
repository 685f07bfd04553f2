"""Builders for CRD configurations."""

from .build_config import create_build_config_from_spec

__all__ = ["create_build_config_from_spec"]
