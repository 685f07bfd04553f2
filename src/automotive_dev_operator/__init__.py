"""Automotive Dev Operator: OAuth proxy secret bootstrap and config handling."""

__version__ = "0.1.0"
