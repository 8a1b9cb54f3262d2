"""Telemetry and observability helpers.

This package emits structured reader events for deterministic auditing.
"""

from .logger import SessionLogger

__all__ = ["SessionLogger"]
