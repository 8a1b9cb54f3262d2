"""Durable storage helpers."""

from .storage import SlotStore

__all__ = ["SlotStore"]
