"""Chapter and narrator catalogs."""

from .reciters import RECITERS, find_reciter, translation_edition
from .registry import PositionRegistry

__all__ = ["PositionRegistry", "RECITERS", "find_reciter", "translation_edition"]
