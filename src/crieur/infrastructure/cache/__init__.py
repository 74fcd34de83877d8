"""Caching infrastructure."""

from crieur.infrastructure.cache.metadata_cache import MetadataCache

__all__ = ["MetadataCache"]
