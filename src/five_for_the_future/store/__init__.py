"""Local storage for xprofile rows and cached values."""

from five_for_the_future.store.object_cache import ObjectCacheStore
from five_for_the_future.store.xprofile_store import XProfileStore

__all__ = ["ObjectCacheStore", "XProfileStore"]
