"""Wiring: build an aggregator and its collaborators from settings."""

from typing import Optional

import httpx

from five_for_the_future.directory.registry import DirectoryRegistry
from five_for_the_future.models.settings import Settings
from five_for_the_future.store import ObjectCacheStore, XProfileStore
from five_for_the_future.xprofile import ProfileAggregator


def build_aggregator(settings: Settings, *, client: Optional[httpx.Client] = None) -> ProfileAggregator:
    """
    Create the store, cache and contributor directory described by settings.
    `client` is only used by the rest directory backend.
    """
    store = XProfileStore(settings.db_path)
    cache = ObjectCacheStore(settings.db_path, blog_id=settings.blog_id)

    if settings.directory_backend.lower() == "rest":
        directory_kwargs = {
            "base_url": settings.directory_url,
            "client": client,
            "timeout": settings.directory_timeout,
        }
    else:
        directory_kwargs = {"db_path": settings.db_path}
    directory = DirectoryRegistry.get(settings.directory_backend, **directory_kwargs)

    return ProfileAggregator(store=store, cache=cache, directory=directory)
