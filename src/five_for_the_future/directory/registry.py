"""Registry for looking up contributor directory backends."""

from typing import Type

from five_for_the_future.directory.base import ContributorDirectory
from five_for_the_future.directory.rest_directory import RestContributorDirectory
from five_for_the_future.directory.sqlite_directory import SqliteContributorDirectory


class DirectoryRegistry:
    """Provides contributor directory backends by name."""

    _backends: dict[str, Type[ContributorDirectory]] = {
        "sqlite": SqliteContributorDirectory,
        "rest": RestContributorDirectory,
    }

    @classmethod
    def get(cls, backend_id: str, **kwargs) -> ContributorDirectory:
        """Get a directory instance for the given backend. kwargs passed to its __init__."""
        backend_cls = cls._backends.get(backend_id.lower())
        if not backend_cls:
            raise ValueError(f"Unknown directory backend: {backend_id}. Available: {list(cls._backends.keys())}")
        return backend_cls(**kwargs)

    @classmethod
    def available_backends(cls) -> list[str]:
        return list(cls._backends.keys())
