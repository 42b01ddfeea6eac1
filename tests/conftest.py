"""Pytest fixtures for five-for-the-future tests."""

import tempfile
from pathlib import Path

import pytest

from five_for_the_future.constants import FIELD_IDS
from five_for_the_future.directory.sqlite_directory import SqliteContributorDirectory
from five_for_the_future.models.xprofile import ProfileField
from five_for_the_future.store import ObjectCacheStore, XProfileStore
from five_for_the_future.xprofile import ProfileAggregator

SPONSORED = FIELD_IDS[ProfileField.SPONSORED]
HOURS = FIELD_IDS[ProfileField.HOURS_PER_WEEK]
TEAMS = FIELD_IDS[ProfileField.TEAM_NAMES]


@pytest.fixture
def temp_db() -> Path:
    """Temporary database path for isolated tests."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        path = Path(f.name)
    yield path
    path.unlink(missing_ok=True)


@pytest.fixture
def store(temp_db: Path) -> XProfileStore:
    return XProfileStore(temp_db)


@pytest.fixture
def cache(temp_db: Path) -> ObjectCacheStore:
    return ObjectCacheStore(temp_db)


@pytest.fixture
def directory(temp_db: Path) -> SqliteContributorDirectory:
    return SqliteContributorDirectory(temp_db)


@pytest.fixture
def aggregator(
    store: XProfileStore,
    cache: ObjectCacheStore,
    directory: SqliteContributorDirectory,
) -> ProfileAggregator:
    """Aggregator wired to stores sharing one temporary database."""
    return ProfileAggregator(store=store, cache=cache, directory=directory)


@pytest.fixture
def seeded_pledge(store: XProfileStore, directory: SqliteContributorDirectory) -> int:
    """
    Pledge 7 with three published contributors and one pending.
    alice: 10h, Docs + Theme Review; bob: 5h, Themes + Docs; carol: no profile data;
    dave (pending): 40h, Core.
    """
    pledge_id = 7
    for user_id, login in ((1, "alice"), (2, "bob"), (3, "carol"), (4, "dave")):
        directory.add_user(user_id, login)
        directory.add_contributor(pledge_id, login, status="pending" if login == "dave" else "publish")

    store.set_value(1, SPONSORED, "Yes")
    store.set_value(1, HOURS, "10")
    store.set_value(1, TEAMS, ["Docs Team", "Theme Review Team"])
    store.set_value(2, SPONSORED, "No")
    store.set_value(2, HOURS, "5")
    store.set_value(2, TEAMS, ["Themes Team", "Docs Team"])
    store.set_value(4, HOURS, "40")
    store.set_value(4, TEAMS, ["Core Team"])
    return pledge_id
