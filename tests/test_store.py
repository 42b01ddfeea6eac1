"""Unit tests for XProfileStore and ObjectCacheStore."""

from pathlib import Path

from five_for_the_future.constants import FIELD_IDS
from five_for_the_future.models.xprofile import ProfileField, RawRow
from five_for_the_future.store import ObjectCacheStore, XProfileStore

SPONSORED = FIELD_IDS[ProfileField.SPONSORED]
HOURS = FIELD_IDS[ProfileField.HOURS_PER_WEEK]
TEAMS = FIELD_IDS[ProfileField.TEAM_NAMES]
NAME_FIELD = 1


class TestXProfileStoreWrite:
    """Tests for set_value."""

    def test_scalar_stored_as_text(self, store: XProfileStore) -> None:
        store.set_value(42, HOURS, 10)
        assert store.fetch_rows([42], [HOURS]) == [RawRow(user_id=42, field_id=HOURS, value="10")]

    def test_list_stored_serialized(self, store: XProfileStore) -> None:
        store.set_value(42, TEAMS, ["Docs Team"])
        rows = store.fetch_rows([42], [TEAMS])
        assert rows[0].value == 'a:1:{i:0;s:9:"Docs Team";}'

    def test_set_value_replaces_existing(self, store: XProfileStore) -> None:
        store.set_value(42, HOURS, "10")
        store.set_value(42, HOURS, "20")
        rows = store.fetch_rows([42], [HOURS])
        assert len(rows) == 1
        assert rows[0].value == "20"


class TestXProfileStoreQueries:
    """Tests for fetch_rows and fetch_rows_for_fields."""

    def test_fetch_rows_restricted_to_users_and_fields(self, store: XProfileStore) -> None:
        store.set_value(1, HOURS, "5")
        store.set_value(1, NAME_FIELD, "Alice")
        store.set_value(2, HOURS, "8")
        store.set_value(3, HOURS, "2")
        rows = store.fetch_rows([1, 2], [SPONSORED, HOURS, TEAMS])
        assert {(r.user_id, r.field_id) for r in rows} == {(1, HOURS), (2, HOURS)}

    def test_fetch_rows_empty_input(self, store: XProfileStore) -> None:
        store.set_value(1, HOURS, "5")
        assert store.fetch_rows([], [HOURS]) == []
        assert store.fetch_rows([1], []) == []

    def test_fetch_rows_for_fields_all_users(self, store: XProfileStore) -> None:
        store.set_value(2, TEAMS, ["Core Team"])
        store.set_value(1, HOURS, "5")
        store.set_value(1, SPONSORED, "Yes")
        rows = store.fetch_rows_for_fields([HOURS, TEAMS])
        assert [(r.user_id, r.field_id) for r in rows] == [(1, HOURS), (2, TEAMS)]


class TestXProfileStoreDelete:
    """Tests for delete_rows."""

    def test_deletes_only_given_fields(self, store: XProfileStore) -> None:
        store.set_value(42, HOURS, "5")
        store.set_value(42, TEAMS, ["Docs Team"])
        store.set_value(42, NAME_FIELD, "Alice")
        deleted = store.delete_rows(42, [SPONSORED, HOURS, TEAMS])
        assert deleted == 2
        rows = store.fetch_rows([42], [SPONSORED, HOURS, TEAMS, NAME_FIELD])
        assert [r.field_id for r in rows] == [NAME_FIELD]

    def test_delete_missing_rows_is_noop(self, store: XProfileStore) -> None:
        assert store.delete_rows(99, [HOURS]) == 0


class TestObjectCacheStore:
    """Tests for the grouped object cache."""

    def test_set_and_get(self, cache: ObjectCacheStore) -> None:
        cache.set("42:29", "10", "bp_xprofile_data")
        assert cache.get("42:29", "bp_xprofile_data") == "10"
        assert cache.get("42:29", "other") is None

    def test_json_values_round_trip(self, cache: ObjectCacheStore) -> None:
        cache.set("k", {"teams": ["Docs Team"]})
        assert cache.get("k") == {"teams": ["Docs Team"]}

    def test_keys_prefixed_by_blog_unless_global(self, temp_db: Path) -> None:
        """Ordinary groups are per blog; global groups are shared."""
        blog_1 = ObjectCacheStore(temp_db, blog_id=1)
        blog_2 = ObjectCacheStore(temp_db, blog_id=2)
        blog_1.set("a", 1, "local")
        assert blog_2.get("a", "local") is None

        blog_1.add_global_groups("shared")
        blog_2.add_global_groups(["shared"])
        blog_1.set("b", 2, "shared")
        assert blog_2.get("b", "shared") == 2
        assert blog_1.build_key("b", "shared") == "b"
        assert blog_1.build_key("a", "local") == "1:a"

    def test_delete_multiple_reports_existing(self, cache: ObjectCacheStore) -> None:
        cache.set("x", 1, "g")
        results = cache.delete_multiple(["x", "y"], "g")
        assert results == {"x": True, "y": False}
        assert cache.get("x", "g") is None

    def test_delete_single(self, cache: ObjectCacheStore) -> None:
        cache.set(5, "v", "g")
        assert cache.delete(5, "g") is True
        assert cache.delete(5, "g") is False
