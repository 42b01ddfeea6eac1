"""Aggregation of Five for the Future contribution data from xprofile rows.

Hours per week, team names and sponsorship are stored as BuddyPress xprofile
fields on profiles.wordpress.org. This module reshapes those scattered rows into
per-user records and per-pledge totals, and resets a user's values.
"""

import logging
from collections import defaultdict
from typing import Iterable, Optional

from five_for_the_future.constants import (
    FIELD_IDS,
    FIELDS_BY_ID,
    PUBLISHED,
    SPONSORED_YES,
    TEAM_NAME_MIGRATIONS,
    XPROFILE_CACHE_GROUP,
)
from five_for_the_future.directory.base import ContributorDirectory
from five_for_the_future.models.xprofile import ContributorRecord, PledgeAggregate, ProfileField, RawRow
from five_for_the_future.serialization import absint, maybe_unserialize, to_string_list
from five_for_the_future.store.object_cache import ObjectCacheStore
from five_for_the_future.store.xprofile_store import XProfileStore

logger = logging.getLogger(__name__)


def normalize_team_names(team_names: Iterable[str]) -> list[str]:
    """Apply team renames in version order, then deduplicate and sort."""
    names = list(team_names)
    for _version, renames in TEAM_NAME_MIGRATIONS:
        names = [renames.get(name, name) for name in names]
    return sorted(set(names))


class ProfileAggregator:
    """
    Reads contribution data for contributors and pledges.

    The store returns raw rows; values are decoded here and never raise on bad data.
    Store and directory errors are not caught.
    """

    def __init__(
        self,
        store: XProfileStore,
        cache: ObjectCacheStore,
        directory: ContributorDirectory,
    ):
        self.store = store
        self.cache = cache
        self.directory = directory

    def fetch_all_contributor_hours_teams(self) -> list[ContributorRecord]:
        """
        Hours and teams for every user who has saved them, regardless of sponsorship.

        Sponsored is not fetched; it's rarely needed and would add a row per user.
        Users with no hours or no teams are left out; BuddyPress keeps empty values as rows.
        This is unbounded; batching would be needed if the table grows much further.
        """
        rows = self.store.fetch_rows_for_fields(
            [FIELD_IDS[ProfileField.HOURS_PER_WEEK], FIELD_IDS[ProfileField.TEAM_NAMES]]
        )

        values_by_user: dict[int, dict[ProfileField, object]] = defaultdict(dict)
        for row in rows:
            field = FIELDS_BY_ID.get(row.field_id)
            if field is None:
                continue
            values_by_user[row.user_id][field] = maybe_unserialize(row.value)

        records: list[ContributorRecord] = []
        for user_id, values in values_by_user.items():
            record = ContributorRecord(
                user_id=absint(user_id),
                hours_per_week=absint(values.get(ProfileField.HOURS_PER_WEEK, 0)),
                team_names=to_string_list(values.get(ProfileField.TEAM_NAMES)),
            )
            if record.is_reportable:
                records.append(record)

        logger.debug("%d of %d users have hours and teams", len(records), len(values_by_user))
        return records

    def index_contributors(self, records: Optional[Iterable[ContributorRecord]] = None) -> dict[int, dict]:
        """Contributor hours and teams keyed by user ID."""
        if records is None:
            records = self.fetch_all_contributor_hours_teams()
        return {
            r.user_id: {"hours_per_week": r.hours_per_week, "team_names": r.team_names}
            for r in records
        }

    def fetch_raw_field_data(self, user_ids: Iterable[int]) -> list[RawRow]:
        """
        Raw rows for the given users. Nothing is unserialized;
        use prepare_contribution_data() for decoded records.
        """
        user_ids = [absint(u) for u in user_ids]
        if not user_ids:
            return []
        return self.store.fetch_rows(user_ids, FIELD_IDS.values())

    def prepare_contribution_data(self, raw_rows: Iterable[RawRow]) -> dict[int, ContributorRecord]:
        """Group raw rows by user and decode them into records."""
        prepared: dict[int, dict] = {}

        for row in raw_rows:
            field = FIELDS_BY_ID.get(int(row.field_id))
            if field is None:
                logger.warning("Skipping xprofile row for user %s with unknown field %s", row.user_id, row.field_id)
                continue

            data = prepared.setdefault(row.user_id, {"user_id": row.user_id, "sponsored": False})
            value = maybe_unserialize(row.value)

            if field is ProfileField.SPONSORED:
                data["sponsored"] = value == SPONSORED_YES
            elif field is ProfileField.HOURS_PER_WEEK:
                data["hours_per_week"] = absint(value)
            else:
                data["team_names"] = to_string_list(value)

        return {user_id: ContributorRecord(**data) for user_id, data in prepared.items()}

    def aggregate_for_pledge(self, pledge_id: int) -> PledgeAggregate:
        """Total hours and distinct teams of every published contributor to a pledge."""
        contributor_posts = self.directory.get_pledge_contributors(pledge_id, PUBLISHED)

        # Every contributor may have declined the invitation and had their post removed.
        if not contributor_posts:
            return PledgeAggregate(contributors=0, hours=0, teams=[])

        users = self.directory.get_contributor_user_objects(contributor_posts)
        user_ids = [u.id for u in users]
        rows = self.fetch_raw_field_data(user_ids)

        hours = 0
        teams: list[str] = []
        for row in rows:
            if row.field_id == FIELD_IDS[ProfileField.HOURS_PER_WEEK]:
                hours += absint(maybe_unserialize(row.value))
            elif row.field_id == FIELD_IDS[ProfileField.TEAM_NAMES]:
                teams.extend(to_string_list(maybe_unserialize(row.value)))

        aggregate = PledgeAggregate(
            contributors=len(user_ids),
            hours=hours,
            teams=normalize_team_names(teams),
        )
        logger.debug(
            "Pledge %s: %d contributors, %d hours, %d teams",
            pledge_id,
            aggregate.contributors,
            aggregate.hours,
            len(aggregate.teams),
        )
        return aggregate

    def get_contributor_data(self, user_id: int) -> ContributorRecord:
        """Profile data for one user; 0 hours and no teams when nothing is stored."""
        user_id = absint(user_id)
        record = self.prepare_contribution_data(self.fetch_raw_field_data([user_id])).get(user_id)
        return record or ContributorRecord(user_id=user_id)

    def reset_contribution_data(self, user_id: int) -> None:
        """
        Delete a user's Five for the Future values and their cached copies.

        The rows and cache are deleted directly because this site runs on a different
        network than the profiles site; the xprofile cache group is shared between them.
        """
        user_id = absint(user_id)
        field_ids = list(FIELD_IDS.values())
        deleted = self.store.delete_rows(user_id, field_ids)

        self.cache.add_global_groups(XPROFILE_CACHE_GROUP)
        self.cache.delete_multiple([f"{user_id}:{field_id}" for field_id in field_ids], XPROFILE_CACHE_GROUP)

        logger.info("Reset contribution data for user %d (%d rows deleted)", user_id, deleted)
