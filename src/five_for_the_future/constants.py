"""BuddyPress xprofile identifiers and team-name migrations."""

from types import MappingProxyType
from typing import Mapping

from five_for_the_future.models.xprofile import ProfileField

# Numerical IDs are used rather than field labels, since labels are more likely to change.
FIELD_IDS: Mapping[ProfileField, int] = MappingProxyType(
    {
        ProfileField.SPONSORED: 24,
        ProfileField.HOURS_PER_WEEK: 29,
        ProfileField.TEAM_NAMES: 30,
    }
)

FIELDS_BY_ID: Mapping[int, ProfileField] = MappingProxyType(
    {field_id: field for field, field_id in FIELD_IDS.items()}
)

XPROFILE_TABLE = "bpmain_bp_xprofile_data"
XPROFILE_CACHE_GROUP = "bp_xprofile_data"

CONTRIBUTOR_POST_TYPE = "5ftf_contributor"
PUBLISHED = "publish"

SPONSORED_YES = "Yes"

# Team names are stored as labels rather than IDs, so renamed teams are mapped here.
# Applied in version order; add a new entry for each rename.
TEAM_NAME_MIGRATIONS: tuple[tuple[int, Mapping[str, str]], ...] = (
    (1, MappingProxyType({"Theme Review Team": "Themes Team"})),
)
