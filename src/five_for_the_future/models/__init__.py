"""Data models for xprofile rows, contributor records and pledge aggregates."""

from five_for_the_future.models.contributor import ContributorPost, ContributorUser
from five_for_the_future.models.settings import Settings
from five_for_the_future.models.xprofile import (
    ContributorRecord,
    PledgeAggregate,
    ProfileField,
    RawRow,
)

__all__ = [
    "ContributorPost",
    "ContributorRecord",
    "ContributorUser",
    "PledgeAggregate",
    "ProfileField",
    "RawRow",
    "Settings",
]
