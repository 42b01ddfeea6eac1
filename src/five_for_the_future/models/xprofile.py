"""xprofile field, row and aggregate models."""

from enum import Enum

from pydantic import BaseModel, Field


class ProfileField(str, Enum):
    """xprofile fields read by Five for the Future."""

    SPONSORED = "sponsored"
    HOURS_PER_WEEK = "hours_per_week"
    TEAM_NAMES = "team_names"


class RawRow(BaseModel):
    """Row from the xprofile data table. `value` is stored as-is, possibly PHP-serialized."""

    user_id: int
    field_id: int
    value: str = ""


class ContributorRecord(BaseModel):
    """Contribution data for one user, decoded from their xprofile rows."""

    user_id: int
    hours_per_week: int = Field(default=0, ge=0)
    team_names: list[str] = Field(default_factory=list)
    sponsored: bool = False

    @property
    def is_reportable(self) -> bool:
        """Only users who pledged some hours to at least one team are counted."""
        return self.hours_per_week > 0 and bool(self.team_names)


class PledgeAggregate(BaseModel):
    """Totals for all contributors linked to a pledge."""

    contributors: int = 0
    hours: int = 0
    teams: list[str] = Field(default_factory=list)
