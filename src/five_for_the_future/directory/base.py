"""Abstract base class for contributor directories."""

from abc import ABC, abstractmethod

from five_for_the_future.constants import PUBLISHED
from five_for_the_future.models.contributor import ContributorPost, ContributorUser


class ContributorDirectory(ABC):
    """
    Source of the contributor posts that link users to pledges.
    The aggregator only needs to list a pledge's contributors and resolve them to users.
    """

    backend_id: str = ""

    @abstractmethod
    def get_pledge_contributors(self, pledge_id: int, status: str = PUBLISHED) -> list[ContributorPost]:
        """
        Contributor posts attached to a pledge with the given post status.
        """
        pass

    @abstractmethod
    def get_contributor_user_objects(self, posts: list[ContributorPost]) -> list[ContributorUser]:
        """
        Users whose login matches each post title. Posts without a matching user are dropped.
        """
        pass

    def get_contributor_user_ids(self, pledge_id: int, status: str = PUBLISHED) -> list[int]:
        """IDs of the users linked to a pledge."""
        posts = self.get_pledge_contributors(pledge_id, status)
        if not posts:
            return []
        return [u.id for u in self.get_contributor_user_objects(posts)]
