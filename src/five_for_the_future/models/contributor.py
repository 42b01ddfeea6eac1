"""Contributor post and user models supplied by the contributor directory."""

from pydantic import BaseModel


class ContributorPost(BaseModel):
    """
    Link between a pledge and a contributor.
    The post title holds the contributor's user login.
    """

    id: int
    pledge_id: int
    post_title: str
    post_status: str = "pending"


class ContributorUser(BaseModel):
    """User account resolved from a contributor post."""

    id: int
    user_login: str
