"""Contributor directories linking users to pledges."""

from five_for_the_future.directory.base import ContributorDirectory
from five_for_the_future.directory.registry import DirectoryRegistry
from five_for_the_future.directory.rest_directory import RestContributorDirectory
from five_for_the_future.directory.sqlite_directory import SqliteContributorDirectory

__all__ = [
    "ContributorDirectory",
    "DirectoryRegistry",
    "RestContributorDirectory",
    "SqliteContributorDirectory",
]
