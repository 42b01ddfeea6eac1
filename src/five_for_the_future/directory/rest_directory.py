"""Contributor directory read from the Five for the Future site's WordPress REST API.

Contributor posts are the `5ftf_contributor` post type; each post's parent is the
pledge and its title is the contributor's user login. Both collections are paginated,
with the page count in the `X-WP-TotalPages` header.

The users endpoint cannot search by login. Its `slug` is the user nicename, which
WordPress derives from the login when the account is created (lowercased, dots turned
into dashes, other punctuation such as `@` dropped). Logins are converted the same way
before the lookup and matched back afterwards. Nicenames that WordPress made unique
with a numeric suffix, or that were edited later, are not found. Unauthenticated
requests only list users who have published posts, so other contributors are dropped
as well; pass an authenticated client to see every user.
"""

import logging
import re
from typing import Optional

import httpx

from five_for_the_future.constants import CONTRIBUTOR_POST_TYPE, PUBLISHED
from five_for_the_future.directory.base import ContributorDirectory
from five_for_the_future.models.contributor import ContributorPost, ContributorUser

logger = logging.getLogger(__name__)

_NICENAME_INVALID = re.compile(r"[^a-z0-9 _-]")
_WHITESPACE = re.compile(r"\s+")
_DASHES = re.compile(r"-+")


def login_to_nicename(user_login: str) -> str:
    """The nicename WordPress assigns to a new user with this login."""
    name = user_login.strip()[:50].lower().replace(".", "-")
    name = _NICENAME_INVALID.sub("", name)
    name = _WHITESPACE.sub("-", name)
    name = _DASHES.sub("-", name)
    return name.strip("-")


class RestContributorDirectory(ContributorDirectory):
    """Reads contributor posts and users over HTTP. HTTP errors are raised to the caller."""

    backend_id = "rest"

    POSTS_PATH = f"/wp-json/wp/v2/{CONTRIBUTOR_POST_TYPE}"
    USERS_PATH = "/wp-json/wp/v2/users"
    PER_PAGE = 100

    DEFAULT_HEADERS = {
        "User-Agent": "five-for-the-future/0.1",
        "Accept": "application/json",
    }

    def __init__(
        self,
        base_url: Optional[str] = None,
        client: Optional[httpx.Client] = None,
        timeout: float = 30.0,
    ):
        """
        Args:
            base_url: Site root, e.g. https://wordpress.org/five-for-the-future
            client: Optional httpx client
            timeout: Request timeout when no client is given
        """
        if not base_url:
            raise ValueError("RestContributorDirectory requires a base_url")
        self._base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            headers=self.DEFAULT_HEADERS,
        )

    def _get_all_pages(self, path: str, params: dict) -> list[dict]:
        """GET every page of a collection endpoint."""
        items: list[dict] = []
        page = 1
        while True:
            resp = self._client.get(
                self._base_url + path,
                params={**params, "per_page": self.PER_PAGE, "page": page},
            )
            resp.raise_for_status()
            items.extend(resp.json())
            total_pages = int(resp.headers.get("X-WP-TotalPages", "1") or 1)
            if page >= total_pages:
                break
            page += 1
        logger.debug("Fetched %d items from %s in %d page(s)", len(items), path, page)
        return items

    def get_pledge_contributors(self, pledge_id: int, status: str = PUBLISHED) -> list[ContributorPost]:
        items = self._get_all_pages(
            self.POSTS_PATH,
            {"parent": pledge_id, "status": status, "_fields": "id,title,status,parent"},
        )
        return [
            ContributorPost(
                id=item["id"],
                pledge_id=item.get("parent", pledge_id),
                post_title=(item.get("title") or {}).get("rendered", ""),
                post_status=item.get("status", status),
            )
            for item in items
        ]

    def get_contributor_user_objects(self, posts: list[ContributorPost]) -> list[ContributorUser]:
        logins = [p.post_title for p in posts if p.post_title]
        if not logins:
            return []
        nicenames = list(dict.fromkeys(login_to_nicename(login) for login in logins))
        ids_by_nicename: dict[str, int] = {}
        for start in range(0, len(nicenames), self.PER_PAGE):
            chunk = [n for n in nicenames[start : start + self.PER_PAGE] if n]
            if not chunk:
                continue
            for item in self._get_all_pages(self.USERS_PATH, {"slug": ",".join(chunk), "_fields": "id,slug"}):
                ids_by_nicename[item["slug"]] = item["id"]

        users: list[ContributorUser] = []
        for login in logins:
            user_id = ids_by_nicename.get(login_to_nicename(login))
            if user_id is None:
                logger.debug("No user found for contributor login %s", login)
                continue
            users.append(ContributorUser(id=user_id, user_login=login))
        return users
