"""Repositories resource client."""

from typing import TYPE_CHECKING, Any

from repoclaim.cache import CacheTTL, TTLCache, create_cache_key
from repoclaim.logging import get_logger
from repoclaim.transport import expect_shape
from repoclaim.types.repos import (
    Contributor,
    Issue,
    PullRequest,
    RepoIdentifier,
    Repository,
    RepositoryOwner,
)
from repoclaim.types.users import PermissionLevel

if TYPE_CHECKING:
    from repoclaim.transport import AsyncHTTPTransport

logger = get_logger()

PER_PAGE = 100
MAX_CONTRIBUTOR_PAGES = 50


class ReposClient:
    """Client for repository-related operations."""

    def __init__(
        self,
        transport: "AsyncHTTPTransport",
        cache: TTLCache,
        ttl: CacheTTL,
    ) -> None:
        """
        Initialize the repos client.

        Args:
            transport: Async HTTP transport for making requests
            cache: Cache shared with the other resource clients
            ttl: Freshness windows for cached lookups
        """
        self.transport = transport
        self.cache = cache
        self.ttl = ttl

    async def get(self, identifier: str) -> Repository:
        """
        Get repository metadata, cached for ``ttl.repo`` seconds.

        Args:
            identifier: Repository in ``owner/name`` form

        Returns:
            Repository snapshot

        Raises:
            InvalidIdentifierError: If identifier is malformed
            NotFoundError: If the repository does not exist or is not visible
        """
        repo_id = RepoIdentifier.parse(identifier)

        async def fetch() -> Repository:
            data = await self.transport.request(
                "GET", f"/repos/{repo_id.owner}/{repo_id.name}"
            )
            return self._parse_repository(data)

        return await self.cache.get_or_compute(
            create_cache_key("github", "repo", str(repo_id)), fetch, ttl=self.ttl.repo
        )

    async def get_permission_level(self, identifier: str, username: str) -> PermissionLevel:
        """
        Get a user's collaborator permission on a repository. Never cached.

        Args:
            identifier: Repository in ``owner/name`` form
            username: Login to check

        Returns:
            PermissionLevel
        """
        repo_id = RepoIdentifier.parse(identifier)
        data = await self.transport.request(
            "GET",
            f"/repos/{repo_id.owner}/{repo_id.name}/collaborators/{username}/permission",
        )
        with expect_shape("permission"):
            return PermissionLevel.from_api(data["permission"])

    async def list_contributors(self, identifier: str) -> list[Contributor]:
        """
        List contributors, paging 100 at a time up to 50 pages.

        Args:
            identifier: Repository in ``owner/name`` form

        Returns:
            Contributors in the order GitHub returns them (most commits first)
        """
        repo_id = RepoIdentifier.parse(identifier)
        path = f"/repos/{repo_id.owner}/{repo_id.name}/contributors"

        async def fetch() -> list[Contributor]:
            contributors: list[Contributor] = []
            page = 1
            while True:
                data = await self.transport.request(
                    "GET", path, params={"per_page": PER_PAGE, "page": page}
                )
                with expect_shape("contributors"):
                    contributors.extend(self._parse_contributor(c) for c in data)

                if len(data) < PER_PAGE:
                    break
                if page >= MAX_CONTRIBUTOR_PAGES:
                    logger.warning(
                        "Contributor listing for %s truncated at %d pages",
                        repo_id,
                        MAX_CONTRIBUTOR_PAGES,
                    )
                    break
                page += 1
            return contributors

        return await self.cache.get_or_compute(
            create_cache_key("github", "contributors", str(repo_id)),
            fetch,
            ttl=self.ttl.contributors,
        )

    async def list_issues(self, identifier: str) -> list[Issue]:
        """List up to 100 issues in any state."""
        repo_id = RepoIdentifier.parse(identifier)

        async def fetch() -> list[Issue]:
            data = await self.transport.request(
                "GET",
                f"/repos/{repo_id.owner}/{repo_id.name}/issues",
                params={"state": "all", "per_page": PER_PAGE},
            )
            with expect_shape("issues"):
                return [
                    Issue(
                        id=i["id"],
                        number=i["number"],
                        title=i["title"],
                        state=i["state"],
                        url=i["html_url"],
                        is_pull_request="pull_request" in i,
                    )
                    for i in data
                ]

        return await self.cache.get_or_compute(
            create_cache_key("github", "issues", str(repo_id)), fetch, ttl=self.ttl.issues
        )

    async def list_pulls(self, identifier: str) -> list[PullRequest]:
        """List up to 100 pull requests in any state."""
        repo_id = RepoIdentifier.parse(identifier)

        async def fetch() -> list[PullRequest]:
            data = await self.transport.request(
                "GET",
                f"/repos/{repo_id.owner}/{repo_id.name}/pulls",
                params={"state": "all", "per_page": PER_PAGE},
            )
            with expect_shape("pulls"):
                return [
                    PullRequest(
                        id=p["id"],
                        number=p["number"],
                        title=p["title"],
                        state=p["state"],
                        url=p["html_url"],
                        merged_at=p.get("merged_at"),
                    )
                    for p in data
                ]

        return await self.cache.get_or_compute(
            create_cache_key("github", "pulls", str(repo_id)), fetch, ttl=self.ttl.pulls
        )

    def _parse_repository(self, data: dict[str, Any]) -> Repository:
        """Parse repository data from API response."""
        with expect_shape("repository"):
            owner = data["owner"]
            return Repository(
                id=data["id"],
                name=data["name"],
                full_name=data["full_name"],
                description=data.get("description"),
                url=data["html_url"],
                is_private=bool(data["private"]),
                owner=RepositoryOwner(login=owner["login"], type=owner["type"]),
                default_branch=data.get("default_branch"),
                stargazers_count=data.get("stargazers_count", 0),
                forks_count=data.get("forks_count", 0),
                open_issues_count=data.get("open_issues_count", 0),
            )

    def _parse_contributor(self, data: dict[str, Any]) -> Contributor:
        """Parse contributor data from API response."""
        return Contributor(
            id=data["id"],
            username=data["login"],
            avatar_url=data.get("avatar_url"),
            contributions=data.get("contributions", 0),
        )
