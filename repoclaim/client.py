"""
repoclaim GitHub client.

Provides the primary interface for reading repository data from GitHub and
the lookups used by ownership verification.
"""

import asyncio
import os
from typing import Any

from repoclaim.cache import CacheTTL, TTLCache
from repoclaim.clients import OrgsClient, PullsClient, ReposClient, UsersClient
from repoclaim.exceptions import ConfigurationError
from repoclaim.transport import AsyncHTTPTransport, RetryConfig
from repoclaim.types.pulls import UserPullRequest
from repoclaim.types.repos import Contributor, Issue, PullRequest, RepoData, Repository
from repoclaim.types.users import Identity, OrgMembership, PermissionLevel, UserDetails


class AsyncGitHubClient:
    """
    Async client for the GitHub API.

    Aggregates the resource clients, owns the read-through cache and
    implements the GitProvider interface used by OwnershipVerifier.

    Example:
        ```python
        import asyncio
        from repoclaim import AsyncGitHubClient

        async def main():
            async with AsyncGitHubClient(token="ghp_...") as client:
                repo = await client.get_repository("octocat/Hello-World")
                print(repo.owner.login, repo.url)

        asyncio.run(main())
        ```
    """

    DEFAULT_BASE_URL = "https://api.github.com"
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        graphql_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        cache: TTLCache | None = None,
        cache_ttl: CacheTTL | None = None,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """
        Initialize the GitHub client.

        Args:
            token: Access token of the user whose ownership is being verified
            base_url: REST API base URL (default: https://api.github.com)
            graphql_url: GraphQL endpoint (default: "{base_url}/graphql")
            timeout: Request timeout in seconds (default: 30.0)
            cache: Cache instance (default: a new private TTLCache)
            cache_ttl: Freshness windows for cached lookups (default: CacheTTL())
            retry_config: Transport retry behavior (default: no retries)
        """
        if not token:
            raise ConfigurationError("A GitHub token is required")

        self.base_url = base_url
        self.timeout = timeout
        self.cache = cache if cache is not None else TTLCache()
        self.cache_ttl = cache_ttl or CacheTTL()

        self._transport = AsyncHTTPTransport(
            base_url=base_url,
            token=token,
            graphql_url=graphql_url,
            timeout=timeout,
            retry_config=retry_config,
        )

        self.users = UsersClient(self._transport, self.cache, self.cache_ttl)
        self.repos = ReposClient(self._transport, self.cache, self.cache_ttl)
        self.orgs = OrgsClient(self._transport)
        self.pulls = PullsClient(self._transport)

    @classmethod
    def from_env(
        cls,
        timeout: float = DEFAULT_TIMEOUT,
        cache: TTLCache | None = None,
        retry_config: RetryConfig | None = None,
    ) -> "AsyncGitHubClient":
        """
        Create a client from environment variables.

        Environment variables:
            GITHUB_TOKEN: Access token (required)
            GITHUB_API_URL: REST base URL (optional, default: https://api.github.com)
            GITHUB_GRAPHQL_URL: GraphQL endpoint (optional)

        Raises:
            ConfigurationError: If GITHUB_TOKEN is not set
        """
        token = os.environ.get("GITHUB_TOKEN")
        base_url = os.environ.get("GITHUB_API_URL", cls.DEFAULT_BASE_URL)
        graphql_url = os.environ.get("GITHUB_GRAPHQL_URL")

        if not token:
            raise ConfigurationError("GITHUB_TOKEN environment variable not set")

        return cls(
            token=token,
            base_url=base_url,
            graphql_url=graphql_url,
            timeout=timeout,
            cache=cache,
            retry_config=retry_config,
        )

    @property
    def transport(self) -> AsyncHTTPTransport:
        """Get the underlying async HTTP transport (for advanced use cases)."""
        return self._transport

    # GitProvider

    async def current_identity(self) -> Identity:
        return await self.users.get_authenticated()

    async def get_repository(self, identifier: str) -> Repository:
        return await self.repos.get(identifier)

    async def get_permission_level(self, identifier: str, username: str) -> PermissionLevel:
        return await self.repos.get_permission_level(identifier, username)

    async def get_org_membership(self, org: str, username: str) -> OrgMembership:
        return await self.orgs.get_membership(org, username)

    # Repository data

    async def list_contributors(self, identifier: str) -> list[Contributor]:
        return await self.repos.list_contributors(identifier)

    async def list_issues(self, identifier: str) -> list[Issue]:
        return await self.repos.list_issues(identifier)

    async def list_pull_requests(self, identifier: str) -> list[PullRequest]:
        return await self.repos.list_pulls(identifier)

    async def get_repo_data(self, identifier: str) -> RepoData:
        """Fetch repository, contributors, issues and pull requests concurrently."""
        repo, contributors, issues, pull_requests = await asyncio.gather(
            self.repos.get(identifier),
            self.repos.list_contributors(identifier),
            self.repos.list_issues(identifier),
            self.repos.list_pulls(identifier),
        )
        return RepoData(
            repo=repo,
            contributors=contributors,
            issues=issues,
            pull_requests=pull_requests,
        )

    # Users

    async def get_user_details(self, username: str) -> UserDetails:
        return await self.users.get(username)

    async def list_user_pull_requests(
        self,
        username: str,
        state: str = "all",
        limit: int = 100,
    ) -> list[UserPullRequest]:
        return await self.pulls.list_for_user(username, state=state, limit=limit)

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> "AsyncGitHubClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit - closes the client."""
        await self.close()
