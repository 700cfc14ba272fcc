"""Users resource client."""

from typing import TYPE_CHECKING, Any

from repoclaim.cache import CacheTTL, TTLCache, create_cache_key
from repoclaim.exceptions import InternalError, NotFoundError, RepoClaimError
from repoclaim.transport import expect_shape
from repoclaim.types.users import Identity, UserDetails

if TYPE_CHECKING:
    from repoclaim.transport import AsyncHTTPTransport


class UsersClient:
    """Client for user lookups."""

    def __init__(
        self,
        transport: "AsyncHTTPTransport",
        cache: TTLCache,
        ttl: CacheTTL,
    ) -> None:
        self.transport = transport
        self.cache = cache
        self.ttl = ttl

    async def get_authenticated(self) -> Identity:
        """
        Resolve the account the client's token belongs to.

        Never cached: identity is scoped to a single verification attempt.
        """
        data = await self.transport.request("GET", "/user")
        with expect_shape("user"):
            return Identity(id=str(data["id"]), username=data["login"])

    async def get(self, username: str) -> UserDetails:
        """
        Get a user's public profile, cached for ``ttl.user`` seconds.

        Args:
            username: GitHub login

        Returns:
            UserDetails

        Raises:
            NotFoundError: If the user does not exist
            InternalError: On any other failure
        """

        async def fetch() -> UserDetails:
            try:
                data = await self.transport.request("GET", f"/users/{username}")
                return self._parse_user(data)
            except NotFoundError as e:
                raise NotFoundError(
                    "NOT_FOUND", f"GitHub user '{username}' not found", e.request_id
                ) from e
            except InternalError:
                raise
            except RepoClaimError as e:
                raise InternalError(
                    "INTERNAL_SERVER_ERROR",
                    f"Failed to fetch GitHub user details: {e.message}",
                    e.request_id,
                ) from e

        return await self.cache.get_or_compute(
            create_cache_key("github", "user", username), fetch, ttl=self.ttl.user
        )

    def _parse_user(self, data: dict[str, Any]) -> UserDetails:
        """Parse user data from API response."""
        with expect_shape("user"):
            return UserDetails(
                login=data["login"],
                id=data["id"],
                avatar_url=data.get("avatar_url"),
                html_url=data.get("html_url"),
                name=data.get("name"),
                company=data.get("company"),
                blog=data.get("blog") or None,
                location=data.get("location"),
                email=data.get("email"),
                bio=data.get("bio"),
                public_repos=data.get("public_repos", 0),
                public_gists=data.get("public_gists", 0),
                followers=data.get("followers", 0),
                following=data.get("following", 0),
                created_at=data.get("created_at"),
                updated_at=data.get("updated_at"),
            )
