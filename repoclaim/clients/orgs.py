"""Organizations resource client."""

from typing import TYPE_CHECKING

from repoclaim.transport import expect_shape
from repoclaim.types.users import OrgMembership

if TYPE_CHECKING:
    from repoclaim.transport import AsyncHTTPTransport


class OrgsClient:
    """Client for organization membership lookups. Nothing here is cached."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        self.transport = transport

    async def get_membership(self, org: str, username: str) -> OrgMembership:
        """
        Get a user's membership in an organization.

        Args:
            org: Organization login
            username: Member login

        Returns:
            OrgMembership with role and state

        Raises:
            NotFoundError: If the user is not a member (or the membership is not visible)
        """
        data = await self.transport.request("GET", f"/orgs/{org}/memberships/{username}")
        with expect_shape("membership"):
            return OrgMembership(
                org=org,
                username=username,
                role=data["role"],
                state=data["state"],
            )
