"""Hosting-provider interface consumed by the ownership verifier."""

from typing import Protocol

from repoclaim.types.repos import Repository
from repoclaim.types.users import Identity, OrgMembership, PermissionLevel


class GitProvider(Protocol):
    """Lookups the verifier needs from a source-control host."""

    async def current_identity(self) -> Identity:
        ...

    async def get_repository(self, identifier: str) -> Repository:
        ...

    async def get_permission_level(self, identifier: str, username: str) -> PermissionLevel:
        ...

    async def get_org_membership(self, org: str, username: str) -> OrgMembership:
        ...
