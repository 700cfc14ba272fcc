"""
Mock provider and in-memory claim store for testing.

MockGitProvider mimics AsyncGitHubClient's GitProvider methods without
making API calls. InMemoryClaimStore is a ClaimStore kept in dictionaries.
"""

import asyncio
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, TypeVar

from repoclaim.types.claims import ClaimAttempt, Project, utcnow
from repoclaim.types.repos import Repository, RepositoryOwner
from repoclaim.types.users import Identity, OrgMembership, PermissionLevel

T = TypeVar("T")


@dataclass
class MockResponse:
    """Configuration for a mock response."""

    data: Any
    error: Exception | None = None
    call_count: int = 0


@dataclass
class MockCall:
    """Record of a method call."""

    method: str
    args: tuple[Any, ...]
    kwargs: dict[str, Any]
    timestamp: datetime = field(default_factory=utcnow)


class MockGitProvider:
    """
    GitProvider double with configurable responses and call recording.

    Example:
        ```python
        provider = MockGitProvider(username="alice")
        provider.configure_repository(create_mock_repository(owner_login="acme", owner_type="Organization"))
        provider.configure_permission(PermissionLevel.ADMIN)
        provider.configure_membership(error=NotFoundError("NOT_FOUND", "Not Found"))
        ```
    """

    def __init__(self, username: str = "mock-user", user_id: str = "1") -> None:
        self.username = username
        self.user_id = user_id
        self._responses: dict[str, MockResponse] = {}
        self._calls: list[MockCall] = []

    def configure_identity(
        self, response: Identity | None = None, error: Exception | None = None
    ) -> None:
        """Configure the response for current_identity() calls."""
        self._responses["current_identity"] = MockResponse(data=response, error=error)

    def configure_repository(
        self, response: Repository | None = None, error: Exception | None = None
    ) -> None:
        """Configure the response for get_repository() calls."""
        self._responses["get_repository"] = MockResponse(data=response, error=error)

    def configure_permission(
        self, response: PermissionLevel | None = None, error: Exception | None = None
    ) -> None:
        """Configure the response for get_permission_level() calls."""
        self._responses["get_permission_level"] = MockResponse(data=response, error=error)

    def configure_membership(
        self, response: OrgMembership | None = None, error: Exception | None = None
    ) -> None:
        """Configure the response for get_org_membership() calls."""
        self._responses["get_org_membership"] = MockResponse(data=response, error=error)

    async def current_identity(self) -> Identity:
        self._record_call("current_identity", (), {})
        await asyncio.sleep(0)
        return self._get_response(
            "current_identity", Identity(id=self.user_id, username=self.username)
        )

    async def get_repository(self, identifier: str) -> Repository:
        self._record_call("get_repository", (identifier,), {})
        await asyncio.sleep(0)
        owner, _, name = identifier.partition("/")
        return self._get_response(
            "get_repository",
            Repository(
                id=1,
                name=name,
                full_name=identifier,
                description=None,
                url=f"https://github.com/{identifier}",
                is_private=False,
                owner=RepositoryOwner(login=owner, type="User"),
            ),
        )

    async def get_permission_level(self, identifier: str, username: str) -> PermissionLevel:
        self._record_call("get_permission_level", (identifier, username), {})
        await asyncio.sleep(0)
        return self._get_response("get_permission_level", PermissionLevel.NONE)

    async def get_org_membership(self, org: str, username: str) -> OrgMembership:
        self._record_call("get_org_membership", (org, username), {})
        await asyncio.sleep(0)
        return self._get_response(
            "get_org_membership",
            OrgMembership(org=org, username=username, role="member", state="active"),
        )

    @property
    def calls(self) -> list[MockCall]:
        """Get all recorded calls."""
        return list(self._calls)

    def was_called(self, method: str) -> bool:
        """Check if a method was called."""
        return any(c.method == method for c in self._calls)

    def call_count(self, method: str) -> int:
        """Get the number of times a method was called."""
        return sum(1 for c in self._calls if c.method == method)

    def reset(self) -> None:
        """Reset all configured responses and recorded calls."""
        self._responses.clear()
        self._calls.clear()

    def _record_call(self, method: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        self._calls.append(MockCall(method=method, args=args, kwargs=kwargs))

    def _get_response(self, method: str, default: T) -> T:
        """Get configured response or default."""
        if method in self._responses:
            resp = self._responses[method]
            resp.call_count += 1
            if resp.error:
                raise resp.error
            if resp.data is not None:
                return resp.data
        return default


class InMemoryClaimStore:
    """ClaimStore kept in memory. The conditional update never yields mid-check."""

    def __init__(self, projects: list[Project] | None = None) -> None:
        self.projects: dict[str, Project] = {p.id: p for p in projects or []}
        self.claims: list[ClaimAttempt] = []

    def add_project(self, project_id: str, owner_id: str | None = None, name: str | None = None) -> Project:
        project = Project(id=project_id, owner_id=owner_id, name=name)
        self.projects[project_id] = project
        return project

    async def insert_claim(self, attempt: ClaimAttempt) -> None:
        self.claims.append(attempt)

    async def claim_project(
        self, project_id: str, owner_id: str, updated_at: datetime
    ) -> Project | None:
        project = self.projects.get(project_id)
        if project is None or project.owner_id is not None:
            return None
        updated = replace(project, owner_id=owner_id, updated_at=updated_at)
        self.projects[project_id] = updated
        return updated

    async def get_project(self, project_id: str) -> Project | None:
        return self.projects.get(project_id)

    async def list_claims(self, project_id: str) -> list[ClaimAttempt]:
        return [c for c in self.claims if c.project_id == project_id]

