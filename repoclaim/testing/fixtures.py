"""
Pytest fixtures for repoclaim testing.

Provides record factories and fixtures for testing code that verifies
repository ownership.
"""

from typing import Generator

import pytest

from repoclaim.cache import TTLCache
from repoclaim.claims import ClaimContext
from repoclaim.testing.mock import InMemoryClaimStore, MockGitProvider
from repoclaim.types.pulls import PullRequestRepository, UserPullRequest
from repoclaim.types.repos import Repository, RepositoryOwner
from repoclaim.types.users import OrgMembership


# ============================================================================
# Factories
# ============================================================================


def create_mock_repository(
    owner_login: str = "octocat",
    name: str = "Hello-World",
    owner_type: str = "User",
    repo_id: int = 1296269,
    description: str | None = "My first repository",
    is_private: bool = False,
) -> Repository:
    """Create a Repository with sensible defaults."""
    return Repository(
        id=repo_id,
        name=name,
        full_name=f"{owner_login}/{name}",
        description=description,
        url=f"https://github.com/{owner_login}/{name}",
        is_private=is_private,
        owner=RepositoryOwner(login=owner_login, type=owner_type),
        default_branch="main",
    )


def create_mock_membership(
    org: str = "acme",
    username: str = "mock-user",
    role: str = "admin",
    state: str = "active",
) -> OrgMembership:
    """Create an OrgMembership with sensible defaults."""
    return OrgMembership(org=org, username=username, role=role, state=state)


def create_mock_user_pull_request(
    number: int = 1,
    state: str = "open",
    merged_at: str | None = None,
    author_repo: str = "octocat/Hello-World",
) -> UserPullRequest:
    """Create a UserPullRequest with sensible defaults."""
    owner = author_repo.split("/", 1)[0]
    return UserPullRequest(
        id=f"PR_{number}",
        number=number,
        title=f"Pull request {number}",
        state=state,
        url=f"https://github.com/{author_repo}/pull/{number}",
        created_at="2024-01-15T10:30:00Z",
        updated_at="2024-01-15T10:30:00Z",
        closed_at=merged_at,
        merged_at=merged_at,
        is_draft=False,
        head_ref_name=f"feature-{number}",
        base_ref_name="main",
        repository=PullRequestRepository(
            name_with_owner=author_repo,
            url=f"https://github.com/{author_repo}",
            is_private=False,
            owner_login=owner,
        ),
    )


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def mock_provider() -> Generator[MockGitProvider, None, None]:
    """
    Provide a MockGitProvider authenticated as "mock-user".

    Example:
        ```python
        def test_my_feature(mock_provider):
            mock_provider.configure_repository(create_mock_repository(owner_login="mock-user"))
        ```
    """
    provider = MockGitProvider(username="mock-user")
    yield provider
    provider.reset()


@pytest.fixture
def claim_store() -> InMemoryClaimStore:
    """Provide an InMemoryClaimStore holding one unclaimed project "project-1"."""
    store = InMemoryClaimStore()
    store.add_project("project-1", name="Hello World")
    return store


@pytest.fixture
def claim_context(claim_store: InMemoryClaimStore) -> ClaimContext:
    """Provide a ClaimContext for session user "session-user-1"."""
    return ClaimContext(store=claim_store, user_id="session-user-1")


@pytest.fixture
def ttl_cache() -> TTLCache:
    """Provide an empty TTLCache with the default 5 minute TTL."""
    return TTLCache()


@pytest.fixture
def sample_repository() -> Repository:
    """Provide octocat/Hello-World owned by the user octocat."""
    return create_mock_repository()


@pytest.fixture
def sample_org_repository() -> Repository:
    """Provide acme/widgets owned by the organization acme."""
    return create_mock_repository(owner_login="acme", name="widgets", owner_type="Organization")
