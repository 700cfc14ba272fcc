"""
Tests for repoclaim testing utilities.

Verifies that MockGitProvider, InMemoryClaimStore and fixtures work correctly.
"""

from datetime import datetime, timezone

import pytest

from repoclaim.exceptions import NotFoundError
from repoclaim.testing import (
    InMemoryClaimStore,
    MockGitProvider,
    create_mock_membership,
    create_mock_repository,
)
from repoclaim.types.claims import ClaimAttempt
from repoclaim.types.repos import Repository
from repoclaim.types.users import PermissionLevel


class TestMockGitProvider:
    """Tests for MockGitProvider."""

    @pytest.mark.asyncio
    async def test_default_responses(self) -> None:
        mock = MockGitProvider(username="alice", user_id="42")

        identity = await mock.current_identity()
        assert identity.username == "alice"
        assert identity.id == "42"

        repo = await mock.get_repository("alice/project")
        assert repo.owner.login == "alice"
        assert repo.name == "project"

        assert await mock.get_permission_level("alice/project", "alice") is PermissionLevel.NONE
        membership = await mock.get_org_membership("acme", "alice")
        assert not membership.is_active_admin

    @pytest.mark.asyncio
    async def test_configured_responses_and_errors(self) -> None:
        mock = MockGitProvider()
        custom = create_mock_repository(owner_login="acme", owner_type="Organization")
        mock.configure_repository(custom)
        mock.configure_membership(error=NotFoundError("NOT_FOUND", "Not Found"))

        assert await mock.get_repository("any/thing") is custom
        with pytest.raises(NotFoundError):
            await mock.get_org_membership("acme", "mock-user")

    @pytest.mark.asyncio
    async def test_call_tracking(self, mock_provider: MockGitProvider) -> None:
        await mock_provider.current_identity()
        await mock_provider.get_repository("octocat/Hello-World")

        assert mock_provider.was_called("current_identity")
        assert mock_provider.call_count("get_repository") == 1
        assert mock_provider.calls[1].args == ("octocat/Hello-World",)
        assert not mock_provider.was_called("get_org_membership")

        mock_provider.reset()
        assert mock_provider.calls == []


class TestInMemoryClaimStore:
    """Tests for InMemoryClaimStore."""

    @pytest.mark.asyncio
    async def test_claim_once(self, claim_store: InMemoryClaimStore) -> None:
        now = datetime.now(timezone.utc)

        first = await claim_store.claim_project("project-1", "user-a", now)
        second = await claim_store.claim_project("project-1", "user-b", now)

        assert first is not None and first.owner_id == "user-a"
        assert first.updated_at == now
        assert second is None
        assert (await claim_store.get_project("project-1")).is_claimed

    @pytest.mark.asyncio
    async def test_claims_listed_per_project(self, claim_store: InMemoryClaimStore) -> None:
        for project_id in ("project-1", "project-2", "project-1"):
            await claim_store.insert_claim(
                ClaimAttempt(
                    project_id=project_id,
                    user_id="u",
                    success=False,
                    verification_method="github_api",
                    verification_details={},
                )
            )

        assert len(await claim_store.list_claims("project-1")) == 2


class TestFixtures:
    """Tests for pytest fixtures."""

    def test_sample_repository(self, sample_repository: Repository) -> None:
        assert sample_repository.full_name == "octocat/Hello-World"
        assert sample_repository.owner.type == "User"

    def test_sample_org_repository(self, sample_org_repository: Repository) -> None:
        assert sample_org_repository.owner.is_organization

    def test_claim_context(self, claim_context, claim_store) -> None:
        assert claim_context.store is claim_store
        assert claim_context.require_user_id() == "session-user-1"

    def test_create_mock_membership(self) -> None:
        assert create_mock_membership().is_active_admin
        assert not create_mock_membership(state="pending").is_active_admin
