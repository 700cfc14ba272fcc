"""
Claim recording and ownership assignment.

Claim rows are append-only. The only mutation of a project is the
conditional owner assignment, which succeeds for at most one caller.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

from repoclaim.exceptions import AuthenticationError, ConflictError
from repoclaim.logging import get_logger
from repoclaim.types.claims import ClaimAttempt, Project, utcnow
from repoclaim.types.repos import Repository
from repoclaim.types.users import Identity

logger = get_logger("verify")

VERIFICATION_METHOD = "github_api"
INSUFFICIENT_PERMISSIONS = "insufficient_permissions"


class ClaimStore(Protocol):
    """Persistence for claim attempts and project ownership."""

    async def insert_claim(self, attempt: ClaimAttempt) -> None:
        """Append a claim attempt."""
        ...

    async def claim_project(
        self, project_id: str, owner_id: str, updated_at: datetime
    ) -> Project | None:
        """
        Set owner_id where the project id matches and owner_id is unset.

        Returns the updated project, or None when no row matched.
        """
        ...

    async def get_project(self, project_id: str) -> Project | None:
        ...

    async def list_claims(self, project_id: str) -> list[ClaimAttempt]:
        ...


@dataclass
class ClaimContext:
    """Per-request context: where to persist and who is asking."""

    store: ClaimStore
    user_id: str | None

    def require_user_id(self) -> str:
        if not self.user_id:
            raise AuthenticationError("UNAUTHENTICATED", "No session user for this request")
        return self.user_id


class ClaimRecorder:
    """Writes claim attempts and performs the one-time owner assignment."""

    def __init__(self, clock: Callable[[], datetime] = utcnow) -> None:
        self._clock = clock

    async def record_failure(
        self,
        ctx: ClaimContext,
        project_id: str,
        identity: Identity,
        repository: Repository,
        reason: str = INSUFFICIENT_PERMISSIONS,
    ) -> ClaimAttempt:
        """Append a failed claim attempt."""
        attempt = ClaimAttempt(
            project_id=project_id,
            user_id=ctx.require_user_id(),
            success=False,
            verification_method=VERIFICATION_METHOD,
            verification_details={
                "verified_as": identity.username,
                "repo_owner": repository.owner.login,
                "repo_owner_type": repository.owner.type,
                "reason": reason,
            },
            error_reason=(
                f"User {identity.username} does not have required permissions. "
                f"Repository owner: {repository.owner.login}"
            ),
            created_at=self._clock(),
        )
        await ctx.store.insert_claim(attempt)
        return attempt

    async def assign_owner(
        self,
        ctx: ClaimContext,
        project_id: str,
        identity: Identity,
        repository: Repository,
        ownership_type: str,
    ) -> Project:
        """
        Assign the project to the session user, then record the success.

        Raises:
            ConflictError: If the project already has an owner
        """
        user_id = ctx.require_user_id()
        now = self._clock()

        project = await ctx.store.claim_project(project_id, user_id, now)
        if project is None:
            logger.info("Project %s was already claimed; %s lost", project_id, identity.username)
            raise ConflictError("CONFLICT", "Project has already been claimed by another user")

        details: dict[str, Any] = {
            "verified_as": identity.username,
            "repo_owner": repository.owner.login,
            "repo_owner_type": repository.owner.type,
            "ownership_type": ownership_type,
            "repository_url": repository.url,
        }
        await ctx.store.insert_claim(
            ClaimAttempt(
                project_id=project_id,
                user_id=user_id,
                success=True,
                verification_method=ownership_type,
                verification_details=details,
                created_at=now,
            )
        )
        return project
