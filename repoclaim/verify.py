"""
Repository ownership verification.

Decides whether the identity behind a provider token may claim a project
for a repository, then records the outcome. Checks run in a fixed order and
stop at the first grant:

1. the caller is the repository owner;
2. for organization repositories, the caller is a repository admin and
   (when visible) an active organization admin;
3. otherwise, the caller is an active organization admin.

Each check returns a CheckOutcome instead of raising, so a failed lookup
inside the organization path is an explicit Inconclusive result.
"""

from dataclasses import dataclass

from repoclaim.claims import ClaimContext, ClaimRecorder
from repoclaim.exceptions import ClaimDeniedError, RepoClaimError
from repoclaim.logging import get_logger
from repoclaim.provider import GitProvider
from repoclaim.types.claims import VerificationResult
from repoclaim.types.repos import RepoIdentifier, Repository
from repoclaim.types.users import Identity, PermissionLevel

logger = get_logger("verify")

REPOSITORY_OWNER = "repository owner"
ORGANIZATION_OWNER = "organization owner"
REPOSITORY_ADMIN = "repository admin"


@dataclass(frozen=True)
class Granted:
    """The check established ownership."""

    ownership_type: str


@dataclass(frozen=True)
class Denied:
    """The check ran and did not establish ownership."""

    reason: str


@dataclass(frozen=True)
class Inconclusive:
    """The check could not run (lookup failed)."""

    error: RepoClaimError


CheckOutcome = Granted | Denied | Inconclusive


class OwnershipVerifier:
    """Verifies repository ownership and assigns project owners."""

    def __init__(
        self,
        provider: GitProvider,
        recorder: ClaimRecorder | None = None,
        allow_admin_fallback: bool = True,
    ) -> None:
        """
        Initialize the verifier.

        Args:
            provider: Provider lookups, authenticated as the claiming user
            recorder: Claim recorder (default: ClaimRecorder())
            allow_admin_fallback: Grant "repository admin" ownership when the
                caller is a repository admin but their organization membership
                cannot be read
        """
        self.provider = provider
        self.recorder = recorder or ClaimRecorder()
        self.allow_admin_fallback = allow_admin_fallback

    async def verify(
        self, identifier: str, project_id: str, ctx: ClaimContext
    ) -> VerificationResult:
        """
        Verify the caller owns ``identifier`` and assign them ``project_id``.

        Args:
            identifier: Repository in ``owner/name`` form
            project_id: Project to claim
            ctx: Claim store and session user

        Returns:
            VerificationResult with the updated project

        Raises:
            AuthenticationError: If ctx has no session user
            InvalidIdentifierError: If identifier is malformed
            ClaimDeniedError: If no check grants ownership (a failed claim is recorded)
            ConflictError: If the project was claimed by someone else first
            RepoClaimError: If identity or repository resolution fails (nothing recorded)
        """
        ctx.require_user_id()
        repo_id = RepoIdentifier.parse(identifier)

        identity = await self.provider.current_identity()
        repository = await self.provider.get_repository(identifier)

        outcome = await self.check_ownership(repo_id, identity, repository)

        if not isinstance(outcome, Granted):
            logger.info("Claim denied for user %s on repo %s", identity.username, repo_id)
            await self.recorder.record_failure(ctx, project_id, identity, repository)
            raise ClaimDeniedError(identity.username, repository.owner.login)

        logger.info(
            "Claim approved: %s is %s for %s", identity.username, outcome.ownership_type, repo_id
        )
        project = await self.recorder.assign_owner(
            ctx, project_id, identity, repository, outcome.ownership_type
        )
        return VerificationResult(
            project=project,
            ownership_type=outcome.ownership_type,
            verified_as=identity.username,
        )

    async def check_ownership(
        self, repo_id: RepoIdentifier, identity: Identity, repository: Repository
    ) -> CheckOutcome:
        """Run the ownership checks in order and return the first decisive outcome."""
        direct = self.check_direct_owner(identity, repository)
        if isinstance(direct, Granted) or not repository.owner.is_organization:
            return direct

        org = repository.owner.login
        logger.info("Checking org ownership for %s in org %s", identity.username, org)

        permission = await self.check_collaborator_permission(repo_id, identity)
        if isinstance(permission, Granted):
            membership = await self.check_org_admin(org, identity)
            if isinstance(membership, Inconclusive) and self.allow_admin_fallback:
                return Granted(REPOSITORY_ADMIN)
            return membership

        return await self.check_org_admin(org, identity)

    def check_direct_owner(self, identity: Identity, repository: Repository) -> CheckOutcome:
        if repository.owner.login == identity.username:
            return Granted(REPOSITORY_OWNER)
        return Denied("not the repository owner")

    async def check_collaborator_permission(
        self, repo_id: RepoIdentifier, identity: Identity
    ) -> CheckOutcome:
        """Granted (as a provisional "repository admin") when the caller has admin permission."""
        try:
            level = await self.provider.get_permission_level(str(repo_id), identity.username)
        except RepoClaimError as e:
            logger.info(
                "User %s does not have collaborator access to %s: %s",
                identity.username,
                repo_id,
                e.message,
            )
            return Inconclusive(e)

        logger.info(
            "User %s has %s permission on the repository", identity.username, level.value
        )
        if level is PermissionLevel.ADMIN:
            return Granted(REPOSITORY_ADMIN)
        return Denied(f"permission level {level.value}")

    async def check_org_admin(self, org: str, identity: Identity) -> CheckOutcome:
        try:
            membership = await self.provider.get_org_membership(org, identity.username)
        except RepoClaimError as e:
            logger.info("Could not read membership of %s in %s: %s", identity.username, org, e.message)
            return Inconclusive(e)

        logger.info(
            "User %s has role '%s' in org with state '%s'",
            identity.username,
            membership.role,
            membership.state,
        )
        if membership.is_active_admin:
            return Granted(ORGANIZATION_OWNER)
        return Denied(f"org role {membership.role} ({membership.state})")
