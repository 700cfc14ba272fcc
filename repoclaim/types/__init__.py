"""repoclaim type definitions.

This module exports all data model types used by the library.
"""

from repoclaim.types.claims import ClaimAttempt, Project, VerificationResult
from repoclaim.types.pulls import PullRequestRepository, UserPullRequest
from repoclaim.types.repos import (
    Contributor,
    Issue,
    PullRequest,
    RepoData,
    RepoIdentifier,
    Repository,
    RepositoryOwner,
)
from repoclaim.types.users import Identity, OrgMembership, PermissionLevel, UserDetails

__all__ = [
    # Repository types
    "RepoIdentifier",
    "Repository",
    "RepositoryOwner",
    "Contributor",
    "Issue",
    "PullRequest",
    "RepoData",
    # User types
    "Identity",
    "PermissionLevel",
    "OrgMembership",
    "UserDetails",
    # Pull request types
    "UserPullRequest",
    "PullRequestRepository",
    # Claim types
    "Project",
    "ClaimAttempt",
    "VerificationResult",
]
