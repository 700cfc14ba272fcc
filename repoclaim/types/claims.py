"""Claim and project data models."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Project:
    """Directory project that can be claimed by exactly one owner."""

    id: str
    owner_id: str | None = None
    name: str | None = None
    updated_at: datetime | None = None

    @property
    def is_claimed(self) -> bool:
        return self.owner_id is not None


@dataclass(frozen=True)
class ClaimAttempt:
    """One verification attempt, successful or not. Append-only."""

    project_id: str
    user_id: str
    success: bool
    verification_method: str
    verification_details: dict[str, Any]
    error_reason: str | None = None
    created_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of a successful claim."""

    project: Project
    ownership_type: str
    verified_as: str
    success: bool = True
