"""User, permission and organization data models."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Identity:
    """The authenticated caller's provider account."""

    id: str
    username: str


class PermissionLevel(str, Enum):
    """Collaborator access tier on a repository."""

    NONE = "none"
    READ = "read"
    WRITE = "write"
    ADMIN = "admin"

    @classmethod
    def from_api(cls, value: str | None) -> "PermissionLevel":
        """Normalize a GitHub permission string (maintain/triage included)."""
        if value is None:
            return cls.NONE
        value = value.lower()
        if value == "maintain":
            return cls.WRITE
        if value == "triage":
            return cls.READ
        return cls(value)


@dataclass(frozen=True)
class OrgMembership:
    """Role and state of a user within an organization."""

    org: str
    username: str
    role: str  # "member" or "admin"
    state: str  # "active" or "pending"

    @property
    def is_active_admin(self) -> bool:
        return self.role == "admin" and self.state == "active"


@dataclass(frozen=True)
class UserDetails:
    """Public profile of a provider user."""

    login: str
    id: int
    avatar_url: str | None
    html_url: str | None
    name: str | None = None
    company: str | None = None
    blog: str | None = None
    location: str | None = None
    email: str | None = None
    bio: str | None = None
    public_repos: int = 0
    public_gists: int = 0
    followers: int = 0
    following: int = 0
    created_at: str | None = None
    updated_at: str | None = None
    provider: str = "github"
