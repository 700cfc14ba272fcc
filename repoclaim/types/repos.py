"""Repository-related data models."""

from dataclasses import dataclass, field

from repoclaim.exceptions import InvalidIdentifierError


@dataclass(frozen=True)
class RepoIdentifier:
    """An ``owner/name`` repository identifier."""

    owner: str
    name: str

    @classmethod
    def parse(cls, identifier: str) -> "RepoIdentifier":
        """
        Parse an ``owner/name`` string.

        Splits on the first ``/``. Both segments must be non-empty and the
        name segment may not contain another ``/``.

        Raises:
            InvalidIdentifierError: If the string is malformed
        """
        owner, sep, name = identifier.partition("/")
        if not sep or not owner or not name or "/" in name:
            raise InvalidIdentifierError(identifier)
        return cls(owner=owner, name=name)

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class RepositoryOwner:
    """Owner of a repository."""

    login: str
    type: str  # "User" or "Organization"

    @property
    def is_organization(self) -> bool:
        return self.type == "Organization"


@dataclass(frozen=True)
class Repository:
    """Repository snapshot taken at query time."""

    id: int
    name: str
    full_name: str
    description: str | None
    url: str
    is_private: bool
    owner: RepositoryOwner
    default_branch: str | None = None
    stargazers_count: int = 0
    forks_count: int = 0
    open_issues_count: int = 0


@dataclass(frozen=True)
class Contributor:
    """Repository contributor."""

    id: int
    username: str
    avatar_url: str | None
    contributions: int = 0


@dataclass(frozen=True)
class Issue:
    """Repository issue. GitHub lists pull requests as issues too."""

    id: int
    number: int
    title: str
    state: str  # "open" or "closed"
    url: str
    is_pull_request: bool = False


@dataclass(frozen=True)
class PullRequest:
    """Pull request as listed on a repository."""

    id: int
    number: int
    title: str
    state: str  # "open" or "closed"
    url: str
    merged_at: str | None = None


@dataclass(frozen=True)
class RepoData:
    """Repository with its contributors, issues and pull requests."""

    repo: Repository
    contributors: list[Contributor] = field(default_factory=list)
    issues: list[Issue] = field(default_factory=list)
    pull_requests: list[PullRequest] = field(default_factory=list)
