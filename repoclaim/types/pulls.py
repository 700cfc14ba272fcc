"""Pull requests authored by a user, as returned by the GraphQL API."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PullRequestRepository:
    """Repository a pull request was opened against."""

    name_with_owner: str
    url: str
    is_private: bool
    owner_login: str


@dataclass(frozen=True)
class UserPullRequest:
    """Pull request authored by a user."""

    id: str
    number: int
    title: str
    state: str  # "open", "closed", "merged"
    url: str
    created_at: str
    updated_at: str
    closed_at: str | None
    merged_at: str | None
    is_draft: bool
    head_ref_name: str
    base_ref_name: str
    repository: PullRequestRepository

    @property
    def is_merged(self) -> bool:
        return self.state == "merged" or bool(self.merged_at)
