"""Pull requests authored by a user, fetched through the GraphQL API."""

from typing import TYPE_CHECKING, Any

from repoclaim.exceptions import InternalError, NotFoundError, RepoClaimError
from repoclaim.logging import get_logger
from repoclaim.transport import expect_shape
from repoclaim.types.pulls import PullRequestRepository, UserPullRequest

if TYPE_CHECKING:
    from repoclaim.transport import AsyncHTTPTransport

logger = get_logger()

STATE_FILTERS = ("open", "closed", "merged", "all")

USER_PULL_REQUESTS_QUERY = """
query GetUserPullRequests($username: String!, $first: Int!, $after: String) {
  user(login: $username) {
    pullRequests(first: $first, after: $after, orderBy: {field: CREATED_AT, direction: DESC}) {
      totalCount
      pageInfo {
        hasNextPage
        endCursor
      }
      nodes {
        id
        number
        title
        state
        isDraft
        createdAt
        updatedAt
        closedAt
        mergedAt
        url
        headRefName
        baseRefName
        repository {
          nameWithOwner
          url
          isPrivate
          owner {
            login
          }
        }
      }
    }
  }
}
"""


def matches_state(pr: UserPullRequest, state: str) -> bool:
    """Whether a pull request passes the open/closed/merged/all filter."""
    if state == "open":
        return pr.state == "open"
    if state == "closed":
        return pr.state == "closed" and not pr.merged_at
    if state == "merged":
        return pr.is_merged
    return True


class PullsClient:
    """Client for pull requests authored by a user."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        self.transport = transport

    async def list_for_user(
        self,
        username: str,
        state: str = "all",
        limit: int = 100,
    ) -> list[UserPullRequest]:
        """
        List pull requests authored by a user, newest first.

        Pages through the GraphQL connection until ``limit`` matching pull
        requests are collected or there are no more pages. Never cached.

        Args:
            username: GitHub login
            state: "open", "closed" (not merged), "merged" or "all"
            limit: Maximum number of pull requests to return

        Returns:
            At most ``limit`` pull requests

        Raises:
            ValueError: If state is not a known filter or limit is not positive
            NotFoundError: If the user does not exist
            InternalError: On any other failure
        """
        if state not in STATE_FILTERS:
            raise ValueError(f"state must be one of {', '.join(STATE_FILTERS)}, got {state!r}")
        if limit < 1:
            raise ValueError("limit must be positive")

        collected: list[UserPullRequest] = []
        cursor: str | None = None

        try:
            while len(collected) < limit:
                data = await self.transport.graphql(
                    USER_PULL_REQUESTS_QUERY,
                    {
                        "username": username,
                        "first": min(100, limit - len(collected)),
                        "after": cursor,
                    },
                )

                user = data.get("user")
                if not user:
                    raise NotFoundError("NOT_FOUND", f"GitHub user '{username}' not found")

                with expect_shape("pull request connection"):
                    connection = user["pullRequests"]
                    page = [self._parse_pull_request(node) for node in connection["nodes"]]
                    has_next_page = bool(connection["pageInfo"]["hasNextPage"])
                    cursor = connection["pageInfo"]["endCursor"]

                collected.extend(pr for pr in page if matches_state(pr, state))

                if not has_next_page:
                    break
        except NotFoundError as e:
            raise NotFoundError(
                "NOT_FOUND", f"GitHub user '{username}' not found", e.request_id
            ) from e
        except RepoClaimError as e:
            logger.error("Error fetching GitHub PRs for %s: %s", username, e.message)
            if isinstance(e, InternalError):
                raise
            raise InternalError(
                "INTERNAL_SERVER_ERROR",
                f"Failed to fetch pull requests: {e.message}",
                e.request_id,
            ) from e

        return collected[:limit]

    def _parse_pull_request(self, node: dict[str, Any]) -> UserPullRequest:
        """Parse a pull request node from the GraphQL response."""
        repo = node["repository"]
        return UserPullRequest(
            id=node["id"],
            number=node["number"],
            title=node["title"],
            state=node["state"].lower(),
            url=node["url"],
            created_at=node["createdAt"],
            updated_at=node["updatedAt"],
            closed_at=node.get("closedAt") or None,
            merged_at=node.get("mergedAt") or None,
            is_draft=bool(node.get("isDraft", False)),
            head_ref_name=node["headRefName"],
            base_ref_name=node["baseRefName"],
            repository=PullRequestRepository(
                name_with_owner=repo["nameWithOwner"],
                url=repo["url"],
                is_private=bool(repo["isPrivate"]),
                owner_login=repo["owner"]["login"],
            ),
        )
