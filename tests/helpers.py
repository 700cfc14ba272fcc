"""Helpers for faking GitHub HTTP responses."""

from collections.abc import Callable
from typing import Any

import httpx

GRAPHQL_URL = "https://api.github.com/graphql"


def json_response(
    status_code: int, data: Any = None, headers: dict[str, str] | None = None
) -> httpx.Response:
    """Build an httpx.Response carrying a JSON body."""
    if data is None:
        return httpx.Response(status_code, headers=headers)
    return httpx.Response(status_code, json=data, headers=headers)


def route(
    routes: dict[str, Any], calls: list[tuple[str, str, dict | None]] | None = None
) -> Callable[..., httpx.Response]:
    """
    Build a side_effect for AsyncClient.request that answers by path.

    Values may be an httpx.Response or a callable taking the query params.
    Unknown paths answer 404.
    """

    def handler(method: str, path: str, params: dict | None = None, json: Any = None) -> httpx.Response:
        if calls is not None:
            calls.append((method, path, params if params is not None else json))
        answer = routes.get(path)
        if answer is None:
            return json_response(404, {"message": "Not Found"})
        if callable(answer):
            return answer(params if params is not None else json)
        return answer

    return handler


def repo_payload(
    owner: str = "octocat", name: str = "Hello-World", owner_type: str = "User"
) -> dict[str, Any]:
    """Minimal GitHub repository JSON."""
    return {
        "id": 1296269,
        "name": name,
        "full_name": f"{owner}/{name}",
        "description": "This your first repo!",
        "html_url": f"https://github.com/{owner}/{name}",
        "private": False,
        "owner": {"login": owner, "type": owner_type},
        "default_branch": "main",
        "stargazers_count": 80,
        "forks_count": 9,
        "open_issues_count": 0,
    }
