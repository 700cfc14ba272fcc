"""
Async HTTP Transport for repoclaim.

Handles authenticated communication with the GitHub REST and GraphQL APIs,
optional retry logic, and error handling using the httpx async client.
"""

import asyncio
import random
import time
from collections.abc import Callable, Coroutine, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

import httpx

from repoclaim.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InternalError,
    NotFoundError,
    RateLimitedError,
    RepoClaimError,
    ValidationError,
)
from repoclaim.logging import log_http_request, log_http_response

GITHUB_API_VERSION = "2022-11-28"


@dataclass
class RetryConfig:
    """Configuration for automatic retry behavior.

    Retries are off by default: every provider call is a single attempt and
    transient failures surface as InternalError.
    """

    max_retries: int = 0
    backoff_factor: float = 2.0
    retry_on: list[int] = field(default_factory=lambda: [429, 500, 502, 503])
    respect_retry_after: bool = True
    max_backoff: float = 60.0  # Maximum backoff time in seconds
    jitter: float = 0.1  # Jitter factor (0.1 = ±10%)


@contextmanager
def expect_shape(kind: str) -> Iterator[None]:
    """Turn a malformed provider payload into InternalError."""
    try:
        yield
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise InternalError(
            "UNEXPECTED_RESPONSE",
            f"Unexpected {kind} payload from GitHub: {type(e).__name__}: {e}",
        ) from e


class AsyncHTTPTransport:
    """
    Async HTTP transport layer with token authentication.

    Handles:
    - Bearer token and GitHub API version headers
    - Optional exponential backoff with jitter for retries
    - Retry-After / X-RateLimit-Reset respect for rate limiting
    - Error response parsing into typed exceptions
    - GraphQL requests and GraphQL error payloads
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        graphql_url: str | None = None,
        timeout: float = 30.0,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """
        Initialize async HTTP transport.

        Args:
            base_url: Base URL for REST requests (e.g., "https://api.github.com")
            token: Personal access or OAuth token of the caller
            graphql_url: GraphQL endpoint (default: "{base_url}/graphql")
            timeout: Request timeout in seconds
            retry_config: Configuration for retry behavior
        """
        self.base_url = base_url.rstrip("/")
        self.graphql_url = graphql_url or f"{self.base_url}/graphql"
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig()

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers={
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {token}",
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
            },
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        """
        Make a REST request.

        Args:
            method: HTTP method
            path: API path (e.g., "/repos/octocat/Hello-World")
            params: Query parameters
            body: JSON request body

        Returns:
            Parsed JSON response (object or array)

        Raises:
            RepoClaimError: On API errors
        """
        async def make_request() -> httpx.Response:
            log_http_request(method, path, params=params)
            started = time.monotonic()
            response = await self._client.request(method, path, params=params, json=body)
            log_http_response(
                response.status_code,
                path,
                elapsed_ms=(time.monotonic() - started) * 1000,
                rate_limit_remaining=response.headers.get("X-RateLimit-Remaining"),
            )
            return response

        return await self._execute_with_retry(make_request)

    async def graphql(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Run a GraphQL query.

        Args:
            query: GraphQL document
            variables: Query variables

        Returns:
            The ``data`` member of the response

        Raises:
            NotFoundError: If GitHub reports a NOT_FOUND error
            InternalError: On any other GraphQL error or missing data
        """
        payload = {"query": query, "variables": variables or {}}

        async def make_request() -> httpx.Response:
            log_http_request("POST", self.graphql_url, params=variables)
            started = time.monotonic()
            response = await self._client.request("POST", self.graphql_url, json=payload)
            log_http_response(
                response.status_code,
                self.graphql_url,
                elapsed_ms=(time.monotonic() - started) * 1000,
            )
            return response

        result = await self._execute_with_retry(make_request)
        if not isinstance(result, dict):
            raise InternalError("UNEXPECTED_RESPONSE", "GraphQL response is not an object")

        errors = result.get("errors") or []
        if errors:
            messages = "; ".join(str(e.get("message", e)) for e in errors)
            if any(e.get("type") == "NOT_FOUND" for e in errors):
                raise NotFoundError("NOT_FOUND", messages)
            raise InternalError("GRAPHQL_ERROR", messages)

        data = result.get("data")
        if not isinstance(data, dict):
            raise InternalError("UNEXPECTED_RESPONSE", "GraphQL response has no data")
        return data

    async def _execute_with_retry(
        self, request_fn: Callable[[], Coroutine[Any, Any, httpx.Response]]
    ) -> Any:
        """
        Execute a request, retrying retryable errors if configured.

        Args:
            request_fn: Async function that makes the HTTP request

        Returns:
            Parsed JSON response

        Raises:
            RepoClaimError: On non-retryable errors or after max retries
        """
        last_error: Exception | None = None

        for attempt in range(self.retry_config.max_retries + 1):
            try:
                response = await request_fn()

                if response.status_code < 400:
                    if response.status_code == 204 or not response.content:
                        return {}
                    try:
                        return response.json()
                    except ValueError as e:
                        raise InternalError(
                            "UNEXPECTED_RESPONSE", "Response body is not valid JSON"
                        ) from e

                error = self._parse_error_response(response)

                if not self._should_retry(response.status_code, attempt):
                    raise error

                last_error = error

                retry_after = response.headers.get("Retry-After")
                wait_time = self._get_backoff_time(attempt, retry_after)
                await asyncio.sleep(wait_time)

            except httpx.RequestError as e:
                # Network errors are retryable
                if attempt >= self.retry_config.max_retries:
                    raise InternalError("CONNECTION_ERROR", str(e)) from e

                last_error = e
                wait_time = self._get_backoff_time(attempt, None)
                await asyncio.sleep(wait_time)

        if last_error:
            if isinstance(last_error, RepoClaimError):
                raise last_error
            raise InternalError("MAX_RETRIES_EXCEEDED", str(last_error))

        raise InternalError("UNKNOWN_ERROR", "Request failed with no error details")

    def _should_retry(self, status_code: int, attempt: int) -> bool:
        """
        Determine if a request should be retried.

        Args:
            status_code: HTTP status code
            attempt: Current attempt number (0-indexed)

        Returns:
            True if the request should be retried
        """
        if attempt >= self.retry_config.max_retries:
            return False

        return status_code in self.retry_config.retry_on

    def _get_backoff_time(
        self, attempt: int, retry_after: str | None
    ) -> float:
        """
        Calculate backoff time for retry.

        Uses exponential backoff with jitter, respecting Retry-After header
        if present.

        Args:
            attempt: Current attempt number (0-indexed)
            retry_after: Value of Retry-After header (if present)

        Returns:
            Time to wait in seconds
        """
        if retry_after and self.retry_config.respect_retry_after:
            try:
                return float(retry_after)
            except ValueError:
                pass  # Fall through to exponential backoff

        base_wait = self.retry_config.backoff_factor ** attempt

        jitter_range = base_wait * self.retry_config.jitter
        jitter = random.uniform(-jitter_range, jitter_range)
        wait_time = base_wait + jitter

        return min(wait_time, self.retry_config.max_backoff)

    def _parse_error_response(self, response: httpx.Response) -> RepoClaimError:
        """
        Parse an error response into a typed exception.

        Args:
            response: HTTP response with error status

        Returns:
            Appropriate RepoClaimError subclass
        """
        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        status_code = response.status_code
        message = data.get("message") or f"HTTP {status_code}"
        request_id = response.headers.get("X-GitHub-Request-Id")

        if status_code == 429 or (
            status_code == 403 and response.headers.get("X-RateLimit-Remaining") == "0"
        ):
            return RateLimitedError(
                "RATE_LIMITED", message, self._retry_after_seconds(response), request_id
            )
        if status_code == 401:
            return AuthenticationError("UNAUTHORIZED", message, request_id)
        elif status_code == 403:
            return AuthorizationError("FORBIDDEN", message, request_id)
        elif status_code == 404:
            return NotFoundError("NOT_FOUND", message, request_id)
        elif status_code == 409:
            return ConflictError("CONFLICT", message, request_id)
        elif status_code >= 500:
            return InternalError("SERVER_ERROR", message, request_id)
        else:
            return ValidationError("VALIDATION_ERROR", message, request_id)

    @staticmethod
    def _retry_after_seconds(response: httpx.Response) -> int:
        retry_after = response.headers.get("Retry-After")
        if retry_after:
            try:
                return int(retry_after)
            except ValueError:
                pass
        reset = response.headers.get("X-RateLimit-Reset")
        if reset:
            try:
                return max(0, int(reset) - int(time.time()))
            except ValueError:
                pass
        return 60
