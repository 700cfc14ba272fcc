"""repoclaim - GitHub repository data and ownership verification for project directories."""

from repoclaim.cache import CacheTTL, TTLCache, create_cache_key
from repoclaim.claims import ClaimContext, ClaimRecorder, ClaimStore
from repoclaim.client import AsyncGitHubClient
from repoclaim.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ClaimDeniedError,
    ConfigurationError,
    ConflictError,
    InternalError,
    InvalidIdentifierError,
    NotFoundError,
    RateLimitedError,
    RepoClaimError,
    ValidationError,
)
from repoclaim.logging import configure_logging, get_logger
from repoclaim.provider import GitProvider
from repoclaim.transport import AsyncHTTPTransport, RetryConfig
from repoclaim.verify import Denied, Granted, Inconclusive, OwnershipVerifier

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Client
    "AsyncGitHubClient",
    "GitProvider",
    # Verification
    "OwnershipVerifier",
    "Granted",
    "Denied",
    "Inconclusive",
    # Claims
    "ClaimContext",
    "ClaimRecorder",
    "ClaimStore",
    # Cache
    "TTLCache",
    "CacheTTL",
    "create_cache_key",
    # Exceptions
    "RepoClaimError",
    "ConfigurationError",
    "InvalidIdentifierError",
    "AuthenticationError",
    "AuthorizationError",
    "ClaimDeniedError",
    "NotFoundError",
    "ConflictError",
    "ValidationError",
    "InternalError",
    "RateLimitedError",
    # Transport
    "AsyncHTTPTransport",
    "RetryConfig",
    # Logging
    "configure_logging",
    "get_logger",
]
