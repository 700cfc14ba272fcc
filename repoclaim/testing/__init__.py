"""repoclaim testing utilities.

Provides a mock provider, an in-memory claim store and fixtures for testing
applications that use repoclaim.
"""

from repoclaim.testing.fixtures import (
    create_mock_membership,
    create_mock_repository,
    create_mock_user_pull_request,
)
from repoclaim.testing.mock import InMemoryClaimStore, MockCall, MockGitProvider, MockResponse

__all__ = [
    # Doubles
    "MockGitProvider",
    "InMemoryClaimStore",
    "MockCall",
    "MockResponse",
    # Helper functions
    "create_mock_repository",
    "create_mock_membership",
    "create_mock_user_pull_request",
]
