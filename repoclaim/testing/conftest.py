"""
Pytest plugin for repoclaim testing fixtures.

This module re-exports all fixtures from fixtures.py so they can be
automatically discovered by pytest when this package is installed.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["repoclaim.testing.conftest"]
"""

from repoclaim.testing.fixtures import (
    claim_context,
    claim_store,
    mock_provider,
    sample_org_repository,
    sample_repository,
    ttl_cache,
)

__all__ = [
    "mock_provider",
    "claim_store",
    "claim_context",
    "ttl_cache",
    "sample_repository",
    "sample_org_repository",
]
