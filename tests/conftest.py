"""Shared fixtures."""

from repoclaim.testing.fixtures import (  # noqa: F401
    claim_context,
    claim_store,
    mock_provider,
    sample_org_repository,
    sample_repository,
    ttl_cache,
)
