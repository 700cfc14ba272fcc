#!/usr/bin/env python3
"""
Basic repoclaim usage example.

Reads GITHUB_TOKEN from the environment, prints a repository summary and
then claims an in-memory project for that repository.
Run with: python examples/basic_usage.py octocat/Hello-World
"""

import asyncio
import logging
import sys

from repoclaim import (
    AsyncGitHubClient,
    ClaimContext,
    ClaimDeniedError,
    OwnershipVerifier,
    RepoClaimError,
    configure_logging,
)
from repoclaim.testing import InMemoryClaimStore


async def main(identifier: str) -> int:
    configure_logging(level=logging.INFO)

    async with AsyncGitHubClient.from_env() as client:
        # 1. Repository data
        print(f"1. Fetching {identifier}...")
        data = await client.get_repo_data(identifier)
        print(f"   {data.repo.full_name} ({data.repo.owner.type})")
        print(f"   Contributors: {len(data.contributors)}")
        print(f"   Issues: {len(data.issues)}, pull requests: {len(data.pull_requests)}")

        # 2. Merged pull requests authored by the token's user
        identity = await client.current_identity()
        merged = await client.list_user_pull_requests(identity.username, state="merged", limit=5)
        print(f"\n2. Recent merged pull requests by {identity.username}:")
        for pr in merged:
            print(f"   #{pr.number} {pr.title} ({pr.repository.name_with_owner})")

        # 3. Ownership claim
        print("\n3. Claiming project...")
        store = InMemoryClaimStore()
        store.add_project("demo-project", name=data.repo.name)
        ctx = ClaimContext(store=store, user_id="demo-session-user")
        try:
            result = await OwnershipVerifier(client).verify(identifier, "demo-project", ctx)
        except ClaimDeniedError as e:
            print(f"   Denied: {e.message}")
            return 1
        except RepoClaimError as e:
            print(f"   Failed: [{e.code}] {e.message}")
            return 1

        print(f"   Claimed as {result.verified_as} ({result.ownership_type})")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "octocat/Hello-World")))
