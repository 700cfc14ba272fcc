"""repoclaim resource clients."""

from repoclaim.clients.orgs import OrgsClient
from repoclaim.clients.pulls import PullsClient
from repoclaim.clients.repos import ReposClient
from repoclaim.clients.users import UsersClient

__all__ = [
    "UsersClient",
    "ReposClient",
    "OrgsClient",
    "PullsClient",
]
