"""Persistent ClaimStore back ends."""

from repoclaim.storage.models import Base, ProjectClaimRow, ProjectRow
from repoclaim.storage.database import SQLAlchemyClaimStore

__all__ = [
    "Base",
    "ProjectRow",
    "ProjectClaimRow",
    "SQLAlchemyClaimStore",
]
