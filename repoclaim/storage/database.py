"""
SQLAlchemy async ClaimStore.

The ownership update is a single UPDATE ... WHERE owner_id IS NULL
RETURNING statement, so concurrent claims on one project resolve in the
database: exactly one statement matches the row.
"""

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from repoclaim.logging import get_logger
from repoclaim.storage.models import ProjectClaimRow, ProjectRow
from repoclaim.types.claims import ClaimAttempt, Project

logger = get_logger("storage")


class SQLAlchemyClaimStore:
    """ClaimStore backed by an async SQLAlchemy engine."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """
        Initialize the store.

        Args:
            session_factory: Session factory bound to the application engine
        """
        self.session_factory = session_factory

    async def insert_claim(self, attempt: ClaimAttempt) -> None:
        async with self.session_factory() as session:
            session.add(
                ProjectClaimRow(
                    project_id=attempt.project_id,
                    user_id=attempt.user_id,
                    success=attempt.success,
                    verification_method=attempt.verification_method,
                    verification_details=attempt.verification_details,
                    error_reason=attempt.error_reason,
                    created_at=attempt.created_at,
                )
            )
            await session.commit()

    async def claim_project(
        self, project_id: str, owner_id: str, updated_at: datetime
    ) -> Project | None:
        stmt = (
            update(ProjectRow)
            .where(ProjectRow.id == project_id, ProjectRow.owner_id.is_(None))
            .values(owner_id=owner_id, updated_at=updated_at)
            .returning(ProjectRow.id, ProjectRow.name, ProjectRow.owner_id, ProjectRow.updated_at)
            .execution_options(synchronize_session=False)
        )
        async with self.session_factory() as session:
            row = (await session.execute(stmt)).first()
            await session.commit()

        if row is None:
            logger.debug("No unclaimed project matched id %s", project_id)
            return None
        return Project(id=row.id, name=row.name, owner_id=row.owner_id, updated_at=row.updated_at)

    async def get_project(self, project_id: str) -> Project | None:
        async with self.session_factory() as session:
            row = await session.get(ProjectRow, project_id)
            if row is None:
                return None
            return Project(
                id=row.id, name=row.name, owner_id=row.owner_id, updated_at=row.updated_at
            )

    async def list_claims(self, project_id: str) -> list[ClaimAttempt]:
        stmt = (
            select(ProjectClaimRow)
            .where(ProjectClaimRow.project_id == project_id)
            .order_by(ProjectClaimRow.created_at)
        )
        async with self.session_factory() as session:
            rows = (await session.execute(stmt)).scalars().all()
            return [
                ClaimAttempt(
                    project_id=r.project_id,
                    user_id=r.user_id,
                    success=r.success,
                    verification_method=r.verification_method,
                    verification_details=r.verification_details,
                    error_reason=r.error_reason,
                    created_at=r.created_at,
                )
                for r in rows
            ]
