"""SQL Project Store — ProjectStore backed by the `projects` table.

Invariants:
    - One store per AsyncSession (per request); the store never outlives its session
    - insert() commits immediately: each write is one durable single-row commit
    - values() enumerates in key (id) order, like an ordered map
    - A write racing another writer raises ConcurrencyError, never overwrites silently

Design Decisions:
    - Maps ProjectRecord <-> Project at the boundary so core never sees ORM objects
    - The session identity map is weak-referencing, so the store keeps the ProjectRecord
      each get() loaded; insert() writes through that record and the UPDATE is
      conditioned on the version get() read, not on a fresh re-read
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from crowdfund.core.domain_types import ProjectId, ProjectStatus
from crowdfund.core.errors import ConcurrencyError, DatabaseError, ErrorContext
from crowdfund.core.project import Project
from crowdfund.models.project import ProjectRecord

logger = logging.getLogger(__name__)


def to_domain(record: ProjectRecord) -> Project:
    return Project(
        id=ProjectId(record.id),
        creator=record.creator,
        title=record.title,
        description=record.description,
        goal_amount=record.goal_amount,
        raised_amount=record.raised_amount,
        start_time=record.start_time,
        deadline=record.deadline,
        contributors=tuple(record.contributors or ()),
        status=ProjectStatus(record.status),
    )


def _copy_onto(record: ProjectRecord, project: Project) -> None:
    record.creator = project.creator
    record.title = project.title
    record.description = project.description
    record.goal_amount = project.goal_amount
    record.raised_amount = project.raised_amount
    record.start_time = project.start_time
    record.deadline = project.deadline
    record.contributors = list(project.contributors)
    record.status = project.status.value


class SqlProjectStore:
    """Durable id -> Project map over one async DB session."""

    def __init__(self, db: AsyncSession):
        self._db = db
        self._loaded: dict[ProjectId, ProjectRecord] = {}

    async def get(self, project_id: ProjectId) -> Project | None:
        record = await self._db.get(ProjectRecord, project_id)
        if record is None:
            return None
        self._loaded[project_id] = record
        return to_domain(record)

    async def contains(self, project_id: ProjectId) -> bool:
        result = await self._db.execute(
            select(ProjectRecord.id).where(ProjectRecord.id == project_id),
        )
        return result.scalar_one_or_none() is not None

    async def insert(self, project: Project) -> None:
        """Insert or overwrite the record stored under project.id."""
        record = self._loaded.get(project.id)
        if record is None:
            record = await self._db.get(ProjectRecord, project.id)
        if record is None:
            record = ProjectRecord(id=project.id)
            self._db.add(record)
        _copy_onto(record, project)
        self._loaded[project.id] = record
        await self._commit(project.id)

    async def values(self) -> list[Project]:
        result = await self._db.execute(
            select(ProjectRecord).order_by(ProjectRecord.id),
        )
        return [to_domain(r) for r in result.scalars().all()]

    async def _commit(self, project_id: ProjectId) -> None:
        ctx = ErrorContext(project_id=project_id, operation="insert")
        try:
            await self._db.commit()
        except StaleDataError:
            await self._db.rollback()
            self._loaded.pop(project_id, None)
            logger.warning(
                f"Concurrent write on project {project_id}",
                extra={"project_id": project_id},
            )
            raise ConcurrencyError(
                f"Project with id={project_id} was modified concurrently",
                ctx,
            )
        except IntegrityError as e:
            await self._db.rollback()
            self._loaded.clear()
            logger.error(f"DB integrity error: {e}", extra={"project_id": project_id})
            raise DatabaseError("Integrity constraint violated", "commit", ctx)
        except SQLAlchemyError as e:
            await self._db.rollback()
            self._loaded.clear()
            logger.error(f"SQLAlchemy error: {e}", extra={"project_id": project_id})
            raise DatabaseError("Database operation failed", "commit", ctx)
