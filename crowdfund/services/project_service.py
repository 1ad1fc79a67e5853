"""Project Service — orchestrates store IO around the pure lifecycle rules.

Invariants:
    - Every operation reads at most one record, then writes at most one record
    - The service never caches records between calls; every mutation re-reads first
    - Transition.write is persisted BEFORE Transition.error is raised (lazy expiry
      leaves the record Expired even though the contribution fails)
    - Failures are raised as CrowdfundError subclasses; nothing is retried here

Design Decisions:
    - Store, clock and id generator are injected: routes pass a SqlProjectStore per
      request, tests pass InMemoryProjectStore and a fake clock
    - Id allocation retries are bounded by max_id_attempts (IdAllocationError after)
"""

import logging
import time

from crowdfund.core.domain_types import ProjectId, ProjectStatus, parse_status
from crowdfund.core.errors import IdAllocationError, ProjectNotFoundError
from crowdfund.core.lifecycle import (
    apply_detail_update,
    apply_status,
    create_project,
    evaluate_contribution,
    filter_by_status,
    generate_project_id,
    require_fields,
    validate_payload,
)
from crowdfund.core.project import Project, ProjectPayload
from crowdfund.core.repository_protocols import Clock, IdGenerator, ProjectStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_ID_ATTEMPTS = 8


def system_clock() -> int:
    """Wall-clock time in nanoseconds since the Unix epoch."""
    return time.time_ns()


class ProjectService:
    """Public project operations over one ProjectStore."""

    def __init__(
        self,
        store: ProjectStore,
        clock: Clock = system_clock,
        id_generator: IdGenerator = generate_project_id,
        max_id_attempts: int = DEFAULT_MAX_ID_ATTEMPTS,
    ):
        self._store = store
        self._clock = clock
        self._id_generator = id_generator
        self._max_id_attempts = max_id_attempts

    # ─── Writes ──────────────────────────────────────────────────

    async def create_project(self, payload: ProjectPayload) -> Project:
        validate_payload(payload)
        now = self._clock()
        project_id = await self._allocate_id()
        project = create_project(payload, project_id, now)
        await self._store.insert(project)
        logger.info(
            f"Project {project.id} created by {project.creator}",
            extra={"project_id": project.id, "operation": "create_project"},
        )
        return project

    async def contribute_to_project(
        self, project_id: str, contributor: str | None, amount: int | None,
    ) -> Project:
        require_fields({
            "project_id": project_id, "contributor": contributor, "amount": amount,
        })
        project = await self._get_or_raise(ProjectId(project_id))
        transition = evaluate_contribution(
            project, contributor, amount, self._clock(),
        )
        if transition.write is not None:
            await self._store.insert(transition.write)
        if transition.error is not None:
            if (
                transition.write is not None
                and transition.write.status is ProjectStatus.EXPIRED
            ):
                logger.info(
                    f"Project {project.id} expired on contribution attempt",
                    extra={"project_id": project.id, "operation": "contribute_to_project"},
                )
            raise transition.error
        return transition.write

    async def update_status(self, project_id: str, status: str | None) -> Project:
        require_fields({"project_id": project_id, "status": status})
        project = await self._get_or_raise(ProjectId(project_id))
        updated = apply_status(project, parse_status(status))
        await self._store.insert(updated)
        logger.info(
            f"Project {project.id} status {project.status.value} -> {updated.status.value}",
            extra={
                "project_id": project.id, "operation": "update_status",
                "status": updated.status.value,
            },
        )
        return updated

    async def cancel_project(self, project_id: str) -> Project:
        return await self.update_status(project_id, ProjectStatus.EXPIRED.value)

    async def update_project(
        self, project_id: str, payload: ProjectPayload,
    ) -> Project:
        require_fields({"project_id": project_id})
        validate_payload(payload)
        project = await self._get_or_raise(ProjectId(project_id))
        updated = apply_detail_update(project, payload, self._clock())
        await self._store.insert(updated)
        logger.info(
            f"Project {project.id} details updated",
            extra={"project_id": project.id, "operation": "update_project"},
        )
        return updated

    # ─── Reads (pure, never apply lazy expiry) ───────────────────

    async def get_projects(
        self, status: str | ProjectStatus | None = None,
    ) -> list[Project]:
        wanted = parse_status(status) if status is not None else None
        return filter_by_status(await self._store.values(), wanted)

    async def get_expired_projects(self) -> list[Project]:
        return await self.get_projects(ProjectStatus.EXPIRED)

    async def get_project(self, project_id: str) -> Project:
        return await self._get_or_raise(ProjectId(project_id))

    async def get_contributors(self, project_id: str) -> list[str]:
        project = await self._get_or_raise(ProjectId(project_id))
        return list(project.contributors)

    # ─── Helpers ─────────────────────────────────────────────────

    async def _get_or_raise(self, project_id: ProjectId) -> Project:
        project = await self._store.get(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    async def _allocate_id(self) -> ProjectId:
        """Draw candidates until one is unused, up to max_id_attempts."""
        for attempt in range(1, self._max_id_attempts + 1):
            candidate = self._id_generator()
            if not await self._store.contains(candidate):
                return candidate
            logger.warning(
                f"Project id collision on attempt {attempt}",
                extra={"project_id": candidate, "operation": "allocate_id"},
            )
        raise IdAllocationError(self._max_id_attempts)
