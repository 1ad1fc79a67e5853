"""In-Memory Project Store — process-local ProjectStore for isolated use.

Invariants:
    - Same contract as SqlProjectStore: insert-or-overwrite, key-ordered values()
    - Records are frozen dataclasses, so callers can never mutate stored state

Design Decisions:
    - Not durable: state is lost on restart. Used for engine tests and local runs
      that should not touch a database
"""

from crowdfund.core.domain_types import ProjectId
from crowdfund.core.project import Project


class InMemoryProjectStore:
    """Dict-backed id -> Project map."""

    def __init__(self, projects: list[Project] | None = None):
        self._projects: dict[ProjectId, Project] = {}
        for project in projects or ():
            self._projects[project.id] = project

    async def get(self, project_id: ProjectId) -> Project | None:
        return self._projects.get(project_id)

    async def contains(self, project_id: ProjectId) -> bool:
        return project_id in self._projects

    async def insert(self, project: Project) -> None:
        self._projects[project.id] = project

    async def values(self) -> list[Project]:
        return [self._projects[k] for k in sorted(self._projects)]

    def __len__(self) -> int:
        return len(self._projects)
