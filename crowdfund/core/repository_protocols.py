"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Store IO accessed only through ProjectStore
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, SQL and in-memory stores share no base
    - The store is a key-ordered map: get / insert (insert-or-overwrite) / contains / values;
      there is no delete; cancellation is a status write
"""

from typing import Callable, Protocol

from crowdfund.core.domain_types import ProjectId
from crowdfund.core.project import Project


Clock = Callable[[], int]
IdGenerator = Callable[[], ProjectId]


class ProjectStore(Protocol):
    """Contract for project persistence — implemented by shell."""
    async def get(self, project_id: ProjectId) -> Project | None: ...
    async def contains(self, project_id: ProjectId) -> bool: ...
    async def insert(self, project: Project) -> None: ...
    async def values(self) -> list[Project]: ...
