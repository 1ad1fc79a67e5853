"""Project Record — the single crowdfunding entity as plain domain data.

Invariants:
    - id, start_time are immutable once assigned
    - start_time <= deadline
    - raised_amount never decreases; contributors only grows
    - Records are values: lifecycle functions return new records, never mutate inputs

Design Decisions:
    - dataclass, not ORM model: core stays IO-free; the store maps to/from ProjectRecord
    - ProjectPayload fields are Optional: presence checks belong to the lifecycle,
      so a missing field fails as INVALID_PAYLOAD rather than a transport error
"""

from dataclasses import dataclass, replace

from crowdfund.core.domain_types import ProjectId, ProjectStatus


@dataclass(frozen=True)
class Project:
    """A crowdfunding campaign as stored under its id."""

    id: ProjectId
    creator: str
    title: str
    description: str
    goal_amount: int
    raised_amount: int
    start_time: int
    deadline: int
    contributors: tuple[str, ...] = ()
    status: ProjectStatus = ProjectStatus.FUNDING

    def with_changes(self, **changes) -> "Project":
        return replace(self, **changes)


@dataclass(frozen=True)
class ProjectPayload:
    """Creation / detail-update input. Every field is required and non-zero."""

    title: str | None = None
    description: str | None = None
    goal_amount: int | None = None
    duration: int | None = None
    creator: str | None = None

    def as_fields(self) -> dict[str, object]:
        return {
            "title": self.title,
            "description": self.description,
            "goal_amount": self.goal_amount,
            "duration": self.duration,
            "creator": self.creator,
        }

