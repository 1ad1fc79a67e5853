"""Project Schemas — Pydantic models for the HTTP boundary.

Invariants:
    - JSON field names are camelCase (goalAmount, raisedAmount, startTime); snake_case accepted on input
    - Numbers are bounded to the unsigned 64-bit range at the boundary
    - Required-field presence is NOT enforced here: missing fields reach the
      lifecycle, which raises INVALID_PAYLOAD

Design Decisions:
    - Request models convert to core dataclasses (to_payload) — core never imports pydantic
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from crowdfund.core.domain_types import U64_MAX, ProjectStatus
from crowdfund.core.project import Project, ProjectPayload


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProjectCreate(_CamelModel):
    """Creation / full detail-update body."""
    title: str | None = None
    description: str | None = None
    goal_amount: int | None = Field(None, ge=0, le=U64_MAX)
    duration: int | None = Field(None, ge=0, le=U64_MAX)
    creator: str | None = None

    def to_payload(self) -> ProjectPayload:
        return ProjectPayload(
            title=self.title,
            description=self.description,
            goal_amount=self.goal_amount,
            duration=self.duration,
            creator=self.creator,
        )


class ContributionCreate(_CamelModel):
    contributor: str | None = None
    amount: int | None = Field(None, ge=0, le=U64_MAX)


class StatusUpdate(_CamelModel):
    # str, not ProjectStatus: unknown values must surface as INVALID_STATUS
    status: str | None = None


class ProjectResponse(_CamelModel):
    """Project response — public-facing project data."""
    id: str
    creator: str
    title: str
    description: str
    goal_amount: int
    raised_amount: int
    start_time: int
    deadline: int
    contributors: list[str]
    status: ProjectStatus

    @classmethod
    def from_project(cls, project: Project) -> "ProjectResponse":
        return cls(
            id=project.id,
            creator=project.creator,
            title=project.title,
            description=project.description,
            goal_amount=project.goal_amount,
            raised_amount=project.raised_amount,
            start_time=project.start_time,
            deadline=project.deadline,
            contributors=list(project.contributors),
            status=project.status,
        )
