"""Project Lifecycle — pure rules for creation, contribution, expiry and updates.

Invariants:
    - Every function is PURE: inputs in, new record or typed failure out, no IO
    - `now` is always passed in by the shell (never read from the wall clock here)
    - Contribution checks run in fixed order: terminal status, deadline, then apply
    - Lazy expiry: a past-deadline Funding project becomes Expired only when a
      contribution attempt observes it; reads never transition status
    - Amount and timestamp arithmetic never leaves the u64 range

Design Decisions:
    - evaluate_contribution returns a Transition instead of raising: the expiry path
      must persist a write AND fail, so the shell writes first, then raises
    - Status overwrite is unconditional, terminal states included
"""

import secrets
from dataclasses import dataclass
from typing import Iterable

from crowdfund.core.domain_types import (
    ProjectId, ProjectStatus, TERMINAL_STATUSES, U64_MAX, fits_u64,
)
from crowdfund.core.errors import (
    CrowdfundError, InvalidPayloadError, ProjectExpiredError,
)
from crowdfund.core.project import Project, ProjectPayload


ID_ENTROPY_BITS: int = 128


@dataclass(frozen=True)
class Transition:
    """Outcome of a lifecycle rule. `write` is persisted before `error` is raised."""
    write: Project | None = None
    error: CrowdfundError | None = None


# ─── Identifiers ─────────────────────────────────────────────────

def generate_project_id() -> ProjectId:
    """128 random bits as 32 lowercase hex chars."""
    return ProjectId(secrets.token_hex(ID_ENTROPY_BITS // 8))


# ─── Validation ──────────────────────────────────────────────────

def require_fields(fields: dict[str, object]) -> None:
    """Raise InvalidPayloadError naming every missing, empty or zero field."""
    missing = [name for name, value in fields.items() if not value]
    if missing:
        raise InvalidPayloadError(
            f"The payload has missing attributes: {', '.join(missing)}",
            fields=missing,
        )


def validate_payload(payload: ProjectPayload) -> None:
    require_fields(payload.as_fields())
    out_of_range = [
        name for name in ("goal_amount", "duration")
        if not fits_u64(getattr(payload, name))
    ]
    if out_of_range:
        raise InvalidPayloadError(
            f"Values out of range: {', '.join(out_of_range)}",
            fields=out_of_range,
        )


def _deadline_from(start_time: int, duration: int) -> int:
    deadline = start_time + duration
    if deadline > U64_MAX:
        raise InvalidPayloadError(
            "invalid duration: deadline exceeds the timestamp range",
            fields=["duration"],
        )
    return deadline


# ─── Creation ────────────────────────────────────────────────────

def create_project(
    payload: ProjectPayload, project_id: ProjectId, now: int,
) -> Project:
    """Build a fresh Funding project starting at `now`. The payload is already validated."""
    return Project(
        id=project_id,
        creator=payload.creator,
        title=payload.title,
        description=payload.description,
        goal_amount=payload.goal_amount,
        raised_amount=0,
        start_time=now,
        deadline=_deadline_from(now, payload.duration),
        contributors=(),
        status=ProjectStatus.FUNDING,
    )


# ─── Contribution & lazy expiry ──────────────────────────────────

def evaluate_contribution(
    project: Project, contributor: str, amount: int, now: int,
) -> Transition:
    """Apply a contribution, or detect expiry. Pure — the shell persists `write`."""
    if project.status in TERMINAL_STATUSES:
        return Transition(error=ProjectExpiredError(project.id))

    if now >= project.deadline:
        return Transition(
            write=project.with_changes(status=ProjectStatus.EXPIRED),
            error=ProjectExpiredError(project.id),
        )

    raised = project.raised_amount + amount
    if raised > U64_MAX:
        return Transition(error=InvalidPayloadError(
            "Contribution would overflow the raised amount", fields=["amount"],
        ))

    return Transition(write=project.with_changes(
        raised_amount=raised,
        contributors=project.contributors + (contributor,),
    ))


# ─── Status & detail updates ─────────────────────────────────────

def apply_status(project: Project, status: ProjectStatus) -> Project:
    return project.with_changes(status=status)


def apply_detail_update(
    project: Project, payload: ProjectPayload, now: int,
) -> Project:
    """Overwrite descriptive fields and recompute the deadline from start_time.

    Skips lazy expiry: a longer duration can reopen a past-deadline project.
    The caller runs validate_payload first.
    """
    deadline = _deadline_from(project.start_time, payload.duration)
    if deadline <= now:
        raise InvalidPayloadError(
            "invalid duration: the recomputed deadline is already in the past",
            fields=["duration"],
        )
    return project.with_changes(
        title=payload.title,
        description=payload.description,
        goal_amount=payload.goal_amount,
        creator=payload.creator,
        deadline=deadline,
    )


# ─── Queries ─────────────────────────────────────────────────────

def filter_by_status(
    projects: Iterable[Project], status: ProjectStatus | None,
) -> list[Project]:
    """Trusts stored status; past-deadline Funding projects stay Funding here."""
    if status is None:
        return list(projects)
    return [p for p in projects if p.status == status]
