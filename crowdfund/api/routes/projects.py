"""Project Routes — one endpoint per project operation.

Invariants:
    - Each route maps 1:1 to a ProjectService operation
    - Failures propagate as CrowdfundError and are rendered by the global handlers
    - /expired is declared before /{project_id} so it is not captured as an id
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from crowdfund.api.dependencies import get_project_service
from crowdfund.schemas.project import (
    ContributionCreate, ProjectCreate, ProjectResponse, StatusUpdate,
)
from crowdfund.services.project_service import ProjectService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


@router.post(
    "", response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_project(
    body: ProjectCreate,
    service: ProjectService = Depends(get_project_service),
):
    """Create a new project in Funding state."""
    project = await service.create_project(body.to_payload())
    return ProjectResponse.from_project(project)


@router.get("", response_model=list[ProjectResponse])
async def get_projects(
    status_filter: str | None = Query(None, alias="status"),
    service: ProjectService = Depends(get_project_service),
):
    """List all projects, optionally filtered by stored status."""
    projects = await service.get_projects(status_filter)
    return [ProjectResponse.from_project(p) for p in projects]


@router.get("/expired", response_model=list[ProjectResponse])
async def get_expired_projects(
    service: ProjectService = Depends(get_project_service),
):
    projects = await service.get_expired_projects()
    return [ProjectResponse.from_project(p) for p in projects]


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str,
    service: ProjectService = Depends(get_project_service),
):
    return ProjectResponse.from_project(await service.get_project(project_id))


@router.get("/{project_id}/contributors", response_model=list[str])
async def get_contributors(
    project_id: str,
    service: ProjectService = Depends(get_project_service),
):
    return await service.get_contributors(project_id)


@router.post("/{project_id}/contributions", response_model=ProjectResponse)
async def contribute_to_project(
    project_id: str,
    body: ContributionCreate,
    service: ProjectService = Depends(get_project_service),
):
    """Contribute to a Funding project. Past-deadline projects are expired here."""
    project = await service.contribute_to_project(
        project_id, body.contributor, body.amount,
    )
    return ProjectResponse.from_project(project)


@router.put("/{project_id}/status", response_model=ProjectResponse)
async def update_status(
    project_id: str,
    body: StatusUpdate,
    service: ProjectService = Depends(get_project_service),
):
    """Overwrite status unconditionally (terminal states included)."""
    project = await service.update_status(project_id, body.status)
    return ProjectResponse.from_project(project)


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: str,
    body: ProjectCreate,
    service: ProjectService = Depends(get_project_service),
):
    """Replace project details; the deadline is recomputed from startTime."""
    project = await service.update_project(project_id, body.to_payload())
    return ProjectResponse.from_project(project)


@router.post("/{project_id}/cancel", response_model=ProjectResponse)
async def cancel_project(
    project_id: str,
    service: ProjectService = Depends(get_project_service),
):
    """Cancel a project (status write to Expired)."""
    return ProjectResponse.from_project(await service.cancel_project(project_id))
