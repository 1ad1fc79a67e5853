"""Project Schemas — camelCase aliases, u64 bounds, conversion to core types."""

import pytest
from pydantic import ValidationError

from crowdfund.core.domain_types import ProjectId, ProjectStatus, U64_MAX
from crowdfund.core.project import Project, ProjectPayload
from crowdfund.schemas.project import (
    ContributionCreate, ProjectCreate, ProjectResponse, StatusUpdate,
)


def test_project_create_reads_camel_case_and_converts():
    body = ProjectCreate.model_validate({
        "title": "T", "description": "D", "goalAmount": 7,
        "duration": 9, "creator": "c",
    })
    assert body.to_payload() == ProjectPayload(
        title="T", description="D", goal_amount=7, duration=9, creator="c",
    )


def test_project_create_leaves_missing_fields_none():
    payload = ProjectCreate.model_validate({"title": "T"}).to_payload()
    assert payload.creator is None
    assert payload.goal_amount is None


@pytest.mark.parametrize("value", [-1, U64_MAX + 1])
def test_amount_bounds(value):
    with pytest.raises(ValidationError):
        ContributionCreate.model_validate({"contributor": "bob", "amount": value})


def test_amount_accepts_u64_max():
    assert ContributionCreate(contributor="bob", amount=U64_MAX).amount == U64_MAX


def test_status_update_keeps_raw_string():
    assert StatusUpdate.model_validate({"status": "Paused"}).status == "Paused"


def test_project_response_dumps_camel_case():
    project = Project(
        id=ProjectId("p1"), creator="alice", title="T", description="D",
        goal_amount=5, raised_amount=3, start_time=10, deadline=20,
        contributors=("bob",), status=ProjectStatus.SUCCESSFUL,
    )
    dumped = ProjectResponse.from_project(project).model_dump(by_alias=True, mode="json")
    assert dumped == {
        "id": "p1", "creator": "alice", "title": "T", "description": "D",
        "goalAmount": 5, "raisedAmount": 3, "startTime": 10, "deadline": 20,
        "contributors": ["bob"], "status": "Successful",
    }
