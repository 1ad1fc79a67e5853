"""Route Dependencies — builds a ProjectService per request.

Invariants:
    - One SqlProjectStore per request DB session
    - Clock and id generator are separate dependencies so tests can override them
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from crowdfund.config import get_settings
from crowdfund.core.lifecycle import generate_project_id
from crowdfund.core.repository_protocols import Clock, IdGenerator
from crowdfund.infrastructure.database import get_db
from crowdfund.infrastructure.project_store import SqlProjectStore
from crowdfund.services.project_service import ProjectService, system_clock


def get_clock() -> Clock:
    return system_clock


def get_id_generator() -> IdGenerator:
    return generate_project_id


def get_project_service(
    db: AsyncSession = Depends(get_db),
    clock: Clock = Depends(get_clock),
    id_generator: IdGenerator = Depends(get_id_generator),
) -> ProjectService:
    return ProjectService(
        SqlProjectStore(db),
        clock=clock,
        id_generator=id_generator,
        max_id_attempts=get_settings().id_max_attempts,
    )
