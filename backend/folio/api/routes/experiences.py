"""Experience Routes - list/get/create/update/delete for work-experience entries.

Invariants:
    - One route per OPERATIONS entry of kind experience
    - Responses carry derived durationMonths / durationLabel / period
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from folio.api.dependencies import get_experience_api
from folio.schemas.common import DeleteResponse
from folio.schemas.experience import ExperienceInput, ExperienceResponse
from folio.services.resource_api import ExperienceAPI, error_responses

router = APIRouter(prefix="/api/v1/experiences", tags=["experiences"])


@router.get(
    "", response_model=list[ExperienceResponse],
    responses=error_responses("listExperiences"),
)
async def list_experiences(api: ExperienceAPI = Depends(get_experience_api)):
    """All experience entries, most recent role first."""
    return await api.list_all()


@router.get(
    "/{experience_id}", response_model=ExperienceResponse,
    responses=error_responses("getExperience"),
)
async def get_experience(
    experience_id: UUID, api: ExperienceAPI = Depends(get_experience_api),
):
    return await api.get(experience_id)


@router.post(
    "", response_model=ExperienceResponse,
    status_code=status.HTTP_201_CREATED,
    responses=error_responses("createExperience"),
)
async def create_experience(
    body: ExperienceInput, api: ExperienceAPI = Depends(get_experience_api),
):
    """Create an entry; current=true drops any supplied endDate."""
    return await api.create(body)


@router.put(
    "/{experience_id}", response_model=ExperienceResponse,
    responses=error_responses("updateExperience"),
)
async def update_experience(
    experience_id: UUID,
    body: ExperienceInput,
    api: ExperienceAPI = Depends(get_experience_api),
):
    return await api.update(experience_id, body)


@router.delete(
    "/{experience_id}", response_model=DeleteResponse,
    responses=error_responses("deleteExperience"),
)
async def delete_experience(
    experience_id: UUID, api: ExperienceAPI = Depends(get_experience_api),
):
    return await api.delete(experience_id)
