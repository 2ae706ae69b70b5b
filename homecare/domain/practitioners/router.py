"""Practitioner router - FastAPI endpoints for practitioner operations"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Practitioner
from ..treatments.schemas import TreatmentSummary
from .schemas import PractitionerCreate, PractitionerResponse, PractitionerUpdate
from .service import PractitionerService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/practitioners", tags=["Practitioners"])


def get_practitioner_service(db: Session = Depends(get_db)) -> PractitionerService:
    """Dependency injection for PractitionerService"""
    return PractitionerService(db)


class PractitionerDetailResponse(PractitionerResponse):
    recentTreatments: list[TreatmentSummary] = []


def _to_response(p: Practitioner) -> dict:
    return dict(
        id=p.id,
        lastName=p.last_name,
        firstName=p.first_name,
        email=p.email,
        phoneNumber=p.phone_number,
        specialties=p.specialties or [],
        employmentType=p.employment_type,
        salarySystem=p.salary_system,
        startDate=p.start_date,
        createdAt=p.created_at,
    )


@router.get("", response_model=list[PractitionerResponse])
async def get_practitioners(service: PractitionerService = Depends(get_practitioner_service)):
    """Get all practitioners"""
    return [PractitionerResponse(**_to_response(p)) for p in service.get_practitioners()]


@router.get("/{practitioner_id}", response_model=PractitionerDetailResponse)
async def get_practitioner(
    practitioner_id: int, service: PractitionerService = Depends(get_practitioner_service)
):
    """Get a practitioner with their most recent treatment records"""
    practitioner = service.get_practitioner(practitioner_id)
    recent = service.get_recent_treatments(practitioner)
    return PractitionerDetailResponse(
        **_to_response(practitioner),
        recentTreatments=[TreatmentSummary.from_record(t) for t in recent],
    )


@router.post("", response_model=PractitionerResponse, status_code=201)
async def create_practitioner(
    data: PractitionerCreate, service: PractitionerService = Depends(get_practitioner_service)
):
    """Create a new practitioner"""
    return PractitionerResponse(**_to_response(service.create_practitioner(data)))


@router.put("/{practitioner_id}", response_model=PractitionerResponse)
async def update_practitioner(
    practitioner_id: int,
    data: PractitionerUpdate,
    service: PractitionerService = Depends(get_practitioner_service),
):
    """Update a practitioner"""
    return PractitionerResponse(**_to_response(service.update_practitioner(practitioner_id, data)))


@router.delete("/{practitioner_id}")
async def delete_practitioner(
    practitioner_id: int, service: PractitionerService = Depends(get_practitioner_service)
):
    """Delete a practitioner"""
    return service.delete_practitioner(practitioner_id)
