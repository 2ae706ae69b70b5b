"""Treatment router - FastAPI endpoints for treatment records"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import TreatmentCreate, TreatmentResponse
from .service import TreatmentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/treatments", tags=["Treatments"])


def get_treatment_service(db: Session = Depends(get_db)) -> TreatmentService:
    """Dependency injection for TreatmentService"""
    return TreatmentService(db)


@router.get("", response_model=list[TreatmentResponse])
async def get_treatments(
    service: TreatmentService = Depends(get_treatment_service),
    patientId: Optional[int] = Query(None),
    practitionerId: Optional[int] = Query(None),
    startDate: Optional[date] = Query(None),
    endDate: Optional[date] = Query(None),
):
    """Get treatment records, newest first"""
    treatments = service.get_treatments(patientId, practitionerId, startDate, endDate)
    return [TreatmentResponse.from_record(t) for t in treatments]


@router.get("/export")
async def export_treatments_csv(
    service: TreatmentService = Depends(get_treatment_service),
    startDate: Optional[date] = Query(None),
    endDate: Optional[date] = Query(None),
    patientId: Optional[int] = Query(None),
):
    """Export treatment records as CSV"""
    return service.export_treatments_csv(startDate, endDate, patientId)


@router.get("/{treatment_id}", response_model=TreatmentResponse)
async def get_treatment(
    treatment_id: int, service: TreatmentService = Depends(get_treatment_service)
):
    """Get a specific treatment record"""
    return TreatmentResponse.from_record(service.get_treatment(treatment_id))


@router.post("", response_model=TreatmentResponse, status_code=201)
async def create_treatment(
    data: TreatmentCreate, service: TreatmentService = Depends(get_treatment_service)
):
    """Record a treatment; fees and first-visit status are computed server-side"""
    treatment = service.create_treatment(data)
    return TreatmentResponse.from_record(treatment)


@router.delete("/{treatment_id}")
async def delete_treatment(
    treatment_id: int, service: TreatmentService = Depends(get_treatment_service)
):
    """Delete a treatment record"""
    return service.delete_treatment(treatment_id)
