"""Appointment router - FastAPI endpoints for visit bookings"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import AppointmentCreate, AppointmentResponse, AppointmentUpdate, BulkStatusUpdate
from .service import AppointmentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["Appointments"])


def get_appointment_service(db: Session = Depends(get_db)) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db)


@router.get("", response_model=list[AppointmentResponse])
async def get_appointments(
    service: AppointmentService = Depends(get_appointment_service),
    date: Optional[date] = Query(None),
    practitionerId: Optional[int] = Query(None),
    patientId: Optional[int] = Query(None),
    status: Optional[str] = Query(None),
):
    """Get appointments in visiting order"""
    appointments = service.get_appointments(date, practitionerId, patientId, status)
    return [AppointmentResponse.from_appointment(a) for a in appointments]


@router.post("/bulk-status")
async def bulk_update_status(
    data: BulkStatusUpdate, service: AppointmentService = Depends(get_appointment_service)
):
    """Change the status of several appointments at once"""
    return service.bulk_update_status(data)


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_id: int, service: AppointmentService = Depends(get_appointment_service)
):
    return AppointmentResponse.from_appointment(service.get_appointment(appointment_id))


@router.post("", response_model=AppointmentResponse, status_code=201)
async def create_appointment(
    data: AppointmentCreate, service: AppointmentService = Depends(get_appointment_service)
):
    """Book a home visit"""
    return AppointmentResponse.from_appointment(service.create_appointment(data))


@router.put("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: int,
    data: AppointmentUpdate,
    service: AppointmentService = Depends(get_appointment_service),
):
    return AppointmentResponse.from_appointment(service.update_appointment(appointment_id, data))


@router.post("/{appointment_id}/cancel", response_model=AppointmentResponse)
async def cancel_appointment(
    appointment_id: int, service: AppointmentService = Depends(get_appointment_service)
):
    """Cancel an appointment without deleting it"""
    return AppointmentResponse.from_appointment(service.cancel_appointment(appointment_id))
