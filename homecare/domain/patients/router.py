"""Patient router - FastAPI endpoints for patient operations"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Patient
from ..fees.calculator import is_first_visit
from ..treatments.schemas import TreatmentSummary
from .schemas import PatientCreate, PatientResponse, PatientUpdate
from .service import PatientService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/patients", tags=["Patients"])


def get_patient_service(db: Session = Depends(get_db)) -> PatientService:
    """Dependency injection for PatientService"""
    return PatientService(db)


class PatientDetailResponse(PatientResponse):
    recentTreatments: list[TreatmentSummary] = []


def _to_response(p: Patient) -> dict:
    return dict(
        id=p.id,
        publicId=p.public_id,
        lastName=p.last_name,
        firstName=p.first_name,
        kanaLastName=p.kana_last_name,
        kanaFirstName=p.kana_first_name,
        birthDate=p.birth_date,
        gender=p.gender,
        phoneNumber=p.phone_number,
        email=p.email,
        address=p.address,
        insuranceType=p.insurance_type,
        insuranceNumber=p.insurance_number,
        insuranceCardExpiryDate=p.insurance_card_expiry_date,
        copaymentRate=p.copayment_rate,
        firstVisitDate=p.first_visit_date,
        isFirstVisit=is_first_visit(p),
        notes=p.notes,
        createdAt=p.created_at,
    )


@router.get("", response_model=list[PatientResponse])
async def get_patients(service: PatientService = Depends(get_patient_service)):
    """Get all patients ordered by family name"""
    return [PatientResponse(**_to_response(p)) for p in service.get_patients()]


@router.get("/{patient_id}", response_model=PatientDetailResponse)
async def get_patient(patient_id: int, service: PatientService = Depends(get_patient_service)):
    """Get a patient with their most recent treatment records"""
    patient = service.get_patient(patient_id)
    recent = service.get_recent_treatments(patient)
    return PatientDetailResponse(
        **_to_response(patient),
        recentTreatments=[TreatmentSummary.from_record(t) for t in recent],
    )


@router.post("", response_model=PatientResponse, status_code=201)
async def create_patient(
    data: PatientCreate, service: PatientService = Depends(get_patient_service)
):
    """Register a new patient"""
    patient = service.create_patient(data)
    return PatientResponse(**_to_response(patient))


@router.put("/{patient_id}", response_model=PatientResponse)
async def update_patient(
    patient_id: int,
    data: PatientUpdate,
    service: PatientService = Depends(get_patient_service),
):
    """Update a patient"""
    patient = service.update_patient(patient_id, data)
    return PatientResponse(**_to_response(patient))


@router.delete("/{patient_id}")
async def delete_patient(patient_id: int, service: PatientService = Depends(get_patient_service)):
    """Delete a patient"""
    return service.delete_patient(patient_id)
