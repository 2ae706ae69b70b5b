"""Patient service - Business logic for patient operations"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import RECENT_TREATMENTS_LIMIT
from ...models import Patient, TreatmentRecord
from ..fees.copayment import REGISTRATION_RATE, CopaymentProfile
from .repository import PatientRepository
from .schemas import PatientCreate, PatientUpdate

logger = logging.getLogger(__name__)

# Request field -> column, for fields copied over verbatim
_FIELD_MAP = {
    "lastName": "last_name",
    "firstName": "first_name",
    "kanaLastName": "kana_last_name",
    "kanaFirstName": "kana_first_name",
    "birthDate": "birth_date",
    "gender": "gender",
    "phoneNumber": "phone_number",
    "email": "email",
    "address": "address",
    "insuranceType": "insurance_type",
    "insuranceNumber": "insurance_number",
    "insuranceCardExpiryDate": "insurance_card_expiry_date",
    "notes": "notes",
}


class PatientService:
    """Service layer for patient business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PatientRepository()

    def get_patients(self) -> list[Patient]:
        """Get all patients"""
        return self.repo.get_patients(self.db)

    def get_patient(self, patient_id: int) -> Patient:
        """Get a specific patient"""
        patient = self.repo.get_patient_by_id(self.db, patient_id)
        if not patient:
            raise HTTPException(status_code=404, detail="Patient not found")
        return patient

    def get_recent_treatments(self, patient: Patient) -> list[TreatmentRecord]:
        return self.repo.get_recent_treatments(self.db, patient.id, RECENT_TREATMENTS_LIMIT)

    def create_patient(self, data: PatientCreate) -> Patient:
        """Register a patient; the co-payment rate follows the insurance category"""
        logger.info(f"📥 Registering patient ({data.insuranceType})")

        patient_data = {
            column: getattr(data, field) for field, column in _FIELD_MAP.items()
        }
        rate = REGISTRATION_RATE.rate_for(CopaymentProfile(insurance_category=data.insuranceType))
        patient_data["copayment_rate"] = float(rate)

        return self.repo.create_patient(self.db, **patient_data)

    def update_patient(self, patient_id: int, data: PatientUpdate) -> Patient:
        """Update a patient, re-deriving the co-payment rate when the insurance changes"""
        patient = self.get_patient(patient_id)

        updates = {}
        for field, column in _FIELD_MAP.items():
            value = getattr(data, field)
            if value is not None:
                updates[column] = value

        if data.insuranceType is not None:
            rate = REGISTRATION_RATE.rate_for(
                CopaymentProfile(insurance_category=data.insuranceType)
            )
            if float(rate) != patient.copayment_rate:
                logger.info(
                    f"🔁 Patient {patient.id} co-payment rate {patient.copayment_rate} → {rate}"
                )
            updates["copayment_rate"] = float(rate)

        return self.repo.update_patient(self.db, patient, **updates)

    def delete_patient(self, patient_id: int) -> dict:
        """Delete a patient"""
        patient = self.get_patient(patient_id)
        self.repo.delete_patient(self.db, patient)
        logger.info(f"🗑️ Deleted patient {patient_id}")
        return {"message": "Patient deleted"}
