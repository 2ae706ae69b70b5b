"""Patient repository - Database operations for patients"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Patient, TreatmentRecord


class PatientRepository:
    """Repository for patient database operations"""

    @staticmethod
    def get_patients(db: Session) -> list[Patient]:
        """Get all patients ordered by family name"""
        return db.query(Patient).order_by(Patient.last_name.asc(), Patient.first_name.asc()).all()

    @staticmethod
    def get_patient_by_id(db: Session, patient_id: int) -> Optional[Patient]:
        """Get a specific patient by ID"""
        return db.query(Patient).filter(Patient.id == patient_id).first()

    @staticmethod
    def create_patient(db: Session, **patient_data) -> Patient:
        """Create a new patient"""
        patient = Patient(**patient_data)
        db.add(patient)
        db.commit()
        db.refresh(patient)
        return patient

    @staticmethod
    def update_patient(db: Session, patient: Patient, **updates) -> Patient:
        """Update a patient with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(patient, key):
                setattr(patient, key, value)

        db.commit()
        db.refresh(patient)
        return patient

    @staticmethod
    def delete_patient(db: Session, patient: Patient) -> None:
        """Delete a patient and everything recorded for them"""
        db.delete(patient)
        db.commit()

    @staticmethod
    def get_recent_treatments(db: Session, patient_id: int, limit: int) -> list[TreatmentRecord]:
        """Get the most recent treatment records for a patient"""
        return (
            db.query(TreatmentRecord)
            .filter(TreatmentRecord.patient_id == patient_id)
            .order_by(TreatmentRecord.date.desc(), TreatmentRecord.id.desc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def claim_first_visit(db: Session, patient_id: int, visit_date: date) -> bool:
        """
        Record visit_date as the patient's first visit if none is recorded yet.

        A single conditional UPDATE, so of two concurrent callers only one sees a
        row updated. Does not commit; the caller commits it together with the
        treatment record.
        """
        updated = (
            db.query(Patient)
            .filter(Patient.id == patient_id, Patient.first_visit_date.is_(None))
            .update({Patient.first_visit_date: visit_date}, synchronize_session=False)
        )
        return updated == 1
