"""Treatment repository - Database operations for treatment records"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from ...models import InsuranceClaim, Practitioner, TreatmentRecord


class TreatmentRepository:
    """Repository for treatment record database operations"""

    @staticmethod
    def get_treatments(
        db: Session,
        patient_id: Optional[int] = None,
        practitioner_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[TreatmentRecord]:
        """Get treatment records, newest first, with optional filters"""
        query = db.query(TreatmentRecord)

        if patient_id is not None:
            query = query.filter(TreatmentRecord.patient_id == patient_id)
        if practitioner_id is not None:
            query = query.filter(TreatmentRecord.practitioner_id == practitioner_id)
        if start_date:
            query = query.filter(TreatmentRecord.date >= start_date)
        if end_date:
            query = query.filter(TreatmentRecord.date <= end_date)

        return query.order_by(TreatmentRecord.date.desc(), TreatmentRecord.id.desc()).all()

    @staticmethod
    def get_treatment_by_id(db: Session, treatment_id: int) -> Optional[TreatmentRecord]:
        """Get a specific treatment record by ID"""
        return db.query(TreatmentRecord).filter(TreatmentRecord.id == treatment_id).first()

    @staticmethod
    def get_practitioner_by_id(db: Session, practitioner_id: int) -> Optional[Practitioner]:
        return db.query(Practitioner).filter(Practitioner.id == practitioner_id).first()

    @staticmethod
    def add_treatment(db: Session, **treatment_data) -> TreatmentRecord:
        """Stage a new treatment record; the caller commits"""
        treatment = TreatmentRecord(**treatment_data)
        db.add(treatment)
        db.flush()
        return treatment

    @staticmethod
    def has_claim(db: Session, treatment_id: int) -> bool:
        return (
            db.query(InsuranceClaim.id).filter(InsuranceClaim.treatment_id == treatment_id).first()
            is not None
        )

    @staticmethod
    def delete_treatment(db: Session, treatment: TreatmentRecord) -> None:
        """Delete a treatment record"""
        db.delete(treatment)
        db.commit()
