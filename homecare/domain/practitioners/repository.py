"""Practitioner repository - Database operations for practitioners"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Appointment, Practitioner, TreatmentRecord


class PractitionerRepository:
    """Repository for practitioner database operations"""

    @staticmethod
    def get_practitioners(db: Session) -> list[Practitioner]:
        """Get all practitioners ordered by family name"""
        return (
            db.query(Practitioner)
            .order_by(Practitioner.last_name.asc(), Practitioner.first_name.asc())
            .all()
        )

    @staticmethod
    def get_practitioner_by_id(db: Session, practitioner_id: int) -> Optional[Practitioner]:
        """Get a specific practitioner by ID"""
        return db.query(Practitioner).filter(Practitioner.id == practitioner_id).first()

    @staticmethod
    def create_practitioner(db: Session, **practitioner_data) -> Practitioner:
        """Create a new practitioner"""
        practitioner = Practitioner(**practitioner_data)
        db.add(practitioner)
        db.commit()
        db.refresh(practitioner)
        return practitioner

    @staticmethod
    def update_practitioner(db: Session, practitioner: Practitioner, **updates) -> Practitioner:
        """Update a practitioner with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(practitioner, key):
                setattr(practitioner, key, value)

        db.commit()
        db.refresh(practitioner)
        return practitioner

    @staticmethod
    def delete_practitioner(db: Session, practitioner: Practitioner) -> None:
        """Delete a practitioner"""
        db.delete(practitioner)
        db.commit()

    @staticmethod
    def has_history(db: Session, practitioner_id: int) -> bool:
        """Whether any treatment or appointment references the practitioner"""
        treatment = (
            db.query(TreatmentRecord.id)
            .filter(TreatmentRecord.practitioner_id == practitioner_id)
            .first()
        )
        appointment = (
            db.query(Appointment.id).filter(Appointment.practitioner_id == practitioner_id).first()
        )
        return treatment is not None or appointment is not None

    @staticmethod
    def get_recent_treatments(
        db: Session, practitioner_id: int, limit: int
    ) -> list[TreatmentRecord]:
        """Get the most recent treatment records for a practitioner"""
        return (
            db.query(TreatmentRecord)
            .filter(TreatmentRecord.practitioner_id == practitioner_id)
            .order_by(TreatmentRecord.date.desc(), TreatmentRecord.id.desc())
            .limit(limit)
            .all()
        )
