"""Practitioner service - Business logic for practitioner operations"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import RECENT_TREATMENTS_LIMIT
from ...models import Practitioner, TreatmentRecord
from .repository import PractitionerRepository
from .schemas import PractitionerCreate, PractitionerUpdate

logger = logging.getLogger(__name__)

_FIELD_MAP = {
    "lastName": "last_name",
    "firstName": "first_name",
    "email": "email",
    "phoneNumber": "phone_number",
    "specialties": "specialties",
    "employmentType": "employment_type",
    "salarySystem": "salary_system",
    "startDate": "start_date",
}


class PractitionerService:
    """Service layer for practitioner business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PractitionerRepository()

    def get_practitioners(self) -> list[Practitioner]:
        return self.repo.get_practitioners(self.db)

    def get_practitioner(self, practitioner_id: int) -> Practitioner:
        """Get a specific practitioner"""
        practitioner = self.repo.get_practitioner_by_id(self.db, practitioner_id)
        if not practitioner:
            raise HTTPException(status_code=404, detail="Practitioner not found")
        return practitioner

    def get_recent_treatments(self, practitioner: Practitioner) -> list[TreatmentRecord]:
        return self.repo.get_recent_treatments(self.db, practitioner.id, RECENT_TREATMENTS_LIMIT)

    def create_practitioner(self, data: PractitionerCreate) -> Practitioner:
        logger.info(f"📥 Creating practitioner ({data.employmentType}, {data.salarySystem})")
        practitioner_data = {
            column: getattr(data, field) for field, column in _FIELD_MAP.items()
        }
        return self.repo.create_practitioner(self.db, **practitioner_data)

    def update_practitioner(self, practitioner_id: int, data: PractitionerUpdate) -> Practitioner:
        practitioner = self.get_practitioner(practitioner_id)
        updates = {
            column: getattr(data, field)
            for field, column in _FIELD_MAP.items()
            if getattr(data, field) is not None
        }
        return self.repo.update_practitioner(self.db, practitioner, **updates)

    def delete_practitioner(self, practitioner_id: int) -> dict:
        """Delete a practitioner who has no treatment or appointment history"""
        practitioner = self.get_practitioner(practitioner_id)

        if self.repo.has_history(self.db, practitioner.id):
            logger.warning(f"⚠️ Refusing to delete practitioner {practitioner_id} with history")
            raise HTTPException(
                status_code=409,
                detail="Practitioner has treatment or appointment history and cannot be deleted",
            )

        self.repo.delete_practitioner(self.db, practitioner)
        return {"message": "Practitioner deleted"}
