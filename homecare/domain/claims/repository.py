"""Insurance claim repository - Database operations for claims"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import InsuranceClaim


class ClaimRepository:
    """Repository for insurance claim database operations"""

    @staticmethod
    def get_claims(
        db: Session, status: Optional[str] = None, patient_id: Optional[int] = None
    ) -> list[InsuranceClaim]:
        """Get claims, newest claim date first, with optional filters"""
        query = db.query(InsuranceClaim)

        if status:
            query = query.filter(InsuranceClaim.status == status)
        if patient_id is not None:
            query = query.filter(InsuranceClaim.patient_id == patient_id)

        return query.order_by(InsuranceClaim.claim_date.desc(), InsuranceClaim.id.desc()).all()

    @staticmethod
    def get_claim_by_id(db: Session, claim_id: int) -> Optional[InsuranceClaim]:
        return db.query(InsuranceClaim).filter(InsuranceClaim.id == claim_id).first()

    @staticmethod
    def get_claim_by_treatment(db: Session, treatment_id: int) -> Optional[InsuranceClaim]:
        return db.query(InsuranceClaim).filter(InsuranceClaim.treatment_id == treatment_id).first()

    @staticmethod
    def create_claim(db: Session, **claim_data) -> InsuranceClaim:
        """Create a new claim"""
        claim = InsuranceClaim(**claim_data)
        db.add(claim)
        db.commit()
        db.refresh(claim)
        return claim

    @staticmethod
    def update_claim(db: Session, claim: InsuranceClaim, **updates) -> InsuranceClaim:
        """Update a claim with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(claim, key):
                setattr(claim, key, value)

        db.commit()
        db.refresh(claim)
        return claim

    @staticmethod
    def get_claim_summary(db: Session) -> dict:
        """Claim counts and insurance totals grouped by status"""
        rows = (
            db.query(
                InsuranceClaim.status,
                func.count(InsuranceClaim.id),
                func.coalesce(func.sum(InsuranceClaim.insurance_amount), 0),
            )
            .group_by(InsuranceClaim.status)
            .all()
        )
        return {status: (count, int(total)) for status, count, total in rows}
