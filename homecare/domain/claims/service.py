"""Insurance claim service - Business logic for claim tracking"""

import logging
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import InsuranceClaim
from ..treatments.repository import TreatmentRepository
from .repository import ClaimRepository
from .schemas import CLAIM_STATUSES, ClaimCreate, ClaimUpdate

logger = logging.getLogger(__name__)

# Allowed status transitions
CLAIM_TRANSITIONS = {
    "pending": {"submitted"},
    "submitted": {"approved", "rejected"},
    "approved": {"paid"},
    "rejected": {"submitted"},  # resubmission after correction
    "paid": set(),
}


def can_transition(current: str, new: str) -> bool:
    return new in CLAIM_TRANSITIONS.get(current, set())


class ClaimService:
    """Service layer for insurance claim business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ClaimRepository()
        self.treatment_repo = TreatmentRepository()

    def get_claims(
        self, status: Optional[str] = None, patient_id: Optional[int] = None
    ) -> list[InsuranceClaim]:
        if status is not None and status not in CLAIM_STATUSES:
            raise HTTPException(status_code=400, detail=f"Unknown claim status: {status}")
        return self.repo.get_claims(self.db, status, patient_id)

    def get_claim(self, claim_id: int) -> InsuranceClaim:
        claim = self.repo.get_claim_by_id(self.db, claim_id)
        if not claim:
            raise HTTPException(status_code=404, detail="Claim not found")
        return claim

    def create_claim(self, data: ClaimCreate) -> InsuranceClaim:
        """
        Open a claim for a treatment record.

        Amounts are copied from the breakdown stored on the record when it was
        charged, so the claim always matches what the patient paid.
        """
        treatment = self.treatment_repo.get_treatment_by_id(self.db, data.treatmentId)
        if not treatment:
            raise HTTPException(status_code=404, detail="Treatment record not found")

        if self.repo.get_claim_by_treatment(self.db, treatment.id):
            raise HTTPException(status_code=409, detail="Treatment already has a claim")

        claim = self.repo.create_claim(
            self.db,
            patient_id=treatment.patient_id,
            practitioner_id=treatment.practitioner_id,
            treatment_id=treatment.id,
            claim_date=data.claimDate or date.today(),
            treatment_date=treatment.date,
            total_amount=treatment.total_fee,
            insurance_amount=treatment.insurance_amount,
            patient_copayment=treatment.patient_copayment,
            status="pending",
            claim_number=data.claimNumber,
            notes=data.notes,
        )
        logger.info(
            f"🧾 Claim {claim.id} opened for treatment {treatment.id}: "
            f"insurance={claim.insurance_amount}"
        )
        return claim

    def update_claim(self, claim_id: int, data: ClaimUpdate) -> InsuranceClaim:
        claim = self.get_claim(claim_id)
        return self.repo.update_claim(
            self.db, claim, claim_number=data.claimNumber, notes=data.notes
        )

    def change_status(self, claim_id: int, new_status: str) -> InsuranceClaim:
        """Move a claim along its workflow"""
        if new_status not in CLAIM_STATUSES:
            raise HTTPException(status_code=400, detail=f"Unknown claim status: {new_status}")

        claim = self.get_claim(claim_id)
        if not can_transition(claim.status, new_status):
            logger.warning(f"⚠️ Claim {claim.id}: illegal transition {claim.status} → {new_status}")
            raise HTTPException(
                status_code=409,
                detail=f"Cannot change claim status from {claim.status} to {new_status}",
            )

        logger.info(f"🔁 Claim {claim.id}: {claim.status} → {new_status}")
        return self.repo.update_claim(self.db, claim, status=new_status)

    def get_summary(self) -> dict:
        summary = self.repo.get_claim_summary(self.db)
        return {
            "counts": {s: summary.get(s, (0, 0))[0] for s in CLAIM_STATUSES},
            "insuranceAmounts": {s: summary.get(s, (0, 0))[1] for s in CLAIM_STATUSES},
        }
