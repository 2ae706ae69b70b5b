"""Insurance claim schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel

from ...models import InsuranceClaim

CLAIM_STATUSES = ("pending", "submitted", "approved", "rejected", "paid")


class ClaimCreate(BaseModel):
    """Schema for opening a claim for a treatment record; amounts come from the record"""

    treatmentId: int
    claimDate: Optional[date] = None
    claimNumber: Optional[str] = None
    notes: Optional[str] = None


class ClaimUpdate(BaseModel):
    claimNumber: Optional[str] = None
    notes: Optional[str] = None


class ClaimStatusUpdate(BaseModel):
    status: str


class ClaimResponse(BaseModel):
    """Schema for insurance claim response"""

    id: int
    patientId: int
    practitionerId: int
    treatmentId: int
    claimDate: date
    treatmentDate: date
    totalAmount: int
    insuranceAmount: int
    patientCopayment: int
    status: str
    claimNumber: Optional[str] = None
    notes: Optional[str] = None
    createdAt: Optional[datetime] = None

    @classmethod
    def from_claim(cls, c: InsuranceClaim) -> "ClaimResponse":
        return cls(
            id=c.id,
            patientId=c.patient_id,
            practitionerId=c.practitioner_id,
            treatmentId=c.treatment_id,
            claimDate=c.claim_date,
            treatmentDate=c.treatment_date,
            totalAmount=c.total_amount,
            insuranceAmount=c.insurance_amount,
            patientCopayment=c.patient_copayment,
            status=c.status,
            claimNumber=c.claim_number,
            notes=c.notes,
            createdAt=c.created_at,
        )


class ClaimSummaryResponse(BaseModel):
    """Totals per claim status"""

    counts: dict[str, int]
    insuranceAmounts: dict[str, int]
