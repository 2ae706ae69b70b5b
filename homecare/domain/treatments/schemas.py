"""Treatment domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, StrictInt, field_validator, model_validator

from ...models import TreatmentRecord
from ...shared.validators import validate_hhmm
from ..fees.calculator import TreatmentSelection
from ..fees.schemas import ModalityFlags

TREATMENT_TYPES = ("single", "combined")


class TreatmentAreas(BaseModel):
    neck: bool = False
    shoulder: bool = False
    back: bool = False
    arm: bool = False
    leg: bool = False
    other: Optional[str] = None


class TreatmentMethods(BaseModel):
    massage: bool = False
    stretching: bool = False
    taping: bool = False
    other: Optional[str] = None


class TreatmentCreate(BaseModel):
    """
    Schema for recording a treatment.

    Fees and first-visit status are decided by the server; clients only send
    what was done.
    """

    patientId: int
    practitionerId: int
    date: date
    time: Optional[str] = None
    treatmentType: Optional[str] = None
    treatmentAreas: TreatmentAreas = TreatmentAreas()
    treatmentMethods: TreatmentMethods = TreatmentMethods()
    painLevel: Optional[int] = None
    areaCount: StrictInt
    procedureCount: StrictInt = 1
    modalities: ModalityFlags = ModalityFlags()
    notes: Optional[str] = None

    @field_validator("time")
    @classmethod
    def validate_time(cls, v):
        return validate_hhmm(v)

    @field_validator("painLevel")
    @classmethod
    def validate_pain_level(cls, v):
        if v is not None and not 1 <= v <= 5:
            raise ValueError("painLevel must be between 1 and 5")
        return v

    @field_validator("treatmentType")
    @classmethod
    def validate_treatment_type(cls, v):
        if v is not None and v not in TREATMENT_TYPES:
            raise ValueError("treatmentType must be 'single' or 'combined'")
        return v

    @model_validator(mode="after")
    def fill_treatment_type(self):
        expected = "combined" if self.procedureCount == 2 else "single"
        if self.treatmentType is None:
            self.treatmentType = expected
        elif self.treatmentType != expected and self.procedureCount in (1, 2):
            raise ValueError(
                f"treatmentType '{self.treatmentType}' does not match procedureCount {self.procedureCount}"
            )
        return self

    def to_selection(self) -> TreatmentSelection:
        return TreatmentSelection.from_flags(
            area_count=self.areaCount,
            procedure_count=self.procedureCount,
            hot_compress=self.modalities.hotCompress,
            hot_and_electric=self.modalities.hotAndElectric,
            manual_therapy=self.modalities.manualTherapy,
            electrotherapy=self.modalities.electrotherapy,
        )


class TreatmentSummary(BaseModel):
    """Condensed treatment record embedded in patient and practitioner details"""

    id: int
    date: date
    patientId: int
    practitionerId: int
    areaCount: int
    procedureCount: int
    isFirstVisit: bool
    totalFee: int
    patientCopayment: int

    @classmethod
    def from_record(cls, t: TreatmentRecord) -> "TreatmentSummary":
        return cls(
            id=t.id,
            date=t.date,
            patientId=t.patient_id,
            practitionerId=t.practitioner_id,
            areaCount=t.local_count,
            procedureCount=t.procedure_count,
            isFirstVisit=t.is_first_visit,
            totalFee=t.total_fee,
            patientCopayment=t.patient_copayment,
        )


class TreatmentResponse(BaseModel):
    """Schema for treatment record response"""

    id: int
    patientId: int
    practitionerId: int
    date: date
    time: Optional[str] = None
    treatmentType: str
    treatmentAreas: Optional[dict] = None
    treatmentMethods: Optional[dict] = None
    painLevel: Optional[int] = None
    areaCount: int
    procedureCount: int
    modalities: ModalityFlags
    isFirstVisit: bool
    firstVisitFee: int
    totalFee: int
    patientCopayment: int
    insuranceAmount: int
    copaymentRate: float
    notes: Optional[str] = None
    createdAt: Optional[datetime] = None

    @classmethod
    def from_record(cls, t: TreatmentRecord) -> "TreatmentResponse":
        return cls(
            id=t.id,
            patientId=t.patient_id,
            practitionerId=t.practitioner_id,
            date=t.date,
            time=t.time,
            treatmentType=t.treatment_type,
            treatmentAreas=t.treatment_areas,
            treatmentMethods=t.treatment_methods,
            painLevel=t.pain_level,
            areaCount=t.local_count,
            procedureCount=t.procedure_count,
            modalities=ModalityFlags(
                hotCompress=t.is_hot_compress,
                hotAndElectric=t.is_hot_electric,
                manualTherapy=t.is_manual_therapy,
                electrotherapy=t.is_electrotherapy,
            ),
            isFirstVisit=t.is_first_visit,
            firstVisitFee=t.first_visit_fee,
            totalFee=t.total_fee,
            patientCopayment=t.patient_copayment,
            insuranceAmount=t.insurance_amount,
            copaymentRate=t.copayment_rate,
            notes=t.notes,
            createdAt=t.created_at,
        )
