"""Fee domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, StrictInt, field_validator, model_validator

from .calculator import FeeBreakdown, TreatmentSelection
from .copayment import INCOME_CATEGORIES, INCOME_GENERAL


def _check_rate_type(v):
    # JSON true would otherwise coerce to 1.0, a 100% co-payment
    if isinstance(v, bool):
        raise ValueError("copaymentRate must be a number")
    return v


class ModalityFlags(BaseModel):
    """Optional add-on modalities, each toggled independently"""

    hotCompress: bool = False
    hotAndElectric: bool = False
    manualTherapy: bool = False
    electrotherapy: bool = False


class FeeCalculationRequest(BaseModel):
    """Schema for a fee calculation with an explicit co-payment rate"""

    areaCount: StrictInt
    procedureCount: StrictInt = 1
    modalities: ModalityFlags = ModalityFlags()
    isFirstVisit: bool = False
    copaymentRate: float

    @field_validator("copaymentRate", mode="before")
    @classmethod
    def validate_rate_type(cls, v):
        return _check_rate_type(v)

    def to_selection(self) -> TreatmentSelection:
        return TreatmentSelection.from_flags(
            area_count=self.areaCount,
            procedure_count=self.procedureCount,
            hot_compress=self.modalities.hotCompress,
            hot_and_electric=self.modalities.hotAndElectric,
            manual_therapy=self.modalities.manualTherapy,
            electrotherapy=self.modalities.electrotherapy,
            is_first_visit=self.isFirstVisit,
        )


class FeeBreakdownResponse(BaseModel):
    """Schema for a fee breakdown"""

    totalFee: int
    patientCopayment: int
    insuranceAmount: int

    @classmethod
    def from_breakdown(cls, breakdown: FeeBreakdown) -> "FeeBreakdownResponse":
        return cls(**breakdown.to_response())


class FeeLineItemResponse(BaseModel):
    code: str
    amount: int


class FeeEstimateRequest(BaseModel):
    """
    Schema for the quick price estimate.

    The rate comes from age and income category unless copaymentRate is given.
    """

    areaCount: StrictInt
    procedureCount: StrictInt = 1
    modalities: ModalityFlags = ModalityFlags()
    isFirstVisit: bool = False
    age: Optional[StrictInt] = None
    incomeCategory: str = INCOME_GENERAL
    copaymentRate: Optional[float] = None

    @field_validator("copaymentRate", mode="before")
    @classmethod
    def validate_rate_type(cls, v):
        return _check_rate_type(v)

    @field_validator("incomeCategory")
    @classmethod
    def validate_income_category(cls, v: str) -> str:
        if v not in INCOME_CATEGORIES:
            raise ValueError(f"incomeCategory must be one of {', '.join(INCOME_CATEGORIES)}")
        return v

    @model_validator(mode="after")
    def require_rate_source(self):
        if self.age is None and self.copaymentRate is None:
            raise ValueError("Either age or copaymentRate is required")
        return self

    def to_selection(self) -> TreatmentSelection:
        return TreatmentSelection.from_flags(
            area_count=self.areaCount,
            procedure_count=self.procedureCount,
            hot_compress=self.modalities.hotCompress,
            hot_and_electric=self.modalities.hotAndElectric,
            manual_therapy=self.modalities.manualTherapy,
            electrotherapy=self.modalities.electrotherapy,
            is_first_visit=self.isFirstVisit,
        )


class FeeEstimateResponse(FeeBreakdownResponse):
    """Schema for the quick price estimate result"""

    copaymentRate: float
    rateRule: str  # "age_and_income" or "explicit"
    lineItems: list[FeeLineItemResponse]
