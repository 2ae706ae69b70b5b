"""Patient domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import (
    validate_email,
    validate_jp_phone,
    validate_kana,
    validate_name,
)
from ..fees.copayment import INSURANCE_CATEGORY_RATES

GENDERS = ("male", "female", "other")


def _check_insurance_type(v: Optional[str]) -> Optional[str]:
    if v is not None and v not in INSURANCE_CATEGORY_RATES:
        raise ValueError(
            f"insuranceType must be one of {', '.join(INSURANCE_CATEGORY_RATES)}"
        )
    return v


def _check_gender(v: Optional[str]) -> Optional[str]:
    if v is not None and v not in GENDERS:
        raise ValueError(f"gender must be one of {', '.join(GENDERS)}")
    return v


class PatientCreate(BaseModel):
    """Schema for registering a new patient; the co-payment rate is derived, not accepted"""

    lastName: str
    firstName: str
    kanaLastName: Optional[str] = None
    kanaFirstName: Optional[str] = None
    birthDate: Optional[date] = None
    gender: Optional[str] = None
    phoneNumber: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    insuranceType: str
    insuranceNumber: Optional[str] = None
    insuranceCardExpiryDate: Optional[date] = None
    notes: Optional[str] = None

    @field_validator("lastName", "firstName")
    @classmethod
    def validate_names(cls, v):
        return validate_name(v)

    @field_validator("kanaLastName", "kanaFirstName")
    @classmethod
    def validate_kana_name(cls, v):
        return validate_kana(v)

    @field_validator("phoneNumber")
    @classmethod
    def validate_phone(cls, v):
        return validate_jp_phone(v)

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, v):
        return validate_email(v)

    @field_validator("insuranceType")
    @classmethod
    def validate_insurance_type(cls, v):
        return _check_insurance_type(v)

    @field_validator("gender")
    @classmethod
    def validate_gender(cls, v):
        return _check_gender(v)


class PatientUpdate(BaseModel):
    """Schema for updating an existing patient"""

    lastName: Optional[str] = None
    firstName: Optional[str] = None
    kanaLastName: Optional[str] = None
    kanaFirstName: Optional[str] = None
    birthDate: Optional[date] = None
    gender: Optional[str] = None
    phoneNumber: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    insuranceType: Optional[str] = None
    insuranceNumber: Optional[str] = None
    insuranceCardExpiryDate: Optional[date] = None
    notes: Optional[str] = None

    @field_validator("lastName", "firstName")
    @classmethod
    def validate_names(cls, v):
        return validate_name(v)

    @field_validator("kanaLastName", "kanaFirstName")
    @classmethod
    def validate_kana_name(cls, v):
        return validate_kana(v)

    @field_validator("phoneNumber")
    @classmethod
    def validate_phone(cls, v):
        return validate_jp_phone(v)

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, v):
        return validate_email(v)

    @field_validator("insuranceType")
    @classmethod
    def validate_insurance_type(cls, v):
        return _check_insurance_type(v)

    @field_validator("gender")
    @classmethod
    def validate_gender(cls, v):
        return _check_gender(v)


class PatientResponse(BaseModel):
    """Schema for patient response"""

    id: int
    publicId: str
    lastName: str
    firstName: str
    kanaLastName: Optional[str] = None
    kanaFirstName: Optional[str] = None
    birthDate: Optional[date] = None
    gender: Optional[str] = None
    phoneNumber: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    insuranceType: str
    insuranceNumber: Optional[str] = None
    insuranceCardExpiryDate: Optional[date] = None
    copaymentRate: float
    firstVisitDate: Optional[date] = None
    isFirstVisit: bool
    notes: Optional[str] = None
    createdAt: Optional[datetime] = None
