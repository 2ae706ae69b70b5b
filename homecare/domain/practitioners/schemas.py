"""Practitioner domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import validate_email, validate_jp_phone, validate_name

EMPLOYMENT_TYPES = ("FULL_TIME", "PART_TIME", "CONTRACT", "FREELANCE")
SALARY_SYSTEMS = ("HOURLY", "MONTHLY", "COMMISSION")


class PractitionerBase(BaseModel):
    @field_validator("lastName", "firstName", check_fields=False)
    @classmethod
    def validate_names(cls, v):
        return validate_name(v)
    @field_validator("phoneNumber", check_fields=False)
    @classmethod
    def validate_phone(cls, v):
        return validate_jp_phone(v)

    @field_validator("email", check_fields=False)
    @classmethod
    def validate_email_address(cls, v):
        return validate_email(v)

    @field_validator("employmentType", check_fields=False)
    @classmethod
    def validate_employment_type(cls, v):
        if v is not None and v not in EMPLOYMENT_TYPES:
            raise ValueError(f"employmentType must be one of {', '.join(EMPLOYMENT_TYPES)}")
        return v

    @field_validator("salarySystem", check_fields=False)
    @classmethod
    def validate_salary_system(cls, v):
        if v is not None and v not in SALARY_SYSTEMS:
            raise ValueError(f"salarySystem must be one of {', '.join(SALARY_SYSTEMS)}")
        return v


class PractitionerCreate(PractitionerBase):
    """Schema for creating a new practitioner"""

    lastName: str
    firstName: str
    email: Optional[str] = None
    phoneNumber: Optional[str] = None
    specialties: list[str] = []
    employmentType: str
    salarySystem: str
    startDate: Optional[date] = None


class PractitionerUpdate(PractitionerBase):
    """Schema for updating an existing practitioner"""

    lastName: Optional[str] = None
    firstName: Optional[str] = None
    email: Optional[str] = None
    phoneNumber: Optional[str] = None
    specialties: Optional[list[str]] = None
    employmentType: Optional[str] = None
    salarySystem: Optional[str] = None
    startDate: Optional[date] = None


class PractitionerResponse(BaseModel):
    """Schema for practitioner response"""

    id: int
    lastName: str
    firstName: str
    email: Optional[str] = None
    phoneNumber: Optional[str] = None
    specialties: list[str] = []
    employmentType: str
    salarySystem: str
    startDate: Optional[date] = None
    createdAt: Optional[datetime] = None
