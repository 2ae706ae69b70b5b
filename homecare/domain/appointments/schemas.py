"""Appointment domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, field_validator, model_validator

from ...models import Appointment
from ...shared.validators import validate_hhmm

APPOINTMENT_STATUSES = ("scheduled", "completed", "cancelled", "rescheduled")
TREATMENT_TYPES = ("single", "combined")

# A field named "date" would shadow the type inside the class body
OptionalDate = Optional[date]


class AppointmentCreate(BaseModel):
    """Schema for booking a home visit"""

    patientId: int
    practitionerId: int
    date: date
    startTime: str
    endTime: str
    treatmentType: str = "single"
    notes: Optional[str] = None

    @field_validator("startTime", "endTime")
    @classmethod
    def validate_time(cls, v):
        return validate_hhmm(v)

    @field_validator("treatmentType")
    @classmethod
    def validate_treatment_type(cls, v):
        if v not in TREATMENT_TYPES:
            raise ValueError("treatmentType must be 'single' or 'combined'")
        return v

    @model_validator(mode="after")
    def check_times(self):
        # HH:MM strings compare correctly as text
        if self.endTime <= self.startTime:
            raise ValueError("endTime must be after startTime")
        return self


class AppointmentUpdate(BaseModel):
    practitionerId: Optional[int] = None
    date: OptionalDate = None
    startTime: Optional[str] = None
    endTime: Optional[str] = None
    status: Optional[str] = None
    treatmentType: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("startTime", "endTime")
    @classmethod
    def validate_time(cls, v):
        return validate_hhmm(v)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        if v is not None and v not in APPOINTMENT_STATUSES:
            raise ValueError(f"status must be one of {', '.join(APPOINTMENT_STATUSES)}")
        return v

    @field_validator("treatmentType")
    @classmethod
    def validate_treatment_type(cls, v):
        if v is not None and v not in TREATMENT_TYPES:
            raise ValueError("treatmentType must be 'single' or 'combined'")
        return v


class BulkStatusUpdate(BaseModel):
    """Schema for changing the status of several appointments at once"""

    appointmentIds: list[int]
    status: str

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        if v not in APPOINTMENT_STATUSES:
            raise ValueError(f"status must be one of {', '.join(APPOINTMENT_STATUSES)}")
        return v


class AppointmentResponse(BaseModel):
    id: int
    patientId: int
    practitionerId: int
    date: date
    startTime: str
    endTime: str
    status: str
    treatmentType: str
    notes: Optional[str] = None
    reminderSent: bool
    createdAt: Optional[datetime] = None

    @classmethod
    def from_appointment(cls, a: Appointment) -> "AppointmentResponse":
        return cls(
            id=a.id,
            patientId=a.patient_id,
            practitionerId=a.practitioner_id,
            date=a.date,
            startTime=a.start_time,
            endTime=a.end_time,
            status=a.status,
            treatmentType=a.treatment_type,
            notes=a.notes,
            reminderSent=a.reminder_sent,
            createdAt=a.created_at,
        )
