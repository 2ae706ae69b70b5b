"""Consent domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, model_validator

from ...models import Consent, ConsentNotification


class ConsentCreate(BaseModel):
    """Schema for registering a physician consent"""

    patientId: int
    practitionerId: int
    issueDate: date
    expirationDate: date
    doctorName: str
    hospitalName: str
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_dates(self):
        if self.expirationDate < self.issueDate:
            raise ValueError("expirationDate must not be before issueDate")
        return self


class ConsentUpdate(BaseModel):
    issueDate: Optional[date] = None
    expirationDate: Optional[date] = None
    doctorName: Optional[str] = None
    hospitalName: Optional[str] = None
    notes: Optional[str] = None


class ConsentResponse(BaseModel):
    id: int
    patientId: int
    practitionerId: int
    issueDate: date
    expirationDate: date
    doctorName: str
    hospitalName: str
    status: str
    notes: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @classmethod
    def from_consent(cls, c: Consent) -> "ConsentResponse":
        return cls(
            id=c.id,
            patientId=c.patient_id,
            practitionerId=c.practitioner_id,
            issueDate=c.issue_date,
            expirationDate=c.expiration_date,
            doctorName=c.doctor_name,
            hospitalName=c.hospital_name,
            status=c.status,
            notes=c.notes,
            createdAt=c.created_at,
            updatedAt=c.updated_at,
        )


class ConsentNotificationResponse(BaseModel):
    id: int
    consentId: int
    patientId: int
    practitionerId: int
    notificationType: str
    message: str
    isRead: bool
    createdAt: Optional[datetime] = None

    @classmethod
    def from_notification(cls, n: ConsentNotification) -> "ConsentNotificationResponse":
        return cls(
            id=n.id,
            consentId=n.consent_id,
            patientId=n.patient_id,
            practitionerId=n.practitioner_id,
            notificationType=n.notification_type,
            message=n.message,
            isRead=n.is_read,
            createdAt=n.created_at,
        )


class ConsentListResponse(BaseModel):
    consents: list[ConsentResponse]
    notifications: list[ConsentNotificationResponse]
