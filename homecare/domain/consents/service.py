"""Consent service - Consent expiry tracking and notifications"""

import logging
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import CONSENT_EXPIRY_WARNING_DAYS
from ...models import Consent, ConsentNotification
from ..patients.repository import PatientRepository
from ..treatments.repository import TreatmentRepository
from .repository import ConsentRepository
from .schemas import ConsentCreate, ConsentUpdate

logger = logging.getLogger(__name__)

ACTIVE = "ACTIVE"
EXPIRING_SOON = "EXPIRING_SOON"
EXPIRED = "EXPIRED"


def consent_status(
    expiration_date: date, today: date, warning_days: int = CONSENT_EXPIRY_WARNING_DAYS
) -> str:
    """Status from the number of days left: negative is expired, within the window is expiring"""
    days_left = (expiration_date - today).days
    if days_left < 0:
        return EXPIRED
    if days_left <= warning_days:
        return EXPIRING_SOON
    return ACTIVE


def notification_message(consent: Consent, notification_type: str) -> str:
    if notification_type == EXPIRING_SOON:
        return (
            f"患者ID: {consent.patient_id} の同意書の有効期限が"
            f"{CONSENT_EXPIRY_WARNING_DAYS}日以内に切れます。"
        )
    return f"患者ID: {consent.patient_id} の同意書の有効期限が切れました。"


class ConsentService:
    """Service layer for consent business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ConsentRepository()
        self.patient_repo = PatientRepository()
        self.treatment_repo = TreatmentRepository()

    def refresh_statuses(self, today: Optional[date] = None) -> list[Consent]:
        """
        Recompute every consent's status for today.

        A consent moving into EXPIRING_SOON or EXPIRED gets one unread notification.
        """
        today = today or date.today()
        consents = self.repo.get_consents(self.db)

        changed = 0
        for consent in consents:
            new_status = consent_status(consent.expiration_date, today)
            if new_status == consent.status:
                continue

            if new_status in (EXPIRING_SOON, EXPIRED):
                self.repo.add_notification(
                    self.db,
                    consent_id=consent.id,
                    patient_id=consent.patient_id,
                    practitioner_id=consent.practitioner_id,
                    notification_type=new_status,
                    message=notification_message(consent, new_status),
                )
            consent.status = new_status
            changed += 1

        if changed:
            self.db.commit()
            logger.info(f"📋 Consent statuses refreshed: {changed} changed")
        return consents

    def get_notifications(self, unread_only: bool = False) -> list[ConsentNotification]:
        return self.repo.get_notifications(self.db, unread_only)

    def get_consent(self, consent_id: int) -> Consent:
        consent = self.repo.get_consent_by_id(self.db, consent_id)
        if not consent:
            raise HTTPException(status_code=404, detail="Consent not found")
        return consent

    def create_consent(self, data: ConsentCreate, today: Optional[date] = None) -> Consent:
        if not self.patient_repo.get_patient_by_id(self.db, data.patientId):
            raise HTTPException(status_code=404, detail="Patient not found")
        if not self.treatment_repo.get_practitioner_by_id(self.db, data.practitionerId):
            raise HTTPException(status_code=404, detail="Practitioner not found")

        return self.repo.create_consent(
            self.db,
            patient_id=data.patientId,
            practitioner_id=data.practitionerId,
            issue_date=data.issueDate,
            expiration_date=data.expirationDate,
            doctor_name=data.doctorName,
            hospital_name=data.hospitalName,
            status=consent_status(data.expirationDate, today or date.today()),
            notes=data.notes,
        )

    def update_consent(
        self, consent_id: int, data: ConsentUpdate, today: Optional[date] = None
    ) -> Consent:
        consent = self.get_consent(consent_id)

        issue_date = data.issueDate or consent.issue_date
        expiration_date = data.expirationDate or consent.expiration_date
        if expiration_date < issue_date:
            raise HTTPException(
                status_code=400, detail="expirationDate must not be before issueDate"
            )

        return self.repo.update_consent(
            self.db,
            consent,
            issue_date=data.issueDate,
            expiration_date=data.expirationDate,
            doctor_name=data.doctorName,
            hospital_name=data.hospitalName,
            notes=data.notes,
            status=consent_status(expiration_date, today or date.today()),
        )

    def mark_notification_read(self, notification_id: int) -> ConsentNotification:
        notification = self.repo.get_notification_by_id(self.db, notification_id)
        if not notification:
            raise HTTPException(status_code=404, detail="Notification not found")

        notification.is_read = True
        self.db.commit()
        self.db.refresh(notification)
        return notification
