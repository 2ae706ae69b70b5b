"""Consent repository - Database operations for consents and their notifications"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Consent, ConsentNotification


class ConsentRepository:
    """Repository for consent database operations"""

    @staticmethod
    def get_consents(db: Session, patient_id: Optional[int] = None) -> list[Consent]:
        query = db.query(Consent)
        if patient_id is not None:
            query = query.filter(Consent.patient_id == patient_id)
        return query.order_by(Consent.expiration_date.asc(), Consent.id.asc()).all()

    @staticmethod
    def get_consent_by_id(db: Session, consent_id: int) -> Optional[Consent]:
        return db.query(Consent).filter(Consent.id == consent_id).first()

    @staticmethod
    def create_consent(db: Session, **consent_data) -> Consent:
        consent = Consent(**consent_data)
        db.add(consent)
        db.commit()
        db.refresh(consent)
        return consent

    @staticmethod
    def update_consent(db: Session, consent: Consent, **updates) -> Consent:
        for key, value in updates.items():
            if value is not None and hasattr(consent, key):
                setattr(consent, key, value)

        db.commit()
        db.refresh(consent)
        return consent

    @staticmethod
    def add_notification(db: Session, **notification_data) -> ConsentNotification:
        """Stage a notification; the caller commits"""
        notification = ConsentNotification(**notification_data)
        db.add(notification)
        return notification

    @staticmethod
    def get_notifications(db: Session, unread_only: bool = False) -> list[ConsentNotification]:
        query = db.query(ConsentNotification)
        if unread_only:
            query = query.filter(ConsentNotification.is_read.is_(False))
        return query.order_by(ConsentNotification.id.desc()).all()

    @staticmethod
    def get_notification_by_id(db: Session, notification_id: int) -> Optional[ConsentNotification]:
        return db.query(ConsentNotification).filter(ConsentNotification.id == notification_id).first()
