"""Appointment repository - Database operations for appointments"""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Appointment


class AppointmentRepository:
    """Repository for appointment database operations"""

    @staticmethod
    def get_appointments(
        db: Session,
        on_date: Optional[date] = None,
        practitioner_id: Optional[int] = None,
        patient_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> list[Appointment]:
        """Get appointments in visiting order, with optional filters"""
        query = db.query(Appointment)

        if on_date:
            query = query.filter(Appointment.date == on_date)
        if practitioner_id is not None:
            query = query.filter(Appointment.practitioner_id == practitioner_id)
        if patient_id is not None:
            query = query.filter(Appointment.patient_id == patient_id)
        if status:
            query = query.filter(Appointment.status == status)

        return query.order_by(Appointment.date.asc(), Appointment.start_time.asc()).all()

    @staticmethod
    def get_appointment_by_id(db: Session, appointment_id: int) -> Optional[Appointment]:
        return db.query(Appointment).filter(Appointment.id == appointment_id).first()

    @staticmethod
    def get_appointments_by_ids(db: Session, appointment_ids: list[int]) -> list[Appointment]:
        return db.query(Appointment).filter(Appointment.id.in_(appointment_ids)).all()

    @staticmethod
    def find_overlapping(
        db: Session,
        practitioner_id: int,
        on_date: date,
        start_time: str,
        end_time: str,
        exclude_id: Optional[int] = None,
    ) -> Optional[Appointment]:
        """First non-cancelled appointment of the practitioner overlapping the slot"""
        query = db.query(Appointment).filter(
            Appointment.practitioner_id == practitioner_id,
            Appointment.date == on_date,
            Appointment.status != "cancelled",
            Appointment.start_time < end_time,
            Appointment.end_time > start_time,
        )
        if exclude_id is not None:
            query = query.filter(Appointment.id != exclude_id)
        return query.first()

    @staticmethod
    def create_appointment(db: Session, **appointment_data) -> Appointment:
        appointment = Appointment(**appointment_data)
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment

    @staticmethod
    def update_appointment(db: Session, appointment: Appointment, **updates) -> Appointment:
        for key, value in updates.items():
            if value is not None and hasattr(appointment, key):
                setattr(appointment, key, value)

        db.commit()
        db.refresh(appointment)
        return appointment
