"""Appointment service - Business logic for visit bookings"""

import logging
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Appointment
from ..patients.repository import PatientRepository
from ..treatments.repository import TreatmentRepository
from .repository import AppointmentRepository
from .schemas import AppointmentCreate, AppointmentUpdate, BulkStatusUpdate

logger = logging.getLogger(__name__)


def _pick(new, current):
    """The requested value, or the stored one when the field was not sent"""
    return new if new is not None else current


def _overlaps(a: Appointment, b: Appointment) -> bool:
    return (
        a.practitioner_id == b.practitioner_id
        and a.date == b.date
        and a.start_time < b.end_time
        and b.start_time < a.end_time
    )


class AppointmentService:
    """Service layer for appointment business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AppointmentRepository()
        self.patient_repo = PatientRepository()
        self.treatment_repo = TreatmentRepository()

    def get_appointments(
        self,
        on_date: Optional[date] = None,
        practitioner_id: Optional[int] = None,
        patient_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> list[Appointment]:
        return self.repo.get_appointments(self.db, on_date, practitioner_id, patient_id, status)

    def get_appointment(self, appointment_id: int) -> Appointment:
        appointment = self.repo.get_appointment_by_id(self.db, appointment_id)
        if not appointment:
            raise HTTPException(status_code=404, detail="Appointment not found")
        return appointment

    def _ensure_free(
        self,
        practitioner_id: int,
        on_date: date,
        start_time: str,
        end_time: str,
        exclude_id: Optional[int] = None,
    ) -> None:
        clash = self.repo.find_overlapping(
            self.db, practitioner_id, on_date, start_time, end_time, exclude_id
        )
        if clash:
            raise HTTPException(
                status_code=409,
                detail=(
                    f"Practitioner already has appointment {clash.id} "
                    f"from {clash.start_time} to {clash.end_time}"
                ),
            )

    def create_appointment(self, data: AppointmentCreate) -> Appointment:
        """Book a visit; the practitioner must be free for the whole slot"""
        if not self.patient_repo.get_patient_by_id(self.db, data.patientId):
            raise HTTPException(status_code=404, detail="Patient not found")
        if not self.treatment_repo.get_practitioner_by_id(self.db, data.practitionerId):
            raise HTTPException(status_code=404, detail="Practitioner not found")

        self._ensure_free(data.practitionerId, data.date, data.startTime, data.endTime)

        appointment = self.repo.create_appointment(
            self.db,
            patient_id=data.patientId,
            practitioner_id=data.practitionerId,
            date=data.date,
            start_time=data.startTime,
            end_time=data.endTime,
            treatment_type=data.treatmentType,
            status="scheduled",
            notes=data.notes,
        )
        logger.info(
            f"📅 Appointment {appointment.id}: practitioner {data.practitionerId} "
            f"{data.date} {data.startTime}-{data.endTime}"
        )
        return appointment

    def update_appointment(self, appointment_id: int, data: AppointmentUpdate) -> Appointment:
        appointment = self.get_appointment(appointment_id)

        practitioner_id = _pick(data.practitionerId, appointment.practitioner_id)
        on_date = _pick(data.date, appointment.date)
        start_time = _pick(data.startTime, appointment.start_time)
        end_time = _pick(data.endTime, appointment.end_time)

        if end_time <= start_time:
            raise HTTPException(status_code=400, detail="endTime must be after startTime")

        if data.practitionerId is not None and not self.treatment_repo.get_practitioner_by_id(
            self.db, data.practitionerId
        ):
            raise HTTPException(status_code=404, detail="Practitioner not found")

        if _pick(data.status, appointment.status) != "cancelled":
            self._ensure_free(practitioner_id, on_date, start_time, end_time, appointment.id)

        return self.repo.update_appointment(
            self.db,
            appointment,
            practitioner_id=data.practitionerId,
            date=data.date,
            start_time=data.startTime,
            end_time=data.endTime,
            status=data.status,
            treatment_type=data.treatmentType,
            notes=data.notes,
        )

    def cancel_appointment(self, appointment_id: int) -> Appointment:
        appointment = self.get_appointment(appointment_id)
        if appointment.status == "cancelled":
            raise HTTPException(status_code=409, detail="Appointment is already cancelled")
        if appointment.status == "completed":
            raise HTTPException(status_code=409, detail="Completed appointments cannot be cancelled")

        logger.info(f"🚫 Cancelling appointment {appointment.id}")
        return self.repo.update_appointment(self.db, appointment, status="cancelled")

    def bulk_update_status(self, data: BulkStatusUpdate) -> dict:
        """Set the same status on several appointments"""
        if not data.appointmentIds:
            raise HTTPException(status_code=400, detail="No appointment IDs provided")

        appointments = self.repo.get_appointments_by_ids(self.db, data.appointmentIds)
        found = {a.id for a in appointments}
        missing = [i for i in data.appointmentIds if i not in found]
        if missing:
            raise HTTPException(
                status_code=404, detail=f"Appointments not found: {', '.join(map(str, missing))}"
            )

        if data.status != "cancelled":
            # Reviving a cancelled booking must not double-book its slot
            revived = [a for a in appointments if a.status == "cancelled"]
            for appointment in revived:
                self._ensure_free(
                    appointment.practitioner_id,
                    appointment.date,
                    appointment.start_time,
                    appointment.end_time,
                    appointment.id,
                )
            for i, first in enumerate(revived):
                for second in revived[i + 1 :]:
                    if _overlaps(first, second):
                        raise HTTPException(
                            status_code=409,
                            detail=f"Appointments {first.id} and {second.id} overlap",
                        )

        for appointment in appointments:
            appointment.status = data.status
        self.db.commit()

        return {
            "message": f"Updated {len(appointments)} appointment(s)",
            "updatedCount": len(appointments),
        }
