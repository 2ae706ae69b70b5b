"""Treatment service - Business logic for treatment records"""

import csv
import logging
from datetime import date
from io import StringIO
from typing import Optional

from fastapi import HTTPException
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from ...models import TreatmentRecord
from ..fees.calculator import calculate_fee, first_visit_fee_for, validate_selection
from ..patients.repository import PatientRepository
from .repository import TreatmentRepository
from .schemas import TreatmentCreate

logger = logging.getLogger(__name__)


class TreatmentService:
    """Service layer for treatment record business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = TreatmentRepository()
        self.patient_repo = PatientRepository()

    def get_treatments(
        self,
        patient_id: Optional[int] = None,
        practitioner_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[TreatmentRecord]:
        """Get treatment records"""
        return self.repo.get_treatments(self.db, patient_id, practitioner_id, start_date, end_date)

    def get_treatment(self, treatment_id: int) -> TreatmentRecord:
        """Get a specific treatment record"""
        treatment = self.repo.get_treatment_by_id(self.db, treatment_id)
        if not treatment:
            raise HTTPException(status_code=404, detail="Treatment record not found")
        return treatment

    def create_treatment(self, data: TreatmentCreate) -> TreatmentRecord:
        """
        Record a treatment and charge it.

        The first-visit claim, the fee snapshot and the record insert are one
        transaction: if two records for a new patient arrive together, exactly one
        of them carries the first-visit fee.
        """
        patient = self.patient_repo.get_patient_by_id(self.db, data.patientId)
        if not patient:
            raise HTTPException(status_code=404, detail="Patient not found")

        practitioner = self.repo.get_practitioner_by_id(self.db, data.practitionerId)
        if not practitioner:
            raise HTTPException(status_code=404, detail="Practitioner not found")

        selection = data.to_selection()
        # Reject bad selections before anything is written
        validate_selection(selection)

        try:
            first_visit = self.patient_repo.claim_first_visit(self.db, patient.id, data.date)
            breakdown = calculate_fee(selection, patient.copayment_rate, is_first_visit=first_visit)

            treatment = self.repo.add_treatment(
                self.db,
                patient_id=patient.id,
                practitioner_id=practitioner.id,
                date=data.date,
                time=data.time,
                treatment_type=data.treatmentType,
                treatment_areas=data.treatmentAreas.model_dump(),
                treatment_methods=data.treatmentMethods.model_dump(),
                pain_level=data.painLevel,
                local_count=data.areaCount,
                procedure_count=data.procedureCount,
                is_hot_compress=data.modalities.hotCompress,
                is_hot_electric=data.modalities.hotAndElectric,
                is_manual_therapy=data.modalities.manualTherapy,
                is_electrotherapy=data.modalities.electrotherapy,
                is_first_visit=first_visit,
                first_visit_fee=first_visit_fee_for(selection) if first_visit else 0,
                total_fee=breakdown.total_fee,
                patient_copayment=breakdown.patient_copayment,
                insurance_amount=breakdown.insurance_amount,
                copayment_rate=patient.copayment_rate,
                notes=data.notes,
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(treatment)
        logger.info(
            f"📝 Treatment {treatment.id} for patient {patient.id}: total={breakdown.total_fee}, "
            f"copay={breakdown.patient_copayment}, first_visit={first_visit}"
        )
        return treatment

    def delete_treatment(self, treatment_id: int) -> dict:
        """Delete a treatment record that has not been claimed"""
        treatment = self.get_treatment(treatment_id)

        if self.repo.has_claim(self.db, treatment.id):
            raise HTTPException(
                status_code=409, detail="Treatment has an insurance claim and cannot be deleted"
            )

        self.repo.delete_treatment(self.db, treatment)
        return {"message": "Treatment record deleted"}

    def export_treatments_csv(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        patient_id: Optional[int] = None,
    ) -> StreamingResponse:
        """Export treatment records as CSV for claim preparation"""
        treatments = self.repo.get_treatments(
            self.db, patient_id=patient_id, start_date=start_date, end_date=end_date
        )
        logger.info(f"📊 Exporting {len(treatments)} treatment records")

        output = StringIO()
        writer = csv.writer(output)

        writer.writerow(
            [
                "ID",
                "Date",
                "Patient ID",
                "Practitioner ID",
                "Areas",
                "Procedures",
                "First Visit",
                "Total Fee",
                "Copayment Rate",
                "Patient Copayment",
                "Insurance Amount",
            ]
        )

        for t in treatments:
            writer.writerow(
                [
                    t.id,
                    t.date.isoformat(),
                    t.patient_id,
                    t.practitioner_id,
                    t.local_count,
                    t.procedure_count,
                    "yes" if t.is_first_visit else "no",
                    t.total_fee,
                    t.copayment_rate,
                    t.patient_copayment,
                    t.insurance_amount,
                ]
            )

        output.seek(0)
        filename = f"treatments_{date.today().isoformat()}.csv"
        return StreamingResponse(
            iter([output.getvalue()]),
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
