import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def generate_public_id():
    """Generate a unique public ID for secure public access"""
    return str(uuid.uuid4())


class Patient(Base):
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    public_id = Column(String(36), unique=True, nullable=False, index=True, default=generate_public_id)
    last_name = Column(String(100), nullable=False, index=True)
    first_name = Column(String(100), nullable=False)
    kana_last_name = Column(String(100), nullable=True)
    kana_first_name = Column(String(100), nullable=True)
    birth_date = Column(Date, nullable=True)
    gender = Column(String(10), nullable=True)  # male, female, other
    phone_number = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)
    insurance_type = Column(String(50), nullable=False)  # health, long_term_care
    insurance_number = Column(String(50), nullable=True)
    insurance_card_expiry_date = Column(Date, nullable=True)
    copayment_rate = Column(Float, nullable=False)  # 0.1 / 0.2 / 0.3, derived from insurance_type
    # Set exactly once, by the first treatment record created for the patient
    first_visit_date = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    treatments = relationship(
        "TreatmentRecord", back_populates="patient", cascade="all, delete-orphan"
    )
    appointments = relationship(
        "Appointment", back_populates="patient", cascade="all, delete-orphan"
    )
    consents = relationship("Consent", back_populates="patient", cascade="all, delete-orphan")
    claims = relationship("InsuranceClaim", back_populates="patient", cascade="all, delete-orphan")


class Practitioner(Base):
    __tablename__ = "practitioners"

    id = Column(Integer, primary_key=True, index=True)
    last_name = Column(String(100), nullable=False, index=True)
    first_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True)
    phone_number = Column(String(50), nullable=True)
    specialties = Column(JSON, default=list, nullable=True)  # e.g. ["massage", "acupuncture"]
    employment_type = Column(String(20), nullable=False)  # FULL_TIME, PART_TIME, CONTRACT, FREELANCE
    salary_system = Column(String(20), nullable=False)  # HOURLY, MONTHLY, COMMISSION
    start_date = Column(Date, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    treatments = relationship("TreatmentRecord", back_populates="practitioner")
    appointments = relationship("Appointment", back_populates="practitioner")


class TreatmentRecord(Base):
    """One home-visit treatment with the fee breakdown charged for it"""

    __tablename__ = "treatment_records"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)
    practitioner_id = Column(Integer, ForeignKey("practitioners.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    time = Column(String(5), nullable=True)  # HH:MM
    treatment_type = Column(String(20), nullable=False, default="single")  # single, combined
    treatment_areas = Column(JSON, default=dict, nullable=True)
    treatment_methods = Column(JSON, default=dict, nullable=True)
    pain_level = Column(Integer, nullable=True)  # 1-5

    # Tariff selection
    local_count = Column(Integer, nullable=False)
    procedure_count = Column(Integer, nullable=False, default=1)
    is_hot_compress = Column(Boolean, default=False, nullable=False)
    is_hot_electric = Column(Boolean, default=False, nullable=False)
    is_manual_therapy = Column(Boolean, default=False, nullable=False)
    is_electrotherapy = Column(Boolean, default=False, nullable=False)

    # Charged amounts (snapshot at creation time)
    is_first_visit = Column(Boolean, default=False, nullable=False)
    first_visit_fee = Column(Integer, default=0, nullable=False)
    total_fee = Column(Integer, nullable=False)
    patient_copayment = Column(Integer, nullable=False)
    insurance_amount = Column(Integer, nullable=False)
    copayment_rate = Column(Float, nullable=False)

    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    patient = relationship("Patient", back_populates="treatments")
    practitioner = relationship("Practitioner", back_populates="treatments")
    claim = relationship("InsuranceClaim", back_populates="treatment", uselist=False)


class InsuranceClaim(Base):
    __tablename__ = "insurance_claims"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)
    practitioner_id = Column(Integer, ForeignKey("practitioners.id"), nullable=False)
    treatment_id = Column(
        Integer, ForeignKey("treatment_records.id"), nullable=False, unique=True
    )
    claim_date = Column(Date, nullable=False)
    treatment_date = Column(Date, nullable=False)
    total_amount = Column(Integer, nullable=False)
    insurance_amount = Column(Integer, nullable=False)
    patient_copayment = Column(Integer, nullable=False)
    # Status workflow: pending → submitted → approved → paid, submitted → rejected → submitted
    status = Column(String(20), default="pending", nullable=False, index=True)
    claim_number = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    patient = relationship("Patient", back_populates="claims")
    treatment = relationship("TreatmentRecord", back_populates="claim")


class Consent(Base):
    """Physician consent (同意書) required for insurance-covered treatment"""

    __tablename__ = "consents"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)
    practitioner_id = Column(Integer, ForeignKey("practitioners.id"), nullable=False)
    issue_date = Column(Date, nullable=False)
    expiration_date = Column(Date, nullable=False)
    doctor_name = Column(String(255), nullable=False)
    hospital_name = Column(String(255), nullable=False)
    status = Column(String(20), default="ACTIVE", nullable=False)  # ACTIVE, EXPIRING_SOON, EXPIRED
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    patient = relationship("Patient", back_populates="consents")
    notifications = relationship(
        "ConsentNotification", back_populates="consent", cascade="all, delete-orphan"
    )


class ConsentNotification(Base):
    __tablename__ = "consent_notifications"

    id = Column(Integer, primary_key=True, index=True)
    consent_id = Column(Integer, ForeignKey("consents.id"), nullable=False, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False)
    practitioner_id = Column(Integer, ForeignKey("practitioners.id"), nullable=False)
    notification_type = Column(String(20), nullable=False)  # EXPIRING_SOON, EXPIRED
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    consent = relationship("Consent", back_populates="notifications")


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)
    practitioner_id = Column(Integer, ForeignKey("practitioners.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    start_time = Column(String(5), nullable=False)  # HH:MM
    end_time = Column(String(5), nullable=False)  # HH:MM
    # scheduled, completed, cancelled, rescheduled
    status = Column(String(20), default="scheduled", nullable=False, index=True)
    treatment_type = Column(String(20), default="single", nullable=False)  # single, combined
    notes = Column(Text, nullable=True)
    reminder_sent = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    patient = relationship("Patient", back_populates="appointments")
    practitioner = relationship("Practitioner", back_populates="appointments")
