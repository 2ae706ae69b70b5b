"""Shared test fixtures."""
import os

# Must be set before homecare.database builds its engine
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"

import pytest
from fastapi.testclient import TestClient

from homecare.database import Base, SessionLocal, engine
from homecare.main import app


@pytest.fixture(autouse=True)
def reset_database():
    """Fresh schema for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_patient(client):
    """Register a patient through the API."""
    def _create(**overrides):
        payload = {
            "lastName": "山田",
            "firstName": "花子",
            "kanaLastName": "ヤマダ",
            "kanaFirstName": "ハナコ",
            "birthDate": "1945-04-01",
            "gender": "female",
            "phoneNumber": "090-1234-5678",
            "address": "東京都世田谷区1-2-3",
            "insuranceType": "health",
            "insuranceNumber": "12345678",
        }
        payload.update(overrides)
        response = client.post("/patients", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _create


@pytest.fixture
def make_practitioner(client):
    """Create a practitioner through the API."""
    def _create(**overrides):
        payload = {
            "lastName": "佐藤",
            "firstName": "一郎",
            "email": "sato@example.com",
            "specialties": ["massage", "acupuncture"],
            "employmentType": "FULL_TIME",
            "salarySystem": "MONTHLY",
            "startDate": "2020-04-01",
        }
        payload.update(overrides)
        response = client.post("/practitioners", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _create


@pytest.fixture
def make_treatment(client):
    """Record a treatment through the API."""
    def _create(patient_id, practitioner_id, **overrides):
        payload = {
            "patientId": patient_id,
            "practitionerId": practitioner_id,
            "date": "2024-05-01",
            "time": "10:00",
            "areaCount": 1,
            "procedureCount": 1,
        }
        payload.update(overrides)
        return client.post("/treatments", json=payload)
    return _create
