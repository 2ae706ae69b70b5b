"""Integration tests for physician consents and expiry notifications"""
from datetime import date, timedelta

import pytest

from homecare.models import Consent


@pytest.fixture
def people(make_patient, make_practitioner):
    return make_patient(), make_practitioner()


def consent_payload(patient, practitioner, expires_in_days):
    today = date.today()
    return {
        "patientId": patient["id"],
        "practitionerId": practitioner["id"],
        "issueDate": (today - timedelta(days=150)).isoformat(),
        "expirationDate": (today + timedelta(days=expires_in_days)).isoformat(),
        "doctorName": "鈴木医師",
        "hospitalName": "世田谷中央病院",
    }


@pytest.mark.parametrize(
    "expires_in_days,status",
    [(90, "ACTIVE"), (30, "EXPIRING_SOON"), (0, "EXPIRING_SOON"), (-1, "EXPIRED")],
)
def test_status_on_create(client, people, expires_in_days, status):
    response = client.post("/consents", json=consent_payload(*people, expires_in_days))

    assert response.status_code == 201
    assert response.json()["status"] == status


def test_expiration_before_issue_is_rejected(client, people):
    payload = consent_payload(*people, 30)
    payload["expirationDate"] = "2000-01-01"

    assert client.post("/consents", json=payload).status_code == 422


def test_create_for_missing_patient(client, people):
    patient, practitioner = people
    payload = consent_payload({"id": 999}, practitioner, 30)

    assert client.post("/consents", json=payload).status_code == 404


def test_refresh_notifies_once_when_consent_expires(client, db_session, people):
    patient, practitioner = people
    today = date.today()
    db_session.add(
        Consent(
            patient_id=patient["id"],
            practitioner_id=practitioner["id"],
            issue_date=today - timedelta(days=180),
            expiration_date=today - timedelta(days=1),
            doctor_name="鈴木医師",
            hospital_name="世田谷中央病院",
            status="ACTIVE",
        )
    )
    db_session.commit()

    first = client.get("/consents").json()
    second = client.get("/consents").json()

    assert first["consents"][0]["status"] == "EXPIRED"
    assert len(first["notifications"]) == 1
    notification = first["notifications"][0]
    assert notification["notificationType"] == "EXPIRED"
    assert notification["isRead"] is False
    assert f"患者ID: {patient['id']}" in notification["message"]
    assert len(second["notifications"]) == 1


def test_consent_created_in_window_is_not_notified(client, people):
    client.post("/consents", json=consent_payload(*people, 10))

    body = client.get("/consents").json()

    assert body["consents"][0]["status"] == "EXPIRING_SOON"
    assert body["notifications"] == []


def test_update_recomputes_status(client, people):
    consent = client.post("/consents", json=consent_payload(*people, 10)).json()
    new_expiry = (date.today() + timedelta(days=120)).isoformat()

    response = client.put(f"/consents/{consent['id']}", json={"expirationDate": new_expiry})

    assert response.status_code == 200
    assert response.json()["status"] == "ACTIVE"


def test_update_with_expiry_before_issue(client, people):
    consent = client.post("/consents", json=consent_payload(*people, 10)).json()

    response = client.put(f"/consents/{consent['id']}", json={"expirationDate": "2000-01-01"})

    assert response.status_code == 400


def test_mark_notification_read(client, db_session, people):
    patient, practitioner = people
    today = date.today()
    db_session.add(
        Consent(
            patient_id=patient["id"],
            practitioner_id=practitioner["id"],
            issue_date=today - timedelta(days=150),
            expiration_date=today + timedelta(days=5),
            doctor_name="鈴木医師",
            hospital_name="世田谷中央病院",
            status="ACTIVE",
        )
    )
    db_session.commit()
    notification = client.get("/consents").json()["notifications"][0]
    assert notification["notificationType"] == "EXPIRING_SOON"

    response = client.patch(f"/consents/notifications/{notification['id']}/read")

    assert response.status_code == 200
    assert response.json()["isRead"] is True
    assert client.patch("/consents/notifications/999/read").status_code == 404
