"""Integration tests for treatment records and first-visit charging"""
import csv
from datetime import date
from io import StringIO

from sqlalchemy.orm import sessionmaker

from homecare.database import Base, build_engine
from homecare.domain.patients.repository import PatientRepository
from homecare.models import Patient


def test_first_visit_fee_is_charged_once(client, make_patient, make_practitioner, make_treatment):
    patient = make_patient()
    practitioner = make_practitioner()

    first = make_treatment(patient["id"], practitioner["id"], date="2024-05-01")
    second = make_treatment(patient["id"], practitioner["id"], date="2024-05-08")

    assert first.status_code == 201
    assert second.status_code == 201
    first, second = first.json(), second.json()

    # 450 area + 2300 visit + 1950 first visit
    assert first["isFirstVisit"] is True
    assert first["firstVisitFee"] == 1950
    assert (first["totalFee"], first["patientCopayment"], first["insuranceAmount"]) == (
        4700,
        1410,
        3290,
    )

    assert second["isFirstVisit"] is False
    assert second["firstVisitFee"] == 0
    assert (second["totalFee"], second["patientCopayment"], second["insuranceAmount"]) == (
        2750,
        825,
        1925,
    )

    patient = client.get(f"/patients/{patient['id']}").json()
    assert patient["firstVisitDate"] == "2024-05-01"


def test_combined_first_visit_uses_combined_fee(make_patient, make_practitioner, make_treatment):
    patient = make_patient(insuranceType="long_term_care")
    practitioner = make_practitioner()

    body = make_treatment(
        patient["id"],
        practitioner["id"],
        areaCount=2,
        procedureCount=2,
        modalities={"hotCompress": True},
    ).json()

    # 900 + 180 + 1770 + 2300 + 2230
    assert body["treatmentType"] == "combined"
    assert body["firstVisitFee"] == 2230
    assert body["totalFee"] == 7380
    assert body["patientCopayment"] == 738
    assert body["insuranceAmount"] == 6642
    assert body["copaymentRate"] == 0.1


def test_client_cannot_send_fees(make_patient, make_practitioner, make_treatment):
    patient = make_patient()
    practitioner = make_practitioner()

    body = make_treatment(
        patient["id"], practitioner["id"], totalFee=1, patientCopayment=0, isFirstVisit=False
    ).json()

    assert body["totalFee"] == 4700
    assert body["isFirstVisit"] is True


def test_invalid_area_count_does_not_consume_first_visit(
    client, make_patient, make_practitioner, make_treatment
):
    patient = make_patient()
    practitioner = make_practitioner()

    rejected = make_treatment(patient["id"], practitioner["id"], areaCount=6)
    assert rejected.status_code == 422
    assert "areaCount" in rejected.json()["detail"]

    assert client.get(f"/patients/{patient['id']}").json()["isFirstVisit"] is True

    accepted = make_treatment(patient["id"], practitioner["id"]).json()
    assert accepted["isFirstVisit"] is True


def test_invalid_procedure_count_is_rejected(make_patient, make_practitioner, make_treatment):
    patient = make_patient()
    practitioner = make_practitioner()

    response = make_treatment(patient["id"], practitioner["id"], procedureCount=3)

    assert response.status_code == 422


def test_treatment_type_must_match_procedure_count(make_patient, make_practitioner, make_treatment):
    patient = make_patient()
    practitioner = make_practitioner()

    response = make_treatment(
        patient["id"], practitioner["id"], procedureCount=1, treatmentType="combined"
    )

    assert response.status_code == 422


def test_unknown_patient_or_practitioner(make_patient, make_practitioner, make_treatment):
    patient = make_patient()
    practitioner = make_practitioner()

    assert make_treatment(999, practitioner["id"]).status_code == 404
    assert make_treatment(patient["id"], 999).status_code == 404


def test_filters(client, make_patient, make_practitioner, make_treatment):
    practitioner = make_practitioner()
    hanako = make_patient()
    taro = make_patient(firstName="太郎", kanaFirstName="タロウ")
    make_treatment(hanako["id"], practitioner["id"], date="2024-04-01")
    make_treatment(hanako["id"], practitioner["id"], date="2024-05-01")
    make_treatment(taro["id"], practitioner["id"], date="2024-05-02")

    by_patient = client.get("/treatments", params={"patientId": hanako["id"]}).json()
    in_may = client.get(
        "/treatments", params={"startDate": "2024-05-01", "endDate": "2024-05-31"}
    ).json()

    assert [t["date"] for t in by_patient] == ["2024-05-01", "2024-04-01"]
    assert {t["patientId"] for t in in_may} == {hanako["id"], taro["id"]}
    assert len(in_may) == 2


def test_get_treatment(client, make_patient, make_practitioner, make_treatment):
    patient = make_patient()
    practitioner = make_practitioner()
    created = make_treatment(patient["id"], practitioner["id"], painLevel=3).json()

    fetched = client.get(f"/treatments/{created['id']}").json()

    assert fetched == created
    assert client.get("/treatments/999").status_code == 404


def test_csv_export(client, make_patient, make_practitioner, make_treatment):
    patient = make_patient()
    practitioner = make_practitioner()
    make_treatment(patient["id"], practitioner["id"])

    response = client.get("/treatments/export")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    rows = list(csv.reader(StringIO(response.text)))
    assert rows[0][0] == "ID"
    assert rows[1][6:] == ["yes", "4700", "0.3", "1410", "3290"]


def test_claimed_treatment_cannot_be_deleted(client, make_patient, make_practitioner, make_treatment):
    patient = make_patient()
    practitioner = make_practitioner()
    claimed = make_treatment(patient["id"], practitioner["id"]).json()
    unclaimed = make_treatment(patient["id"], practitioner["id"]).json()
    client.post("/claims", json={"treatmentId": claimed["id"]})

    assert client.delete(f"/treatments/{claimed['id']}").status_code == 409
    assert client.delete(f"/treatments/{unclaimed['id']}").status_code == 200


def test_first_visit_claim_succeeds_once(db_session, make_patient):
    patient = make_patient()

    first = PatientRepository.claim_first_visit(db_session, patient["id"], date(2024, 5, 1))
    second = PatientRepository.claim_first_visit(db_session, patient["id"], date(2024, 5, 2))
    db_session.commit()

    assert (first, second) == (True, False)
    stored = db_session.query(Patient).filter(Patient.id == patient["id"]).one()
    assert stored.first_visit_date == date(2024, 5, 1)


def test_boolean_counts_are_rejected_without_consuming_first_visit(
    client, make_patient, make_practitioner, make_treatment
):
    patient = make_patient()
    practitioner = make_practitioner()

    assert make_treatment(patient["id"], practitioner["id"], areaCount=True).status_code == 422
    assert (
        make_treatment(patient["id"], practitioner["id"], procedureCount=True).status_code == 422
    )
    assert client.get(f"/patients/{patient['id']}").json()["isFirstVisit"] is True


def test_first_visit_claim_is_won_by_one_connection(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'claims.db'}")
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine)

    with Session() as setup:
        patient = Patient(
            last_name="山田", first_name="花子", insurance_type="health", copayment_rate=0.3
        )
        setup.add(patient)
        setup.commit()
        patient_id = patient.id

    winner, loser = Session(), Session()
    try:
        assert PatientRepository.claim_first_visit(winner, patient_id, date(2024, 5, 1))
        winner.commit()

        assert not PatientRepository.claim_first_visit(loser, patient_id, date(2024, 5, 2))
        loser.commit()

        stored = loser.query(Patient).filter(Patient.id == patient_id).one()
        assert stored.first_visit_date == date(2024, 5, 1)
    finally:
        winner.close()
        loser.close()
        engine.dispose()
