"""
Tests for patient record endpoints and their role rules.
"""
import datetime as dt

from frontdesk.appointments.models import Appointment

PATIENT_PAYLOAD = {
    "first_name": "Ada",
    "last_name": "Lovelace",
    "email": "ada@mail.com",
    "phone": "555-0199",
    "date_of_birth": "1985-12-10",
    "gender": "female",
    "allergies": "penicillin",
}


def test_front_desk_registers_patient(client, front_desk, front_desk_headers):
    response = client.post("/api/patients", json=PATIENT_PAYLOAD, headers=front_desk_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["first_name"] == "Ada"
    assert body["registered_by"] == front_desk.id
    assert body["last_updated_by"] == front_desk.id


def test_clinician_cannot_register_patient(client, clinician_headers):
    response = client.post("/api/patients", json=PATIENT_PAYLOAD, headers=clinician_headers)
    assert response.status_code == 403


def test_anonymous_cannot_list_patients(client):
    assert client.get("/api/patients").status_code == 401


def test_duplicate_patient_email_is_conflict(client, front_desk_headers):
    assert client.post("/api/patients", json=PATIENT_PAYLOAD, headers=front_desk_headers).status_code == 201
    response = client.post("/api/patients", json=PATIENT_PAYLOAD, headers=front_desk_headers)
    assert response.status_code == 409


def test_list_patients_is_paginated(client, make_patient, clinician_headers):
    for i in range(3):
        make_patient(first_name=f"P{i}")
    response = client.get("/api/patients?page=1&size=2", headers=clinician_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 3
    assert len(body["items"]) == 2
    assert body["pages"] == 2
    assert body["has_next"] is True


def test_search_patients(client, make_patient, clinician_headers):
    make_patient(first_name="Grace", last_name="Hopper")
    make_patient(first_name="Alan", last_name="Turing")
    response = client.get("/api/patients/search?q=hop", headers=clinician_headers)
    assert response.status_code == 200
    assert [p["last_name"] for p in response.json()] == ["Hopper"]


def test_get_missing_patient(client, front_desk_headers):
    response = client.get("/api/patients/999", headers=front_desk_headers)
    assert response.status_code == 404


def test_clinician_updates_patient(client, patient, clinician, clinician_headers):
    response = client.put(
        f"/api/patients/{patient.id}",
        json={"medical_history": "asthma"},
        headers=clinician_headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["medical_history"] == "asthma"
    assert body["first_name"] == patient.first_name
    assert body["last_updated_by"] == clinician.id


def test_only_front_desk_deletes_patient(client, db, patient, clinician, make_appointment,
                                         front_desk_headers, clinician_headers):
    make_appointment(patient.id, clinician.id, dt.date(2024, 3, 1), "09:00")

    assert client.delete(f"/api/patients/{patient.id}", headers=clinician_headers).status_code == 403

    response = client.delete(f"/api/patients/{patient.id}", headers=front_desk_headers)
    assert response.status_code == 200
    assert client.get(f"/api/patients/{patient.id}", headers=front_desk_headers).status_code == 404
    assert db.query(Appointment).count() == 0
