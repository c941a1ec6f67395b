import pytest

from care_api.models.chronic import ChronicMonitoring


@pytest.fixture
def api(client, auth_headers):
    """Authenticated request helper."""
    async def call(method: str, url: str, **kwargs):
        return await client.request(method, url, headers=auth_headers, **kwargs)
    return call


async def _create_exam(api, patient_id, exam_type="Hemograma", status="Agendado", scheduled="2024-05-02"):
    response = await api(
        "POST",
        "/api/exames",
        json={"patient_id": patient_id, "exam_type": exam_type, "status": status, "scheduled_date": scheduled},
    )
    assert response.status_code == 201
    return response.json()


async def test_root_and_health_are_public(client):
    assert (await client.get("/")).json()["status"] == "ok"

    response = await client.get("/api/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "operational"
    assert body["database"]["status"] == "connected"


async def test_patient_crud(api):
    response = await api(
        "POST",
        "/api/pacientes",
        json={"full_name": "Joana Pereira", "cpf": "987.654.321-00", "birth_date": "1990-03-15"},
    )
    assert response.status_code == 201
    created = response.json()
    assert created["is_pregnant"] is False

    response = await api("PUT", f"/api/pacientes/{created['id']}", json={"phone": "(11) 99999-0000"})
    assert response.status_code == 200
    assert response.json()["phone"] == "(11) 99999-0000"
    assert response.json()["full_name"] == "Joana Pereira"

    assert (await api("GET", f"/api/pacientes/{created['id']}")).status_code == 200
    assert (await api("DELETE", f"/api/pacientes/{created['id']}")).json()["deleted"] is True

    response = await api("GET", f"/api/pacientes/{created['id']}")
    assert response.status_code == 404
    assert response.json() == {"error": "Patient not found"}


async def test_patient_search(api, patient):
    await api("POST", "/api/pacientes", json={"full_name": "Carlos Lima", "sus_card": "700000000000002"})

    names = [p["full_name"] for p in (await api("GET", "/api/pacientes", params={"search": "silva"})).json()]
    assert names == ["Maria da Silva"]

    by_card = (await api("GET", "/api/pacientes", params={"search": "7000000"})).json()
    assert [p["full_name"] for p in by_card] == ["Carlos Lima"]

    assert len((await api("GET", "/api/pacientes")).json()) == 2


async def test_patient_requires_name(api):
    response = await api("POST", "/api/pacientes", json={"cpf": "000"})
    assert response.status_code == 400
    assert "full_name" in response.json()["details"]


async def test_exam_filters_and_patient_name(api, patient):
    await _create_exam(api, patient.id, "Hemograma", "Agendado")
    await _create_exam(api, patient.id, "Glicemia de jejum", "Realizado")

    all_exams = (await api("GET", "/api/exames", params={"pacienteId": patient.id})).json()
    assert len(all_exams) == 2
    assert {e["patient_name"] for e in all_exams} == {"Maria da Silva"}

    scheduled = (await api("GET", "/api/exames", params={"status": "Agendado"})).json()
    assert [e["exam_type"] for e in scheduled] == ["Hemograma"]

    by_type = (await api("GET", "/api/exames", params={"tipoExame": "Glicemia de jejum"})).json()
    assert [e["status"] for e in by_type] == ["Realizado"]


async def test_exam_for_unknown_patient(api):
    response = await api("POST", "/api/exames", json={"patient_id": 4242, "exam_type": "Hemograma"})
    assert response.status_code == 404


async def test_pregnancy_flow(api, patient):
    response = await api(
        "POST",
        "/api/gestantes",
        json={"patient_id": patient.id, "last_period_date": "2024-01-10", "risk_classification": "alto"},
    )
    assert response.status_code == 201
    pregnancy = response.json()

    assert (await api("GET", f"/api/pacientes/{patient.id}")).json()["is_pregnant"] is True

    exam = await _create_exam(api, patient.id, "Ultrassom obstetrico")
    response = await api("POST", f"/api/gestantes/{pregnancy['id']}/exames", json={"exam_id": exam["id"]})
    assert response.status_code == 201
    link = response.json()
    assert link["is_completed"] is False

    response = await api("PUT", f"/api/gestantes/exames/{link['id']}", json={"is_completed": True})
    assert response.json()["is_completed"] is True

    detail = (await api("GET", f"/api/gestantes/{pregnancy['id']}")).json()
    assert detail["patient_name"] == "Maria da Silva"
    assert [(e["exam_type"], e["is_completed"]) for e in detail["exams"]] == [("Ultrassom obstetrico", True)]

    listed = (await api("GET", "/api/gestantes", params={"pacienteId": patient.id})).json()
    assert [p["id"] for p in listed] == [pregnancy["id"]]


async def test_pregnancy_for_unknown_patient(api):
    response = await api("POST", "/api/gestantes", json={"patient_id": 999})
    assert response.status_code == 404


async def test_chronic_flow(api, patient):
    response = await api(
        "POST",
        "/api/cronicos",
        json={"patient_id": patient.id, "condition_type": "hypertension", "medications": "losartana"},
    )
    assert response.status_code == 201
    monitoring = response.json()

    stored = (await api("GET", f"/api/pacientes/{patient.id}")).json()
    assert stored["is_hypertensive"] is True
    assert stored["is_diabetic"] is False

    base = f"/api/cronicos/{monitoring['id']}"
    response = await api("POST", f"{base}/pressao-arterial", json={"measurement_date": "2024-04-01", "systolic": 150, "diastolic": 95})
    assert response.status_code == 201
    response = await api("POST", f"{base}/glicemia", json={"measurement_date": "2024-04-01", "glucose_level": 110.5})
    assert response.status_code == 201

    assert len((await api("GET", f"{base}/pressao-arterial")).json()) == 1
    assert (await api("GET", f"{base}/glicemia")).json()[0]["glucose_level"] == 110.5

    filtered = (await api("GET", "/api/cronicos", params={"tipoCondicao": "diabetes"})).json()
    assert filtered == []


async def test_chronic_rejects_unknown_condition(api, patient, count_rows):
    response = await api("POST", "/api/cronicos", json={"patient_id": patient.id, "condition_type": "asthma"})
    assert response.status_code == 400
    assert "condition_type" in response.json()["details"]
    assert await count_rows(ChronicMonitoring) == 0


async def test_blood_pressure_for_unknown_monitoring(api):
    response = await api(
        "POST",
        "/api/cronicos/77/pressao-arterial",
        json={"measurement_date": "2024-04-01", "systolic": 120, "diastolic": 80},
    )
    assert response.status_code == 404


async def test_appointments(api, patient):
    response = await api(
        "POST",
        "/api/consultas",
        json={"patient_id": patient.id, "appointment_date": "2024-06-10T09:00:00", "appointment_type": "Pre-natal", "status": "Agendada"},
    )
    assert response.status_code == 201
    appointment = response.json()
    assert appointment["patient_name"] == "Maria da Silva"

    response = await api("PUT", f"/api/consultas/{appointment['id']}", json={"status": "Realizada"})
    assert response.json()["status"] == "Realizada"

    assert len((await api("GET", "/api/consultas", params={"status": "Realizada"})).json()) == 1
    assert (await api("DELETE", f"/api/consultas/{appointment['id']}")).status_code == 200
    assert (await api("GET", f"/api/consultas/{appointment['id']}")).status_code == 404


async def test_summary_report(api, patient):
    await api("POST", "/api/cronicos", json={"patient_id": patient.id, "condition_type": "diabetes"})
    await _create_exam(api, patient.id, "Hemograma", "Agendado")
    await _create_exam(api, patient.id, "Urina", "Marcado")
    await _create_exam(api, patient.id, "TSH", "Realizado")

    summary = (await api("GET", "/api/relatorios/resumo")).json()
    assert summary == {
        "total_patients": 1,
        "pregnant_patients": 0,
        "hypertensive_patients": 0,
        "diabetic_patients": 1,
        "pending_exams": 2,
    }


async def test_alerts_report(api, patient):
    await api("POST", "/api/gestantes", json={"patient_id": patient.id, "risk_classification": "alto"})
    monitoring = (
        await api("POST", "/api/cronicos", json={"patient_id": patient.id, "condition_type": "hypertension"})
    ).json()
    base = f"/api/cronicos/{monitoring['id']}"
    await api("POST", f"{base}/pressao-arterial", json={"measurement_date": "2024-03-01", "systolic": 160, "diastolic": 100})
    await api("POST", f"{base}/pressao-arterial", json={"measurement_date": "2024-04-01", "systolic": 145, "diastolic": 85})
    await api("POST", f"{base}/pressao-arterial", json={"measurement_date": "2024-05-01", "systolic": 120, "diastolic": 80})
    await api("POST", f"{base}/glicemia", json={"measurement_date": "2024-05-01", "glucose_level": 250})
    await api("POST", f"{base}/glicemia", json={"measurement_date": "2024-05-02", "glucose_level": 95})

    alerts = (await api("GET", "/api/relatorios/alertas")).json()

    assert [a["patient_name"] for a in alerts["high_risk_pregnancies"]] == ["Maria da Silva"]
    # One entry per patient: the most recent out-of-range reading
    assert len(alerts["high_blood_pressure"]) == 1
    assert alerts["high_blood_pressure"][0]["systolic"] == 145
    assert [g["glucose_level"] for g in alerts["high_glucose"]] == [250]


async def test_reports_require_token(client):
    assert (await client.get("/api/relatorios/resumo")).status_code == 401
