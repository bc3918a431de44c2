from datetime import datetime, timedelta, timezone

from jose import jwt


def test_dashboard_requires_token(client):
    res = client.get("/api/dashboard")

    assert res.status_code == 401
    assert res.get_json() == {"message": "Missing token"}


def test_dashboard_rejects_bearer_without_token(client):
    res = client.get("/api/dashboard", headers={"Authorization": "Bearer"})

    assert res.status_code == 401
    assert res.get_json() == {"message": "Missing token"}


def test_dashboard_rejects_bad_signature(client):
    token = jwt.encode({"sub": "nurse-1"}, "someone-else", algorithm="HS256")

    res = client.get("/api/dashboard", headers={"Authorization": f"Bearer {token}"})

    assert res.status_code == 401
    assert res.get_json() == {"message": "Invalid token"}


def test_dashboard_rejects_expired_token(client):
    token = jwt.encode(
        {"sub": "nurse-1", "exp": datetime.now(timezone.utc) - timedelta(minutes=5)},
        "test-secret",
        algorithm="HS256",
    )

    res = client.get("/api/dashboard", headers={"Authorization": f"Bearer {token}"})

    assert res.status_code == 401
    assert res.get_json() == {"message": "Invalid token"}


def test_dashboard_counts_todays_buckets(client, auth_headers, make_patient, make_appointment, today_at):
    sipho = make_patient(name="Sipho", surname="Khumalo")
    make_appointment(patient=sipho, start_time=today_at(8), status="InPatient")
    make_appointment(start_time=today_at(9), status="InPatient")
    make_appointment(start_time=today_at(10), status="OutPatient")
    make_appointment(start_time=today_at(11), status="Pending")
    make_appointment(start_time=today_at(12), status="Scheduled")
    make_appointment(start_time=today_at(13), status="Cancelled")
    make_appointment(start_time=today_at(9) - timedelta(days=1), status="InPatient")

    res = client.get("/api/dashboard", headers=auth_headers)

    assert res.status_code == 200
    body = res.get_json()
    assert body["inPatient"] == 2
    assert body["outPatient"] == 1
    assert body["pending"] == 2
    assert body["totalAppointments"] == 6
    assert len(body["todayAppointments"]) == 6
    first = body["todayAppointments"][0]
    assert first["PatientName"] == "Sipho Khumalo"
    assert first["Status"] == "InPatient"
    assert first["StartTime"].endswith("08:00:00")
    starts = [a["StartTime"] for a in body["todayAppointments"]]
    assert starts == sorted(starts)


def test_dashboard_limits_listed_appointments(app, client, auth_headers, make_appointment, today_at):
    app.config["DASHBOARD_LIMIT"] = 2
    for hour in (8, 9, 10):
        make_appointment(start_time=today_at(hour), status="Pending")

    body = client.get("/api/dashboard", headers=auth_headers).get_json()

    assert len(body["todayAppointments"]) == 2
    assert body["totalAppointments"] == 3
    assert body["pending"] == 3


def test_dashboard_empty_day(client, auth_headers):
    body = client.get("/api/dashboard", headers=auth_headers).get_json()

    assert body == {
        "todayAppointments": [],
        "inPatient": 0,
        "outPatient": 0,
        "pending": 0,
        "totalAppointments": 0,
    }
