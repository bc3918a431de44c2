from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from flask import Flask
from jose import jwt

from src.app_factory import create_app
from extensions import db
from src.models import Patient, Appointment
from src.services.clinic_service import clinic_now


JWT_SECRET = "test-secret"


@pytest.fixture
def app(tmp_path) -> Flask:
    app = create_app({
        "TESTING": True,
        # Use sqlite file for stability across threads
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'test_clinic.db'}",
        "JWT_SECRET": JWT_SECRET,
        "CLINIC_TIMEZONE": "Africa/Johannesburg",
        "CORS_ORIGINS": ["http://localhost:8080"],
    })
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app: Flask):
    return app.test_client()


@pytest.fixture
def auth_headers():
    token = jwt.encode(
        {"sub": "nurse-1", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        JWT_SECRET,
        algorithm="HS256",
    )
    return {"Authorization": f"Bearer {token}"}


def _today_at(hour: int, minute: int = 0) -> datetime:
    return datetime.combine(clinic_now().date(), datetime.min.time()) + timedelta(hours=hour, minutes=minute)


@pytest.fixture
def today_at(app):
    """Build a clinic-local time today."""
    return _today_at


@pytest.fixture
def make_patient(app):
    def _make(name="Thandi", surname="Nkosi", **kwargs):
        patient = Patient(name=name, surname=surname, **kwargs)
        db.session.add(patient)
        db.session.commit()
        return patient
    return _make


@pytest.fixture
def make_appointment(app, make_patient):
    def _make(patient=None, start_time=None, status="InPatient", **kwargs):
        patient = patient or make_patient()
        fields = dict(
            service_name="General Consultation",
            service_price=Decimal("450.00"),
            final_price=Decimal("400.00"),
            payment_method="Medical Aid",
            medical_aid_name="Discovery Health",
            medical_aid_number="DH0012345",
            medical_aid_main_member="S Nkosi",
            main_member_id_no="8001015009087",
            medical_aid_option="Classic Saver",
            user_id=7,
            is_student=True,
        )
        fields.update(kwargs)
        appt = Appointment(
            patient_id=patient.id,
            start_time=start_time or _today_at(9),
            status=status,
            **fields,
        )
        db.session.add(appt)
        db.session.commit()
        return appt
    return _make
