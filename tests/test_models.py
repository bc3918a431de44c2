from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy import text

from extensions import db
from src.models import Appointment, AppointmentStatus


@pytest.mark.parametrize("raw", ["InPatient", " inpatient ", "INPATIENT", AppointmentStatus.IN_PATIENT])
def test_status_is_normalised_on_write(app, make_appointment, raw):
    appt = make_appointment(status=raw)

    stored = db.session.execute(
        text("SELECT status FROM appointments WHERE id = :id"), {"id": appt.id}
    ).scalar_one()
    assert stored == "InPatient"
    assert db.session.get(Appointment, appt.id).status is AppointmentStatus.IN_PATIENT


def test_unknown_status_is_rejected(app):
    with pytest.raises(ValueError):
        Appointment(patient_id=1, start_time=datetime(2026, 10, 19, 9), status="Walk-in")


def test_bounded_fields_are_truncated(app):
    appt = Appointment(
        patient_id=1,
        start_time=datetime(2026, 10, 19, 9),
        medical_aid_name="M" * 80,
        payment_method="",
    )

    assert appt.medical_aid_name == "M" * 50
    assert appt.payment_method is None


def test_follow_up_from_copies_booking_details(app, make_appointment):
    original = make_appointment(status="OutPatient", is_student=False)
    when = datetime(2026, 11, 2, 10, 0)

    follow_up = Appointment.follow_up_from(original, when)

    assert follow_up.id is None
    assert follow_up.patient_id == original.patient_id
    assert follow_up.start_time == when
    assert follow_up.status is AppointmentStatus.IN_PATIENT
    assert follow_up.is_follow_up is True
    assert follow_up.is_student is False
    assert follow_up.final_price == Decimal("400.00")
    assert follow_up.medical_aid_option == "Classic Saver"


def test_patient_full_name(app, make_patient):
    assert make_patient(name="Lerato", surname="Mokoena").full_name == "Lerato Mokoena"
