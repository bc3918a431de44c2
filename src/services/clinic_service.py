from datetime import datetime, timedelta
from decimal import Decimal
import logging

from flask import current_app
from sqlalchemy import func
import pytz

from extensions import db
from src.models import Patient, Appointment, AppointmentStatus, Visit


logger = logging.getLogger("clinic_service")

UNKNOWN_PATIENT = "Unknown Patient"


# -------------------------------
# 🕒 CLINIC CLOCK
# -------------------------------

def clinic_timezone():
    """Timezone the clinic's wall clock (and "today") is measured in."""
    name = current_app.config.get("CLINIC_TIMEZONE", "UTC")
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        logger.warning(f"[clinic_timezone] Unknown timezone {name!r}, falling back to UTC")
        return pytz.UTC


def clinic_now() -> datetime:
    """Current clinic-local time as a naive datetime (how times are stored)."""
    return datetime.now(clinic_timezone()).replace(tzinfo=None)


def to_clinic_time(value: datetime) -> datetime:
    """Convert an aware datetime to naive clinic-local time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone(clinic_timezone()).replace(tzinfo=None)


def today_bounds():
    start = datetime.combine(clinic_now().date(), datetime.min.time())
    return start, start + timedelta(days=1)


def _iso(value):
    return value.isoformat() if value else None


def _number(value):
    if value is None:
        return None
    return float(value) if isinstance(value, Decimal) else value


def _todays_appointments():
    start, end = today_bounds()
    return (
        Appointment.query
        .filter(Appointment.start_time >= start)
        .filter(Appointment.start_time < end)
    )


# -------------------------------
# 📅 ATTEND BOOKING
# -------------------------------

def get_todays_attendable_bookings():
    """Today's appointments still waiting to be attended, earliest first."""
    start, end = today_bounds()
    rows = (
        db.session.query(Appointment, Patient)
        .outerjoin(Patient, Appointment.patient_id == Patient.id)
        .filter(Appointment.start_time >= start)
        .filter(Appointment.start_time < end)
        .filter(Appointment.status == AppointmentStatus.IN_PATIENT)
        .order_by(Appointment.start_time.asc())
        .all()
    )
    return [_booking_payload(appt, patient) for appt, patient in rows]


def _booking_payload(appt: Appointment, patient: Patient | None) -> dict:
    return {
        "AppointID": appt.id,
        "PatientID": appt.patient_id,
        "PatientName": getattr(patient, "name", None),
        "PatientSurname": getattr(patient, "surname", None),
        "StartTime": _iso(appt.start_time),
        "Status": appt.status.value,
        "MedicalAidNumber": appt.medical_aid_number,
        "MedicalAidName": appt.medical_aid_name,
        "ServiceName": appt.service_name,
        "ServicePrice": _number(appt.service_price),
        "UserID": appt.user_id,
        "MedicalAid_MainMember": appt.medical_aid_main_member,
        "MainMember__IDNo": appt.main_member_id_no,
        "MedicalAid_option": appt.medical_aid_option,
        "PaymentMethod": appt.payment_method,
        "FinalPrice": _number(appt.final_price),
        "IsStudent": bool(appt.is_student),
        "isFollow_Up": "Yes" if appt.is_follow_up else "No",
    }


def get_visit_for_appointment(appointment_id: int):
    visit = Visit.query.filter_by(appointment_id=appointment_id).first()
    if not visit:
        return None
    return visit_payload(visit)


def visit_payload(visit: Visit) -> dict:
    return {
        "VisitID": visit.id,
        "AppointID": visit.appointment_id,
        "Examination": visit.examination,
        "History": visit.history,
        "Diagnoses": visit.diagnoses,
        "Treatment": visit.treatment,
        "Health_Education": visit.health_education,
        "FollowUp_Plan": visit.follow_up_plan,
        "endTime": _iso(visit.end_time),
    }


# -------------------------------
# 📊 DASHBOARD
# -------------------------------

def get_dashboard_snapshot():
    """
    Aggregate data for the nurse dashboard:
    - Counts of today's appointments per status bucket
    - The first page of today's appointments (with patient name)
    """
    limit = current_app.config.get("DASHBOARD_LIMIT", 50)

    status_counts = dict(
        _todays_appointments()
        .with_entities(Appointment.status, func.count(Appointment.id))
        .group_by(Appointment.status)
        .all()
    )

    todays_appointments = (
        _todays_appointments()
        .order_by(Appointment.start_time.asc())
        .limit(limit)
        .all()
    )

    today_payload = []
    for appt in todays_appointments:
        patient_obj = appt.patient
        today_payload.append(
            {
                "AppointID": appt.id,
                "PatientID": appt.patient_id,
                "PatientName": patient_obj.full_name if patient_obj else UNKNOWN_PATIENT,
                "StartTime": _iso(appt.start_time),
                "EndTime": _iso(appt.end_time),
                "Status": appt.status.value,
                "ServiceName": appt.service_name,
            }
        )

    return {
        "todayAppointments": today_payload,
        "inPatient": status_counts.get(AppointmentStatus.IN_PATIENT, 0),
        "outPatient": status_counts.get(AppointmentStatus.OUT_PATIENT, 0),
        "pending": (
            status_counts.get(AppointmentStatus.PENDING, 0)
            + status_counts.get(AppointmentStatus.SCHEDULED, 0)
        ),
        "totalAppointments": sum(status_counts.values()),
    }


# -------------------------------
# 👤 PATIENTS
# -------------------------------

def list_patients():
    patients = Patient.query.order_by(Patient.name.asc()).all()
    return [
        {
            "id": p.id,
            "name": p.name,
            "surname": p.surname,
            "phone": p.phone,
            "email": p.email,
            "dob": _iso(p.dob),
            "gender": p.gender,
        }
        for p in patients
    ]


def get_visit_history(patient_id: int):
    """Every recorded visit for a patient, most recent first."""
    rows = (
        db.session.query(Visit, Patient)
        .join(Appointment, Visit.appointment_id == Appointment.id)
        .join(Patient, Appointment.patient_id == Patient.id)
        .filter(Patient.id == patient_id)
        .order_by(Visit.end_time.desc())
        .all()
    )
    return [
        {
            "visitId": v.id,
            "appointId": v.appointment_id,
            "examination": v.examination,
            "history": v.history,
            "diagnoses": v.diagnoses,
            "treatment": v.treatment,
            "healthEducation": v.health_education,
            "followUpPlan": v.follow_up_plan,
            "endTime": _iso(v.end_time),
            "patientName": f"{p.name} {p.surname}",
        }
        for v, p in rows
    ]
