"""
Demo data for local development.

Creates the sample patients the nurse portal UI was designed against and a
day of bookings for *today* (clinic time), so every screen has something to
show. Patients are only inserted when the table is empty; ``flush`` clears
visits and appointments first.
"""
from datetime import date, datetime, timedelta
from decimal import Decimal
import logging

from src.models import Patient, Appointment, AppointmentStatus, Visit
from src.services.clinic_service import clinic_now
from src.services.db_context import transaction
from src.services.visit_service import record_visit


logger = logging.getLogger("seed_service")

DEMO_PATIENTS = [
    ("John", "Doe", date(1990, 5, 15), "M", "0821234567", "john@email.com", "9005155012089"),
    ("Jane", "Smith", date(1985, 8, 22), "F", "0829876543", "jane@email.com", "8508220087089"),
    ("Michael", "Brown", date(1978, 12, 3), "M", "0834567890", "michael@email.com", "7812035123083"),
    ("Emily", "Wilson", date(1995, 3, 18), "F", "0847654321", "emily@email.com", "9503180456082"),
    ("David", "Taylor", date(1982, 7, 9), "M", "0856789012", "david@email.com", "8207095789087"),
]

# (patient index, minutes after 09:00, status)
DEMO_SCHEDULE = [
    (0, 0, AppointmentStatus.IN_PATIENT),
    (1, 30, AppointmentStatus.PENDING),
    (2, 60, AppointmentStatus.IN_PATIENT),
    (3, 90, AppointmentStatus.OUT_PATIENT),  # booked InPatient, then attended
    (4, 120, AppointmentStatus.SCHEDULED),
]


def seed_demo_data(flush: bool = False) -> dict:
    stats = {
        "patients": 0, "appointments": 0, "visits": 0,
        "deleted_visits": 0, "deleted_appointments": 0,
    }
    attended = []

    with transaction() as session:
        if flush:
            stats["deleted_visits"] = Visit.query.delete()
            stats["deleted_appointments"] = Appointment.query.delete()

        patients = Patient.query.order_by(Patient.id.asc()).all()
        if not patients:
            for name, surname, dob, gender, phone, email, id_number in DEMO_PATIENTS:
                session.add(Patient(
                    name=name, surname=surname, dob=dob, gender=gender,
                    phone=phone, email=email, id_number=id_number,
                ))
            session.flush()
            patients = Patient.query.order_by(Patient.id.asc()).all()
            stats["patients"] = len(patients)

        morning = datetime.combine(clinic_now().date(), datetime.min.time()) + timedelta(hours=9)
        for index, offset, status in DEMO_SCHEDULE:
            patient = patients[index % len(patients)]
            appt = Appointment(
                patient_id=patient.id,
                start_time=morning + timedelta(minutes=offset),
                status=AppointmentStatus.IN_PATIENT if status is AppointmentStatus.OUT_PATIENT else status,
                service_name="General Consultation",
                service_price=Decimal("450.00"),
                final_price=Decimal("450.00"),
                payment_method="Medical Aid" if index % 2 == 0 else "Cash",
                medical_aid_name="Discovery" if index % 2 == 0 else None,
                medical_aid_number=f"DH{patient.id:07d}" if index % 2 == 0 else None,
            )
            session.add(appt)
            if status is AppointmentStatus.OUT_PATIENT:
                attended.append(appt)
            stats["appointments"] += 1
        session.flush()
        attended_ids = [appt.id for appt in attended]

    # OutPatient only ever comes from a recorded visit
    for appointment_id in attended_ids:
        record_visit(
            appointment_id,
            examination="BP 120/80, temperature 36.5C, heart rate 72 bpm",
            diagnoses="Upper respiratory tract infection",
            treatment="Paracetamol 500mg, rest and fluids",
        )
        stats["visits"] += 1

    logger.info(f"[seed_demo_data] {stats}")
    return stats
