from src.models.patient_db import Patient
from src.models.appointments_db import Appointment, AppointmentStatus
from src.models.visit_db import Visit

__all__ = ["Patient", "Appointment", "AppointmentStatus", "Visit"]
