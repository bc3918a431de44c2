from dataclasses import dataclass
from datetime import datetime
import logging

from src.models import Appointment, AppointmentStatus, Visit
from src.services.clinic_service import clinic_now, to_clinic_time
from src.services.db_context import transaction
from src.services.exceptions import AppointmentNotFound, InvalidFollowUpDate


logger = logging.getLogger("visit_service")

VISIT_FIELDS = (
    "examination",
    "history",
    "diagnoses",
    "treatment",
    "health_education",
    "follow_up_plan",
)


@dataclass
class VisitOutcome:
    visit: Visit
    created: bool
    follow_up: Appointment | None = None


def parse_follow_up(raw) -> datetime:
    """Parse an ISO-8601 follow-up value (e.g. ``2026-10-26T09:30:00.000Z``) to clinic time."""
    if isinstance(raw, datetime):
        return to_clinic_time(raw)
    try:
        value = datetime.fromisoformat(str(raw).strip())
    except ValueError as e:
        raise InvalidFollowUpDate(raw) from e
    return to_clinic_time(value)


def record_visit(appointment_id: int, **fields) -> VisitOutcome:
    """
    Record the clinical notes for an attended appointment.

    - Creates the appointment's visit, or updates it if one already exists.
    - Marks the appointment OutPatient.
    - When ``follow_up_plan`` is given it must be a datetime, and a follow-up
      booking is created for it.

    Everything happens in one transaction: any failure leaves no trace.
    """
    unknown = set(fields) - set(VISIT_FIELDS)
    if unknown:
        raise TypeError(f"Unexpected visit fields: {sorted(unknown)}")

    # Blank strings are stored as NULL
    values = {name: (fields.get(name) or None) for name in VISIT_FIELDS}
    now = clinic_now()

    with transaction() as session:
        appt = session.get(Appointment, appointment_id, with_for_update=True)
        if appt is None:
            raise AppointmentNotFound(appointment_id)

        visit = Visit.query.filter_by(appointment_id=appointment_id).first()
        created = visit is None
        if created:
            visit = Visit(appointment_id=appointment_id)
            session.add(visit)

        for name, value in values.items():
            setattr(visit, name, value)
        visit.end_time = now

        appt.status = AppointmentStatus.OUT_PATIENT

        follow_up = None
        if values["follow_up_plan"]:
            session.flush()
            original = session.get(Appointment, appointment_id, populate_existing=True)
            # Unreachable while the row lock above holds; kept for dialects without FOR UPDATE
            if original is None:
                raise AppointmentNotFound(appointment_id)

            start_time = parse_follow_up(values["follow_up_plan"])
            follow_up = Appointment.follow_up_from(original, start_time)
            session.add(follow_up)

    logger.info(
        f"[record_visit] appointment_id={appointment_id} "
        f"{'created' if created else 'updated'} visit_id={visit.id}"
        + (f" follow_up_id={follow_up.id} at {follow_up.start_time.isoformat()}" if follow_up else "")
    )
    return VisitOutcome(visit=visit, created=created, follow_up=follow_up)
