from typing import Optional
import logging

from flask import Blueprint, jsonify, request
from pydantic import BaseModel, Field, ValidationError, field_validator

from src.services.clinic_service import get_todays_attendable_bookings, get_visit_for_appointment
from src.services.exceptions import ClinicError
from src.services.visit_service import record_visit


logger = logging.getLogger("routes.attend_booking")

attend_booking_bp = Blueprint("attend_booking", __name__, url_prefix="/api/attendBooking")


class VisitRecordRequest(BaseModel):
    appointID: int = Field(..., gt=0, description="Appointment being attended")
    examination: Optional[str] = None
    history: Optional[str] = None
    diagnoses: Optional[str] = None
    treatment: Optional[str] = None
    healthEducation: Optional[str] = None
    followUpPlan: Optional[str] = Field(None, description="ISO datetime of the follow-up booking")

    @field_validator(
        "examination", "history", "diagnoses", "treatment", "healthEducation", "followUpPlan",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


def _validation_errors(e: ValidationError):
    return [
        {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
        for err in e.errors()
    ]


@attend_booking_bp.route("/today", methods=["GET"])
def todays_bookings():
    """Today's InPatient bookings waiting to be attended."""
    try:
        return jsonify(get_todays_attendable_bookings())
    except Exception as e:
        logger.exception(f"[todays_bookings] Failed to fetch today's bookings: {e}")
        return jsonify({"message": "Failed to fetch today's bookings"}), 500


@attend_booking_bp.route("/<int:appoint_id>/visit", methods=["GET"])
def appointment_visit(appoint_id: int):
    try:
        return jsonify(get_visit_for_appointment(appoint_id))
    except Exception as e:
        logger.exception(f"[appointment_visit] Failed for appoint_id={appoint_id}: {e}")
        return jsonify({"message": "Failed to fetch visit info"}), 500


@attend_booking_bp.route("", methods=["POST"])
def save_visit():
    """
    Record (or update) the visit for an appointment and mark it attended.
    A followUpPlan datetime also books the follow-up appointment.
    """
    try:
        payload = VisitRecordRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        logger.warning(f"[save_visit] validation_failed error={e}")
        return jsonify({"message": "Invalid visit payload", "errors": _validation_errors(e)}), 400

    try:
        record_visit(
            payload.appointID,
            examination=payload.examination,
            history=payload.history,
            diagnoses=payload.diagnoses,
            treatment=payload.treatment,
            health_education=payload.healthEducation,
            follow_up_plan=payload.followUpPlan,
        )
    except ClinicError as e:
        logger.warning(f"[save_visit] appointID={payload.appointID} rejected: {e.message}")
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logger.exception(f"[save_visit] Failed to record visit for appointID={payload.appointID}: {e}")
        return jsonify({"message": "Failed to record visit or create follow-up"}), 500

    return jsonify({"success": True, "message": "Visit recorded successfully"})
