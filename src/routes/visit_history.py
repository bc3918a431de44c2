import logging

from flask import Blueprint, jsonify

from src.services.clinic_service import get_visit_history


logger = logging.getLogger("routes.visit_history")

visit_history_bp = Blueprint("visit_history", __name__, url_prefix="/api/visitHistory")


@visit_history_bp.route("/<int:patient_id>", methods=["GET"])
def patient_visit_history(patient_id: int):
    """All visits for a patient, most recent first."""
    try:
        return jsonify(get_visit_history(patient_id))
    except Exception as e:
        logger.exception(f"[patient_visit_history] Failed for patient_id={patient_id}: {e}")
        return jsonify({"message": "Server error fetching visit history"}), 500
