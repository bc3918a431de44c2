import logging

from flask import Blueprint, jsonify

from src.services.auth import require_token
from src.services.clinic_service import list_patients


logger = logging.getLogger("routes.patients")

patients_bp = Blueprint("patients", __name__, url_prefix="/api/patients")


@patients_bp.route("", methods=["GET"])
@require_token
def patients_list():
    try:
        return jsonify(list_patients())
    except Exception as e:
        logger.exception(f"[patients_list] Failed to fetch patients: {e}")
        return jsonify({"message": "Server error fetching patients"}), 500
