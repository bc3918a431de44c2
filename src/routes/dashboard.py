import logging

from flask import Blueprint, jsonify

from src.services.auth import require_token
from src.services.clinic_service import get_dashboard_snapshot


logger = logging.getLogger("routes.dashboard")

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api/dashboard")


@dashboard_bp.route("", methods=["GET"])
@require_token
def dashboard_home():
    """
    Nurse dashboard: today's status counts and the first page of
    today's appointments.
    """
    try:
        return jsonify(get_dashboard_snapshot())
    except Exception as e:
        logger.exception(f"[dashboard_home] Dashboard fetch error: {e}")
        return jsonify({"message": "Server error fetching dashboard stats"}), 500
