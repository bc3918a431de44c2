from functools import wraps
import logging

from flask import current_app, g, jsonify, request
from jose import JWTError, jwt


logger = logging.getLogger("auth")


def decode_token(token: str) -> dict:
    return jwt.decode(
        token,
        current_app.config["JWT_SECRET"],
        algorithms=[current_app.config.get("JWT_ALGORITHM", "HS256")],
    )


def require_token(view):
    """Reject the request with 401 unless it carries a valid bearer token.

    Decoded claims are available to the view as ``g.user``.
    """
    @wraps(view)
    def wrapper(*args, **kwargs):
        auth_header = request.headers.get("Authorization")
        if not auth_header:
            return jsonify({"message": "Missing token"}), 401

        parts = auth_header.split(" ")
        token = parts[1] if len(parts) > 1 else ""
        if not token:
            return jsonify({"message": "Missing token"}), 401

        try:
            g.user = decode_token(token)
        except JWTError as e:
            logger.warning(f"[require_token] rejected token on {request.path}: {e}")
            return jsonify({"message": "Invalid token"}), 401

        return view(*args, **kwargs)

    return wrapper
