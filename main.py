import os

from src.app_factory import create_app


if __name__ == "__main__":
    """
    Entrypoint for the nurse portal API (development server).
    Use a WSGI server (e.g. `flask --app src.app_factory:create_app run`) elsewhere.
    """
    app = create_app()
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", 5000)), debug=app.config.get("DEBUG", False))
