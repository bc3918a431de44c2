"""
Domain exceptions raised by the clinic services.

Blueprints translate these to JSON responses using ``status_code`` and
``message``; anything else that escapes a service is treated as a server error.
"""


class ClinicError(Exception):
    status_code = 500
    message = "Clinic operation failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_dict(self) -> dict:
        return {"message": self.message}


class AppointmentNotFound(ClinicError):
    status_code = 404
    message = "Appointment not found"

    def __init__(self, appointment_id: int):
        self.appointment_id = appointment_id
        super().__init__(f"Appointment {appointment_id} not found")


class InvalidFollowUpDate(ClinicError):
    status_code = 400
    message = "Invalid follow-up datetime"

    def __init__(self, raw_value):
        self.raw_value = raw_value
        super().__init__(f"Invalid follow-up datetime: {raw_value!r}")
