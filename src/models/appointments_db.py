import enum
from datetime import datetime, timezone

from sqlalchemy.orm import validates

from extensions import db


class AppointmentStatus(enum.Enum):
    PENDING = "Pending"
    SCHEDULED = "Scheduled"
    IN_PATIENT = "InPatient"
    OUT_PATIENT = "OutPatient"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"

    @classmethod
    def parse(cls, value):
        """Accept a member or free text like ' inpatient ' and return the member."""
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().upper()
        for member in cls:
            if member.value.upper() == key:
                return member
        raise ValueError(f"Unknown appointment status: {value!r}")


# Copied forward onto follow-up bookings
CARRIED_FIELDS = (
    "medical_aid_number",
    "medical_aid_name",
    "medical_aid_main_member",
    "main_member_id_no",
    "medical_aid_option",
    "service_name",
    "payment_method",
)


class Appointment(db.Model):
    __tablename__ = "appointments"

    id = db.Column(db.Integer, primary_key=True)
    patient_id = db.Column(db.Integer, db.ForeignKey('patients.id'), nullable=False)
    user_id = db.Column(db.Integer)
    start_time = db.Column(db.DateTime, nullable=False, index=True)
    end_time = db.Column(db.DateTime)
    status = db.Column(
        db.Enum(
            AppointmentStatus,
            native_enum=False,
            length=50,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=AppointmentStatus.PENDING,
    )
    service_name = db.Column(db.String(50))
    service_price = db.Column(db.Numeric(10, 2))
    final_price = db.Column(db.Numeric(10, 2))
    payment_method = db.Column(db.String(50))
    medical_aid_number = db.Column(db.String(50))
    medical_aid_name = db.Column(db.String(50))
    medical_aid_main_member = db.Column(db.String(50))
    main_member_id_no = db.Column(db.String(50))
    medical_aid_option = db.Column(db.String(50))
    is_student = db.Column(db.Boolean, nullable=False, default=False)
    is_follow_up = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc).replace(tzinfo=None))

    # Relationship back to Patient
    patient = db.relationship('Patient', backref=db.backref('appointments', lazy=True))

    @validates("status")
    def validate_status(self, key, value):
        return AppointmentStatus.parse(value)

    @validates(*CARRIED_FIELDS)
    def validate_bounded(self, key, value):
        # Bounded columns: cut to the column length, blank means NULL
        if value is None:
            return None
        limit = self.__table__.c[key].type.length
        return str(value)[:limit] or None

    @classmethod
    def follow_up_from(cls, original: "Appointment", start_time: datetime) -> "Appointment":
        """Build the follow-up booking for an attended appointment."""
        follow_up = cls(
            patient_id=original.patient_id,
            user_id=original.user_id,
            start_time=start_time,
            end_time=None,
            status=AppointmentStatus.IN_PATIENT,
            service_price=original.service_price,
            final_price=original.final_price,
            is_student=bool(original.is_student),
            is_follow_up=True,
        )
        for field in CARRIED_FIELDS:
            setattr(follow_up, field, getattr(original, field))
        return follow_up

    def __repr__(self):
        return f"<Appointment {self.id} patient={self.patient_id} status={self.status}>"
