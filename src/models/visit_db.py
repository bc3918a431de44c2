from extensions import db


class Visit(db.Model):
    __tablename__ = "visits"

    id = db.Column(db.Integer, primary_key=True)
    appointment_id = db.Column(
        db.Integer, db.ForeignKey('appointments.id'), nullable=False, unique=True
    )
    examination = db.Column(db.Text)
    history = db.Column(db.Text)
    diagnoses = db.Column(db.Text)
    treatment = db.Column(db.Text)
    health_education = db.Column(db.Text)
    follow_up_plan = db.Column(db.Text)
    end_time = db.Column(db.DateTime)

    appointment = db.relationship(
        'Appointment', backref=db.backref('visit', uselist=False, lazy=True)
    )

    def __repr__(self):
        return f"<Visit {self.id} appointment={self.appointment_id}>"
