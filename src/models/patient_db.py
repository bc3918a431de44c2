from extensions import db

class Patient(db.Model):
    __tablename__ = "patients"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    surname = db.Column(db.String(100), nullable=False, default="")
    phone = db.Column(db.String(20))
    email = db.Column(db.String(100))
    dob = db.Column(db.Date)
    gender = db.Column(db.String(10))
    id_number = db.Column(db.String(20))
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.surname}".strip()

    def __repr__(self):
        return f"<Patient {self.id} {self.full_name}>"
