from models import db
from werkzeug.security import generate_password_hash, check_password_hash


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(100), nullable=False, unique=True)
    password_hash = db.Column(db.String(255), nullable=False)
    full_name = db.Column(db.String(100), nullable=False)
    display_name = db.Column(db.String(100), nullable=True)
    contact_number = db.Column(db.String(30), nullable=True)
    role = db.Column(db.String(20), nullable=False, default="student")  # 'student', 'teacher', 'admin'
    status = db.Column(db.String(20), nullable=False, default="active")  # 'active', 'inactive'
    date_created = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    courses = db.relationship("Course", back_populates="teacher")

    def set_password(self, password):
        """Hashes the password before storing."""
        self.password_hash = generate_password_hash(password, method="pbkdf2:sha256")

    def check_password(self, password):
        """Checks if a given password matches the stored hash."""
        return check_password_hash(self.password_hash, password)

    @property
    def is_active(self):
        return self.status == "active"

    def __repr__(self):
        return f"<User {self.email} ({self.role})>"

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "full_name": self.full_name,
            "display_name": self.display_name,
            "contact_number": self.contact_number,
            "role": self.role,
            "status": self.status,
            "date_created": self.date_created.isoformat() if self.date_created else None,
        }
