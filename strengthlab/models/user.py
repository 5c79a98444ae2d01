from strengthlab.clock import utcnow
from strengthlab.extensions import db

USERS_TABLE = "users"


class User(db.Model):
    __tablename__ = USERS_TABLE

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    role = db.Column(
        db.String(20),
        db.CheckConstraint("role IN ('student','admin')"),
        nullable=False,
        default="student",
        index=True,
    )
    created_at = db.Column(db.DateTime, default=utcnow)

    training_results = db.relationship("TrainingResult", back_populates="user", lazy="dynamic", cascade="all, delete-orphan")
    test_results = db.relationship("TestResult", back_populates="user", lazy="dynamic", cascade="all, delete-orphan")
    xp_transactions = db.relationship("XpTransaction", back_populates="user", lazy="dynamic", cascade="all, delete-orphan")
    progress = db.relationship("ProgressTracking", back_populates="user", lazy="dynamic", cascade="all, delete-orphan")
    stat = db.relationship("UserStat", back_populates="user", uselist=False, cascade="all, delete-orphan")

    # ------- helper properties -------
    @property
    def is_admin(self):
        return self.role == "admin"

    @property
    def is_student(self):
        return self.role == "student"

    def __repr__(self):
        return f"<User {self.id} {self.username}>"
