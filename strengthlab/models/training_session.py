import enum
from dataclasses import dataclass
from typing import Optional

from strengthlab.clock import utcnow
from strengthlab.extensions import db


class SessionType(str, enum.Enum):
    TRAINING = "training"
    TESTING = "testing"
    REST = "rest"


@dataclass(frozen=True)
class SessionKind:
    """What a session is: ``Training(ordinal)``, ``Testing`` or ``Rest``."""

    type: SessionType
    ordinal: Optional[int] = None

    @classmethod
    def training(cls, ordinal):
        return cls(SessionType.TRAINING, ordinal)

    @classmethod
    def testing(cls):
        return cls(SessionType.TESTING)

    @classmethod
    def rest(cls):
        return cls(SessionType.REST)

    @property
    def is_training(self):
        return self.type is SessionType.TRAINING

    @property
    def is_testing(self):
        return self.type is SessionType.TESTING

    @property
    def is_rest(self):
        return self.type is SessionType.REST


class TrainingSession(db.Model):
    __tablename__ = "training_sessions"

    id = db.Column(db.Integer, primary_key=True)
    block_id = db.Column(db.Integer, db.ForeignKey("blocks.id", ondelete="CASCADE"), nullable=False, index=True)
    week_number = db.Column(db.Integer, nullable=False)
    # ordinal within the week, training sessions only
    session_number = db.Column(db.Integer, nullable=True)
    session_type = db.Column(
        db.String(20),
        db.CheckConstraint("session_type IN ('training','testing','rest')"),
        nullable=False,
        index=True,
    )
    release_date = db.Column(db.Date, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, index=True)

    block = db.relationship("Block", back_populates="sessions")
    training_results = db.relationship("TrainingResult", back_populates="session", lazy="dynamic", cascade="all, delete-orphan")
    test_results = db.relationship("TestResult", back_populates="session", lazy="dynamic", cascade="all, delete-orphan")

    __table_args__ = (
        db.Index("idx_training_sessions_block_week", "block_id", "week_number"),
        db.CheckConstraint("week_number >= 1", name="ck_training_sessions_week"),
    )

    @property
    def kind(self) -> SessionKind:
        session_type = SessionType(self.session_type)
        if session_type is SessionType.TRAINING:
            return SessionKind.training(self.session_number)
        if session_type is SessionType.TESTING:
            return SessionKind.testing()
        return SessionKind.rest()
