from strengthlab.clock import utcnow
from strengthlab.extensions import db
from strengthlab.utils.numbers import is_filled

TRAINING_FIELDS = (
    "warmup_completed",
    "plyometrics_score",
    "power_score",
    "lower_body_strength_score",
    "upper_body_core_strength_score",
)


class TrainingResult(db.Model):
    __tablename__ = "training_results"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    session_id = db.Column(db.Integer, db.ForeignKey("training_sessions.id", ondelete="CASCADE"), nullable=False, index=True)

    warmup_completed = db.Column(db.String(20), default="NO")
    plyometrics_score = db.Column(db.String(50))
    power_score = db.Column(db.String(50))
    lower_body_strength_score = db.Column(db.String(50))
    upper_body_core_strength_score = db.Column(db.String(50))
    completed_at = db.Column(db.DateTime, default=utcnow)

    user = db.relationship("User", back_populates="training_results")
    session = db.relationship("TrainingSession", back_populates="training_results")

    __table_args__ = (
        db.UniqueConstraint("user_id", "session_id", name="uq_training_results_user_session"),
    )

    @property
    def is_complete(self):
        """Every one of the five fields carries a value; never partially credited."""
        return all(is_filled(getattr(self, field)) for field in TRAINING_FIELDS)
