from strengthlab.clock import utcnow
from strengthlab.extensions import db


class ProgressTracking(db.Model):
    __tablename__ = "progress_trackings"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    test_type = db.Column(db.String(50), nullable=False)
    baseline_value = db.Column(db.Numeric(6, 1, asdecimal=False), nullable=False)
    current_value = db.Column(db.Numeric(6, 1, asdecimal=False), nullable=False)
    percentage_increase = db.Column(db.Numeric(8, 2, asdecimal=False), nullable=True)
    last_updated = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    user = db.relationship("User", back_populates="progress")

    __table_args__ = (
        db.UniqueConstraint("user_id", "test_type", name="uq_progress_trackings_user_type"),
    )
