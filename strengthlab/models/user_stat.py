from strengthlab.clock import utcnow
from strengthlab.extensions import db


class UserStat(db.Model):
    """Per-user rollup cache; recomputable from the ledger and results."""

    __tablename__ = "user_stats"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    total_xp = db.Column(db.Integer, nullable=False, default=0)
    strength_level = db.Column(db.Integer, nullable=False, default=1)
    sessions_completed = db.Column(db.Integer, nullable=False, default=0)
    sessions_available = db.Column(db.Integer, nullable=False, default=0)
    consistency_score = db.Column(db.Numeric(5, 2, asdecimal=False), nullable=False, default=0)
    last_updated = db.Column(db.DateTime, default=utcnow)

    user = db.relationship("User", back_populates="stat")

    __table_args__ = (
        db.CheckConstraint("consistency_score >= 0 AND consistency_score <= 100", name="ck_user_stats_consistency"),
        db.Index("idx_user_stats_strength", "strength_level", "total_xp"),
        db.Index("idx_user_stats_consistency", "consistency_score"),
    )

    def to_dict(self):
        return {
            'user_id': self.user_id,
            'total_xp': self.total_xp,
            'strength_level': self.strength_level,
            'sessions_completed': self.sessions_completed,
            'sessions_available': self.sessions_available,
            'consistency_score': self.consistency_score,
            'last_updated': self.last_updated.isoformat() if self.last_updated else None,
        }
