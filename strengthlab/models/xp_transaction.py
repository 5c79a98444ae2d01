import enum

from strengthlab.clock import utcnow
from strengthlab.extensions import db


class XpSource(str, enum.Enum):
    SESSION_COMPLETE = "session_complete"
    TESTING_COMPLETE = "testing_complete"
    WEEK_COMPLETE = "week_complete"
    TRAINING_AND_TESTING = "training_and_testing"
    MONTH_COMPLETE = "month_complete"


XP_SOURCE_LABELS = {
    XpSource.SESSION_COMPLETE.value: "Training Session Completed",
    XpSource.TESTING_COMPLETE.value: "Testing Session Completed",
    XpSource.WEEK_COMPLETE.value: "Weekly Training Bonus",
    XpSource.TRAINING_AND_TESTING.value: "Training and Testing Bonus",
    XpSource.MONTH_COMPLETE.value: "Monthly Training Bonus",
}


def format_xp_source(source):
    source = getattr(source, "value", source)
    return XP_SOURCE_LABELS.get(source, source.replace("_", " ").capitalize())


class XpTransaction(db.Model):
    """Append-only XP ledger entry. Rows are never updated or deleted."""

    __tablename__ = "xp_transactions"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    xp_amount = db.Column(db.Integer, nullable=False)
    xp_source = db.Column(db.String(50), nullable=False, index=True)
    # bonus window the grant belongs to, e.g. the Monday of a calendar week
    window_key = db.Column(db.String(32), nullable=True)
    transaction_date = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)

    user = db.relationship("User", back_populates="xp_transactions")

    __table_args__ = (
        db.UniqueConstraint("user_id", "xp_source", "window_key", name="uq_xp_transactions_window"),
        db.CheckConstraint("xp_amount > 0", name="ck_xp_transactions_amount"),
        db.Index("idx_xp_transactions_user_source_date", "user_id", "xp_source", "transaction_date"),
    )

    @property
    def label(self):
        return format_xp_source(self.xp_source)

    def to_dict(self):
        return {
            'amount': self.xp_amount,
            'source': self.label,
            'date': self.transaction_date.strftime("%Y-%m-%d %H:%M:%S"),
        }
