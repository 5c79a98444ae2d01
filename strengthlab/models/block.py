import math

from strengthlab.extensions import db


class Block(db.Model):
    """A multi-week training period. Program setup enforces the 12 weeks."""

    __tablename__ = "blocks"

    id = db.Column(db.Integer, primary_key=True)
    block_number = db.Column(db.Integer, nullable=False, unique=True)
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)

    sessions = db.relationship(
        "TrainingSession",
        back_populates="block",
        order_by="TrainingSession.week_number",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        db.CheckConstraint("end_date > start_date", name="ck_block_dates"),
    )

    @property
    def name(self):
        return f"Block {self.block_number}"

    @property
    def duration_in_weeks(self):
        return math.ceil(((self.end_date - self.start_date).days + 1) / 7)

    def contains(self, day):
        return self.start_date <= day <= self.end_date
