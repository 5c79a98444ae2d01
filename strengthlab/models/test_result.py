from strengthlab.clock import utcnow
from strengthlab.extensions import db
from strengthlab.utils.numbers import is_filled

# bent arm hang is a bonus assessment and does not count towards completeness
REQUIRED_TEST_FIELDS = (
    "standing_long_jump",
    "single_leg_jump_left",
    "single_leg_jump_right",
    "wall_sit_assessment",
    "high_plank_assessment",
)
TEST_METRICS = REQUIRED_TEST_FIELDS + ("bent_arm_hang_assessment",)


def _measurement():
    return db.Column(db.Numeric(6, 1, asdecimal=False), nullable=True)


class TestResult(db.Model):
    __tablename__ = "test_results"
    __test__ = False  # keep pytest from collecting the model

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    session_id = db.Column(db.Integer, db.ForeignKey("training_sessions.id", ondelete="CASCADE"), nullable=False, index=True)

    standing_long_jump = _measurement()
    single_leg_jump_left = _measurement()
    single_leg_jump_right = _measurement()
    wall_sit_assessment = _measurement()
    high_plank_assessment = _measurement()
    bent_arm_hang_assessment = _measurement()
    completed_at = db.Column(db.DateTime, default=utcnow)

    user = db.relationship("User", back_populates="test_results")
    session = db.relationship("TrainingSession", back_populates="test_results")

    __table_args__ = (
        db.UniqueConstraint("user_id", "session_id", name="uq_test_results_user_session"),
    )

    @property
    def is_complete(self):
        return all(is_filled(getattr(self, field)) for field in REQUIRED_TEST_FIELDS)

    @property
    def chronology_key(self):
        """Program order: block, then week, then submission time."""
        return (
            self.session.block.block_number,
            self.session.week_number,
            self.completed_at or utcnow(),
        )

    def measurements(self):
        return {metric: getattr(self, metric) for metric in TEST_METRICS}
