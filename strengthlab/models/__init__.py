from .user import User
from .block import Block
from .training_session import TrainingSession, SessionKind, SessionType
from .training_result import TrainingResult, TRAINING_FIELDS
from .test_result import TestResult, TEST_METRICS, REQUIRED_TEST_FIELDS
from .xp_transaction import XpTransaction, XpSource, XP_SOURCE_LABELS, format_xp_source
from .user_stat import UserStat
from .progress_tracking import ProgressTracking

__all__ = [
    "User", "Block",
    "TrainingSession", "SessionKind", "SessionType",
    "TrainingResult", "TRAINING_FIELDS",
    "TestResult", "TEST_METRICS", "REQUIRED_TEST_FIELDS",
    "XpTransaction", "XpSource", "XP_SOURCE_LABELS", "format_xp_source",
    "UserStat", "ProgressTracking",
]
