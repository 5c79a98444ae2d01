from .stats import UserStatSchema, LeaderboardEntrySchema
from .progress import ProgressTrackingSchema, TestingSubmissionSchema

__all__ = ["UserStatSchema", "LeaderboardEntrySchema", "ProgressTrackingSchema", "TestingSubmissionSchema"]
