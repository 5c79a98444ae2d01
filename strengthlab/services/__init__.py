from dataclasses import dataclass

from flask import current_app

from strengthlab.clock import SystemClock
from strengthlab.repositories import (
    ProgressRepository,
    ResultStore,
    SessionCatalog,
    UserDirectory,
    UserStatRepository,
    XpLedger,
    transaction,
)


@dataclass
class Services:
    xp: "XpService"
    stats: "UserStatService"
    progress: "ProgressTrackingService"
    leaderboard: "LeaderboardService"


def build_services(app=None):
    """Wire the scoring services to the SQLAlchemy repositories."""
    from strengthlab.services.base import ProgramRules
    from strengthlab.services.leaderboard_service import LeaderboardService
    from strengthlab.services.progress_tracking_service import ProgressTrackingService
    from strengthlab.services.user_stat_service import UserStatService
    from strengthlab.services.xp_service import XpService

    app = app or current_app
    clock = app.extensions.get("clock") or SystemClock()
    catalog = SessionCatalog()
    results = ResultStore()
    users = UserDirectory()
    stat_repo = UserStatRepository()

    xp = XpService(
        catalog, results, XpLedger(), users,
        clock=clock,
        rules=ProgramRules.from_config(app.config),
        transaction=transaction,
        recent_limit=app.config.get("RECENT_TRANSACTIONS_LIMIT", 10),
    )
    stats = UserStatService(xp, catalog, results, users, stat_repo, clock=clock, transaction=transaction)
    progress = ProgressTrackingService(
        catalog, results, ProgressRepository(), users, clock=clock, transaction=transaction
    )
    leaderboard = LeaderboardService(stats, stat_repo, limit=app.config.get("LEADERBOARD_LIMIT", 50))
    return Services(xp=xp, stats=stats, progress=progress, leaderboard=leaderboard)
