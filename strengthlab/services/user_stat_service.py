import logging

from strengthlab.clock import SystemClock
from strengthlab.errors import NotFoundError
from strengthlab.services.base import atomically, no_transaction
from strengthlab.utils.numbers import clamp, round_half_up

logger = logging.getLogger(__name__)


def consistency_score(sessions_completed, sessions_available):
    """Percentage of available training sessions completed, two decimals."""
    if sessions_available <= 0:
        return 0.0
    return float(clamp(round_half_up(sessions_completed / sessions_available * 100, 2)))


class UserStatService:
    """Recomputes the per-user UserStat rollup from scratch."""

    def __init__(self, xp_service, catalog, results, users, stats, clock=None,
                 transaction=no_transaction):
        self.xp_service = xp_service
        self.catalog = catalog
        self.results = results
        self.users = users
        self.stats = stats
        self.clock = clock or SystemClock()
        self.transaction = transaction

    def recompute_user_stat(self, user_id: int):
        if self.users.get(user_id) is None:
            raise NotFoundError("User", user_id)
        return atomically(self.transaction, lambda: self._recompute(user_id))

    def _recompute(self, user_id):
        completed = self.results.count_training_completions(user_id)
        # every training session in the catalog, released or not
        available = self.catalog.count_training_sessions()
        total_xp = self.xp_service.total_xp(user_id)

        stat = self.stats.upsert(
            user_id,
            total_xp=total_xp,
            strength_level=self.xp_service.current_level(user_id),
            sessions_completed=completed,
            sessions_available=available,
            consistency_score=consistency_score(completed, available),
            last_updated=self.clock.now(),
        )
        logger.debug("Stats for user %s: %s/%s sessions, %s XP", user_id, completed, available, total_xp)
        return stat

    def update_after_session_completion(self, user_id: int, session_id: int):
        self.xp_service.award_session_xp(user_id, session_id)
        return self.recompute_user_stat(user_id)

    def refresh_all(self, user_id=None):
        """Recompute every student's stats, or only ``user_id``'s."""
        if user_id is not None:
            return [self.recompute_user_stat(user_id)]
        refreshed = [self.recompute_user_stat(student.id) for student in self.users.students()]
        logger.info("Refreshed stats for %s students", len(refreshed))
        return refreshed
