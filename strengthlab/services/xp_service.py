import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import List, Optional

from strengthlab.clock import SystemClock
from strengthlab.errors import NotFoundError
from strengthlab.models import SessionType, XpSource, XpTransaction, format_xp_source
from strengthlab.services import levels
from strengthlab.services.base import ProgramRules, atomically, calendar_week, no_transaction, session_key

logger = logging.getLogger(__name__)

# XP amounts
SESSION_COMPLETE = 4
WEEK_COMPLETE = 3
TESTING_COMPLETE = 8
TRAINING_AND_TESTING_WEEK = 5
MONTH_COMPLETE = 12


@dataclass
class SessionAward:
    """Everything written to the ledger by one ``award_session`` call."""

    user_id: int
    session_id: int
    base: Optional[XpTransaction] = None
    bonuses: List[XpTransaction] = field(default_factory=list)

    @property
    def base_xp(self):
        return self.base.xp_amount if self.base else 0

    @property
    def bonus_xp(self):
        return sum(t.xp_amount for t in self.bonuses)

    @property
    def total_xp(self):
        return self.base_xp + self.bonus_xp

    @property
    def transactions(self):
        return ([self.base] if self.base else []) + self.bonuses


class XpService:
    """Awards XP for completed sessions and answers level questions.

    All storage goes through the injected collaborators: ``catalog``
    (sessions), ``results`` (training/test results), ``ledger`` (XP
    transactions) and ``users``.
    """

    def __init__(self, catalog, results, ledger, users, clock=None, rules=None,
                 transaction=no_transaction, recent_limit=10):
        self.catalog = catalog
        self.results = results
        self.ledger = ledger
        self.users = users
        self.clock = clock or SystemClock()
        self.rules = rules or ProgramRules()
        self.transaction = transaction
        self.recent_limit = recent_limit

    # ------------------------------------------------------------------
    # Awarding
    # ------------------------------------------------------------------
    def award_session_xp(self, user_id: int, session_id: int) -> int:
        """Award XP for a session and return the base amount (bonuses excluded).

        A session earns its base award once per user; later calls return 0
        and only re-check the bonuses.
        """
        return self.award_session(user_id, session_id).base_xp

    def award_session(self, user_id: int, session_id: int) -> SessionAward:
        return atomically(self.transaction, lambda: self._award(user_id, session_id))

    def _award(self, user_id, session_id):
        session = self.catalog.get_session(session_id)
        if session is None:
            raise NotFoundError("Session", session_id)
        if self.users.lock(user_id) is None:
            raise NotFoundError("User", user_id)

        award = SessionAward(user_id=user_id, session_id=session_id)
        kind = session.kind

        if kind.is_training:
            result = self.results.training_result(user_id, session_id)
            if result is None or not result.is_complete:
                return award
            award.base = self._grant_once(
                user_id, SESSION_COMPLETE, XpSource.SESSION_COMPLETE, session_key(session_id)
            )
            self._add_bonus(award, self._weekly_bonus(user_id, session))
            self._add_bonus(award, self._monthly_bonus(user_id))

        elif kind.is_testing:
            result = self.results.test_result(user_id, session_id)
            if result is None or not result.is_complete:
                return award
            award.base = self._grant_once(
                user_id, TESTING_COMPLETE, XpSource.TESTING_COMPLETE, session_key(session_id)
            )
            self._add_bonus(award, self._training_and_testing_bonus(user_id, session))

        if award.transactions:
            logger.info(
                "User %s earned %s XP (%s bonus) for session %s",
                user_id, award.total_xp, award.bonus_xp, session_id,
            )
        return award

    @staticmethod
    def _add_bonus(award, transaction):
        if transaction is not None:
            award.bonuses.append(transaction)

    def _grant(self, user_id, amount, source, window_key=None):
        return self.ledger.append(user_id, amount, source, self.clock.now(), window_key=window_key)

    def _grant_once(self, user_id, amount, source, window_key):
        if self.ledger.has_window(user_id, source, window_key):
            return None
        logger.info("Granting %s to user %s for %s", source.value, user_id, window_key)
        return self._grant(user_id, amount, source, window_key=window_key)

    # ------------------------------------------------------------------
    # Bonus checks
    # ------------------------------------------------------------------
    def _weekly_bonus(self, user_id, session):
        week = self.catalog.week_sessions(session.block_id, session.week_number)
        required = self.rules.required_training_sessions(session.week_number, week)
        if not required:
            return None

        training_ids = [s.id for s in week if s.kind.is_training]
        if len(training_ids) < required:
            return None

        results = self.results.training_results(user_id, training_ids)
        if sum(1 for r in results if r.is_complete) < required:
            return None

        window = calendar_week(min(s.release_date for s in week))
        return self._grant_once(user_id, WEEK_COMPLETE, XpSource.WEEK_COMPLETE, window.key)

    def _training_and_testing_bonus(self, user_id, session):
        week = self.catalog.week_sessions(session.block_id, session.week_number)
        training = [s for s in week if s.kind.is_training]
        testing = [s for s in week if s.kind.is_testing]
        if len(training) != 1 or len(testing) != 1:
            return None

        training_result = self.results.training_result(user_id, training[0].id)
        test_result = self.results.test_result(user_id, testing[0].id)
        if not (training_result and training_result.is_complete):
            return None
        if not (test_result and test_result.is_complete):
            return None

        window = calendar_week(min(s.release_date for s in week))
        return self._grant_once(
            user_id, TRAINING_AND_TESTING_WEEK, XpSource.TRAINING_AND_TESTING, window.key
        )

    def _monthly_bonus(self, user_id):
        end = self.clock.now()
        start = end - timedelta(weeks=self.rules.monthly_window_weeks)

        sessions = self.catalog.sessions_created_between(
            start, end, (SessionType.TRAINING, SessionType.TESTING)
        )
        if not sessions:
            return None

        training_ids = [s.id for s in sessions if s.kind.is_training]
        testing_ids = [s.id for s in sessions if s.kind.is_testing]
        training = [r for r in self.results.training_results(user_id, training_ids) if r.is_complete]
        testing = [r for r in self.results.test_results(user_id, testing_ids) if r.is_complete]
        if len(training) < len(training_ids) or len(testing) < len(testing_ids):
            return None

        if self.ledger.exists_between(user_id, XpSource.MONTH_COMPLETE, start, end):
            return None
        logger.info("Granting month_complete to user %s", user_id)
        return self._grant(user_id, MONTH_COMPLETE, XpSource.MONTH_COMPLETE)

    # ------------------------------------------------------------------
    # Totals and levels
    # ------------------------------------------------------------------
    def total_xp(self, user_id: int) -> int:
        return int(self.ledger.total(user_id) or 0)

    def current_level(self, user_id: int) -> int:
        return levels.level_for_xp(self.total_xp(user_id))

    def xp_for_level(self, level: int) -> int:
        return levels.xp_for_level(level)

    def xp_gap_between_levels(self, level: int) -> int:
        return levels.xp_gap_between_levels(level)

    def next_level_info(self, user_id: int) -> dict:
        return levels.next_level_info(self.total_xp(user_id))

    def level_progress_table(self, user_id: int) -> list:
        return levels.level_progress_rows(self.total_xp(user_id))

    def user_xp_summary(self, user_id: int) -> dict:
        info = self.next_level_info(user_id)
        recent = self.ledger.recent(user_id, self.recent_limit)
        breakdown = self.ledger.totals_by_source(user_id)

        return {
            'total_xp': info['total_xp'],
            'current_level': info['current_level'],
            'next_level': info['next_level'],
            'xp_needed_for_next_level': info['xp_needed'],
            'progress_percentage': info['progress_percentage'],
            'xp_for_current_level': info['xp_for_current_level'],
            'xp_for_next_level': info['xp_for_next_level'],
            'xp_gap': info['xp_gap'],
            'recent_transactions': [t.to_dict() for t in recent],
            'breakdown_by_source': [
                {'source': format_xp_source(source), 'total': total}
                for source, total in breakdown
            ],
        }
