import logging

from strengthlab.clock import SystemClock
from strengthlab.errors import NotFoundError
from strengthlab.models import TEST_METRICS
from strengthlab.services.base import atomically, no_transaction
from strengthlab.utils.numbers import percentage_increase

logger = logging.getLogger(__name__)


class ProgressTrackingService:
    """Keeps the baseline-vs-current table for every physical test metric.

    Baseline and latest results are picked in program order (block, week,
    submission time) by both the incremental and the full rebuild path.
    """

    def __init__(self, catalog, results, progress, users, clock=None, transaction=no_transaction):
        self.catalog = catalog
        self.results = results
        self.progress = progress
        self.users = users
        self.clock = clock or SystemClock()
        self.transaction = transaction

    def submit_test_result(self, user_id: int, session_id: int, fields: dict) -> bool:
        """Store posted measurements as the session's TestResult, then track them.

        A complete result already on file is never overwritten.
        """
        session = self._testing_session(user_id, session_id)
        if session is None:
            return False

        stored = self.results.test_result(user_id, session_id)
        if stored is not None and stored.is_complete:
            logger.info("User %s resubmitted completed test %s, keeping stored result", user_id, session_id)
        elif any(fields.get(metric) is not None for metric in TEST_METRICS):
            atomically(self.transaction, lambda: self.results.save_test_result(
                user_id, session_id, fields, completed_at=self.clock.now()
            ))
        return self.record_testing_progress(user_id, session_id, fields)

    def record_testing_progress(self, user_id: int, session_id: int, submitted_fields=None) -> bool:
        if self._testing_session(user_id, session_id) is None:
            return False

        stored = self.results.test_result(user_id, session_id)
        if stored is not None:
            current = stored.measurements()
        else:
            current = {metric: (submitted_fields or {}).get(metric) for metric in TEST_METRICS}
        if all(value is None for value in current.values()):
            return False

        history = self._chronological(user_id)
        if history:
            baseline = history[0].measurements()
        else:
            # nothing stored yet: an earlier tracked baseline still wins
            tracked = {row.test_type: row.baseline_value for row in self.progress.for_user(user_id)}
            baseline = {metric: tracked.get(metric, current[metric]) for metric in TEST_METRICS}

        def work():
            for metric in TEST_METRICS:
                self._track(user_id, metric, baseline.get(metric), current.get(metric))

        atomically(self.transaction, work)
        return True

    def recalculate_all(self, user_id: int) -> bool:
        self._require_user(user_id)
        history = self._chronological(user_id)
        if not history:
            return False
        baseline = history[0].measurements()
        latest = history[-1].measurements()

        def work():
            self.progress.delete_for_user(user_id)
            for metric in TEST_METRICS:
                self._track(user_id, metric, baseline[metric], latest[metric])

        atomically(self.transaction, work)
        logger.info("Rebuilt progress tracking for user %s from %s test results", user_id, len(history))
        return True

    def progress_for_user(self, user_id: int) -> list:
        order = {metric: index for index, metric in enumerate(TEST_METRICS)}
        return sorted(self.progress.for_user(user_id), key=lambda row: order.get(row.test_type, len(order)))

    def _require_user(self, user_id):
        if self.users.get(user_id) is None:
            raise NotFoundError("User", user_id)

    def _testing_session(self, user_id, session_id):
        """The session when it is a testing session, ``None`` for any other kind."""
        session = self.catalog.get_session(session_id)
        if session is None:
            raise NotFoundError("Session", session_id)
        self._require_user(user_id)
        return session if session.kind.is_testing else None

    def _chronological(self, user_id):
        return sorted(self.results.test_results(user_id), key=lambda result: result.chronology_key)

    def _track(self, user_id, metric, baseline, current):
        if current is None:
            return None
        if baseline is None or baseline <= 0:
            logger.warning("Skipping %s for user %s: no usable baseline (%s)", metric, user_id, baseline)
            return None
        return self.progress.upsert(
            user_id,
            metric,
            baseline_value=baseline,
            current_value=current,
            percentage_increase=percentage_increase(baseline, current),
            last_updated=self.clock.now(),
        )
