import logging
from contextlib import nullcontext
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


def no_transaction():
    return nullcontext()


def atomically(transaction, work, retries=1):
    """Run ``work`` inside one storage transaction.

    A unique-constraint violation means a concurrent request wrote the same
    natural key first; the whole unit is rolled back and replayed so it sees
    that row.
    """
    attempt = 0
    while True:
        try:
            with transaction():
                return work()
        except IntegrityError:
            attempt += 1
            if attempt > retries:
                raise
            logger.warning("Constraint conflict, replaying unit of work (attempt %s)", attempt)


@dataclass(frozen=True)
class Window:
    """Half-open time range ``[start, end)`` with a stable key."""

    start: datetime
    end: datetime
    key: str


def session_key(session_id):
    """Ledger key of the one base award a session can earn."""
    return f"session:{session_id}"


def calendar_week(day):
    """Monday-to-Sunday week containing ``day``, keyed by its Monday."""
    if isinstance(day, datetime):
        day = day.date()
    monday = day - timedelta(days=day.weekday())
    start = datetime(monday.year, monday.month, monday.day)
    return Window(start=start, end=start + timedelta(days=7), key=monday.isoformat())


@dataclass(frozen=True)
class ProgramRules:
    """Program-specific week layout used by the bonus checks."""

    single_session_weeks: frozenset = frozenset({5, 11})
    rest_weeks: frozenset = frozenset({6, 12})
    monthly_window_weeks: int = 4

    @classmethod
    def from_config(cls, config):
        return cls(
            single_session_weeks=frozenset(config.get("SINGLE_SESSION_WEEKS", (5, 11))),
            rest_weeks=frozenset(config.get("REST_WEEKS", (6, 12))),
            monthly_window_weeks=config.get("MONTHLY_WINDOW_WEEKS", 4),
        )

    def required_training_sessions(self, week_number, week_sessions):
        """Completed training sessions needed for the weekly bonus, 0 if none applies."""
        if week_number in self.rest_weeks or any(s.kind.is_rest for s in week_sessions):
            return 0
        return 1 if week_number in self.single_session_weeks else 2
