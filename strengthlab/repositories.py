"""SQLAlchemy-backed storage collaborators for the scoring services.

The services only talk to these objects, never to ``db.session`` directly,
so tests can hand them in-memory replacements with the same methods.
"""
from contextlib import contextmanager

from sqlalchemy import func

from strengthlab.extensions import db
from strengthlab.models import (
    ProgressTracking,
    SessionType,
    TEST_METRICS,
    TestResult,
    TrainingResult,
    TrainingSession,
    User,
    UserStat,
    XpTransaction,
)


@contextmanager
def transaction():
    """Commit everything written inside the block, or roll all of it back."""
    try:
        yield
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise


class UserDirectory:
    def get(self, user_id):
        return User.query.get(user_id)

    def lock(self, user_id):
        # serializes concurrent awards for one user (no-op on SQLite)
        return User.query.filter_by(id=user_id).with_for_update().first()

    def students(self):
        return User.query.filter_by(role="student").order_by(User.id).all()


class SessionCatalog:
    def get_session(self, session_id):
        return TrainingSession.query.get(session_id)

    def week_sessions(self, block_id, week_number):
        return (
            TrainingSession.query
            .filter_by(block_id=block_id, week_number=week_number)
            .order_by(TrainingSession.release_date, TrainingSession.id)
            .all()
        )

    def sessions_created_between(self, start, end, session_types):
        types = [getattr(t, "value", t) for t in session_types]
        return (
            TrainingSession.query
            .filter(
                TrainingSession.created_at >= start,
                TrainingSession.created_at <= end,
                TrainingSession.session_type.in_(types),
            )
            .all()
        )

    def count_training_sessions(self):
        return TrainingSession.query.filter_by(session_type=SessionType.TRAINING.value).count()


class ResultStore:
    def training_result(self, user_id, session_id):
        return TrainingResult.query.filter_by(user_id=user_id, session_id=session_id).first()

    def test_result(self, user_id, session_id):
        return TestResult.query.filter_by(user_id=user_id, session_id=session_id).first()

    def training_results(self, user_id, session_ids):
        if not session_ids:
            return []
        return TrainingResult.query.filter(
            TrainingResult.user_id == user_id,
            TrainingResult.session_id.in_(session_ids),
        ).all()

    def test_results(self, user_id, session_ids=None):
        query = TestResult.query.filter(TestResult.user_id == user_id)
        if session_ids is not None:
            if not session_ids:
                return []
            query = query.filter(TestResult.session_id.in_(session_ids))
        else:
            query = query.join(TrainingSession).filter(
                TrainingSession.session_type == SessionType.TESTING.value
            )
        return query.all()

    def save_test_result(self, user_id, session_id, fields, completed_at=None):
        result = self.test_result(user_id, session_id)
        if result is None:
            result = TestResult(user_id=user_id, session_id=session_id)
            db.session.add(result)
        for metric in TEST_METRICS:
            if metric in fields:
                setattr(result, metric, fields[metric])
        if completed_at is not None:
            result.completed_at = completed_at
        db.session.flush()
        return result

    def count_training_completions(self, user_id):
        return (
            TrainingResult.query
            .join(TrainingSession)
            .filter(
                TrainingResult.user_id == user_id,
                TrainingSession.session_type == SessionType.TRAINING.value,
            )
            .count()
        )


class XpLedger:
    def append(self, user_id, amount, source, when, window_key=None):
        entry = XpTransaction(
            user_id=user_id,
            xp_amount=amount,
            xp_source=getattr(source, "value", source),
            window_key=window_key,
            transaction_date=when,
        )
        db.session.add(entry)
        db.session.flush()
        return entry

    def has_window(self, user_id, source, window_key):
        return db.session.query(
            XpTransaction.query.filter_by(
                user_id=user_id,
                xp_source=getattr(source, "value", source),
                window_key=window_key,
            ).exists()
        ).scalar()

    def exists_between(self, user_id, source, start, end):
        return db.session.query(
            XpTransaction.query.filter(
                XpTransaction.user_id == user_id,
                XpTransaction.xp_source == getattr(source, "value", source),
                XpTransaction.transaction_date >= start,
                XpTransaction.transaction_date <= end,
            ).exists()
        ).scalar()

    def total(self, user_id):
        return db.session.query(
            func.coalesce(func.sum(XpTransaction.xp_amount), 0)
        ).filter(XpTransaction.user_id == user_id).scalar()

    def recent(self, user_id, limit):
        return (
            XpTransaction.query
            .filter_by(user_id=user_id)
            .order_by(XpTransaction.transaction_date.desc(), XpTransaction.id.desc())
            .limit(limit)
            .all()
        )

    def totals_by_source(self, user_id):
        rows = (
            db.session.query(XpTransaction.xp_source, func.sum(XpTransaction.xp_amount))
            .filter(XpTransaction.user_id == user_id)
            .group_by(XpTransaction.xp_source)
            .order_by(XpTransaction.xp_source)
            .all()
        )
        return [(source, int(total)) for source, total in rows]


class UserStatRepository:
    def get(self, user_id):
        return UserStat.query.filter_by(user_id=user_id).first()

    def upsert(self, user_id, **values):
        stat = self.get(user_id)
        if stat is None:
            stat = UserStat(user_id=user_id)
            db.session.add(stat)
        for key, value in values.items():
            setattr(stat, key, value)
        db.session.flush()
        return stat

    def student_stats(self):
        """(user, stat) pairs for every student that has a stat row."""
        return (
            db.session.query(User, UserStat)
            .join(UserStat, UserStat.user_id == User.id)
            .filter(User.role == "student")
            .all()
        )


class ProgressRepository:
    def upsert(self, user_id, test_type, **values):
        row = ProgressTracking.query.filter_by(user_id=user_id, test_type=test_type).first()
        if row is None:
            row = ProgressTracking(user_id=user_id, test_type=test_type)
            db.session.add(row)
        for key, value in values.items():
            setattr(row, key, value)
        db.session.flush()
        return row

    def delete_for_user(self, user_id):
        ProgressTracking.query.filter_by(user_id=user_id).delete()

    def for_user(self, user_id):
        return ProgressTracking.query.filter_by(user_id=user_id).all()
