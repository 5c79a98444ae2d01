"""In-memory stand-ins for the SQLAlchemy repositories."""
from itertools import count

from strengthlab.models import UserStat, XpTransaction


def _value(source):
    return getattr(source, "value", source)


class FakeUsers:
    def __init__(self, *users):
        self.users = {user.id: user for user in users}

    def get(self, user_id):
        return self.users.get(user_id)

    def lock(self, user_id):
        return self.users.get(user_id)

    def students(self):
        return [user for user in self.users.values() if user.role == "student"]


class FakeCatalog:
    def __init__(self, *sessions):
        self.sessions = {}
        for session in sessions:
            self.add(session)

    def add(self, session):
        self.sessions[session.id] = session

    def get_session(self, session_id):
        return self.sessions.get(session_id)

    def week_sessions(self, block_id, week_number):
        week = [s for s in self.sessions.values() if s.block_id == block_id and s.week_number == week_number]
        return sorted(week, key=lambda s: (s.release_date, s.id))

    def sessions_created_between(self, start, end, session_types):
        types = {_value(t) for t in session_types}
        return [
            s for s in self.sessions.values()
            if start <= s.created_at <= end and s.session_type in types
        ]

    def count_training_sessions(self):
        return sum(1 for s in self.sessions.values() if s.session_type == "training")


class FakeResults:
    def __init__(self, catalog):
        self.catalog = catalog
        self.training = {}
        self.tests = {}

    def add_training(self, result):
        self.training[(result.user_id, result.session_id)] = result

    def add_test(self, result):
        self.tests[(result.user_id, result.session_id)] = result

    def training_result(self, user_id, session_id):
        return self.training.get((user_id, session_id))

    def test_result(self, user_id, session_id):
        return self.tests.get((user_id, session_id))

    def training_results(self, user_id, session_ids):
        return [r for (uid, sid), r in self.training.items() if uid == user_id and sid in session_ids]

    def test_results(self, user_id, session_ids=None):
        return [
            r for (uid, sid), r in self.tests.items()
            if uid == user_id and (session_ids is None or sid in session_ids)
        ]

    def count_training_completions(self, user_id):
        return sum(
            1 for (uid, sid) in self.training
            if uid == user_id and self.catalog.get_session(sid).session_type == "training"
        )


class FakeLedger:
    def __init__(self):
        self.rows = []
        self._ids = count(1)

    def append(self, user_id, amount, source, when, window_key=None):
        entry = XpTransaction(
            id=next(self._ids),
            user_id=user_id,
            xp_amount=amount,
            xp_source=_value(source),
            window_key=window_key,
            transaction_date=when,
        )
        self.rows.append(entry)
        return entry

    def for_user(self, user_id, source=None):
        return [r for r in self.rows if r.user_id == user_id and (source is None or r.xp_source == _value(source))]

    def has_window(self, user_id, source, window_key):
        return any(r.window_key == window_key for r in self.for_user(user_id, source))

    def exists_between(self, user_id, source, start, end):
        return any(start <= r.transaction_date <= end for r in self.for_user(user_id, source))

    def total(self, user_id):
        return sum(r.xp_amount for r in self.for_user(user_id))

    def recent(self, user_id, limit):
        rows = sorted(self.for_user(user_id), key=lambda r: (r.transaction_date, r.id), reverse=True)
        return rows[:limit]

    def totals_by_source(self, user_id):
        totals = {}
        for row in self.for_user(user_id):
            totals[row.xp_source] = totals.get(row.xp_source, 0) + row.xp_amount
        return sorted(totals.items())


class FakeStats:
    def __init__(self, users):
        self.users = users
        self.rows = {}

    def get(self, user_id):
        return self.rows.get(user_id)

    def upsert(self, user_id, **values):
        stat = self.rows.setdefault(user_id, UserStat(user_id=user_id))
        for key, value in values.items():
            setattr(stat, key, value)
        return stat

    def student_stats(self):
        return [
            (user, self.rows[user.id])
            for user in self.users.students()
            if user.id in self.rows
        ]
