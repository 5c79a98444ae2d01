"""Standard 12-week block layout used by program setup and the test suite.

Weeks 1-4 and 7-10 hold two training sessions, weeks 5 and 11 one training
session plus the testing session, weeks 6 and 12 are rest weeks.
"""
from datetime import timedelta

from strengthlab.extensions import db
from strengthlab.models import Block, SessionType, TrainingSession
from strengthlab.services.base import ProgramRules

# days after the week's Monday each session unlocks
TRAINING_OFFSETS = (0, 2)
TESTING_OFFSET = 2


def week_layout(week_number, rules):
    """(session_type, session_number, day_offset) tuples for one week."""
    if week_number in rules.rest_weeks:
        return [(SessionType.REST, None, 0)]
    if week_number in rules.single_session_weeks:
        return [
            (SessionType.TRAINING, 1, TRAINING_OFFSETS[0]),
            (SessionType.TESTING, None, TESTING_OFFSET),
        ]
    return [
        (SessionType.TRAINING, number, offset)
        for number, offset in enumerate(TRAINING_OFFSETS, start=1)
    ]


def create_block(block_number, start_date, weeks=12, rules=None, created_at=None):
    rules = rules or ProgramRules()
    block = Block(
        block_number=block_number,
        start_date=start_date,
        end_date=start_date + timedelta(weeks=weeks, days=-1),
    )
    db.session.add(block)

    for week in range(1, weeks + 1):
        week_start = start_date + timedelta(weeks=week - 1)
        for session_type, number, offset in week_layout(week, rules):
            session = TrainingSession(
                block=block,
                week_number=week,
                session_number=number,
                session_type=session_type.value,
                release_date=week_start + timedelta(days=offset),
            )
            if created_at is not None:
                session.created_at = created_at
            db.session.add(session)

    db.session.commit()
    return block
