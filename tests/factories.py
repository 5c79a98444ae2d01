from strengthlab.extensions import db
from strengthlab.models import TestResult, TrainingResult, User

FULL_TRAINING = {
    "warmup_completed": "YES",
    "plyometrics_score": "3",
    "power_score": "4",
    "lower_body_strength_score": "5",
    "upper_body_core_strength_score": "2",
}

FULL_TEST = {
    "standing_long_jump": 150.0,
    "single_leg_jump_left": 120.0,
    "single_leg_jump_right": 125.0,
    "wall_sit_assessment": 45.0,
    "high_plank_assessment": 60.0,
    "bent_arm_hang_assessment": 20.0,
}


def make_user(username, role="student"):
    user = User(username=username, email=f"{username}@example.com", role=role)
    db.session.add(user)
    db.session.commit()
    return user


def find_session(block, week, session_type="training", number=None):
    for session in block.sessions:
        if session.week_number != week or session.session_type != session_type:
            continue
        if number is None or session.session_number == number:
            return session
    raise LookupError(f"no {session_type} session in week {week}")


def complete_training(user, session, **overrides):
    values = dict(FULL_TRAINING, **overrides)
    result = TrainingResult(user_id=user.id, session_id=session.id, **values)
    db.session.add(result)
    db.session.commit()
    return result


def complete_testing(user, session, completed_at=None, **overrides):
    values = dict(FULL_TEST, **overrides)
    result = TestResult(user_id=user.id, session_id=session.id, **values)
    if completed_at is not None:
        result.completed_at = completed_at
    db.session.add(result)
    db.session.commit()
    return result


def complete_everything(user, block):
    for session in block.sessions:
        if session.session_type == "training":
            complete_training(user, session)
        elif session.session_type == "testing":
            complete_testing(user, session)
