from datetime import date, datetime

import pytest
from flask_jwt_extended import create_access_token

from strengthlab import create_app
from strengthlab.clock import FixedClock
from strengthlab.extensions import db
from strengthlab.seed import create_block
from strengthlab.services import build_services
from tests.factories import make_user

BLOCK_START = date(2025, 3, 3)  # a Monday
NOW = datetime(2025, 3, 20, 12, 0)
SESSIONS_CREATED = datetime(2025, 3, 1, 9, 0)


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def app(clock):
    app = create_app('testing')
    app.extensions['clock'] = clock
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def services(app):
    return build_services(app)


@pytest.fixture
def student(app):
    return make_user("ali")


@pytest.fixture
def other_student(app):
    return make_user("sara")


@pytest.fixture
def block(app):
    return create_block(1, BLOCK_START, created_at=SESSIONS_CREATED)


@pytest.fixture
def auth_headers(app):
    def _headers(user):
        token = create_access_token(identity=str(user.id))
        return {"Authorization": f"Bearer {token}"}
    return _headers
