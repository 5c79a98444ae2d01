# strengthlab/routes/api/__init__.py
from flask import Blueprint

# JSON endpoints consumed by the student/admin pages
api_bp = Blueprint("api", __name__)

from . import xp, stats, progress  # noqa: E402,F401
