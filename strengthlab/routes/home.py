from flask import Blueprint, jsonify
from sqlalchemy import text

from strengthlab.extensions import db

home_bp = Blueprint('home', __name__)


@home_bp.route('/health')
def health():
    db.session.execute(text("SELECT 1"))
    return jsonify({"status": "ok"})
