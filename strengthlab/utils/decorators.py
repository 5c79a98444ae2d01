# strengthlab/utils/decorators.py
from functools import wraps
from flask import jsonify
from flask_jwt_extended import get_jwt_identity, jwt_required
from strengthlab.models.user import User


def inject_current_user(view_func):
    """
    Resolve the JWT identity to a User and pass it to the view as
    ``current_user``. Requires a valid JWT token.
    """
    @wraps(view_func)
    @jwt_required()
    def wrapper(*args, **kwargs):
        identity = get_jwt_identity()
        try:
            user_id = int(identity)
        except (TypeError, ValueError):
            return jsonify({"msg": "Invalid token identity"}), 401

        user = User.query.get(user_id)
        if not user:
            return jsonify({"msg": "User not found"}), 404

        kwargs['current_user'] = user
        return view_func(*args, **kwargs)
    return wrapper


def student_required(view_func):
    """Like :func:`inject_current_user` but only lets students through."""
    @wraps(view_func)
    @inject_current_user
    def wrapper(*args, **kwargs):
        if not kwargs['current_user'].is_student:
            return jsonify({"msg": "Unauthorized"}), 403
        return view_func(*args, **kwargs)
    return wrapper
