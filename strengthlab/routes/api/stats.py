from flask import jsonify, request

from strengthlab.schemas import LeaderboardEntrySchema, UserStatSchema
from strengthlab.services import build_services
from strengthlab.utils.decorators import inject_current_user
from . import api_bp

user_stat_schema = UserStatSchema()
leaderboard_schema = LeaderboardEntrySchema(many=True)


@api_bp.route("/stats", methods=["GET"])
@inject_current_user
def my_stats(current_user):
    stat = build_services().stats.recompute_user_stat(current_user.id)
    return jsonify(user_stat_schema.dump(stat))


@api_bp.route("/leaderboard/consistency", methods=["GET"])
@inject_current_user
def consistency_leaderboard(current_user):
    board = build_services().leaderboard.consistency(viewer_id=current_user.id)
    return jsonify(leaderboard_schema.dump(board))


@api_bp.route("/leaderboard/strength", methods=["GET"])
@inject_current_user
def strength_leaderboard(current_user):
    limit = request.args.get("limit", type=int)
    board = build_services().leaderboard.strength(viewer_id=current_user.id, limit=limit)
    return jsonify(leaderboard_schema.dump(board))
