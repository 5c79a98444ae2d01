from flask import jsonify

from strengthlab.services import build_services
from strengthlab.utils.decorators import inject_current_user
from . import api_bp


@api_bp.route("/sessions/<int:session_id>/complete", methods=["POST"])
@inject_current_user
def complete_session(session_id, current_user):
    services = build_services()
    award = services.xp.award_session(current_user.id, session_id)
    stat = services.stats.recompute_user_stat(current_user.id)

    return jsonify({
        "xp_awarded": award.base_xp,
        "bonus_xp": award.bonus_xp,
        "transactions": [t.to_dict() for t in award.transactions],
        "stats": stat.to_dict(),
    })


@api_bp.route("/xp/summary", methods=["GET"])
@inject_current_user
def xp_summary(current_user):
    services = build_services()
    return jsonify(services.xp.user_xp_summary(current_user.id))


@api_bp.route("/xp/levels", methods=["GET"])
@inject_current_user
def xp_levels(current_user):
    services = build_services()
    return jsonify({
        "total_xp": services.xp.total_xp(current_user.id),
        "current_level": services.xp.current_level(current_user.id),
        "next_level_info": services.xp.next_level_info(current_user.id),
        "levels": services.xp.level_progress_table(current_user.id),
    })
