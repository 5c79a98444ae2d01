from flask import jsonify, request

from strengthlab.schemas import ProgressTrackingSchema, TestingSubmissionSchema
from strengthlab.services import build_services
from strengthlab.utils.decorators import student_required
from . import api_bp

submission_schema = TestingSubmissionSchema()
progress_schema = ProgressTrackingSchema(many=True)


@api_bp.route("/sessions/<int:session_id>/testing-progress", methods=["POST"])
@student_required
def record_testing_progress(session_id, current_user):
    fields = submission_schema.load(request.get_json(silent=True) or {})
    updated = build_services().progress.submit_test_result(current_user.id, session_id, fields)
    return jsonify({"updated": updated})


@api_bp.route("/progress", methods=["GET"])
@student_required
def my_progress(current_user):
    rows = build_services().progress.progress_for_user(current_user.id)
    return jsonify(progress_schema.dump(rows))
