from marshmallow import EXCLUDE, fields, validate

from strengthlab.extensions import ma


def _measurement():
    return fields.Float(allow_none=True, load_default=None, validate=validate.Range(min=0, max=99999.9))


class TestingSubmissionSchema(ma.Schema):
    """Measured values of a testing session, as posted by the client."""

    class Meta:
        unknown = EXCLUDE

    standing_long_jump = _measurement()
    single_leg_jump_left = _measurement()
    single_leg_jump_right = _measurement()
    wall_sit_assessment = _measurement()
    high_plank_assessment = _measurement()
    bent_arm_hang_assessment = _measurement()


class ProgressTrackingSchema(ma.Schema):
    test_type = fields.String()
    baseline_value = fields.Float()
    current_value = fields.Float()
    percentage_increase = fields.Float(allow_none=True)
    last_updated = fields.DateTime()
