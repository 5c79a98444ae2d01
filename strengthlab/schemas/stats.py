from marshmallow import fields

from strengthlab.extensions import ma


class UserStatSchema(ma.Schema):
    user_id = fields.Integer()
    total_xp = fields.Integer()
    strength_level = fields.Integer()
    sessions_completed = fields.Integer()
    sessions_available = fields.Integer()
    consistency_score = fields.Float()
    last_updated = fields.DateTime()


class NextLevelSchema(ma.Schema):
    xp_needed = fields.Integer()
    progress_percentage = fields.Integer()
    next_level = fields.Integer()


class LeaderboardEntrySchema(ma.Schema):
    id = fields.Integer()
    rank = fields.Integer()
    username = fields.String()
    is_you = fields.Boolean()
    # consistency board
    consistency_score = fields.Float()
    completed_sessions = fields.Integer()
    available_sessions = fields.Integer()
    # strength board
    strength_level = fields.Integer()
    total_xp = fields.Integer()
    next_level_info = fields.Nested(NextLevelSchema, allow_none=True)
