"""Exceptions raised by the scoring engine.

Incomplete results are not errors: the engine answers them with a zero
award or a ``False`` return value.
"""


class StrengthLabError(Exception):
    """Base class for engine errors."""


class NotFoundError(StrengthLabError):
    """A referenced user, session or block does not exist."""

    def __init__(self, entity, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")
