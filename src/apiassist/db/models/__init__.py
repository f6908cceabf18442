"""Import all ORM models so they register with Base.metadata."""

from apiassist.db.models.state_record import StateRecordRow

__all__ = [
    "StateRecordRow",
]
