"""Key/value table holding whole-document state records."""

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from apiassist.db.base import Base, TimestampMixin


class StateRecordRow(Base, TimestampMixin):
    __tablename__ = "state_records"

    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    value: Mapped[dict | list | None] = mapped_column(JSON, nullable=True)
