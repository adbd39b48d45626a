"""Learning record model — one JSON document per adaptive-learning key."""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class LearningRecord(Base):
    __tablename__ = "learning_records"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)  # weight_adjustments, domain_reputation, feedback_log
    value_json: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now(), nullable=False
    )
