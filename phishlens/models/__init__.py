"""SQLAlchemy models package."""

from .base import Base
from .learning_record import LearningRecord

__all__ = ["Base", "LearningRecord"]
