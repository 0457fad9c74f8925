"""SQLAlchemy metadata registry import for Alembic."""

from typeforge.models import InferenceRun
from typeforge.models.base import Base

__all__ = ["Base", "InferenceRun"]
