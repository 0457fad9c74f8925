"""Inference run audit log model."""

from sqlalchemy import JSON, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from typeforge.models.base import Base, CreatedAtMixin, IdMixin


class InferenceRun(Base, IdMixin, CreatedAtMixin):
    """Stores the named schema and diagnostics produced by one inference run."""

    __tablename__ = "inference_runs"

    source_format: Mapped[str] = mapped_column(String(32), index=True, nullable=False)
    root_type_name: Mapped[str] = mapped_column(String(255), nullable=False)
    sample_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    definition_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    conflict_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    root_json: Mapped[dict[str, object]] = mapped_column(JSON, default=dict, nullable=False)
    definitions_json: Mapped[list[dict[str, object]]] = mapped_column(JSON, default=list, nullable=False)
    conflicts_json: Mapped[list[dict[str, object]]] = mapped_column(JSON, default=list, nullable=False)
