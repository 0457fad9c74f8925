"""Inference endpoint schemas and the schema descriptor export format."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

TypeKind = Literal[
    "null",
    "bool",
    "int",
    "float",
    "string",
    "timestamp",
    "array",
    "object",
    "optional",
    "union",
]


class TypeDescriptor(BaseModel):
    """Renderer-facing description of one schema node.

    Objects are referenced by ``name``; their fields live in the definitions list.
    """

    kind: TypeKind
    name: str | None = None
    numeric_hint: bool = False
    empty: bool = False
    element: TypeDescriptor | None = None
    inner: TypeDescriptor | None = None
    variants: list[TypeDescriptor] = Field(default_factory=list)


TypeDescriptor.model_rebuild()


class FieldDescriptor(BaseModel):
    """One field of a named definition."""

    name: str
    type: TypeDescriptor
    optional: bool
    observed_count: int
    total_samples: int


class TypeDefinitionRead(BaseModel):
    """Named object definition."""

    name: str
    sample_count: int
    fields: list[FieldDescriptor]


class ConflictRead(BaseModel):
    """Type conflict diagnostic."""

    path: str
    kinds_observed: list[str]


class InferenceRequest(BaseModel):
    """Sample documents to infer a schema from.

    Provide either ``content`` (raw text in ``format``) or ``samples``
    (already-decoded JSON values, one per sample).
    """

    format: Literal["json", "jsonl", "yaml", "csv"] = "json"
    content: str | None = None
    samples: list[Any] | None = None
    numeric_columns: list[str] = Field(default_factory=list)
    root_type_name: str | None = Field(default=None, min_length=1, max_length=255)
    persist: bool = True

    @model_validator(mode="after")
    def _exactly_one_source(self) -> InferenceRequest:
        if (self.content is None) == (self.samples is None):
            raise ValueError("Provide exactly one of 'content' or 'samples'")
        return self


class InferenceRunResult(BaseModel):
    """Inference execution summary."""

    inference_run_id: int | None = None
    root_type_name: str
    sample_count: int
    root: TypeDescriptor
    definitions: list[TypeDefinitionRead]
    conflicts: list[ConflictRead]


class InferenceRunRead(BaseModel):
    """Serialized stored inference run."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
    source_format: str
    root_type_name: str
    sample_count: int
    definition_count: int
    conflict_count: int
    root_json: dict[str, Any]
    definitions_json: list[dict[str, Any]]
    conflicts_json: list[dict[str, Any]]
