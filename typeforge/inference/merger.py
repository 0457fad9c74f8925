"""Schema merge over the type lattice.

A node is decomposed into a nullable flag plus at most one component per kind
bucket (bool, number, string, array, object). Merging unions the buckets,
merges components that share a bucket, and reassembles the result. Because
every per-bucket merge is associative and commutative, so is ``merge``; the
only order that survives is object field order, which follows first
observation from left to right.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from dataclasses import dataclass

from typeforge.inference.nodes import (
    ArrayType,
    BoolType,
    FieldSchema,
    FloatType,
    IntType,
    NullType,
    ObjectType,
    OptionalType,
    SchemaNode,
    StringType,
    TimestampType,
    UnionType,
    make_optional,
)

ROOT_PATH = ""
_BUCKET_ORDER: tuple[str, ...] = ("bool", "number", "string", "array", "object")
_BUCKET_BY_TYPE: dict[type[SchemaNode], str] = {
    BoolType: "bool",
    IntType: "number",
    FloatType: "number",
    StringType: "string",
    TimestampType: "string",
    ArrayType: "array",
    ObjectType: "object",
}


@dataclass(frozen=True, slots=True)
class ConflictRecord:
    """Non-fatal type conflict recorded when a merge falls back to a union."""

    path: str
    kinds_observed: frozenset[str]


class ConflictSink:
    """Append-only, thread-safe collector of conflict records."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: list[ConflictRecord] = []

    def append(self, record: ConflictRecord) -> None:
        with self._lock:
            self._records.append(record)

    @property
    def records(self) -> tuple[ConflictRecord, ...]:
        with self._lock:
            return tuple(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __iter__(self) -> Iterator[ConflictRecord]:
        return iter(self.records)


def field_path(parent: str, name: str) -> str:
    return name if parent == ROOT_PATH else f"{parent}.{name}"


def element_path(parent: str) -> str:
    return f"{parent}[]"


def merge(
    left: SchemaNode,
    right: SchemaNode,
    sink: ConflictSink | None = None,
    path: str = ROOT_PATH,
) -> SchemaNode:
    """Combine two nodes describing the same logical position."""

    nullable = _is_nullable(left) or _is_nullable(right)
    left_parts = _components(left)
    right_parts = _components(right)

    merged: dict[str, SchemaNode] = {}
    for bucket in _BUCKET_ORDER:
        left_part = left_parts.get(bucket)
        right_part = right_parts.get(bucket)
        if left_part is None and right_part is None:
            continue
        if left_part is None:
            merged[bucket] = right_part  # type: ignore[assignment]
        elif right_part is None:
            merged[bucket] = left_part
        else:
            merged[bucket] = _merge_bucket(bucket, left_part, right_part, sink, path)

    if sink is not None and len(merged) > 1 and len(merged) > max(len(left_parts), len(right_parts)):
        sink.append(ConflictRecord(path=path, kinds_observed=frozenset(node.kind for node in merged.values())))

    if not merged:
        return NullType()
    core = next(iter(merged.values())) if len(merged) == 1 else UnionType(tuple(merged.values()))
    return OptionalType(core) if nullable else core


def _is_nullable(node: SchemaNode) -> bool:
    return isinstance(node, (NullType, OptionalType))


def _components(node: SchemaNode) -> dict[str, SchemaNode]:
    if isinstance(node, NullType):
        return {}
    if isinstance(node, OptionalType):
        return _components(node.inner)
    if isinstance(node, UnionType):
        parts: dict[str, SchemaNode] = {}
        for variant in node.variants:
            parts.update(_components(variant))
        return parts
    return {_BUCKET_BY_TYPE[type(node)]: node}


def _merge_bucket(
    bucket: str,
    left: SchemaNode,
    right: SchemaNode,
    sink: ConflictSink | None,
    path: str,
) -> SchemaNode:
    if bucket == "bool":
        return left
    if bucket == "number":
        # Int widens to Float, never the reverse.
        if isinstance(left, FloatType) or isinstance(right, FloatType):
            return FloatType()
        return IntType()
    if bucket == "string":
        return _merge_strings(left, right)
    if bucket == "array":
        return _merge_arrays(left, right, sink, path)  # type: ignore[arg-type]
    return _merge_objects(left, right, sink, path)  # type: ignore[arg-type]


def _merge_strings(left: SchemaNode, right: SchemaNode) -> SchemaNode:
    """Timestamp widens to String without a conflict; the hint survives only numeric pairs."""

    if isinstance(left, TimestampType) and isinstance(right, TimestampType):
        return left
    numeric = (
        isinstance(left, StringType)
        and left.numeric_hint
        and isinstance(right, StringType)
        and right.numeric_hint
    )
    return StringType(numeric_hint=numeric)


def _merge_arrays(left: ArrayType, right: ArrayType, sink: ConflictSink | None, path: str) -> ArrayType:
    if left.empty:
        return right
    if right.empty:
        return left
    return ArrayType(element=merge(left.element, right.element, sink, element_path(path)))


def _merge_objects(left: ObjectType, right: ObjectType, sink: ConflictSink | None, path: str) -> ObjectType:
    total = left.sample_count + right.sample_count
    right_fields = {item.name: item for item in right.fields}
    left_names = {item.name for item in left.fields}

    fields: list[FieldSchema] = []
    for left_field in left.fields:
        right_field = right_fields.get(left_field.name)
        fields.append(_merge_field(left_field, right_field, total, sink, path))
    for right_field in right.fields:
        if right_field.name not in left_names:
            fields.append(_merge_field(right_field, None, total, sink, path))
    return ObjectType(fields=tuple(fields), sample_count=total)


def _merge_field(
    first: FieldSchema,
    second: FieldSchema | None,
    total: int,
    sink: ConflictSink | None,
    path: str,
) -> FieldSchema:
    if second is None:
        node = first.type
        observed = first.observed_count
    else:
        node = merge(first.type, second.type, sink, field_path(path, first.name))
        observed = first.observed_count + second.observed_count
    optional = observed < total
    if optional:
        node = make_optional(node)
    return FieldSchema(
        name=first.name,
        type=node,
        optional=optional,
        observed_count=observed,
        total_samples=total,
    )
