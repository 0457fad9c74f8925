"""Immutable schema node variants and structural signatures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable


@dataclass(frozen=True, slots=True)
class SchemaNode:
    """Base class for inferred type descriptions."""

    @property
    def kind(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class NullType(SchemaNode):
    @property
    def kind(self) -> str:
        return "null"


@dataclass(frozen=True, slots=True)
class BoolType(SchemaNode):
    @property
    def kind(self) -> str:
        return "bool"


@dataclass(frozen=True, slots=True)
class IntType(SchemaNode):
    @property
    def kind(self) -> str:
        return "int"


@dataclass(frozen=True, slots=True)
class FloatType(SchemaNode):
    @property
    def kind(self) -> str:
        return "float"


@dataclass(frozen=True, slots=True)
class StringType(SchemaNode):
    """Plain string; ``numeric_hint`` is set when every value looked numeric."""

    numeric_hint: bool = False

    @property
    def kind(self) -> str:
        return "string"


@dataclass(frozen=True, slots=True)
class TimestampType(SchemaNode):
    @property
    def kind(self) -> str:
        return "timestamp"


@dataclass(frozen=True, slots=True)
class ArrayType(SchemaNode):
    """Homogeneous sequence.

    ``empty`` marks the placeholder inferred from an empty array; its element
    is ``NullType`` until a non-empty sample is merged in.
    """

    element: SchemaNode
    empty: bool = False

    @property
    def kind(self) -> str:
        return "array"


@dataclass(frozen=True, slots=True)
class FieldSchema:
    """One object field with its observation counters."""

    name: str
    type: SchemaNode
    optional: bool = False
    observed_count: int = 1
    total_samples: int = 1


@dataclass(frozen=True, slots=True)
class ObjectType(SchemaNode):
    """Ordered record; ``name`` stays ``None`` until naming runs."""

    fields: tuple[FieldSchema, ...] = ()
    sample_count: int = 1
    name: str | None = None

    @property
    def kind(self) -> str:
        return "object"

    @property
    def field_names(self) -> list[str]:
        return [item.name for item in self.fields]

    def field(self, name: str) -> FieldSchema:
        for item in self.fields:
            if item.name == name:
                return item
        raise KeyError(name)


@dataclass(frozen=True, slots=True)
class OptionalType(SchemaNode):
    inner: SchemaNode

    @property
    def kind(self) -> str:
        return "optional"


@dataclass(frozen=True, slots=True)
class UnionType(SchemaNode):
    """Fallback for irreconcilable kinds; variants are kept in canonical order."""

    variants: tuple[SchemaNode, ...]

    @property
    def kind(self) -> str:
        return "union"


def make_optional(node: SchemaNode) -> SchemaNode:
    """Wrap ``node`` as optional unless it is already nullable."""

    if isinstance(node, (OptionalType, NullType)):
        return node
    return OptionalType(node)


def unwrap_optional(node: SchemaNode) -> SchemaNode:
    return node.inner if isinstance(node, OptionalType) else node


def signature(node: SchemaNode) -> Hashable:
    """Structural identity of ``node``.

    Object names, field order and observation counters are ignored; field
    names, field types and field optionality are part of the signature.
    """

    if isinstance(node, StringType):
        return ("string", node.numeric_hint)
    if isinstance(node, ArrayType):
        return ("array", signature(node.element), node.empty)
    if isinstance(node, ObjectType):
        return (
            "object",
            tuple(
                sorted(
                    ((item.name, signature(item.type), item.optional) for item in node.fields),
                    key=lambda entry: entry[0],
                )
            ),
        )
    if isinstance(node, OptionalType):
        return ("optional", signature(node.inner))
    if isinstance(node, UnionType):
        return ("union", tuple(signature(variant) for variant in node.variants))
    return (node.kind,)


def structurally_equal(left: SchemaNode, right: SchemaNode) -> bool:
    return signature(left) == signature(right)


def describe(node: SchemaNode) -> str:
    """Compact human-readable rendering used in logs and test failure output."""

    if isinstance(node, StringType) and node.numeric_hint:
        return "string(numeric)"
    if isinstance(node, ArrayType):
        return "[]" + ("empty" if node.empty else describe(node.element))
    if isinstance(node, ObjectType):
        body = ", ".join(
            f"{item.name}{'?' if item.optional else ''}: {describe(item.type)}" for item in node.fields
        )
        return f"{node.name or 'object'}{{{body}}}"
    if isinstance(node, OptionalType):
        return f"optional({describe(node.inner)})"
    if isinstance(node, UnionType):
        return "union(" + " | ".join(describe(variant) for variant in node.variants) + ")"
    return node.kind
