"""Deterministic naming and structural deduplication of object types.

Runs once over the fully merged tree. Every object is keyed by its
structural signature: the first occurrence (in post-order) receives a name
derived from its field path, later occurrences with the same signature reuse
that exact definition instance. Name collisions between different shapes are
resolved by prepending enclosing path segments, never by counters, so the
output only depends on the input tree.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Hashable

from typeforge.errors import NamingCollisionExhaustedError
from typeforge.inference.nodes import (
    ArrayType,
    ObjectType,
    OptionalType,
    SchemaNode,
    UnionType,
    signature,
    unwrap_optional,
)

DEFAULT_ROOT_NAME = "Root"
_WORD_SPLIT_RE = re.compile(r"[^0-9A-Za-z]+")
_TRAILING_WORD_RE = re.compile(r"([A-Z]?[a-z]+)$")


@dataclass(frozen=True, slots=True)
class NamedSchema:
    """Root node plus named object definitions in post-order."""

    root: SchemaNode
    definitions: tuple[ObjectType, ...] = ()

    @property
    def names(self) -> list[str]:
        return [definition.name or "" for definition in self.definitions]

    def definition(self, name: str) -> ObjectType:
        for definition in self.definitions:
            if definition.name == name:
                return definition
        raise KeyError(name)

    def index_of(self, name: str) -> int:
        return self.names.index(name)


class Namer:
    """Per-invocation naming state; create a fresh instance for every run."""

    def __init__(self, root_name: str = DEFAULT_ROOT_NAME) -> None:
        self.root_name = to_type_name(root_name)
        self._by_signature: dict[Hashable, ObjectType] = {}
        self._owners: dict[str, Hashable] = {}
        self._definitions: list[ObjectType] = []

    def name(self, node: SchemaNode) -> NamedSchema:
        root_object = _root_object(node)
        if root_object is not None:
            self._owners[self.root_name] = signature(root_object)
        named_root = self._visit(node, ())
        return NamedSchema(root=named_root, definitions=tuple(self._definitions))

    def _visit(self, node: SchemaNode, words: tuple[str, ...]) -> SchemaNode:
        if isinstance(node, OptionalType):
            return OptionalType(self._visit(node.inner, words))
        if isinstance(node, UnionType):
            return UnionType(tuple(self._visit(variant, words) for variant in node.variants))
        if isinstance(node, ArrayType):
            return replace(node, element=self._visit(node.element, self._element_words(words)))
        if isinstance(node, ObjectType):
            return self._visit_object(node, words)
        return node

    def _visit_object(self, node: ObjectType, words: tuple[str, ...]) -> ObjectType:
        key = signature(node)
        existing = self._by_signature.get(key)
        if existing is not None:
            return existing
        fields = tuple(
            replace(item, type=self._visit(item.type, words + (to_type_name(item.name),)))
            for item in node.fields
        )
        named = ObjectType(fields=fields, sample_count=node.sample_count, name=self._assign(key, words))
        self._by_signature[key] = named
        self._definitions.append(named)
        return named

    def _element_words(self, words: tuple[str, ...]) -> tuple[str, ...]:
        if not words:
            return (f"{self.root_name}Item",)
        return words[:-1] + (singularize(words[-1]),)

    def _assign(self, key: Hashable, words: tuple[str, ...]) -> str:
        for candidate in self._candidates(words):
            owner = self._owners.get(candidate)
            if owner is None or owner == key:
                self._owners[candidate] = key
                return candidate
        base = words[-1] if words else self.root_name
        raise NamingCollisionExhaustedError(base, ".".join(words))

    def _candidates(self, words: tuple[str, ...]) -> list[str]:
        if not words:
            return [self.root_name]
        candidates = [words[-1]]
        for word in reversed(words[:-1]):
            candidates.append(word + candidates[-1])
        fallback = self.root_name + candidates[-1]
        if fallback not in candidates:
            candidates.append(fallback)
        # Words never contain "_", so this one is unique per path.
        candidates.append("_".join((self.root_name,) + words))
        return candidates


def _root_object(node: SchemaNode) -> ObjectType | None:
    node = unwrap_optional(node)
    if isinstance(node, UnionType):
        for variant in node.variants:
            if isinstance(variant, ObjectType):
                return variant
        return None
    return node if isinstance(node, ObjectType) else None


def name_schema(node: SchemaNode, root_name: str = DEFAULT_ROOT_NAME) -> NamedSchema:
    """Assign names to every object type in ``node`` and collect definitions."""

    return Namer(root_name).name(node)


def to_type_name(value: str) -> str:
    """PascalCase identifier for a field name; acronyms are kept as written."""

    words = [word for word in _WORD_SPLIT_RE.split(value) if word]
    name = "".join(word[0].upper() + word[1:] for word in words)
    if not name:
        return "Field"
    if name[0].isdigit():
        return f"Field{name}"
    return name


def singularize(name: str) -> str:
    """Singular form of the trailing word of a PascalCase name."""

    match = _TRAILING_WORD_RE.search(name)
    if match is None:
        return name
    head = name[: match.start()]
    return head + _singularize_word(match.group(1))


def _singularize_word(word: str) -> str:
    lowered = word.lower()
    if len(lowered) <= 3:
        return word
    if lowered.endswith("ies"):
        return word[:-3] + "y"
    if lowered.endswith(("sses", "shes", "ches", "uses", "xes", "zes")):
        return word[:-2]
    if lowered.endswith(("ss", "us", "is")):
        return word
    if lowered.endswith("s"):
        return word[:-1]
    return word
