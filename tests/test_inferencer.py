"""Unit tests for single-sample type inference and the raw value model."""

from __future__ import annotations

import unittest

from typeforge.errors import MalformedInputError
from typeforge.inference.inferencer import TypeInferencer, infer
from typeforge.inference.merger import ConflictRecord, ConflictSink
from typeforge.inference.nodes import (
    ArrayType,
    BoolType,
    FieldSchema,
    FloatType,
    IntType,
    NullType,
    ObjectType,
    OptionalType,
    StringType,
    TimestampType,
    UnionType,
)
from typeforge.values import RawArray, RawBool, RawNull, RawNumber, RawObject, RawString, from_python


class ScalarInferenceTests(unittest.TestCase):
    def test_scalars_map_to_their_node_kinds(self) -> None:
        self.assertEqual(infer(RawNull()), NullType())
        self.assertEqual(infer(RawBool(False)), BoolType())
        self.assertEqual(infer(RawNumber(30)), IntType())
        self.assertEqual(infer(RawNumber(95.5)), FloatType())
        self.assertEqual(infer(RawString("hello")), StringType())
        self.assertEqual(infer(RawString("2024-03-01T12:30:00Z")), TimestampType())
        self.assertEqual(infer(RawString("02134")), StringType(numeric_hint=True))

    def test_float_literal_without_fraction_is_still_float(self) -> None:
        self.assertEqual(infer(RawNumber(1.0)), FloatType())

    def test_integers_outside_target_range_widen_to_float(self) -> None:
        self.assertEqual(infer(RawNumber(2**63 - 1)), IntType())
        self.assertEqual(infer(RawNumber(2**63)), FloatType())
        self.assertEqual(infer(RawNumber(-(2**63) - 1)), FloatType())

        narrow = TypeInferencer(int_min=-128, int_max=127)
        self.assertEqual(narrow.infer(RawNumber(127)), IntType())
        self.assertEqual(narrow.infer(RawNumber(128)), FloatType())

    def test_inverted_integer_range_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            TypeInferencer(int_min=10, int_max=0)


class StructuralInferenceTests(unittest.TestCase):
    def test_empty_array_yields_placeholder_element(self) -> None:
        self.assertEqual(infer(RawArray(())), ArrayType(element=NullType(), empty=True))

    def test_array_elements_are_merged(self) -> None:
        node = infer(from_python([1, 2.5, None]))
        self.assertEqual(node, ArrayType(element=OptionalType(FloatType())))

    def test_heterogeneous_array_records_conflict_at_element_path(self) -> None:
        sink = ConflictSink()
        node = infer(from_python([1, "x"]), sink)

        self.assertEqual(node, ArrayType(element=UnionType((IntType(), StringType()))))
        self.assertEqual(sink.records, (ConflictRecord(path="[]", kinds_observed=frozenset({"int", "string"})),))

    def test_nested_conflict_paths_follow_fields(self) -> None:
        sink = ConflictSink()
        infer(from_python({"orders": [{"tags": [1, True]}]}), sink)
        self.assertEqual([record.path for record in sink], ["orders[].tags[]"])

    def test_object_fields_keep_insertion_order_and_counters(self) -> None:
        node = infer(from_python({"zeta": 1, "alpha": "a", "mid": None}))

        self.assertIsInstance(node, ObjectType)
        self.assertIsNone(node.name)
        self.assertEqual(node.field_names, ["zeta", "alpha", "mid"])
        self.assertEqual(node.sample_count, 1)
        self.assertEqual(
            node.field("mid"),
            FieldSchema(name="mid", type=NullType(), optional=False, observed_count=1, total_samples=1),
        )


class RawValueModelTests(unittest.TestCase):
    def test_malformed_numbers_are_rejected(self) -> None:
        with self.assertRaises(MalformedInputError):
            RawNumber(True)
        with self.assertRaises(MalformedInputError):
            RawNumber(float("nan"))
        with self.assertRaises(MalformedInputError):
            RawNumber(float("inf"))

    def test_duplicate_object_fields_are_rejected(self) -> None:
        with self.assertRaises(MalformedInputError):
            RawObject((("a", RawNull()), ("a", RawBool(True))))

    def test_object_lookup_helpers(self) -> None:
        value = RawObject((("a", RawNumber(1)), ("b", RawString("x"))))
        self.assertEqual(value.keys(), ["a", "b"])
        self.assertEqual(value.get("b"), RawString("x"))
        self.assertIsNone(value.get("c"))


if __name__ == "__main__":
    unittest.main()
