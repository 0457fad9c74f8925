"""Unit tests for sample adapters and text document parsers."""

from __future__ import annotations

import unittest
from datetime import date, datetime, timezone
from decimal import Decimal

from typeforge.errors import MalformedInputError
from typeforge.inference.engine import infer_schema
from typeforge.inference.nodes import FloatType, IntType, OptionalType, StringType, TimestampType
from typeforge.values import (
    RawArray,
    RawBool,
    RawNull,
    RawNumber,
    RawObject,
    RawString,
    from_python,
    from_records,
    parse_documents,
)


class FromPythonTests(unittest.TestCase):
    def test_nested_structures_keep_key_order(self) -> None:
        value = from_python({"b": [1, None, True], "a": {"x": "y"}})

        self.assertEqual(
            value,
            RawObject(
                (
                    ("b", RawArray((RawNumber(1), RawNull(), RawBool(True)))),
                    ("a", RawObject((("x", RawString("y")),))),
                )
            ),
        )

    def test_temporal_and_decimal_values(self) -> None:
        self.assertEqual(from_python(date(2024, 3, 1)), RawString("2024-03-01"))
        self.assertEqual(
            from_python(datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)),
            RawString("2024-03-01T12:30:00+00:00"),
        )
        self.assertEqual(from_python(Decimal("10")), RawNumber(10))
        self.assertEqual(from_python(Decimal("1.0")), RawNumber(1.0))

    def test_non_string_keys_are_stringified(self) -> None:
        self.assertEqual(from_python({1: "a"}).keys(), ["1"])

    def test_unsupported_values_are_malformed(self) -> None:
        with self.assertRaises(MalformedInputError):
            from_python({"a": {1, 2}})
        with self.assertRaises(MalformedInputError):
            from_python(Decimal("NaN"))


class FromRecordsTests(unittest.TestCase):
    def test_cells_are_strings_unless_hinted_numeric(self) -> None:
        rows = [{"id": "1", "zip": "02134", "price": "9.50"}, {"id": "2", "zip": "10001", "price": " "}]

        records = list(from_records(rows, numeric_columns={"id", "price"}))

        self.assertEqual(records[0].get("id"), RawNumber(1))
        self.assertEqual(records[0].get("zip"), RawString("02134"))
        self.assertEqual(records[0].get("price"), RawNumber(9.5))
        self.assertEqual(records[1].get("price"), RawNull())

    def test_non_numeric_hinted_cell_is_malformed(self) -> None:
        with self.assertRaises(MalformedInputError):
            list(from_records([{"id": "abc"}], numeric_columns=["id"]))


class ParseDocumentsTests(unittest.TestCase):
    def test_json_document_is_one_sample(self) -> None:
        samples = parse_documents('[{"a": 1}, {"a": 2}]', "json")
        self.assertEqual(len(samples), 1)
        self.assertIsInstance(samples[0], RawArray)

    def test_jsonl_lines_are_samples(self) -> None:
        samples = parse_documents('{"a": 1}\n\n{"a": 2.5}\n', "jsonl")
        result = infer_schema(samples, parallel=False)
        self.assertEqual(result.sample_count, 2)
        self.assertEqual(result.root.field("a").type, FloatType())

    def test_yaml_documents_are_samples_and_timestamps_survive(self) -> None:
        content = "created: 2024-03-01T12:30:00Z\nday: 2024-03-01\n---\n---\ncreated: 2024-03-02T08:00:00Z\n"

        samples = parse_documents(content, "yaml")
        result = infer_schema(samples, parallel=False)

        self.assertEqual(len(samples), 2)
        self.assertEqual(result.root.field("created").type, TimestampType())
        self.assertEqual(result.root.field("day").type, OptionalType(TimestampType()))

    def test_csv_records_with_numeric_hints(self) -> None:
        content = "id,zip,price\n1,02134,9.5\n2,10001,\n"

        result = infer_schema(parse_documents(content, "csv", numeric_columns=["id", "price"]), parallel=False)

        self.assertEqual(result.sample_count, 2)
        self.assertEqual(result.root.field("id").type, IntType())
        self.assertEqual(result.root.field("zip").type, StringType(numeric_hint=True))
        self.assertEqual(result.root.field("price").type, OptionalType(FloatType()))

    def test_malformed_documents_raise(self) -> None:
        cases = [
            ('{"a": ', "json"),
            ('{"a": 1}\nnot json', "jsonl"),
            ("a: [1, 2", "yaml"),
            ("a,b\n1,2,3\n", "csv"),
        ]
        for content, fmt in cases:
            with self.subTest(fmt=fmt):
                with self.assertRaises(MalformedInputError):
                    parse_documents(content, fmt)


if __name__ == "__main__":
    unittest.main()
