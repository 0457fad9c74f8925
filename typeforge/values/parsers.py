"""Text document parsers producing one raw value per sample."""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Collection
from typing import Literal

import yaml

from typeforge.errors import MalformedInputError
from typeforge.values.adapters import from_python, from_records
from typeforge.values.types import RawValue

SampleFormat = Literal["json", "jsonl", "yaml", "csv"]
SAMPLE_FORMATS: tuple[str, ...] = ("json", "jsonl", "yaml", "csv")


def parse_documents(
    content: str,
    fmt: SampleFormat,
    *,
    numeric_columns: Collection[str] = (),
) -> list[RawValue]:
    """Parse ``content`` in the given format into raw sample values."""

    if fmt == "json":
        return [from_python(_load_json(content, "document"))]
    if fmt == "jsonl":
        return [
            from_python(_load_json(line, f"line {line_number}"))
            for line_number, line in enumerate(content.splitlines(), start=1)
            if line.strip()
        ]
    if fmt == "yaml":
        return _parse_yaml(content)
    if fmt == "csv":
        reader = csv.DictReader(io.StringIO(content))
        try:
            return list(from_records(reader, numeric_columns=numeric_columns))
        except csv.Error as exc:
            raise MalformedInputError(f"CSV parse error: {exc}") from exc
    raise MalformedInputError(f"Unsupported sample format: {fmt!r}")


def _load_json(text: str, where: str) -> object:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedInputError(f"Invalid JSON in {where}: {exc.msg} (line {exc.lineno}, column {exc.colno})") from exc


def _parse_yaml(content: str) -> list[RawValue]:
    try:
        documents = list(yaml.safe_load_all(content))
    except yaml.YAMLError as exc:
        raise MalformedInputError(f"Invalid YAML: {exc}") from exc
    return [from_python(document) for document in documents if document is not None]
