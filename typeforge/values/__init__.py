"""Raw value model and sample adapters."""

from typeforge.values.adapters import from_python, from_records
from typeforge.values.parsers import SAMPLE_FORMATS, SampleFormat, parse_documents
from typeforge.values.types import RawArray, RawBool, RawNull, RawNumber, RawObject, RawString, RawValue

__all__ = [
    "RawArray",
    "RawBool",
    "RawNull",
    "RawNumber",
    "RawObject",
    "RawString",
    "RawValue",
    "SAMPLE_FORMATS",
    "SampleFormat",
    "from_python",
    "from_records",
    "parse_documents",
]
