"""Schema inference and unification engine."""

from typeforge.inference.detectors import (
    TIMESTAMP_LAYOUTS,
    SemanticDetector,
    SemanticKind,
    SemanticMatch,
    TimestampLayout,
)
from typeforge.inference.engine import InferenceResult, SchemaBuilder, build_inferencer, infer_schema, merge_all
from typeforge.inference.inferencer import TypeInferencer, infer
from typeforge.inference.merger import ConflictRecord, ConflictSink, merge
from typeforge.inference.naming import NamedSchema, Namer, name_schema
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
    signature,
    structurally_equal,
)

__all__ = [
    "ArrayType",
    "BoolType",
    "ConflictRecord",
    "ConflictSink",
    "FieldSchema",
    "FloatType",
    "InferenceResult",
    "IntType",
    "NamedSchema",
    "Namer",
    "NullType",
    "ObjectType",
    "OptionalType",
    "SchemaBuilder",
    "SchemaNode",
    "SemanticDetector",
    "SemanticKind",
    "SemanticMatch",
    "StringType",
    "TIMESTAMP_LAYOUTS",
    "TimestampLayout",
    "TimestampType",
    "TypeInferencer",
    "UnionType",
    "build_inferencer",
    "infer",
    "infer_schema",
    "merge",
    "merge_all",
    "name_schema",
    "signature",
    "structurally_equal",
]
