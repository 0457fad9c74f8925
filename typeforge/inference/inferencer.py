"""Single-sample type inference."""

from __future__ import annotations

from typeforge.inference.detectors import SemanticDetector
from typeforge.inference.merger import ROOT_PATH, ConflictSink, element_path, field_path, merge
from typeforge.inference.nodes import (
    ArrayType,
    BoolType,
    FieldSchema,
    FloatType,
    IntType,
    NullType,
    ObjectType,
    SchemaNode,
)
from typeforge.values.types import RawArray, RawBool, RawNull, RawNumber, RawObject, RawString, RawValue

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class TypeInferencer:
    """Maps one raw value tree to one schema node."""

    def __init__(
        self,
        detector: SemanticDetector | None = None,
        *,
        int_min: int = INT64_MIN,
        int_max: int = INT64_MAX,
    ) -> None:
        if int_min > int_max:
            raise ValueError(f"int_min ({int_min}) must not exceed int_max ({int_max})")
        self.detector = detector or SemanticDetector()
        self.int_min = int_min
        self.int_max = int_max

    def infer(self, value: RawValue, sink: ConflictSink | None = None, path: str = ROOT_PATH) -> SchemaNode:
        if isinstance(value, RawNull):
            return NullType()
        if isinstance(value, RawBool):
            return BoolType()
        if isinstance(value, RawNumber):
            return self._infer_number(value)
        if isinstance(value, RawString):
            return self.detector.classify(value.value)
        if isinstance(value, RawArray):
            return self._infer_array(value, sink, path)
        if isinstance(value, RawObject):
            return self._infer_object(value, sink, path)
        raise TypeError(f"Unsupported raw value: {type(value).__name__}")

    def _infer_number(self, value: RawNumber) -> SchemaNode:
        if value.is_integral and self.int_min <= value.value <= self.int_max:
            return IntType()
        return FloatType()

    def _infer_array(self, value: RawArray, sink: ConflictSink | None, path: str) -> ArrayType:
        if not value.items:
            return ArrayType(element=NullType(), empty=True)
        items_path = element_path(path)
        element: SchemaNode | None = None
        for item in value.items:
            inferred = self.infer(item, sink, items_path)
            element = inferred if element is None else merge(element, inferred, sink, items_path)
        return ArrayType(element=element)  # type: ignore[arg-type]

    def _infer_object(self, value: RawObject, sink: ConflictSink | None, path: str) -> ObjectType:
        return ObjectType(
            fields=tuple(
                FieldSchema(
                    name=name,
                    type=self.infer(item, sink, field_path(path, name)),
                    optional=False,
                    observed_count=1,
                    total_samples=1,
                )
                for name, item in value.fields
            ),
            sample_count=1,
        )


_DEFAULT_INFERENCER = TypeInferencer()


def infer(value: RawValue, sink: ConflictSink | None = None) -> SchemaNode:
    """Infer a schema node for one sample using default detector and integer range."""

    return _DEFAULT_INFERENCER.infer(value, sink)
