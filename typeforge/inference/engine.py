"""Inference orchestration: per-sample inference, fold, naming."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass
from time import perf_counter

from typeforge.config import Settings, get_settings
from typeforge.errors import NamingCollisionExhaustedError
from typeforge.inference.detectors import SemanticDetector, layouts_by_name
from typeforge.inference.inferencer import TypeInferencer
from typeforge.inference.merger import ConflictRecord, ConflictSink, merge
from typeforge.inference.naming import NamedSchema, name_schema
from typeforge.inference.nodes import NullType, ObjectType, SchemaNode
from typeforge.values.types import RawValue

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class InferenceResult:
    """Named schema plus the diagnostics collected while building it."""

    schema: NamedSchema
    merged: SchemaNode
    conflicts: tuple[ConflictRecord, ...]
    sample_count: int

    @property
    def root(self) -> SchemaNode:
        return self.schema.root

    @property
    def definitions(self) -> tuple[ObjectType, ...]:
        return self.schema.definitions


def build_inferencer(settings: Settings | None = None) -> TypeInferencer:
    """Return an inferencer configured from settings."""

    active = settings or get_settings()
    layouts = None if active.timestamp_layouts is None else layouts_by_name(active.timestamp_layouts)
    return TypeInferencer(SemanticDetector(layouts), int_min=active.int_min, int_max=active.int_max)


def merge_all(
    nodes: Sequence[SchemaNode],
    sink: ConflictSink | None = None,
    executor: Executor | None = None,
) -> SchemaNode | None:
    """Fold ``nodes`` into one node.

    Without an executor this is a left fold. With one, adjacent pairs are
    merged level by level; operand order is kept, so both give the same tree.
    """

    if not nodes:
        return None
    if executor is None:
        merged = nodes[0]
        for node in nodes[1:]:
            merged = merge(merged, node, sink)
        return merged

    level = list(nodes)
    while len(level) > 1:
        lefts = level[0::2]
        rights = level[1::2]
        paired = list(executor.map(lambda pair: merge(pair[0], pair[1], sink), zip(lefts, rights)))
        if len(lefts) > len(rights):
            paired.append(lefts[-1])
        level = paired
    return level[0]


class SchemaBuilder:
    """Incremental sample ingestion for callers that stream samples."""

    def __init__(self, inferencer: TypeInferencer | None = None, sink: ConflictSink | None = None) -> None:
        self.inferencer = inferencer or build_inferencer()
        self.sink = sink if sink is not None else ConflictSink()
        self._merged: SchemaNode | None = None
        self._sample_count = 0

    @property
    def merged(self) -> SchemaNode:
        return self._merged if self._merged is not None else NullType()

    @property
    def sample_count(self) -> int:
        return self._sample_count

    def add(self, sample: RawValue) -> None:
        inferred = self.inferencer.infer(sample, self.sink)
        self.add_node(inferred)

    def add_node(self, node: SchemaNode, sample_count: int = 1) -> None:
        """Merge an already inferred (or partially merged) node."""

        self._merged = node if self._merged is None else merge(self._merged, node, self.sink)
        self._sample_count += sample_count

    def extend(self, samples: Iterable[RawValue]) -> None:
        for sample in samples:
            self.add(sample)

    def build(self, root_name: str | None = None) -> InferenceResult:
        schema = name_schema(self.merged, root_name or get_settings().root_type_name)
        return InferenceResult(
            schema=schema,
            merged=self.merged,
            conflicts=self.sink.records,
            sample_count=self._sample_count,
        )


def infer_schema(
    samples: Iterable[RawValue],
    *,
    root_name: str | None = None,
    parallel: bool | None = None,
    max_workers: int | None = None,
    settings: Settings | None = None,
    inferencer: TypeInferencer | None = None,
) -> InferenceResult:
    """Infer, merge and name a schema for a sequence of samples.

    ``parallel=None`` switches to the thread-pool map-reduce once the sample
    count reaches ``settings.parallel_threshold``.
    """

    active = settings or get_settings()
    active_inferencer = inferencer or build_inferencer(active)
    sample_list = list(samples)
    use_parallel = len(sample_list) >= active.parallel_threshold if parallel is None else parallel
    sink = ConflictSink()

    total_started = perf_counter()
    try:
        started = perf_counter()
        if use_parallel and len(sample_list) > 1:
            with ThreadPoolExecutor(max_workers=max_workers or active.max_workers) as executor:
                inferred = list(executor.map(lambda sample: active_inferencer.infer(sample, sink), sample_list))
                infer_ms = (perf_counter() - started) * 1000.0
                started = perf_counter()
                merged = merge_all(inferred, sink, executor)
        else:
            inferred = [active_inferencer.infer(sample, sink) for sample in sample_list]
            infer_ms = (perf_counter() - started) * 1000.0
            started = perf_counter()
            merged = merge_all(inferred, sink)
        merge_ms = (perf_counter() - started) * 1000.0

        merged_node = merged if merged is not None else NullType()
        started = perf_counter()
        schema = name_schema(merged_node, root_name or active.root_type_name)
        naming_ms = (perf_counter() - started) * 1000.0
    except NamingCollisionExhaustedError:
        logger.exception(
            "typeforge.inference_failed samples=%d elapsed_ms=%.2f",
            len(sample_list),
            (perf_counter() - total_started) * 1000.0,
        )
        raise

    conflicts = sink.records
    for conflict in conflicts:
        logger.warning(
            "typeforge.type_conflict path=%s kinds=%s",
            conflict.path or "<root>",
            ",".join(sorted(conflict.kinds_observed)),
        )
    logger.info(
        (
            "typeforge.inference_timing samples=%d parallel=%s infer_ms=%.2f merge_ms=%.2f "
            "naming_ms=%.2f total_ms=%.2f definitions=%d conflicts=%d"
        ),
        len(sample_list),
        use_parallel,
        infer_ms,
        merge_ms,
        naming_ms,
        (perf_counter() - total_started) * 1000.0,
        len(schema.definitions),
        len(conflicts),
    )
    return InferenceResult(schema=schema, merged=merged_node, conflicts=conflicts, sample_count=len(sample_list))
