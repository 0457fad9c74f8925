"""Inference orchestration, descriptor export and run persistence services."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from time import perf_counter

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from typeforge.config import Settings, get_settings
from typeforge.inference import (
    ArrayType,
    ConflictRecord,
    InferenceResult,
    ObjectType,
    OptionalType,
    SchemaNode,
    StringType,
    UnionType,
    infer_schema,
)
from typeforge.inference.naming import to_type_name
from typeforge.models.inference_run import InferenceRun
from typeforge.schemas.inference import (
    ConflictRead,
    FieldDescriptor,
    InferenceRequest,
    InferenceRunResult,
    TypeDefinitionRead,
    TypeDescriptor,
)
from typeforge.values import RawValue, from_python, parse_documents

logger = logging.getLogger(__name__)


def describe_node(node: SchemaNode) -> TypeDescriptor:
    """Export a named schema node as a descriptor; objects become name references."""

    if isinstance(node, StringType):
        return TypeDescriptor(kind="string", numeric_hint=node.numeric_hint)
    if isinstance(node, ArrayType):
        return TypeDescriptor(kind="array", element=describe_node(node.element), empty=node.empty)
    if isinstance(node, ObjectType):
        return TypeDescriptor(kind="object", name=node.name)
    if isinstance(node, OptionalType):
        return TypeDescriptor(kind="optional", inner=describe_node(node.inner))
    if isinstance(node, UnionType):
        return TypeDescriptor(kind="union", variants=[describe_node(variant) for variant in node.variants])
    return TypeDescriptor(kind=node.kind)  # type: ignore[arg-type]


def describe_definition(definition: ObjectType) -> TypeDefinitionRead:
    return TypeDefinitionRead(
        name=definition.name or "",
        sample_count=definition.sample_count,
        fields=[
            FieldDescriptor(
                name=item.name,
                type=describe_node(item.type),
                optional=item.optional,
                observed_count=item.observed_count,
                total_samples=item.total_samples,
            )
            for item in definition.fields
        ],
    )


def describe_conflict(conflict: ConflictRecord) -> ConflictRead:
    return ConflictRead(path=conflict.path, kinds_observed=sorted(conflict.kinds_observed))


def build_run_result(
    result: InferenceResult,
    *,
    root_type_name: str,
    inference_run_id: int | None = None,
) -> InferenceRunResult:
    """Convert an engine result into the API/export payload."""

    return InferenceRunResult(
        inference_run_id=inference_run_id,
        root_type_name=root_type_name,
        sample_count=result.sample_count,
        root=describe_node(result.root),
        definitions=[describe_definition(definition) for definition in result.definitions],
        conflicts=[describe_conflict(conflict) for conflict in result.conflicts],
    )


def load_request_samples(request: InferenceRequest) -> list[RawValue]:
    """Turn request content or decoded samples into raw values."""

    if request.samples is not None:
        return [from_python(sample) for sample in request.samples]
    return parse_documents(request.content or "", request.format, numeric_columns=request.numeric_columns)


def run_inference(
    db: Session | None,
    request: InferenceRequest,
    *,
    settings: Settings | None = None,
) -> InferenceRunResult:
    """Infer a schema for the request samples and optionally persist the run."""

    active = settings or get_settings()
    root_type_name = to_type_name(request.root_type_name or active.root_type_name)
    total_started = perf_counter()
    try:
        started = perf_counter()
        samples = load_request_samples(request)
        parse_ms = (perf_counter() - started) * 1000.0

        result = infer_schema(samples, root_name=root_type_name, settings=active)
        payload = build_run_result(result, root_type_name=root_type_name)

        persist_ms = 0.0
        if db is not None and request.persist:
            started = perf_counter()
            run = _log_inference_run(db, source_format=request.format, payload=payload)
            payload = payload.model_copy(update={"inference_run_id": run.id})
            db.commit()
            persist_ms = (perf_counter() - started) * 1000.0

        logger.info(
            (
                "typeforge.run_timing format=%s inference_run_id=%s samples=%d parse_ms=%.2f "
                "persist_ms=%.2f total_ms=%.2f definitions=%d conflicts=%d"
            ),
            request.format,
            payload.inference_run_id,
            payload.sample_count,
            parse_ms,
            persist_ms,
            (perf_counter() - total_started) * 1000.0,
            len(payload.definitions),
            len(payload.conflicts),
        )
        return payload
    except Exception:
        logger.exception(
            "typeforge.run_failed format=%s elapsed_ms=%.2f",
            request.format,
            (perf_counter() - total_started) * 1000.0,
        )
        raise


def list_inference_runs(db: Session, *, limit: int = 50, offset: int = 0) -> Sequence[InferenceRun]:
    """List stored runs, newest first."""

    stmt = select(InferenceRun).order_by(InferenceRun.id.desc()).limit(limit).offset(offset)
    return list(db.scalars(stmt).all())


def count_inference_runs(db: Session) -> int:
    return int(db.scalar(select(func.count()).select_from(InferenceRun)) or 0)


def get_inference_run(db: Session, run_id: int) -> InferenceRun | None:
    return db.get(InferenceRun, run_id)


def _log_inference_run(db: Session, *, source_format: str, payload: InferenceRunResult) -> InferenceRun:
    run = InferenceRun(
        source_format=source_format,
        root_type_name=payload.root_type_name,
        sample_count=payload.sample_count,
        definition_count=len(payload.definitions),
        conflict_count=len(payload.conflicts),
        root_json=payload.root.model_dump(mode="json"),
        definitions_json=[definition.model_dump(mode="json") for definition in payload.definitions],
        conflicts_json=[conflict.model_dump(mode="json") for conflict in payload.conflicts],
    )
    db.add(run)
    db.flush()
    return run
