"""Schema inference routes."""

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy.orm import Session

from typeforge.db.dependencies import get_db
from typeforge.errors import MalformedInputError, NamingCollisionExhaustedError
from typeforge.schemas.common import ApiResponse, PagedApiResponse, PageMeta
from typeforge.schemas.inference import InferenceRequest, InferenceRunRead, InferenceRunResult
from typeforge.services.inference import (
    count_inference_runs,
    get_inference_run,
    list_inference_runs,
    run_inference,
)

router = APIRouter(prefix="/schema")


@router.post("/infer", response_model=ApiResponse[InferenceRunResult])
def infer_schema_view(
    request: InferenceRequest,
    db: Session = Depends(get_db),
) -> ApiResponse[InferenceRunResult]:
    """Infer a named schema from sample documents."""

    try:
        result = run_inference(db, request)
    except MalformedInputError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except NamingCollisionExhaustedError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return ApiResponse(data=result)


@router.get("/runs", response_model=PagedApiResponse[InferenceRunRead])
def get_inference_runs(
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
) -> PagedApiResponse[InferenceRunRead]:
    """List stored inference runs, newest first."""

    runs = list_inference_runs(db, limit=limit, offset=offset)
    return PagedApiResponse(
        data=[InferenceRunRead.model_validate(run) for run in runs],
        meta=PageMeta(total=count_inference_runs(db), limit=limit, offset=offset),
    )


@router.get("/runs/{run_id}", response_model=ApiResponse[InferenceRunRead])
def get_inference_run_view(
    run_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
) -> ApiResponse[InferenceRunRead]:
    """Return one stored inference run."""

    run = get_inference_run(db, run_id)
    if run is None:
        raise HTTPException(status_code=404, detail=f"Inference run {run_id} not found")
    return ApiResponse(data=InferenceRunRead.model_validate(run))
