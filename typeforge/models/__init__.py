"""ORM models package exports."""

from typeforge.models.inference_run import InferenceRun

__all__ = ["InferenceRun"]
