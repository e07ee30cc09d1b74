"""Pydantic models for bodyfile."""

from bodyfile.models.error import ErrorCode, StructuredError
from bodyfile.models.line import BodyfileLine
from bodyfile.models.metrics import StepMetrics

__all__ = [
    "BodyfileLine",
    "ErrorCode",
    "StructuredError",
    "StepMetrics",
]
