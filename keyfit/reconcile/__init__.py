"""Key reconciliation engine, options and key transformations."""

from .engine import KeyReconciler, partition_keys
from .options import RESIDUAL_FIELD, ReconcileOptions, RestMode
from .transforms import TRANSFORMATIONS, Transformation, to_snake_case


__all__ = [
    "RESIDUAL_FIELD",
    "TRANSFORMATIONS",
    "KeyReconciler",
    "ReconcileOptions",
    "RestMode",
    "Transformation",
    "partition_keys",
    "to_snake_case",
]
