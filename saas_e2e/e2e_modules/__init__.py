"""Shared module namespace for the E2E login helpers."""

from . import data_types, orchestrators, utils

__all__ = [
    "data_types",
    "orchestrators",
    "utils",
]
