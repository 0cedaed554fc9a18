"""Exceptions raised when a layout cannot be generated."""
from __future__ import annotations


class GenerationError(RuntimeError):
    """A generation run aborted; retry with another seed."""


class DegenerateGeometryError(GenerationError):
    """Geometry that the polyline toolkit cannot work with.

    Raised for zero-length edges, snapped rays that never meet, wall pieces
    without a shared endpoint and loops that collapse while being cleaned.
    """
