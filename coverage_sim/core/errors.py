"""Exceptions raised by the analysis engine."""

from __future__ import annotations


class AnalysisError(Exception):
    """Base class for analysis failures."""


class InvalidFloorPlanError(AnalysisError, ValueError):
    """Floor plan bounds or resolution cannot be rasterized."""


class GridTooLargeError(AnalysisError, ValueError):
    """The requested resolution would produce more cells than allowed."""


class UnsupportedSensorError(AnalysisError, TypeError):
    """A sensor record is not one of the known variants."""


class JobStateError(AnalysisError, RuntimeError):
    """Illegal job state transition."""
