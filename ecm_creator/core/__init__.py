"""Core data structures for ECM rasterization."""

from .ellipse import EllipticalRegion, EllipseZone, ellipse_functional
from .grid import VoxelGrid, voxel_centers, OUTPUT_COLUMNS
from .errors import (
    ECMCreatorError,
    ECMSpecError,
    UnrecognizedPatchTypeError,
    UnrecognizedOrientationError,
    MissingRequiredElementError,
    InvalidValueError,
    RotationUnitsConflictError,
    RotationParseError,
    ECMCompositionError,
    OverlapViolationError,
    IncompleteCoverageError,
)

__all__ = [
    "EllipticalRegion",
    "EllipseZone",
    "ellipse_functional",
    "VoxelGrid",
    "voxel_centers",
    "OUTPUT_COLUMNS",
    "ECMCreatorError",
    "ECMSpecError",
    "UnrecognizedPatchTypeError",
    "UnrecognizedOrientationError",
    "MissingRequiredElementError",
    "InvalidValueError",
    "RotationUnitsConflictError",
    "RotationParseError",
    "ECMCompositionError",
    "OverlapViolationError",
    "IncompleteCoverageError",
]
