"""
Exceptions raised while reading an ECM description or compositing it.

Every error is fatal to the current generation run. Spec errors describe a
problem with the input document; composition errors describe a geometric
conflict between patches or layers.
"""

from typing import Iterable, Optional


class ECMCreatorError(Exception):
    """Base exception for ECM creator errors."""
    pass


class ECMSpecError(ECMCreatorError):
    """Raised when the ECM description is malformed."""
    pass


class UnrecognizedPatchTypeError(ECMSpecError):
    """Raised when a patch collection names an unknown patch type."""

    def __init__(self, patch_type: Optional[str], recognized: Iterable[str], context: str = ""):
        self.patch_type = patch_type
        self.recognized = tuple(recognized)
        where = f"{context}: " if context else ""
        super().__init__(
            f"{where}Patch type '{patch_type}' not recognized. "
            f"Recognized patch types are: {_quoted(self.recognized)}"
        )


class UnrecognizedOrientationError(ECMSpecError):
    """Raised when an orientation mode is not allowed for a patch kind or region."""

    def __init__(self, orientation: str, allowed: Iterable[str], context: str):
        self.orientation = orientation
        self.allowed = tuple(allowed)
        super().__init__(
            f"Orientation '{orientation}' not recognized for {context}. "
            f"Recognized orientations are: {_quoted(self.allowed)}"
        )


class MissingRequiredElementError(ECMSpecError):
    """Raised when a required element or attribute is absent."""

    def __init__(self, name: str, context: str, expected: str = "", attribute: bool = False):
        self.name = name
        what = f"attribute '{name}'" if attribute else f"element <{name}>"
        message = f"{context} is missing required {what}."
        if expected:
            message += f" Expected: {expected}"
        super().__init__(message)


class InvalidValueError(ECMSpecError):
    """Raised when element text cannot be read as the expected type."""
    pass


class RotationUnitsConflictError(ECMSpecError):
    """Raised when a pi-bearing rotation is declared to be in degrees."""
    pass


class RotationParseError(ECMSpecError):
    """Raised when a rotation expression cannot be evaluated."""
    pass


class ECMCompositionError(ECMCreatorError):
    """Raised when patches or layers cannot be composited."""
    pass


class OverlapViolationError(ECMCompositionError):
    """Raised when two patches of the same layer define the same voxel."""

    def __init__(self, message: str, n_overlapping: int = 0):
        self.n_overlapping = n_overlapping
        super().__init__(message)


class IncompleteCoverageError(ECMCompositionError):
    """Raised when voxels remain undefined after all layers are composited."""

    def __init__(self, message: str, n_undefined: int = 0):
        self.n_undefined = n_undefined
        super().__init__(message)


def _quoted(values: Iterable[str]) -> str:
    return ", ".join(f"`{v}`" for v in values)


__all__ = [
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
