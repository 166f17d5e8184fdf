"""Operations that rasterize ECM patches and composite layers."""

from .orientation import (
    random_orientation,
    perpendicular_orientation,
    parallel_orientation,
    closest_boundary_angle,
    orientation_field,
)
from .patches import resolve_patch, check_orientation
from .compose import (
    resolve_patch_collection,
    resolve_layer,
    resolve_all,
    compose_document,
)

__all__ = [
    "random_orientation",
    "perpendicular_orientation",
    "parallel_orientation",
    "closest_boundary_angle",
    "orientation_field",
    "resolve_patch",
    "check_orientation",
    "resolve_patch_collection",
    "resolve_layer",
    "resolve_all",
    "compose_document",
]
