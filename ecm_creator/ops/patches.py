"""
Patch resolution: turning one patch into a filled scratch grid.

Each patch kind selects a set of voxels and assigns them the ECM properties
of the patch:

- everywhere: every voxel, random orientation only
- ellipse: the ring around the ellipse, any orientation
- elliptical_disc: the closed disc, random orientation only
- ellipse_with_shell: the disc (interior, random only), the ring (shell, any
  orientation) and, when an exterior is given, all remaining voxels
  (random only)
"""

from typing import Callable, Dict, Optional
import logging
import numpy as np

from ecm_policies import OrientationPolicy

from ..core.ellipse import EllipticalRegion, EllipseZone
from ..core.errors import UnrecognizedOrientationError, UnrecognizedPatchTypeError
from ..core.grid import VoxelGrid
from ..specs.patch_spec import (
    ALLOWED_ORIENTATIONS,
    ECMSpec,
    EllipsePatch,
    EllipseWithShellPatch,
    EllipticalDiscPatch,
    EverywherePatch,
    Patch,
    PatchKind,
    ordered_modes,
)
from .orientation import orientation_field

logger = logging.getLogger(__name__)


def check_orientation(ecm: ECMSpec, allowed_key: str, context: str) -> None:
    """Raise UnrecognizedOrientationError if the mode is not allowed here."""
    allowed = ALLOWED_ORIENTATIONS[allowed_key]
    if ecm.orientation not in allowed:
        raise UnrecognizedOrientationError(ecm.orientation.value, ordered_modes(allowed), context)


def _fill(
    grid: VoxelGrid,
    mask: np.ndarray,
    ecm: ECMSpec,
    region: Optional[EllipticalRegion],
    rng: Optional[np.random.Generator],
    policy: Optional[OrientationPolicy],
) -> VoxelGrid:
    fn = orientation_field(ecm.orientation, ecm.anisotropy, region=region, rng=rng, policy=policy)
    return grid.fill_subset(mask, ecm.density, fn)


def resolve_everywhere(patch: EverywherePatch, grid: VoxelGrid, rng=None, policy=None, context="") -> VoxelGrid:
    check_orientation(patch.ecm, "everywhere", context or "an everywhere ECM patch")
    mask = np.ones(len(grid), dtype=bool)
    return _fill(grid, mask, patch.ecm, None, rng, policy)


def resolve_ellipse(patch: EllipsePatch, grid: VoxelGrid, rng=None, policy=None, context="") -> VoxelGrid:
    check_orientation(patch.ecm, "ellipse", context or "an ellipse ECM patch")
    mask = patch.region.inside_ring(grid.x, grid.y)
    return _fill(grid, mask, patch.ecm, patch.region, rng, policy)


def resolve_elliptical_disc(patch: EllipticalDiscPatch, grid: VoxelGrid, rng=None, policy=None, context="") -> VoxelGrid:
    check_orientation(patch.ecm, "elliptical_disc", context or "an elliptical disc ECM patch")
    mask = patch.region.inside_disc(grid.x, grid.y)
    return _fill(grid, mask, patch.ecm, patch.region, rng, policy)


def resolve_ellipse_with_shell(
    patch: EllipseWithShellPatch,
    grid: VoxelGrid,
    rng=None,
    policy=None,
    context="",
) -> VoxelGrid:
    """
    Fill the interior, shell and optional exterior of an ellipse.

    The interior is filled against the same ellipse without a ring, the shell
    against the ring itself.
    """
    context = context or "an ellipse_with_shell ECM patch"
    check_orientation(patch.interior, "interior", f"{context} <interior>")
    check_orientation(patch.shell, "shell", f"{context} <shell>")
    if patch.exterior is not None:
        check_orientation(patch.exterior, "exterior", f"{context} <exterior>")

    zones = patch.region.classify(grid.x, grid.y)

    grid = _fill(grid, zones == int(EllipseZone.INSIDE), patch.interior,
                 patch.region.without_thickness(), rng, policy)
    grid = _fill(grid, zones == int(EllipseZone.THICKNESS), patch.shell,
                 patch.region, rng, policy)
    if patch.exterior is not None:
        grid = _fill(grid, zones == int(EllipseZone.OUTSIDE), patch.exterior,
                     patch.region, rng, policy)
    return grid


PATCH_RESOLVERS: Dict[PatchKind, Callable[..., VoxelGrid]] = {
    PatchKind.EVERYWHERE: resolve_everywhere,
    PatchKind.ELLIPSE: resolve_ellipse,
    PatchKind.ELLIPTICAL_DISC: resolve_elliptical_disc,
    PatchKind.ELLIPSE_WITH_SHELL: resolve_ellipse_with_shell,
}


def resolve_patch(
    patch: Patch,
    domain_grid: VoxelGrid,
    rng: Optional[np.random.Generator] = None,
    policy: Optional[OrientationPolicy] = None,
    context: str = "",
) -> VoxelGrid:
    """
    Resolve one patch into a scratch grid shaped like the domain grid.

    Parameters
    ----------
    patch : Patch
        Parsed patch of any kind.
    domain_grid : VoxelGrid
        Grid whose coordinates are used. Its properties are ignored.
    rng : np.random.Generator, optional
        Source for random orientations.
    policy : OrientationPolicy, optional
        Orientation solver settings.
    context : str
        Layer/patch description used in error messages.

    Returns
    -------
    VoxelGrid
        Scratch grid with only this patch's voxels defined.
    """
    resolver = PATCH_RESOLVERS.get(getattr(patch, "kind", None))
    if resolver is None:
        raise UnrecognizedPatchTypeError(
            getattr(patch, "kind", type(patch).__name__),
            [k.value for k in PatchKind],
            context,
        )
    grid = resolver(patch, domain_grid.empty_like(), rng=rng, policy=policy, context=context)
    logger.debug(f"{context or patch.kind.value}: {grid.n_defined} voxel(s) defined")
    return grid
