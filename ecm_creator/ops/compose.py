"""
Layer compositing.

Within a layer, patches (and patch collections) must not define the same
voxel; any overlap is an error. Layers are then stacked in ascending ID
order, a higher layer replacing whatever lower layers assigned. Once every
layer is merged, every voxel must be defined.
"""

from typing import Iterable, Optional
import logging
import numpy as np

from ecm_policies import GenerationReport, OrientationPolicy

from ..core.errors import IncompleteCoverageError
from ..core.grid import VoxelGrid
from ..specs.patch_spec import ECMDocument, Layer, PatchCollection
from .patches import resolve_patch

logger = logging.getLogger(__name__)

MAX_REPORTED_VOXELS = 5


def resolve_patch_collection(
    collection: PatchCollection,
    domain_grid: VoxelGrid,
    rng: Optional[np.random.Generator] = None,
    policy: Optional[OrientationPolicy] = None,
    context: str = "",
) -> VoxelGrid:
    """
    Resolve every patch of a collection into one scratch grid.

    Raises
    ------
    OverlapViolationError
        If two patches of the collection define the same voxel.
    """
    scratch = domain_grid.empty_like()
    for patch in collection.patches:
        patch_context = f"{context}, {collection.kind.value} patch {patch.patch_id}".lstrip(", ")
        patch_grid = resolve_patch(patch, domain_grid, rng=rng, policy=policy, context=patch_context)
        scratch = patch_grid.merge_into(scratch, allow_overwrite=False, context=patch_context)
    return scratch


def resolve_layer(
    layer: Layer,
    domain_grid: VoxelGrid,
    rng: Optional[np.random.Generator] = None,
    policy: Optional[OrientationPolicy] = None,
) -> VoxelGrid:
    """
    Resolve all collections of a layer into one scratch grid.

    Overlap detection spans the whole layer, across collections.
    """
    context = f"Layer {layer.layer_id}"
    scratch = domain_grid.empty_like()
    for collection in layer.collections:
        collection_grid = resolve_patch_collection(
            collection, domain_grid, rng=rng, policy=policy, context=context
        )
        scratch = collection_grid.merge_into(
            scratch,
            allow_overwrite=False,
            context=f"{context}, {collection.kind.value} patch collection",
        )
    return scratch


def _describe_undefined(grid: VoxelGrid) -> str:
    idx = np.flatnonzero(~grid.defined)[:MAX_REPORTED_VOXELS]
    points = ", ".join(f"({grid.x[i]:g}, {grid.y[i]:g})" for i in idx)
    more = " ..." if grid.n_undefined > len(idx) else ""
    return points + more


def resolve_all(
    layers: Iterable[Layer],
    domain_grid: VoxelGrid,
    rng: Optional[np.random.Generator] = None,
    policy: Optional[OrientationPolicy] = None,
    report: Optional[GenerationReport] = None,
) -> VoxelGrid:
    """
    Composite layers in ascending ID order into the final grid.

    Parameters
    ----------
    layers : iterable of Layer
        Layers in any order; they are sorted by ID (stable for equal IDs).
    domain_grid : VoxelGrid
        Grid of the domain.
    report : GenerationReport, optional
        Receives per-layer voxel counts.

    Raises
    ------
    OverlapViolationError
        If patches within one layer overlap.
    IncompleteCoverageError
        If any voxel is left undefined.
    """
    accumulator = domain_grid.empty_like()
    for layer in sorted(layers, key=lambda layer: layer.layer_id):
        layer_grid = resolve_layer(layer, domain_grid, rng=rng, policy=policy)
        n_overwritten = int(np.count_nonzero(layer_grid.defined & accumulator.defined))
        accumulator = layer_grid.merge_into(accumulator, allow_overwrite=True)
        logger.info(
            f"Layer {layer.layer_id}: {layer_grid.n_defined} voxel(s) defined, "
            f"{n_overwritten} overwritten"
        )
        if report is not None:
            report.record_layer(layer.layer_id, layer_grid.n_defined, n_overwritten)

    if accumulator.n_undefined:
        raise IncompleteCoverageError(
            f"All voxels must have their ECM properties defined, but {accumulator.n_undefined} "
            f"of {len(accumulator)} voxel(s) are undefined, e.g. at {_describe_undefined(accumulator)}. "
            "Add a base layer (for example an everywhere patch) or extend the patches.",
            n_undefined=accumulator.n_undefined,
        )
    return accumulator


def compose_document(
    document: ECMDocument,
    domain_grid: VoxelGrid,
    rng: Optional[np.random.Generator] = None,
    policy: Optional[OrientationPolicy] = None,
    report: Optional[GenerationReport] = None,
) -> VoxelGrid:
    """Composite every layer of a parsed document."""
    return resolve_all(document.ordered_layers(), domain_grid, rng=rng, policy=policy, report=report)
