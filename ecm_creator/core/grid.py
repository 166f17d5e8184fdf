"""
Voxel grid holding the per-voxel ECM property columns.

The grid is the ordered set of voxel centers of a 2D PhysiCell domain, with x
varying fastest. Alongside the coordinate columns it holds the ECM density,
the 2D fiber orientation vector and a ``defined`` mask recording which voxels
have been assigned.

Grids are treated as snapshots: filling and merging return new grids and
never modify their inputs.
"""

from dataclasses import dataclass, replace
from typing import Callable, Union
import math
import logging
import numpy as np
import pandas as pd

from ecm_policies import DomainConfig

from .errors import OverlapViolationError

logger = logging.getLogger(__name__)

# Keeps an exact multiple of the spacing from adding an extra voxel.
COUNT_EPSILON = 1e-16

OUTPUT_COLUMNS = (
    "x",
    "y",
    "z",
    "ecm_density",
    "ecm_orientation_x",
    "ecm_orientation_y",
)

Selection = Union[np.ndarray, Callable[[np.ndarray, np.ndarray], np.ndarray]]
OrientationFn = Callable[[np.ndarray, np.ndarray], np.ndarray]


def voxel_centers(c_min: float, c_max: float, dc: float) -> np.ndarray:
    """Voxel center coordinates along one axis."""
    n = int(math.ceil((c_max - c_min) / dc - COUNT_EPSILON))
    return c_min + (np.arange(n) + 0.5) * dc


@dataclass(frozen=True)
class VoxelGrid:
    """
    Per-voxel ECM property table.

    Attributes
    ----------
    x, y : np.ndarray
        Voxel center coordinates, shape (n,), x varying fastest.
    z : float
        Constant z coordinate of the whole grid.
    density : np.ndarray
        ECM density, shape (n,).
    orientation : np.ndarray
        Fiber orientation vectors, shape (n, 2).
    defined : np.ndarray
        Boolean mask of voxels whose properties have been assigned.
    nx, ny : int
        Number of voxels along each axis.
    """

    x: np.ndarray
    y: np.ndarray
    z: float
    density: np.ndarray
    orientation: np.ndarray
    defined: np.ndarray
    nx: int
    ny: int

    @classmethod
    def build(cls, config: DomainConfig) -> "VoxelGrid":
        """Create an undefined grid covering the configured domain."""
        xc = voxel_centers(config.x_min, config.x_max, config.dx)
        yc = voxel_centers(config.y_min, config.y_max, config.dy)
        nx, ny = len(xc), len(yc)
        n = nx * ny
        logger.debug(f"Building voxel grid with {nx} x {ny} = {n} voxels")
        return cls(
            x=np.tile(xc, ny),
            y=np.repeat(yc, nx),
            z=config.z0,
            density=np.zeros(n),
            orientation=np.zeros((n, 2)),
            defined=np.zeros(n, dtype=bool),
            nx=nx,
            ny=ny,
        )

    def __len__(self) -> int:
        return len(self.x)

    @property
    def n_defined(self) -> int:
        return int(np.count_nonzero(self.defined))

    @property
    def n_undefined(self) -> int:
        return len(self) - self.n_defined

    def empty_like(self) -> "VoxelGrid":
        """Fresh undefined grid sharing this grid's coordinates."""
        n = len(self)
        return replace(
            self,
            density=np.zeros(n),
            orientation=np.zeros((n, 2)),
            defined=np.zeros(n, dtype=bool),
        )

    def select(self, selection: Selection) -> np.ndarray:
        """Resolve a boolean mask or an (x, y) predicate into a mask."""
        if callable(selection):
            mask = selection(self.x, self.y)
        else:
            mask = selection
        mask = np.asarray(mask, dtype=bool)
        if mask.shape != self.x.shape:
            raise ValueError(f"Selection shape {mask.shape} does not match grid shape {self.x.shape}")
        return mask

    def fill_subset(
        self,
        selection: Selection,
        density: float,
        orientation_fn: OrientationFn,
    ) -> "VoxelGrid":
        """
        Assign density and orientation to the selected voxels.

        Parameters
        ----------
        selection : np.ndarray or callable
            Boolean mask over voxels, or predicate(x, y) returning one.
        density : float
            ECM density for every selected voxel.
        orientation_fn : callable
            orientation_fn(x_sel, y_sel) -> array of shape (k, 2) giving the
            orientation of each selected voxel.

        Returns
        -------
        VoxelGrid
            New grid with the selected voxels defined.
        """
        mask = self.select(selection)
        k = int(np.count_nonzero(mask))

        new_density = self.density.copy()
        new_orientation = self.orientation.copy()
        new_defined = self.defined.copy()

        new_density[mask] = density
        if k > 0:
            vectors = np.asarray(orientation_fn(self.x[mask], self.y[mask]), dtype=float)
            new_orientation[mask] = vectors.reshape(k, 2)
        new_defined[mask] = True

        return replace(
            self,
            density=new_density,
            orientation=new_orientation,
            defined=new_defined,
        )

    def merge_into(
        self,
        accumulator: "VoxelGrid",
        allow_overwrite: bool,
        context: str = "",
    ) -> "VoxelGrid":
        """
        Copy this grid's defined voxels into the accumulator.

        Parameters
        ----------
        accumulator : VoxelGrid
            Grid receiving the voxels. It is not modified.
        allow_overwrite : bool
            If False, any voxel defined in both grids raises
            OverlapViolationError.
        context : str
            Description of what is being merged, used in error messages.

        Returns
        -------
        VoxelGrid
            Merged copy of the accumulator.
        """
        if len(accumulator) != len(self):
            raise ValueError(f"Cannot merge grids of {len(self)} and {len(accumulator)} voxels")

        mask = self.defined
        if not allow_overwrite:
            clash = mask & accumulator.defined
            n_clash = int(np.count_nonzero(clash))
            if n_clash:
                first = int(np.flatnonzero(clash)[0])
                where = f"{context} " if context else "Patch "
                raise OverlapViolationError(
                    f"{where}overlaps previously placed patches in the same layer at "
                    f"{n_clash} voxel(s), first at (x={self.x[first]:g}, y={self.y[first]:g}). "
                    "Overlapping patches are not allowed within the same layer. "
                    "Remove the overlap or move one patch to a higher layer to "
                    "indicate which one is on top.",
                    n_overlapping=n_clash,
                )

        new_density = accumulator.density.copy()
        new_orientation = accumulator.orientation.copy()
        new_defined = accumulator.defined.copy()

        new_density[mask] = self.density[mask]
        new_orientation[mask] = self.orientation[mask]
        new_defined[mask] = True

        return replace(
            accumulator,
            density=new_density,
            orientation=new_orientation,
            defined=new_defined,
        )

    def to_dataframe(self) -> pd.DataFrame:
        """Output table in generation order."""
        return pd.DataFrame({
            "x": self.x,
            "y": self.y,
            "z": np.full(len(self), self.z),
            "ecm_density": self.density,
            "ecm_orientation_x": self.orientation[:, 0],
            "ecm_orientation_y": self.orientation[:, 1],
        }, columns=list(OUTPUT_COLUMNS))
