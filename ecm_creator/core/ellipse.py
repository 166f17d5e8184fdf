"""
Rotated ellipse geometry for elliptical ECM patches.

An EllipticalRegion is described by its center, semi-axes, a counter-clockwise
rotation and a ring thickness. Points are classified against three nested
zones:

- INSIDE: on or inside the ellipse (a, b)
- THICKNESS: outside the ellipse but on or inside the offset ellipse
  (a + thickness, b + thickness)
- OUTSIDE: everything else

Boundary points resolve toward the interior zone.

All methods accept scalars or numpy arrays of coordinates.
"""

from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Tuple, Union
import numpy as np


ArrayLike = Union[float, np.ndarray]


class EllipseZone(IntEnum):
    """Position of a point relative to an elliptical region."""
    INSIDE = 0
    THICKNESS = 1
    OUTSIDE = 2


def _rotation_matrix(angle: float) -> np.ndarray:
    """Counter-clockwise 2x2 rotation matrix."""
    c = np.cos(angle)
    s = np.sin(angle)
    return np.array([
        [c, -s],
        [s, c],
    ])


def ellipse_functional(u: ArrayLike, v: ArrayLike, a: float, b: float) -> ArrayLike:
    """Implicit ellipse function (u/a)^2 + (v/b)^2 in local coordinates."""
    return (u / a) ** 2 + (v / b) ** 2


@dataclass(frozen=True)
class EllipticalRegion:
    """
    Rotated ellipse with an optional surrounding ring.

    Parameters
    ----------
    center : tuple
        (x0, y0) center of the ellipse.
    semi_axes : tuple
        (a, b) semi-axes along the local u and v directions. Both positive.
    rotation : float
        Counter-clockwise rotation of the local frame, in radians.
    thickness : float
        Width of the ring surrounding the ellipse. Non-negative.
    """

    center: Tuple[float, float]
    semi_axes: Tuple[float, float]
    rotation: float = 0.0
    thickness: float = 0.0
    from_local_matrix: np.ndarray = field(init=False, repr=False, compare=False)
    to_local_matrix: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        a, b = self.semi_axes
        if a <= 0 or b <= 0:
            raise ValueError(f"semi_axes ({a}, {b}) must be positive")
        if self.thickness < 0:
            raise ValueError(f"thickness ({self.thickness}) must be non-negative")
        object.__setattr__(self, "center", (float(self.center[0]), float(self.center[1])))
        object.__setattr__(self, "semi_axes", (float(a), float(b)))
        m = _rotation_matrix(self.rotation)
        object.__setattr__(self, "from_local_matrix", m)
        object.__setattr__(self, "to_local_matrix", m.T.copy())

    @property
    def a(self) -> float:
        return self.semi_axes[0]

    @property
    def b(self) -> float:
        return self.semi_axes[1]

    def without_thickness(self) -> "EllipticalRegion":
        """Same ellipse with a zero-width ring."""
        return replace(self, thickness=0.0)

    def to_local(self, x: ArrayLike, y: ArrayLike) -> Tuple[ArrayLike, ArrayLike]:
        """Translate by -center and rotate by -rotation."""
        dx = np.asarray(x, dtype=float) - self.center[0]
        dy = np.asarray(y, dtype=float) - self.center[1]
        m = self.to_local_matrix
        return m[0, 0] * dx + m[0, 1] * dy, m[1, 0] * dx + m[1, 1] * dy

    def from_local(self, u: ArrayLike, v: ArrayLike) -> Tuple[ArrayLike, ArrayLike]:
        """Rotate by +rotation and translate by +center."""
        u = np.asarray(u, dtype=float)
        v = np.asarray(v, dtype=float)
        m = self.from_local_matrix
        return (
            m[0, 0] * u + m[0, 1] * v + self.center[0],
            m[1, 0] * u + m[1, 1] * v + self.center[1],
        )

    def rotate_to_global(self, vec: np.ndarray) -> np.ndarray:
        """Rotate direction vector(s) of shape (2,) or (n, 2) into the global frame."""
        return np.asarray(vec, dtype=float) @ self.from_local_matrix.T

    def classify(self, x: ArrayLike, y: ArrayLike) -> np.ndarray:
        """
        Classify points into EllipseZone values.

        Returns
        -------
        np.ndarray
            Integer array of EllipseZone values with the shape of x.
        """
        u, v = self.to_local(x, y)
        a, b = self.semi_axes
        t = self.thickness
        inner = ellipse_functional(u, v, a, b) <= 1.0
        outer = ellipse_functional(u, v, a + t, b + t) <= 1.0
        return np.where(
            inner,
            int(EllipseZone.INSIDE),
            np.where(outer, int(EllipseZone.THICKNESS), int(EllipseZone.OUTSIDE)),
        )

    def classify_point(self, x: float, y: float) -> EllipseZone:
        return EllipseZone(int(self.classify(x, y)))

    def inside_disc(self, x: ArrayLike, y: ArrayLike) -> np.ndarray:
        """Disc membership, boundary inclusive."""
        u, v = self.to_local(x, y)
        return ellipse_functional(u, v, self.a, self.b) <= 1.0

    def inside_ring(self, x: ArrayLike, y: ArrayLike) -> np.ndarray:
        """Ring membership: strictly the THICKNESS zone."""
        return self.classify(x, y) == int(EllipseZone.THICKNESS)

    def to_dict(self) -> dict:
        return {
            "x0": self.center[0],
            "y0": self.center[1],
            "a": self.a,
            "b": self.b,
            "rotation": self.rotation,
            "thickness": self.thickness,
        }
