"""
Fiber orientation modes for ECM patches.

Three modes are supported:

- random: an independent uniformly distributed direction per voxel
- perpendicular: the direction from the closest point on the ellipse
  boundary to the voxel, i.e. normal to the ellipse
- parallel: the perpendicular direction rotated 90 degrees counter-clockwise,
  i.e. tangent to the ellipse

All functions return unit vectors (zero for degenerate points) scaled by the
requested anisotropy, with shape (n, 2).
"""

from typing import Optional
import logging
import numpy as np

from ecm_policies import OrientationPolicy

from ..core.ellipse import EllipticalRegion
from ..specs.patch_spec import OrientationMode
from ..optimization import SolverConfig, bounded_scalar_minimize

logger = logging.getLogger(__name__)

# Counter-clockwise quarter turn.
R90 = np.array([
    [0.0, -1.0],
    [1.0, 0.0],
])

DEGENERATE_NORM = 1e-12


def random_orientation(
    n: int,
    anisotropy: float,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """Draw n independent directions uniformly on the circle, scaled by anisotropy."""
    if rng is None:
        rng = np.random.default_rng()
    theta = rng.uniform(0.0, 2.0 * np.pi, n)
    return anisotropy * np.column_stack([np.cos(theta), np.sin(theta)])


def closest_boundary_angle(
    region: EllipticalRegion,
    u: float,
    v: float,
    config: Optional[SolverConfig] = None,
) -> float:
    """
    Parametric angle of the closest point on the ellipse boundary.

    Minimizes (u - a cos t)^2 + (v - b sin t)^2 over t in [-pi, pi], starting
    from atan2(v, u). Coordinates are local to the ellipse.
    """
    a, b = region.semi_axes

    def objective(t: float) -> float:
        return (u - a * np.cos(t)) ** 2 + (v - b * np.sin(t)) ** 2

    def derivative(t: float) -> float:
        return (
            2.0 * (u - a * np.cos(t)) * a * np.sin(t)
            - 2.0 * (v - b * np.sin(t)) * b * np.cos(t)
        )

    return bounded_scalar_minimize(
        objective,
        float(np.arctan2(v, u)),
        (-np.pi, np.pi),
        derivative=derivative,
        config=config,
    )


def _unit_local_normal(
    region: EllipticalRegion,
    u: float,
    v: float,
    config: Optional[SolverConfig],
) -> np.ndarray:
    t = closest_boundary_angle(region, u, v, config)
    vec = np.array([u - region.a * np.cos(t), v - region.b * np.sin(t)])
    norm = np.hypot(vec[0], vec[1])
    if norm < DEGENERATE_NORM:
        logger.debug(f"Point ({u:g}, {v:g}) lies on the ellipse boundary; orientation set to zero")
        return np.zeros(2)
    return vec / norm


def perpendicular_orientation(
    region: EllipticalRegion,
    x: np.ndarray,
    y: np.ndarray,
    anisotropy: float = 1.0,
    config: Optional[SolverConfig] = None,
) -> np.ndarray:
    """
    Directions normal to the ellipse at each point, in the global frame.

    Points lying exactly on the boundary have no defined normal and get a
    zero vector.
    """
    u, v = region.to_local(np.atleast_1d(x), np.atleast_1d(y))
    local = np.array(
        [_unit_local_normal(region, ui, vi, config) for ui, vi in zip(u, v)]
    ).reshape(-1, 2)
    return anisotropy * region.rotate_to_global(local)


def _polynomial_tangent(region: EllipticalRegion, u: float, v: float) -> np.ndarray:
    a, b = region.semi_axes
    u, v = float(u), float(v)
    pa = np.polynomial.Polynomial([a, 1.0]) ** 2
    pb = np.polynomial.Polynomial([b, 1.0]) ** 2
    p = u ** 2 * pb + v ** 2 * pa - pa * pb
    roots = p.roots()
    real = roots[np.abs(roots.imag) < 1e-9].real
    real = real[real > -min(a, b)]
    if real.size == 0:
        return np.zeros(2)
    t = real.max()
    tangent = np.array([-v / (b + t) ** 2, u / (a + t) ** 2])
    norm = np.hypot(tangent[0], tangent[1])
    if norm < DEGENERATE_NORM:
        return np.zeros(2)
    return tangent / norm


def parallel_orientation(
    region: EllipticalRegion,
    x: np.ndarray,
    y: np.ndarray,
    anisotropy: float = 1.0,
    config: Optional[SolverConfig] = None,
    method: str = "rotate_perpendicular",
) -> np.ndarray:
    """
    Directions tangent to the ellipse at each point, in the global frame.

    Parameters
    ----------
    method : str
        "rotate_perpendicular" (default) rotates the perpendicular direction
        a quarter turn counter-clockwise. "solve_polynomial" uses the tangent
        of the offset ellipse (a + t, b + t) passing through the point, where
        t is found from a quartic; it only approximates the perpendicular
        construction away from the boundary.
    """
    if method == "rotate_perpendicular":
        perp = perpendicular_orientation(region, x, y, anisotropy, config)
        return perp @ R90.T
    if method == "solve_polynomial":
        logger.warning(
            "The solve_polynomial parallel method only approximates the "
            "rotate_perpendicular result; prefer rotate_perpendicular"
        )
        u, v = region.to_local(np.atleast_1d(x), np.atleast_1d(y))
        local = np.array(
            [_polynomial_tangent(region, ui, vi) for ui, vi in zip(u, v)]
        ).reshape(-1, 2)
        return anisotropy * region.rotate_to_global(local)
    raise ValueError(
        f"Unknown parallel method '{method}'. "
        "Valid methods: ['rotate_perpendicular', 'solve_polynomial']"
    )


def solver_config_from_policy(policy: OrientationPolicy) -> SolverConfig:
    return SolverConfig(
        method=policy.solver_method,
        tolerance=policy.tolerance,
        max_iterations=policy.max_iterations,
    )


def orientation_field(
    mode: OrientationMode,
    anisotropy: float,
    region: Optional[EllipticalRegion] = None,
    rng: Optional[np.random.Generator] = None,
    policy: Optional[OrientationPolicy] = None,
):
    """
    Build the orientation_fn(x, y) used to fill a voxel subset.

    Parallel and perpendicular modes need the region they are relative to.
    """
    if policy is None:
        policy = OrientationPolicy()

    if mode == OrientationMode.RANDOM:
        def fn(x, y):
            return random_orientation(len(x), anisotropy, rng)
        return fn

    if region is None:
        raise ValueError(f"Orientation mode '{mode.value}' requires an elliptical region")

    config = solver_config_from_policy(policy)
    if mode == OrientationMode.PERPENDICULAR:
        def fn(x, y):
            return perpendicular_orientation(region, x, y, anisotropy, config)
        return fn

    def fn(x, y):
        return parallel_orientation(region, x, y, anisotropy, config, method=policy.parallel_method)
    return fn
