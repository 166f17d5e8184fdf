"""
Fiber orientation policies for the ECM creator.

Controls how parallel/perpendicular fiber directions are computed on
elliptical patches and how random orientations are sampled.
"""

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional


ParallelMethod = Literal["rotate_perpendicular", "solve_polynomial"]

PARALLEL_METHODS = ("rotate_perpendicular", "solve_polynomial")


@dataclass
class OrientationPolicy:
    """
    Policy for fiber orientation computation.

    The closest-point search on the ellipse boundary is a bounded scalar
    minimization; ``tolerance`` and ``max_iterations`` cap it.

    JSON Schema:
    {
        "parallel_method": "rotate_perpendicular" | "solve_polynomial",
        "solver_method": str (scipy.optimize.minimize method),
        "tolerance": float,
        "max_iterations": int,
        "seed": int | null
    }
    """
    parallel_method: ParallelMethod = "rotate_perpendicular"
    solver_method: str = "L-BFGS-B"
    tolerance: float = 1e-10
    max_iterations: int = 200
    seed: Optional[int] = None

    def __post_init__(self):
        if self.parallel_method not in PARALLEL_METHODS:
            raise ValueError(
                f"Unknown parallel_method '{self.parallel_method}'. "
                f"Valid methods: {list(PARALLEL_METHODS)}"
            )
        if self.max_iterations <= 0:
            raise ValueError(f"max_iterations ({self.max_iterations}) must be positive")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "parallel_method": self.parallel_method,
            "solver_method": self.solver_method,
            "tolerance": self.tolerance,
            "max_iterations": self.max_iterations,
            "seed": self.seed,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "OrientationPolicy":
        return cls(**{k: v for k, v in d.items() if k in cls.__dataclass_fields__})
