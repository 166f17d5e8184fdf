"""Bounded optimization helpers used by the fiber orientation solver."""

from .solvers import (
    SolverConfig,
    SolverResult,
    solve_bounded_optimization,
    bounded_scalar_minimize,
)

__all__ = [
    "SolverConfig",
    "SolverResult",
    "solve_bounded_optimization",
    "bounded_scalar_minimize",
]
