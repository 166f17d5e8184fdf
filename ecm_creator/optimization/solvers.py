"""
Bounded solver utilities for fiber orientation.

Provides the scipy.optimize wrapper used to find the closest point on an
ellipse boundary, the only iterative computation in the ECM creator.

Supported methods (scipy.optimize.minimize):
- L-BFGS-B (default)
- SLSQP
- trust-constr
"""

from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Dict, Any
import logging
import numpy as np
from scipy.optimize import minimize, Bounds

logger = logging.getLogger(__name__)


@dataclass
class SolverConfig:
    """Configuration for the bounded solver."""

    method: str = "L-BFGS-B"
    tolerance: float = 1e-10
    max_iterations: int = 200

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "method": self.method,
            "tolerance": self.tolerance,
            "max_iterations": self.max_iterations,
        }


@dataclass
class SolverResult:
    """Result from the bounded solver."""

    x: np.ndarray
    success: bool
    iterations: int
    objective_value: float
    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "success": self.success,
            "iterations": self.iterations,
            "objective_value": self.objective_value,
            "message": self.message,
        }


def solve_bounded_optimization(
    objective: Callable[[np.ndarray], float],
    x0: np.ndarray,
    lower_bounds: np.ndarray,
    upper_bounds: np.ndarray,
    gradient: Optional[Callable[[np.ndarray], np.ndarray]] = None,
    config: Optional[SolverConfig] = None,
) -> SolverResult:
    """
    Minimize an objective subject to box constraints.

    The iteration count is capped by the configuration. A run that stops
    without converging is reported through ``success=False`` rather than
    raising; callers decide how to fall back.

    Parameters
    ----------
    objective : callable
        Objective function f(x) -> float
    x0 : np.ndarray
        Initial guess
    lower_bounds : np.ndarray
        Lower bounds for each variable
    upper_bounds : np.ndarray
        Upper bounds for each variable
    gradient : callable, optional
        Gradient function grad_f(x) -> np.ndarray
    config : SolverConfig, optional
        Solver configuration

    Returns
    -------
    SolverResult
        Optimization result
    """
    if config is None:
        config = SolverConfig()

    x0 = np.clip(np.asarray(x0, dtype=float), lower_bounds, upper_bounds)

    method = config.method
    options: Dict[str, Any] = {
        'maxiter': config.max_iterations,
    }

    if method == "SLSQP":
        options['ftol'] = config.tolerance
    elif method == "trust-constr":
        options['gtol'] = config.tolerance
    elif method == "L-BFGS-B":
        options['ftol'] = config.tolerance
        options['gtol'] = config.tolerance

    result = minimize(
        objective,
        x0,
        method=method,
        jac=gradient,
        bounds=Bounds(lower_bounds, upper_bounds),
        options=options,
    )

    return SolverResult(
        x=np.atleast_1d(result.x),
        success=bool(result.success),
        iterations=result.nit if hasattr(result, 'nit') else 0,
        objective_value=float(result.fun),
        message=str(result.message) if hasattr(result, 'message') else "",
    )


def bounded_scalar_minimize(
    objective: Callable[[float], float],
    x0: float,
    bounds: Tuple[float, float],
    derivative: Optional[Callable[[float], float]] = None,
    config: Optional[SolverConfig] = None,
) -> float:
    """
    Minimize a scalar function on an interval, never raising on non-convergence.

    If the solver does not converge, the better of its last iterate and the
    initial guess is returned.

    Returns
    -------
    float
        The minimizing argument.
    """
    def f(x: np.ndarray) -> float:
        return objective(float(x[0]))

    grad = None
    if derivative is not None:
        def grad(x: np.ndarray) -> np.ndarray:
            return np.array([derivative(float(x[0]))])

    lo, hi = bounds
    result = solve_bounded_optimization(
        f,
        np.array([x0]),
        np.array([lo]),
        np.array([hi]),
        gradient=grad,
        config=config,
    )

    x_opt = float(result.x[0])
    if result.success:
        return x_opt

    guess = float(np.clip(x0, lo, hi))
    if np.isfinite(result.objective_value) and result.objective_value <= objective(guess):
        # Line search stalls near the optimum; the last iterate is still usable.
        logger.debug(
            f"Closest-point search stopped after {result.iterations} iterations "
            f"({result.message}); keeping the last iterate"
        )
        return x_opt
    logger.warning(
        f"Closest-point search did not converge after {result.iterations} iterations "
        f"({result.message}); keeping the initial guess"
    )
    return guess
