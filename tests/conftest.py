"""Pytest fixtures and benchmark functions for nrsolve testing.

This module provides:
- Benchmark residual functions for testing Newton convergence
- Expected solutions and starting points for each benchmark
- All functions return residual arrays suitable for Solver.solve()
"""

import numpy as np
from numpy.typing import NDArray


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "robustness: mark test as robustness/edge case test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow (run on limited CI matrix)"
    )

# =============================================================================
# Benchmark Residual Functions
# =============================================================================


def rosenbrock_residual(x: NDArray[np.float64]) -> NDArray[np.float64]:
    """2D Rosenbrock in residual form.

    Residuals [10*(y - x^2), 1 - x]. Root at (1, 1); Newton reaches it
    from the origin in two steps.
    """
    return np.array([10.0 * (x[1] - x[0] ** 2), 1.0 - x[0]])


def himmelblau_residual(x: NDArray[np.float64]) -> NDArray[np.float64]:
    """Himmelblau's function in residual form (2D).

    Residuals [x^2 + y - 11, x + y^2 - 7]. Four roots; from (2, 1.5)
    Newton converges to (3, 2).
    """
    return np.array([x[0] ** 2 + x[1] - 11.0, x[0] + x[1] ** 2 - 7.0])


def booth_residual(x: NDArray[np.float64]) -> NDArray[np.float64]:
    """Booth's function in residual form (2D, linear).

    Root at (1, 3).
    """
    return np.array([x[0] + 2.0 * x[1] - 7.0, 2.0 * x[0] + x[1] - 5.0])


def circle_cosine_residual(x: NDArray[np.float64]) -> NDArray[np.float64]:
    """Intersection of the circle x^2 + y^2 = 10 with y = cos(x)."""
    return np.array([x[0] ** 2 + x[1] ** 2 - 10.0, np.cos(x[0]) - x[1]])


def beale_residual(x: NDArray[np.float64]) -> NDArray[np.float64]:
    """Beale's function in residual form: 3 equations in 2 unknowns."""
    return np.array(
        [
            1.5 - x[0] + x[0] * x[1],
            2.25 - x[0] + x[0] * x[1] ** 2,
            2.625 - x[0] + x[0] * x[1] ** 3,
        ]
    )


def plane_residual(x: NDArray[np.float64]) -> NDArray[np.float64]:
    """Underdetermined linear system in 3 unknowns: x + y + z = 3, x = y.

    The minimum-norm solution from the origin is (1, 1, 1).
    """
    return np.array([x[0] + x[1] + x[2] - 3.0, x[0] - x[1]])


def sphere_residual(x: NDArray[np.float64]) -> NDArray[np.float64]:
    """Single equation |x|^2 = 4 in 3 unknowns."""
    return np.array([np.dot(x, x) - 4.0])


# =============================================================================
# Expected Solutions
# =============================================================================

ROSENBROCK_SOLUTION = np.array([1.0, 1.0])
HIMMELBLAU_SOLUTION = np.array([3.0, 2.0])
BOOTH_SOLUTION = np.array([1.0, 3.0])
PLANE_SOLUTION = np.array([1.0, 1.0, 1.0])


# =============================================================================
# Starting Points
# =============================================================================

ROSENBROCK_X0 = np.array([0.0, 0.0])
HIMMELBLAU_X0 = np.array([2.0, 1.5])
BOOTH_X0 = np.array([0.0, 0.0])
CIRCLE_COSINE_X0 = np.array([20.0, -2.0])
BEALE_X0 = np.array([0.0, 0.0])
PLANE_X0 = np.array([0.0, 0.0, 0.0])
SPHERE_X0 = np.array([1.0, 1.0, 1.0])
