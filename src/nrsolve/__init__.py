"""nrsolve: Newton-Raphson solver for nonlinear systems with finite-difference Jacobians."""

__version__ = "0.1.0"

from nrsolve._core import Solver, solve, solve_underdetermined
from nrsolve._differentiation import Differentiator
from nrsolve._linalg import LinearAlgebra, ScipyLinearAlgebra
from nrsolve._types import Solution, SolverConfig, SolveStatus

__all__ = [
    "__version__",
    "solve",
    "solve_underdetermined",
    "Solver",
    "Differentiator",
    "LinearAlgebra",
    "ScipyLinearAlgebra",
    "Solution",
    "SolverConfig",
    "SolveStatus",
]
