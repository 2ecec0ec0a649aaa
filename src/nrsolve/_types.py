"""Public type definitions for the nrsolve Newton-Raphson package.

This module defines the core data structures used by the solver:
- SolverConfig: Immutable solver parameters and their defaults
- SolveStatus: Tag classifying how a solve call terminated
- Solution: Immutable result container returned by every solve call
"""

import enum
from dataclasses import dataclass, field, fields
from typing import Iterator, List, Optional

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class SolverConfig:
    """Configuration parameters for the Newton-Raphson solver.

    Attributes:
        stop_error: Convergence threshold on max(abs(f(x))). Default 1e-6.
        max_iterations: Maximum number of Newton iterations. Default 1000.
        timeout: Wall-clock budget in seconds, checked between iterations.
            Default 3600.0 (one hour).
        delta: Central-difference step used for the Jacobian. Default 1e-9.
            Must be small relative to the scale of the variables; this is
            not checked.
        verbose: Verbosity level (-1=silent, 0=summary, 1=iterations,
            2=Jacobian diagnostics). Default -1.
    """

    stop_error: float = 1e-6
    max_iterations: int = 1000
    timeout: float = 3600.0
    delta: float = 1e-9
    verbose: int = -1


class SolveStatus(enum.Enum):
    """Outcome of a solve call."""

    SUCCESS = "success"
    TIMEOUT = "timeout"
    MAX_ITERATIONS = "max-iterations-reached"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    SolveStatus.SUCCESS: "Solution achieved",
    SolveStatus.TIMEOUT: "No solution found. Solver timed out",
    SolveStatus.MAX_ITERATIONS: "No solution found. Max number of iterations reached",
}


@dataclass(frozen=True)
class Solution:
    """Result of a solve call - immutable container with dict-like access.

    Running out of iterations or time is a normal outcome, not an error:
    check ``solved`` before trusting ``x`` as a root. On failure ``x`` is
    the last iterate reached.

    Attributes:
        x: Final iterate. Shape (n,).
        status: SolveStatus tag for the outcome.
        nit: Number of Newton iterations performed.
        nfev: Number of function evaluations performed.
        fun: Residual vector at x. None when no iteration ran.
        residual: max(abs(fun)), or inf when no iteration ran.
        history: Optional list of iterates, starting with the initial guess.
    """

    x: NDArray[np.float64]
    status: SolveStatus
    nit: int = 0
    nfev: int = 0
    fun: Optional[NDArray[np.float64]] = None
    residual: float = field(default=float("inf"))
    history: Optional[List[NDArray[np.float64]]] = None

    @property
    def solved(self) -> bool:
        """True if the residual fell below the stop error."""
        return self.status is SolveStatus.SUCCESS

    @property
    def message(self) -> str:
        return self.status.message

    @classmethod
    def success(cls, x: NDArray[np.float64], **diagnostics) -> "Solution":
        return cls(x=x, status=SolveStatus.SUCCESS, **diagnostics)

    @classmethod
    def timed_out(cls, x: NDArray[np.float64], **diagnostics) -> "Solution":
        return cls(x=x, status=SolveStatus.TIMEOUT, **diagnostics)

    @classmethod
    def max_iterations_reached(cls, x: NDArray[np.float64], **diagnostics) -> "Solution":
        return cls(x=x, status=SolveStatus.MAX_ITERATIONS, **diagnostics)

    def __getitem__(self, key: str) -> object:
        """Enable dict-style access: result['x']."""
        return getattr(self, key)

    def keys(self) -> List[str]:
        """Return list of field names for dict-like iteration."""
        return [f.name for f in fields(self)]

    def __iter__(self) -> Iterator[str]:
        """Iterate over field names."""
        return iter(self.keys())

    def __contains__(self, key: str) -> bool:
        """Check if key is a valid field name."""
        return key in self.keys()
