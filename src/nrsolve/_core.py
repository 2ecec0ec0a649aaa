"""Newton-Raphson iteration for square and underdetermined systems.

Each solve call runs the state machine RUNNING -> {CONVERGED, MAX_ITER,
TIMED_OUT}. Iteration count, timer and residual are locals of the call, so
a Solver instance only carries read-only configuration and can be reused
from several call sites at once.

The timeout is cooperative: it is checked between iterations, so a slow
function evaluation inside an iteration is not interrupted.
"""

import time
import warnings
from typing import Callable, List, Optional

import numpy as np
from numpy.typing import ArrayLike, NDArray

from nrsolve._differentiation import Differentiator
from nrsolve._linalg import (
    LinearAlgebra,
    ScipyLinearAlgebra,
    VectorFunction,
    as_vector,
    evaluate,
)
from nrsolve._types import Solution, SolverConfig

Callback = Callable[[NDArray[np.float64], NDArray[np.float64]], None]
Inverter = Callable[[NDArray[np.float64]], NDArray[np.float64]]


class Solver:
    """Numerical n-dimensional Newton-Raphson solver.

    Args:
        stop_error: Convergence threshold on max(abs(f(x))).
        max_iterations: Maximum number of Newton iterations.
        timeout: Wall-clock budget in seconds, checked once per iteration.
        delta: Central-difference step for the Jacobian.
        verbose: Verbosity level:
            -1: Silent (default)
             0: Final summary only
             1: Per-iteration output
             2: Adds Jacobian shape and condition number
        linalg: Backend providing inv() and pinv(). Defaults to scipy.linalg.

    Example:
        >>> import numpy as np
        >>> from nrsolve import Solver
        >>> solver = Solver(stop_error=1e-8)
        >>> result = solver.solve(lambda x: x ** 2 - np.array([1.0, 4.0]), [0.5, 1.5])
        >>> result.solved  # True
        >>> result.x  # [1.0, 2.0]
    """

    def __init__(
        self,
        stop_error: float = 1e-6,
        max_iterations: int = 1000,
        timeout: float = 3600.0,
        delta: float = 1e-9,
        *,
        verbose: int = -1,
        linalg: Optional[LinearAlgebra] = None,
    ):
        self._config = SolverConfig(
            stop_error=stop_error,
            max_iterations=max_iterations,
            timeout=timeout,
            delta=delta,
            verbose=verbose,
        )
        self._diff = Differentiator(delta)
        self._linalg = linalg if linalg is not None else ScipyLinearAlgebra()

    @property
    def config(self) -> SolverConfig:
        return self._config

    def solve(
        self,
        residual_fn: VectorFunction,
        x0: ArrayLike,
        *,
        callback: Optional[Callback] = None,
        history: bool = False,
    ) -> Solution:
        """Find a zero of a square system f: R^n -> R^n.

        Each step solves J h = -f(x) with the explicit inverse of the
        finite-difference Jacobian. A singular Jacobian raises
        numpy.linalg.LinAlgError; it is not caught.

        Args:
            residual_fn: Function f(x) -> residuals of shape (n,).
            x0: Initial guess. Shape (n,) or (n, 1). Not modified.
            callback: Optional function called with (x, f(x)) after each step.
            history: If True, include the list of iterates in the result.

        Returns:
            Solution. Check ``solved`` before trusting ``x``.

        Raises:
            ValueError: If x0 is empty.
        """
        x = self._initial_guess(x0)
        return self._iterate(residual_fn, x, self._linalg.inv, 0, callback, history)

    def solve_underdetermined(
        self,
        residual_fn: VectorFunction,
        x0: ArrayLike,
        *,
        callback: Optional[Callback] = None,
        history: bool = False,
    ) -> Solution:
        """Find a zero of f: R^n -> R^m with m <= n.

        Same iteration as solve(), but the step uses the Moore-Penrose
        pseudo-inverse of the (m, n) Jacobian, giving the minimum-norm
        Newton step.

        Raises:
            ValueError: If x0 is empty, or if the system has more equations
                than variables (m > n). Raised before any iteration.

        Warns:
            RuntimeWarning: If m == n, since solve() is the better fit.
        """
        x = self._initial_guess(x0)
        n = len(x)
        m = len(evaluate(residual_fn, x))

        if m > n:
            raise ValueError(
                f"System has more equations than variables ({m} > {n}); "
                f"solve_underdetermined() requires m <= n"
            )
        if m == n:
            warnings.warn(
                "Using solve_underdetermined() for a system with the same number of "
                "variables and equations. Use solve() for better performance.",
                RuntimeWarning,
                stacklevel=2,
            )

        return self._iterate(residual_fn, x, self._linalg.pinv, 1, callback, history)

    @staticmethod
    def _initial_guess(x0: ArrayLike) -> NDArray[np.float64]:
        x = as_vector(x0)
        if x.size == 0:
            raise ValueError("x0 must be non-empty")
        return x

    def _iterate(
        self,
        residual_fn: VectorFunction,
        x: NDArray[np.float64],
        invert: Inverter,
        nfev: int,
        callback: Optional[Callback],
        history: bool,
    ) -> Solution:
        config = self._config
        verbose = config.verbose
        history_list: List[NDArray[np.float64]] = [x.copy()] if history else []

        nit = 0
        fun: Optional[NDArray[np.float64]] = None
        error = float("inf")
        start = time.monotonic()

        # Written as "not <" so that a NaN residual keeps iterating.
        while not error < config.stop_error:
            if nit >= config.max_iterations:
                factory = Solution.max_iterations_reached
                break
            if time.monotonic() - start >= config.timeout:
                factory = Solution.timed_out
                break

            y0 = evaluate(residual_fn, x)
            J, nfev_jac = self._diff.jacobian_with_count(residual_fn, x)
            nfev += 1 + nfev_jac

            if verbose >= 2:
                print(f"    [NR] Jacobian shape {J.shape}, condition number {np.linalg.cond(J):.2e}")

            h = -(invert(J) @ y0)
            x = x + h

            fun = evaluate(residual_fn, x)
            nfev += 1
            error = float(np.max(np.abs(fun)))
            nit += 1

            if history:
                history_list.append(x.copy())
            if callback is not None:
                callback(x.copy(), fun.copy())

            if verbose >= 1:
                print(
                    f"    [NR] Iteration {nit:4d}: max|f|={error:.4e}, "
                    f"|h|={float(np.linalg.norm(h)):.4e}"
                )
        else:
            factory = Solution.success

        result = factory(
            x,
            nit=nit,
            nfev=nfev,
            fun=fun,
            residual=error,
            history=history_list if history else None,
        )

        if verbose >= 0:
            print(f"[NR] {result.status.name}: {result.message}")
            print(f"    Max residual: {error:.4e}")
            print(f"    Iterations: {nit}, evaluations: {nfev}")

        return result


def solve(
    residual_fn: VectorFunction,
    x0: ArrayLike,
    *,
    stop_error: float = 1e-6,
    max_iterations: int = 1000,
    timeout: float = 3600.0,
    delta: float = 1e-9,
    verbose: int = -1,
    callback: Optional[Callback] = None,
    history: bool = False,
    linalg: Optional[LinearAlgebra] = None,
) -> Solution:
    """Solve a square nonlinear system with a one-off Solver.

    See Solver and Solver.solve for the parameters.

    Example:
        >>> import numpy as np
        >>> from nrsolve import solve
        >>> def system(x):
        ...     return np.array([x[0] ** 2 + x[1] ** 2 - 10.0, np.cos(x[0]) - x[1]])
        >>> result = solve(system, [20.0, -2.0], delta=1e-6)
        >>> print(result.solved)  # True
    """
    solver = Solver(stop_error, max_iterations, timeout, delta, verbose=verbose, linalg=linalg)
    return solver.solve(residual_fn, x0, callback=callback, history=history)


def solve_underdetermined(
    residual_fn: VectorFunction,
    x0: ArrayLike,
    *,
    stop_error: float = 1e-6,
    max_iterations: int = 1000,
    timeout: float = 3600.0,
    delta: float = 1e-9,
    verbose: int = -1,
    callback: Optional[Callback] = None,
    history: bool = False,
    linalg: Optional[LinearAlgebra] = None,
) -> Solution:
    """Solve a system with no more equations than unknowns with a one-off Solver."""
    solver = Solver(stop_error, max_iterations, timeout, delta, verbose=verbose, linalg=linalg)
    return solver.solve_underdetermined(residual_fn, x0, callback=callback, history=history)
