"""Central finite-difference derivatives of caller-supplied functions.

The Differentiator approximates partial derivatives, gradients and
Jacobians with the symmetric difference

    df/dx_j ~ (f(x + delta*e_j) - f(x - delta*e_j)) / (2*delta)

whose truncation error is O(delta^2). Round-off grows like
O(eps / delta), so delta has to balance both; it is a tunable, not
selected automatically.
"""

from typing import Tuple

import numpy as np
from numpy.typing import ArrayLike, NDArray

from nrsolve._linalg import ScalarFunction, VectorFunction, as_vector, evaluate


class Differentiator:
    """Numerical differentiation with a fixed central-difference step.

    Holds no per-call state, so one instance can be shared freely.
    """

    def __init__(self, delta: float = 1e-9):
        self._delta = float(delta)

    @property
    def delta(self) -> float:
        return self._delta

    def partial_diff(self, f: ScalarFunction, j: int, x: ArrayLike) -> float:
        """Approximate the j-th partial derivative of scalar f at x.

        Args:
            f: Scalar-valued function of a vector of shape (n,).
            j: Coordinate index, 0 <= j < n.
            x: Evaluation point. Shape (n,) or (n, 1).

        Returns:
            Central-difference estimate of df/dx_j. Exceptions raised by f
            propagate unchanged.
        """
        x = as_vector(x)

        x_minus = x.copy()
        x_minus[j] -= self._delta
        x_plus = x.copy()
        x_plus[j] += self._delta

        y_minus = f(x_minus)
        y_plus = f(x_plus)
        return float((y_plus - y_minus) / (2.0 * self._delta))

    def gradient(self, f: ScalarFunction, x: ArrayLike) -> NDArray[np.float64]:
        """Approximate the gradient of scalar f at x as a vector of shape (n,)."""
        x = as_vector(x)
        grad = np.zeros(len(x), dtype=np.float64)
        for j in range(len(x)):
            grad[j] = self.partial_diff(f, j, x)
        return grad

    def jacobian(self, F: VectorFunction, x: ArrayLike) -> NDArray[np.float64]:
        """Approximate the Jacobian of vector-valued F at x.

        Row i is the gradient of the scalar function z -> F(z)[i]. For a
        square system the result is (n, n); in general it is (m, n) where
        m is the number of components of F(x).
        """
        J, _ = self.jacobian_with_count(F, x)
        return J

    def jacobian_with_count(
        self, F: VectorFunction, x: ArrayLike
    ) -> Tuple[NDArray[np.float64], int]:
        """Compute the Jacobian and report the function evaluations used.

        Returns:
            Tuple of:
                - J: Jacobian matrix of shape (m, n)
                - nfev: Evaluations of F, exactly 2*m*n
        """
        x = as_vector(x)
        nfev = [0]
        pending = {}

        def counted(z: NDArray[np.float64]) -> NDArray[np.float64]:
            cached = pending.pop(z.tobytes(), None)
            if cached is not None:
                return cached
            nfev[0] += 1
            return evaluate(F, z)

        # The output size comes from the first backward difference point,
        # which row 0 then reuses instead of evaluating again.
        x_first = x.copy()
        x_first[0] -= self._delta
        y_first = counted(x_first)
        pending[x_first.tobytes()] = y_first
        m = len(y_first)
        J = np.zeros((m, len(x)), dtype=np.float64)

        # Rows are independent gradients; each closes over its own index.
        for i in range(m):
            J[i, :] = self.gradient(lambda z, i=i: counted(z)[i], x)

        return J, nfev[0]
