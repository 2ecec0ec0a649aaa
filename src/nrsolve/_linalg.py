"""Dense linear-algebra backend used by the Newton step.

The solver only needs an inverse and a Moore-Penrose pseudo-inverse; all
other arithmetic is plain NumPy. Any object providing ``inv`` and ``pinv``
can be passed to ``Solver(linalg=...)`` in place of the SciPy default.
"""

from typing import Callable, Protocol

import numpy as np
import scipy.linalg as la
from numpy.typing import ArrayLike, NDArray

VectorFunction = Callable[[NDArray[np.float64]], ArrayLike]
ScalarFunction = Callable[[NDArray[np.float64]], float]


class LinearAlgebra(Protocol):
    """Capability required from a dense linear-algebra backend."""

    def inv(self, a: NDArray[np.float64]) -> NDArray[np.float64]:
        ...

    def pinv(self, a: NDArray[np.float64]) -> NDArray[np.float64]:
        ...


class ScipyLinearAlgebra:
    """Default backend wrapping scipy.linalg.

    ``inv`` raises numpy.linalg.LinAlgError for a singular matrix and
    ValueError for a non-square one; both propagate to the caller.
    """

    def inv(self, a: NDArray[np.float64]) -> NDArray[np.float64]:
        return la.inv(a)

    def pinv(self, a: NDArray[np.float64]) -> NDArray[np.float64]:
        return la.pinv(a)


def as_vector(x: ArrayLike) -> NDArray[np.float64]:
    """Copy x into a fresh float64 vector of shape (n,).

    Column vectors of shape (n, 1) are flattened.
    """
    return np.array(x, dtype=np.float64).reshape(-1)


def evaluate(fn: VectorFunction, x: NDArray[np.float64]) -> NDArray[np.float64]:
    """Call fn on a copy of x and return its output as a float64 vector."""
    return np.asarray(fn(x.copy()), dtype=np.float64).reshape(-1)
