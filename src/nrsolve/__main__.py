"""Demonstration: solve x1^2 + x2^2 = 10, cos(x1) = x2 from (20, -2)."""

import numpy as np

from nrsolve import Solver


def system(x):
    return np.array([x[0] ** 2 + x[1] ** 2 - 10.0, np.cos(x[0]) - x[1]])


def main() -> None:
    solver = Solver(1e-3, 10**10, float("inf"), 1e-6)
    result = solver.solve(system, np.array([20.0, -2.0]))
    print(result)


if __name__ == "__main__":
    main()
