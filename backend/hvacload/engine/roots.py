"""
Reusable one-dimensional root finders for psychrometric inversions.

Both finders share the same contract: given a continuous function and a
bracket, return a RootResult with the best root estimate, its residual,
the iteration count and whether the tolerance was met. Neither raises on
non-convergence; callers decide how to surface that.
"""

from abc import ABC, abstractmethod
from typing import Callable

from scipy.optimize import brentq

from hvacload.config import SOLVER_TOLERANCE, SOLVER_MAX_ITERATIONS
from hvacload.models.psychrometrics import RootResult


class RootFinder(ABC):
    """Base class for bracketed root finders."""

    name = "root finder"

    def __init__(
        self,
        tolerance: float = SOLVER_TOLERANCE,
        max_iterations: int = SOLVER_MAX_ITERATIONS,
    ):
        if tolerance <= 0:
            raise ValueError("tolerance must be positive")
        if max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        self.tolerance = tolerance
        self.max_iterations = max_iterations

    @abstractmethod
    def solve(
        self, func: Callable[[float], float], lower: float, upper: float
    ) -> RootResult:
        """Find x in [lower, upper] with func(x) ≈ 0."""
        ...


class BisectionRootFinder(RootFinder):
    """
    Bisection on the residual.

    Stops as soon as |func(mid)| < tolerance. The direction of each step is
    taken from the function's trend across the bracket, so when the target
    lies outside the reachable range the search walks towards the nearer
    bound and returns it as the best estimate with converged=False.
    """

    name = "bisection"

    def solve(self, func, lower, upper):
        increasing = func(upper) >= func(lower)
        lo, hi = lower, upper
        best_x, best_residual = lo, float("inf")

        for iteration in range(1, self.max_iterations + 1):
            mid = (lo + hi) / 2.0
            residual = func(mid)

            if abs(residual) < abs(best_residual):
                best_x, best_residual = mid, residual

            if abs(residual) < self.tolerance:
                return RootResult(
                    root=mid, residual=residual, iterations=iteration, converged=True
                )

            if (residual < 0) == increasing:
                lo = mid
            else:
                hi = mid

        return RootResult(
            root=best_x,
            residual=best_residual,
            iterations=self.max_iterations,
            converged=False,
        )


class BrentRootFinder(RootFinder):
    """
    Brent's method via scipy.

    Requires a sign change across the bracket; raises ValueError otherwise.
    """

    name = "brent"

    def solve(self, func, lower, upper):
        root, info = brentq(
            func,
            lower,
            upper,
            xtol=self.tolerance,
            maxiter=self.max_iterations,
            full_output=True,
            disp=False,
        )
        residual = func(root)
        return RootResult(
            root=root,
            residual=residual,
            iterations=info.iterations,
            converged=bool(info.converged),
        )
