"""
Exception taxonomy for the heat-load engine.

InputError and SizingImpossible are raised to the caller. ConvergenceWarning
is never raised: its message is embedded in the result alongside a
``converged=False`` flag.
"""


class HeatLoadError(Exception):
    """Base class for all engine errors."""


class InputError(HeatLoadError, ValueError):
    """Missing, contradictory or physically invalid input."""


class SizingImpossible(HeatLoadError):
    """No catalog equipment combination satisfies the requirement."""


class UnknownReference(HeatLoadError, LookupError):
    """A city, category, tier or table key that the reference data lacks."""


class ConvergenceWarning(RuntimeWarning):
    """An iterative solver stopped at its iteration cap."""

    def __init__(self, solver: str, iterations: int, residual: float):
        self.solver = solver
        self.iterations = iterations
        self.residual = residual
        super().__init__(
            f"{solver} did not converge after {iterations} iterations "
            f"(residual {residual:.4g}); returning best estimate"
        )
