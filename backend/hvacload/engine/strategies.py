"""
Pluggable outdoor-unit selection strategies.

Each strategy receives the required capacity in HP, the outdoor units that
passed the piping and height filters, the indoor-unit count and the tier's
maximum unit size, and returns the list of picks (repeats allowed). The
selector consolidates picks into quantities.

Ties are always broken on (capacity, price, model name) so identical inputs
give identical selections.
"""

import math
from abc import ABC, abstractmethod

from hvacload.config import SelectionStrategyName, SELECTION_MAX_ITERATIONS
from hvacload.engine.errors import SizingImpossible
from hvacload.models.catalog import OutdoorUnitModel


def min_connections(indoor_count: int) -> int:
    """Each outdoor unit must be able to absorb half the indoor units."""
    return math.ceil(indoor_count / 2)


class OutdoorSelectionStrategy(ABC):
    """Base class for outdoor-unit selection strategies."""

    name: SelectionStrategyName

    def __init__(self, max_iterations: int = SELECTION_MAX_ITERATIONS):
        self.max_iterations = max_iterations

    @abstractmethod
    def select(
        self,
        required_hp: float,
        candidates: list[OutdoorUnitModel],
        indoor_count: int,
        max_unit_hp: float,
    ) -> list[OutdoorUnitModel]:
        """Return outdoor-unit picks whose capacity covers required_hp."""
        ...


class GreedyUnitCountStrategy(OutdoorSelectionStrategy):
    """
    Largest-first greedy fill, which keeps the unit count low.

    Only units within the tier maximum whose connection rating covers half
    the indoor units qualify. Repeatedly takes the largest qualifying unit
    not exceeding the remainder; when nothing fits below the remainder,
    closes with the smallest qualifying unit at or above it.
    """

    name = SelectionStrategyName.MIN_UNITS

    def select(self, required_hp, candidates, indoor_count, max_unit_hp):
        needed = min_connections(indoor_count)
        eligible = [
            u for u in candidates
            if u.max_indoor_units >= needed and u.capacity_hp <= max_unit_hp
        ]
        if required_hp > 0 and not eligible:
            raise SizingImpossible(
                f"No outdoor unit up to {max_unit_hp:g} HP accepts {needed} indoor connections"
            )

        picks: list[OutdoorUnitModel] = []
        remaining = required_hp
        for _ in range(self.max_iterations):
            if remaining <= 0:
                return picks

            fitting = [u for u in eligible if u.capacity_hp <= remaining]
            if fitting:
                unit = min(fitting, key=lambda u: (-u.capacity_hp, u.price, u.model))
                picks.append(unit)
                remaining -= unit.capacity_hp
                continue

            # every qualifying unit is larger than the remainder here
            picks.append(min(eligible, key=lambda u: (u.capacity_hp, u.price, u.model)))
            return picks

        if remaining > 0:
            raise SizingImpossible(
                f"Outdoor selection exceeded {self.max_iterations} units "
                f"with {remaining:g} HP still unassigned"
            )
        return picks


class _ExactCoverStrategy(OutdoorSelectionStrategy):
    """
    Exact unbounded-knapsack search over unit combinations.

    Capacities are handled in tenths of an HP. For every reachable total the
    cheapest-then-fewest combination is kept; the strategy then picks the
    best total at or above the requirement.
    """

    _SCALE = 10

    @abstractmethod
    def _rank(self, total: int, price: float, count: int, models: tuple) -> tuple:
        ...

    def select(self, required_hp, candidates, indoor_count, max_unit_hp):
        if required_hp <= 0:
            return []

        needed = min_connections(indoor_count)
        units = sorted(
            (u for u in candidates
             if u.max_indoor_units >= needed and u.capacity_hp <= max_unit_hp),
            key=lambda u: u.model,
        )
        if not units:
            raise SizingImpossible(
                f"No outdoor unit up to {max_unit_hp:g} HP accepts {needed} indoor connections"
            )

        sizes = [int(round(u.capacity_hp * self._SCALE)) for u in units]
        target = int(math.ceil(required_hp * self._SCALE - 1e-9))
        limit = target + max(sizes)

        # best[total] = (price, count, models, picks)
        best: list = [None] * (limit + 1)
        best[0] = (0.0, 0, (), ())
        for total in range(1, limit + 1):
            for unit, size in zip(units, sizes):
                prev = best[total - size] if total >= size else None
                if prev is None or prev[1] >= self.max_iterations:
                    continue
                models = tuple(sorted(prev[2] + (unit.model,)))
                option = (prev[0] + unit.price, prev[1] + 1, models, prev[3] + (unit,))
                if best[total] is None or option[:3] < best[total][:3]:
                    best[total] = option

        reachable = [
            (self._rank(total, *best[total][:3]), best[total][3])
            for total in range(target, limit + 1)
            if best[total] is not None
        ]
        if not reachable:
            raise SizingImpossible(
                f"No combination of up to {self.max_iterations} outdoor units "
                f"covers {required_hp:g} HP"
            )
        return list(min(reachable, key=lambda r: r[0])[1])


class LowestCostStrategy(_ExactCoverStrategy):
    """Cheapest combination that covers the requirement."""

    name = SelectionStrategyName.MIN_COST

    def _rank(self, total, price, count, models):
        return (price, count, total, models)


class LeastOversizingStrategy(_ExactCoverStrategy):
    """Combination closest to the requirement, then fewest units, then cheapest."""

    name = SelectionStrategyName.MIN_OVERSIZING

    def _rank(self, total, price, count, models):
        return (total, count, price, models)


STRATEGIES = {
    SelectionStrategyName.MIN_UNITS: GreedyUnitCountStrategy,
    SelectionStrategyName.MIN_COST: LowestCostStrategy,
    SelectionStrategyName.MIN_OVERSIZING: LeastOversizingStrategy,
}


def get_strategy(
    name: SelectionStrategyName, max_iterations: int = SELECTION_MAX_ITERATIONS
) -> OutdoorSelectionStrategy:
    return STRATEGIES[SelectionStrategyName(name)](max_iterations=max_iterations)
