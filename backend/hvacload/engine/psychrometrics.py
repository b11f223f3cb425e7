"""
Psychrometric state derivation from partial moist-air measurements.

Given any two of dry-bulb, wet-bulb and relative humidity (plus pressure in
kPa), derives the full ClimateCondition:

    Dew point        Magnus formula from Tdb + RH
    Wet bulb         Stull (2011) empirical closed form from Tdb + RH
    Humidity ratio   moisture-content formula from the saturation vapour
                     pressure at the dew point and the total pressure
    RH from Tdb+Twb  bisection over RH ∈ [0, 100] on the Stull wet bulb
    Tdb from Twb+RH  Brent's method on the Stull wet bulb
    h, v             psychrolib's standard moist-air formulas

All temperatures are handled in °F inside a call. SI inputs are converted
on the way in and the result is converted back on the way out.

psychrolib keeps its unit system in process-wide state, and every call here
resets it. Rooms may be calculated in parallel processes, but threads that
share the interpreter must not resolve conditions concurrently.
"""

import logging
import math
from typing import Optional

import psychrolib

from hvacload.config import (
    UnitSystem,
    DEFAULT_PRESSURE_KPA,
    KPA_TO_PSIA,
    GRAINS_PER_LB,
    GRAMS_PER_KG,
    MOLECULAR_WEIGHT_RATIO,
    WET_BULB_MISMATCH_F,
)
from hvacload.engine.errors import InputError, ConvergenceWarning
from hvacload.engine.roots import RootFinder, BisectionRootFinder, BrentRootFinder
from hvacload.models.psychrometrics import ClimateCondition, RootResult

logger = logging.getLogger(__name__)

# Magnus coefficients (°C)
_MAGNUS_A = 17.27
_MAGNUS_B = 237.3
_MAGNUS_E0 = 0.61078  # kPa

# Search bracket for Tdb when solving from Twb + RH (°F above/below Twb)
_TDB_BRACKET_BELOW = 20.0
_TDB_BRACKET_ABOVE = 150.0


def f_to_c(t: float) -> float:
    return (t - 32.0) * 5.0 / 9.0


def c_to_f(t: float) -> float:
    return t * 9.0 / 5.0 + 32.0


def _set_unit_system(unit_system: UnitSystem) -> None:
    """Set psychrolib's global unit system."""
    if unit_system == UnitSystem.IP:
        psychrolib.SetUnitSystem(psychrolib.IP)
    else:
        psychrolib.SetUnitSystem(psychrolib.SI)


def dew_point(Tdb: float, RH: float) -> float:
    """Dew point (°F) from dry-bulb (°F) and RH (%) by the Magnus formula."""
    t = f_to_c(Tdb)
    alpha = _MAGNUS_A * t / (_MAGNUS_B + t) + math.log(RH / 100.0)
    return c_to_f(_MAGNUS_B * alpha / (_MAGNUS_A - alpha))


def wet_bulb(Tdb: float, RH: float) -> float:
    """Wet bulb (°F) from dry-bulb (°F) and RH (%) by Stull (2011)."""
    t = f_to_c(Tdb)
    tw = (
        t * math.atan(0.151977 * math.sqrt(RH + 8.313659))
        + math.atan(t + RH)
        - math.atan(RH - 1.676331)
        + 0.00391838 * RH ** 1.5 * math.atan(0.023101 * RH)
        - 4.686035
    )
    return c_to_f(tw)


def vapor_pressure_at_dew_point(Tdp: float) -> float:
    """Saturation vapour pressure (kPa) at a dew point given in °F."""
    t = f_to_c(Tdp)
    return _MAGNUS_E0 * math.exp(_MAGNUS_A * t / (t + _MAGNUS_B))


def humidity_ratio(Tdp: float, pressure: float = DEFAULT_PRESSURE_KPA) -> float:
    """
    Humidity ratio (lb_w/lb_da) from dew point (°F) and total pressure (kPa).

    Raises:
        InputError: if the vapour pressure reaches the total pressure
    """
    e = vapor_pressure_at_dew_point(Tdp)
    if e >= pressure:
        raise InputError(
            f"Vapour pressure {e:.3f} kPa at dew point {Tdp:.2f}°F "
            f"exceeds total pressure {pressure} kPa"
        )
    return MOLECULAR_WEIGHT_RATIO * e / (pressure - e)


def relative_humidity_from_wet_bulb(
    Tdb: float, Twb: float, root_finder: Optional[RootFinder] = None
) -> RootResult:
    """
    Solve RH (%) such that wet_bulb(Tdb, RH) matches Twb (both °F).

    The default finder is bisection with a 0.01°F tolerance and a 50
    iteration cap. The returned RootResult carries converged=False when the
    cap was hit, with the best estimate as root.
    """
    finder = root_finder or BisectionRootFinder()
    return finder.solve(lambda rh: wet_bulb(Tdb, rh) - Twb, 0.0, 100.0)


def dry_bulb_from_wet_bulb(
    Twb: float, RH: float, root_finder: Optional[RootFinder] = None
) -> RootResult:
    """
    Solve Tdb (°F) such that wet_bulb(Tdb, RH) matches Twb.

    Raises:
        InputError: if no Tdb in the search bracket reproduces Twb
    """
    finder = root_finder or BrentRootFinder()
    try:
        return finder.solve(
            lambda tdb: wet_bulb(tdb, RH) - Twb,
            Twb - _TDB_BRACKET_BELOW,
            Twb + _TDB_BRACKET_ABOVE,
        )
    except ValueError:
        raise InputError(f"Cannot find a valid Tdb for Twb={Twb}°F, RH={RH}%")


def _moist_air_properties(
    Tdb: float, W: float, pressure: float, unit_system: UnitSystem
) -> tuple[float, float]:
    """Enthalpy and specific volume in the caller's unit system."""
    _set_unit_system(unit_system)
    if unit_system == UnitSystem.IP:
        h = psychrolib.GetMoistAirEnthalpy(Tdb, W)
        v = psychrolib.GetMoistAirVolume(Tdb, W, pressure * KPA_TO_PSIA)
    else:
        t = f_to_c(Tdb)
        h = psychrolib.GetMoistAirEnthalpy(t, W) / 1000.0  # J/kg → kJ/kg
        v = psychrolib.GetMoistAirVolume(t, W, pressure * 1000.0)
    return h, v


def _validate(
    Tdb: Optional[float],
    Twb: Optional[float],
    RH: Optional[float],
    pressure: float,
) -> None:
    given = [name for name, value in (("Tdb", Tdb), ("Twb", Twb), ("RH", RH))
             if value is not None]
    if len(given) < 2:
        raise InputError(
            "At least two of Tdb, Twb and RH are required; "
            f"got {', '.join(given) or 'none'}"
        )
    if pressure <= 0:
        raise InputError(f"Pressure must be positive, got {pressure} kPa")
    if RH is not None and not 0.0 < RH <= 100.0:
        raise InputError(f"RH must be in (0, 100], got {RH}")
    if Tdb is not None and Twb is not None and Twb > Tdb:
        raise InputError(f"Wet-bulb {Twb} exceeds dry-bulb {Tdb}")


def resolve_condition(
    Tdb: Optional[float] = None,
    Twb: Optional[float] = None,
    RH: Optional[float] = None,
    pressure: float = DEFAULT_PRESSURE_KPA,
    unit_system: UnitSystem = UnitSystem.IP,
    root_finder: Optional[RootFinder] = None,
) -> ClimateCondition:
    """
    Main entry point. Resolves a full ClimateCondition.

    Args:
        Tdb: Dry-bulb (°F for IP, °C for SI)
        Twb: Wet-bulb (°F for IP, °C for SI)
        RH: Relative humidity in percent
        pressure: Atmospheric pressure in kPa
        unit_system: Units of the temperature inputs and of the result
        root_finder: Override for the inversion solver (bisection for
            Tdb+Twb, Brent for Twb+RH)

    When all three are given, Tdb+RH is authoritative and a supplied Twb that
    disagrees by more than 1°F is reported as a warning.

    Raises:
        InputError: fewer than two properties, Twb > Tdb, RH outside
            (0, 100], non-positive pressure
    """
    _validate(Tdb, Twb, RH, pressure)

    if unit_system == UnitSystem.SI:
        Tdb = c_to_f(Tdb) if Tdb is not None else None
        Twb = c_to_f(Twb) if Twb is not None else None

    warnings: list[str] = []
    converged = True
    iterations = 0

    if Tdb is not None and RH is not None:
        Twb_calc = wet_bulb(Tdb, RH)
        if Twb is not None and abs(Twb_calc - Twb) > WET_BULB_MISMATCH_F:
            warnings.append(
                f"Supplied wet-bulb {Twb:.2f}°F differs from the value derived "
                f"from Tdb and RH ({Twb_calc:.2f}°F); using the derived value"
            )
        Twb = Twb_calc
    elif Tdb is not None:
        result = relative_humidity_from_wet_bulb(Tdb, Twb, root_finder)
        RH = result.root
        converged = result.converged
        iterations = result.iterations
        if not converged:
            warning = ConvergenceWarning("RH bisection", result.iterations, result.residual)
            logger.warning("Tdb=%.2f Twb=%.2f: %s", Tdb, Twb, warning)
            warnings.append(str(warning))
    else:
        result = dry_bulb_from_wet_bulb(Twb, RH, root_finder)
        Tdb = result.root
        converged = result.converged
        iterations = result.iterations
        if not converged:
            warning = ConvergenceWarning("Tdb search", result.iterations, result.residual)
            logger.warning("Twb=%.2f RH=%.2f: %s", Twb, RH, warning)
            warnings.append(str(warning))

    Tdp = dew_point(Tdb, RH)
    W = humidity_ratio(Tdp, pressure)
    h, v = _moist_air_properties(Tdb, W, pressure, unit_system)

    if unit_system == UnitSystem.IP:
        temps = (Tdb, Twb, Tdp)
        W_display = W * GRAINS_PER_LB
    else:
        temps = tuple(f_to_c(t) for t in (Tdb, Twb, Tdp))
        W_display = W * GRAMS_PER_KG

    return ClimateCondition(
        unit_system=unit_system,
        pressure=pressure,
        Tdb=round(temps[0], 4),
        Twb=round(temps[1], 4),
        Tdp=round(temps[2], 4),
        RH=round(RH, 4),
        W=round(W, 7),
        W_display=round(W_display, 4),
        h=round(h, 4),
        v=round(v, 4),
        converged=converged,
        iterations=iterations,
        warnings=warnings,
    )


def to_ip(condition: ClimateCondition) -> ClimateCondition:
    """Return the condition expressed in IP units."""
    if condition.unit_system == UnitSystem.IP:
        return condition
    Tdb, Twb, Tdp = (c_to_f(t) for t in (condition.Tdb, condition.Twb, condition.Tdp))
    h, v = _moist_air_properties(Tdb, condition.W, condition.pressure, UnitSystem.IP)
    return condition.model_copy(update={
        "unit_system": UnitSystem.IP,
        "Tdb": round(Tdb, 4),
        "Twb": round(Twb, 4),
        "Tdp": round(Tdp, 4),
        "W_display": round(condition.W * GRAINS_PER_LB, 4),
        "h": round(h, 4),
        "v": round(v, 4),
    })


def pressure_from_elevation(elevation_m: float) -> float:
    """
    Atmospheric pressure (kPa) at an elevation in metres, from psychrolib's
    standard atmosphere model.
    """
    _set_unit_system(UnitSystem.SI)
    return psychrolib.GetStandardAtmPressure(elevation_m) / 1000.0
