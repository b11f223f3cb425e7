"""
Room cooling-load calculator (CLTD/SHGF method).

The room load is the sum of independent addends:

    Transmission   U × A × CLTD for walls and roofs (table lookup by
                   orientation and construction weight / roof surface),
                   U × A × (adjacent − inside) for partitions and floors,
                   U × A × (outside − inside) for glass conduction
    Solar          A × SHGF(orientation, latitude band, hour) × SC(glass, shading)
    Internal       occupants (activity table), lighting W × 3.41 × use × ballast,
                   equipment W × 3.412 × use × diversity, motors hp × 2545
    Outdoor air    sensible 1.08 × cfm × ΔT, latent 0.68 × cfm × ΔW (gr/lb)

When an apparatus dew point is given, an effective-heat coil analysis
(ERSH, ESHF, dehumidified cfm, supply and mixed air) is attached as ``coil``.

A safety factor is applied to the sensible and latent subtotals. Every
component is kept ≥ 0: a negative addend (e.g. an adjacent space cooler than
the room) is clamped and reported in ``warnings``. Every table fallback or
missing optional input is reported in ``defaults_used``.
"""

import logging
from typing import Optional

from hvacload.config import (
    ComponentKind,
    BTU_PER_TON,
    SENSIBLE_AIR_FACTOR,
    LATENT_AIR_FACTOR,
    LIGHTING_BTU_PER_WATT,
    EQUIPMENT_BTU_PER_WATT,
    MOTOR_BTU_PER_HP,
    DEFAULT_LIGHTING_W_PER_SQFT,
    DEFAULT_EQUIPMENT_W_PER_SQFT,
    DEFAULT_INFILTRATION_CFM_PER_SQFT,
    DEFAULT_LATITUDE_BAND,
    DEFAULT_BYPASS_FACTOR,
)
from hvacload.engine.climate import latitude_band as band_for_latitude
from hvacload.engine.errors import InputError
from hvacload.engine.psychrometrics import to_ip
from hvacload.engine.reference import load_tables
from hvacload.models.room_load import (
    RoomGeometry,
    EnvelopeComponent,
    RoomLoadInput,
    RoomLoadResult,
    InternalLoadSource,
    CoilAnalysis,
    SensibleComponents,
    LatentComponents,
)

logger = logging.getLogger(__name__)

SOLAR_HOURS = ("9", "12", "15", "peak")

# Adjacent unconditioned spaces are taken as this much cooler than outdoors
ADJACENT_SPACE_OFFSET_F = 5.0

# SHGF used when an orientation or band is missing from the table
FALLBACK_SHGF = 50.0

# Coil analysis plausibility bounds
SUPPLY_AIR_MIN_F = 50.0
SUPPLY_AIR_MAX_F = 60.0
CFM_PER_TON_MIN = 350.0
CFM_PER_TON_MAX = 450.0
ESHF_LOW = 0.65
ESHF_HIGH = 0.95
OUTSIDE_AIR_MIN_PERCENT = 15.0

_DEFAULT_ROOF_SURFACE = "Medium Surface"
_DEFAULT_GLASS_TYPE = "Single Clear 6mm"


# ---------------------------------------------------------------------------
# Pure addends
# ---------------------------------------------------------------------------

def transmission_gain(u_factor: float, area: float, temp_difference: float) -> float:
    return u_factor * area * temp_difference


def solar_gain(area: float, shgf: float, shading_coefficient: float) -> float:
    return area * shgf * shading_coefficient


def occupant_gain(count: int, sensible_per_person: float, latent_per_person: float) -> tuple[float, float]:
    return count * sensible_per_person, count * latent_per_person


def lighting_gain(watts: float, use_factor: float = 1.0, ballast_factor: float = 1.0) -> float:
    return watts * LIGHTING_BTU_PER_WATT * use_factor * ballast_factor


def equipment_gain(watts: float, use_factor: float, diversity: float) -> float:
    return watts * EQUIPMENT_BTU_PER_WATT * use_factor * diversity


def motor_gain(horsepower: float) -> float:
    return horsepower * MOTOR_BTU_PER_HP


def air_sensible_gain(cfm: float, delta_t: float) -> float:
    return SENSIBLE_AIR_FACTOR * cfm * delta_t


def air_latent_gain(cfm: float, delta_grains: float) -> float:
    return LATENT_AIR_FACTOR * cfm * delta_grains


# ---------------------------------------------------------------------------
# Table lookups (record fallbacks in `defaults`)
# ---------------------------------------------------------------------------

def resolve_geometry(geometry: RoomGeometry) -> tuple[float, float]:
    """
    Return (area, volume) for a room.

    Raises:
        InputError: negative dimensions, or neither area nor length × width
    """
    for name in ("length", "width", "height", "area"):
        value = getattr(geometry, name)
        if value is not None and value < 0:
            raise InputError(f"Room {name} cannot be negative, got {value}")

    if geometry.area is not None:
        area = geometry.area
    elif geometry.length is not None and geometry.width is not None:
        area = geometry.length * geometry.width
    else:
        raise InputError("Room geometry needs either area or length and width")
    return area, area * geometry.height


def _u_factor(component: EnvelopeComponent, defaults: list[str]) -> float:
    if component.u_factor is not None:
        return component.u_factor

    tables = load_tables()
    kind = component.kind.value
    by_kind = tables["u_factors"].get(kind, {})
    if component.construction is not None and component.construction in by_kind:
        return by_kind[component.construction]

    u = tables["default_u_factors"][kind]
    if component.construction is None:
        defaults.append(f"{_describe(component)}: U-factor {u} (no construction given)")
    else:
        defaults.append(
            f"{_describe(component)}: U-factor {u} "
            f"(unknown construction '{component.construction}')"
        )
    return u


def _wall_cltd(component: EnvelopeComponent, defaults: list[str]) -> float:
    if component.cltd is not None:
        return component.cltd
    tables = load_tables()
    by_weight = tables["wall_cltd"].get(component.wall_weight)
    if by_weight is None:
        defaults.append(f"{_describe(component)}: wall weight 'Medium' (unknown '{component.wall_weight}')")
        by_weight = tables["wall_cltd"]["Medium"]
    if component.orientation in by_weight:
        return by_weight[component.orientation]
    cltd = tables["default_wall_cltd"]
    defaults.append(f"{_describe(component)}: CLTD {cltd}°F (orientation '{component.orientation}')")
    return cltd


def _roof_cltd(component: EnvelopeComponent, defaults: list[str]) -> float:
    if component.cltd is not None:
        return component.cltd
    tables = load_tables()
    surface = component.roof_surface
    if surface is None:
        surface = _DEFAULT_ROOF_SURFACE
        defaults.append(f"{_describe(component)}: roof surface '{surface}'")
    if surface in tables["roof_cltd"]:
        return tables["roof_cltd"][surface]
    cltd = tables["default_roof_cltd"]
    defaults.append(f"{_describe(component)}: CLTD {cltd}°F (unknown roof surface '{surface}')")
    return cltd


def _shgf(component: EnvelopeComponent, band: str, hour: str, defaults: list[str]) -> float:
    by_band = load_tables()["solar_heat_gain_factors"].get(band, {})
    by_orientation = by_band.get(component.orientation)
    if by_orientation is None:
        defaults.append(
            f"{_describe(component)}: SHGF {FALLBACK_SHGF} "
            f"(no data for orientation '{component.orientation}' at {band})"
        )
        return FALLBACK_SHGF
    return by_orientation[hour]


def _shading_coefficient(component: EnvelopeComponent, defaults: list[str]) -> float:
    table = load_tables()["shading_coefficients"]
    glass = table.get(component.glass_type)
    if glass is None:
        defaults.append(
            f"{_describe(component)}: glass '{_DEFAULT_GLASS_TYPE}' "
            f"(unknown '{component.glass_type}')"
        )
        glass = table[_DEFAULT_GLASS_TYPE]
    if component.shading not in glass:
        defaults.append(f"{_describe(component)}: no shading (unknown '{component.shading}')")
        return glass["none"]
    return glass[component.shading]


def occupant_rates(activity: Optional[str], room_type: str, defaults: list[str]) -> tuple[float, float]:
    """Sensible and latent BTU/hr per person for an activity or room type."""
    tables = load_tables()
    gains = tables["occupant_gains"]
    for key in (activity, room_type):
        if key is not None and key in gains:
            return gains[key]["sensible"], gains[key]["latent"]
    fallback = tables["default_activity"]
    defaults.append(f"occupant activity '{fallback}'")
    return gains[fallback]["sensible"], gains[fallback]["latent"]


def required_fresh_air(
    space_type: str,
    occupants: int,
    area: float,
    volume: float = 0.0,
    defaults: Optional[list[str]] = None,
) -> float:
    """
    Minimum outdoor air (cfm) for a space type.

    The larger of the per-person and per-area rates, raised to the space's
    minimum air-change rate where the table defines one.
    """
    rates = load_tables()["ventilation_rates"]
    rate = rates.get(space_type)
    if rate is None:
        if defaults is not None:
            defaults.append(f"ventilation rates 'Default' (unknown space type '{space_type}')")
        rate = rates["Default"]

    cfm = max(occupants * rate["cfm_per_person"], area * rate["cfm_per_sqft"])
    min_ach = rate.get("min_ach")
    if min_ach:
        cfm = max(cfm, volume * min_ach / 60.0)
    return cfm


def check_internal_loads(internal: InternalLoadSource) -> None:
    """
    Reject internal-load inputs that would produce a negative gain.

    Raises:
        InputError: negative count, wattage, density or motor power, a use or
            diversity factor outside 0..1, or a negative ballast factor
    """
    if internal.occupants < 0:
        raise InputError(f"Occupant count cannot be negative, got {internal.occupants}")
    if internal.motor_hp < 0:
        raise InputError(f"Motor power cannot be negative, got {internal.motor_hp}")

    for name in ("lighting_watts", "lighting_w_per_sqft", "equipment_watts", "equipment_w_per_sqft"):
        value = getattr(internal, name)
        if value is not None and value < 0:
            raise InputError(f"Internal load {name} cannot be negative, got {value}")

    for name in ("lighting_use_factor", "equipment_use_factor", "equipment_diversity"):
        value = getattr(internal, name)
        if not 0.0 <= value <= 1.0:
            raise InputError(f"Internal load {name} must be between 0 and 1, got {value}")

    if internal.ballast_factor < 0:
        raise InputError(f"Ballast factor cannot be negative, got {internal.ballast_factor}")


def _describe(component: EnvelopeComponent) -> str:
    if component.label:
        return component.label
    if component.orientation:
        return f"{component.kind.value} ({component.orientation})"
    return component.kind.value


def _clamp(value: float, label: str, warnings: list[str]) -> float:
    if value < 0:
        warnings.append(f"{label} gain is negative ({value:.1f} BTU/hr); counted as 0")
        logger.debug("Clamped negative %s gain %.1f", label, value)
        return 0.0
    return value


def _resolve_band(data: RoomLoadInput, defaults: list[str]) -> str:
    if data.latitude_band is not None:
        return data.latitude_band
    if data.latitude is not None:
        return band_for_latitude(data.latitude)
    defaults.append(f"latitude band {DEFAULT_LATITUDE_BAND}")
    return DEFAULT_LATITUDE_BAND


# ---------------------------------------------------------------------------
# Effective-heat coil analysis
# ---------------------------------------------------------------------------

def coil_analysis(
    sensible: SensibleComponents,
    latent: LatentComponents,
    sensible_safety_factor: float,
    latent_safety_factor: float,
    inside_Tdb: float,
    outside_Tdb: float,
    fresh_air_cfm: float,
    bypass_factor: float,
    adp: float,
    warnings: list[str],
) -> CoilAnalysis:
    """
    Effective-heat figures for a coil with the given bypass factor and
    apparatus dew point.

    Room heat excludes ventilation air; the outside-air heat that reaches
    the coil is the ventilation load × (1 − BF):

        ERSH = (sensible − ventilation) × SF_s
        ERLH = (latent − ventilation) × SF_l
        ESHF = ERSH / (ERSH + ERLH)
        dehumidified rise = (1 − BF) × (Tin − ADP)
        dehumidified cfm  = ERSH / (1.08 × rise)
        coil leaving air  = ADP + BF × (Tin − ADP)

    Out-of-range supply air, cfm/ton, ESHF and outside-air share are
    appended to ``warnings``.

    Raises:
        InputError: BF outside 0 ≤ BF < 1, or ADP not below the room dry-bulb
    """
    if not 0.0 <= bypass_factor < 1.0:
        raise InputError(f"Bypass factor must be in [0, 1), got {bypass_factor}")
    if adp >= inside_Tdb:
        raise InputError(
            f"Apparatus dew point {adp}°F must be below the room dry-bulb {inside_Tdb:.1f}°F"
        )

    room_sensible = sum(sensible.model_dump().values()) - sensible.ventilation
    room_latent = sum(latent.model_dump().values()) - latent.ventilation
    ersh = room_sensible * sensible_safety_factor
    erlh = room_latent * latent_safety_factor
    erth = ersh + erlh

    oa_sensible = sensible.ventilation * (1.0 - bypass_factor)
    oa_latent = latent.ventilation * (1.0 - bypass_factor)

    grand_sensible = ersh + oa_sensible
    grand_latent = erlh + oa_latent
    grand_total = grand_sensible + grand_latent
    tonnage = grand_total / BTU_PER_TON

    rise = (1.0 - bypass_factor) * (inside_Tdb - adp)
    dehumidified_cfm = ersh / (SENSIBLE_AIR_FACTOR * rise)
    leaving_temp = adp + bypass_factor * (inside_Tdb - adp)

    if dehumidified_cfm > 0:
        supply_temp = inside_Tdb - ersh / (SENSIBLE_AIR_FACTOR * dehumidified_cfm)
        oa_fraction = min(1.0, fresh_air_cfm / dehumidified_cfm)
    else:
        supply_temp = leaving_temp
        oa_fraction = 0.0
    return_cfm = max(0.0, dehumidified_cfm - fresh_air_cfm)
    mixed_temp = inside_Tdb + oa_fraction * (outside_Tdb - inside_Tdb)

    eshf = ersh / erth if erth > 0 else 0.0
    cfm_per_ton = dehumidified_cfm / tonnage if tonnage > 0 else 0.0
    oa_percent = oa_fraction * 100.0

    if supply_temp < SUPPLY_AIR_MIN_F:
        warnings.append(f"Supply air {supply_temp:.1f}°F is below {SUPPLY_AIR_MIN_F:.0f}°F; risk of overcooling")
    elif supply_temp > SUPPLY_AIR_MAX_F:
        warnings.append(f"Supply air {supply_temp:.1f}°F is above {SUPPLY_AIR_MAX_F:.0f}°F; insufficient cooling")
    if 0 < cfm_per_ton < CFM_PER_TON_MIN:
        warnings.append(f"{cfm_per_ton:.0f} cfm/ton is below {CFM_PER_TON_MIN:.0f}; high latent load or low airflow")
    elif cfm_per_ton > CFM_PER_TON_MAX:
        warnings.append(f"{cfm_per_ton:.0f} cfm/ton is above {CFM_PER_TON_MAX:.0f}; comfort issues possible")
    if 0 < eshf < ESHF_LOW:
        warnings.append(f"Low ESHF {eshf:.2f}; high latent load application")
    elif eshf > ESHF_HIGH:
        warnings.append(f"High ESHF {eshf:.2f}; very low latent load")
    if 0 < oa_percent < OUTSIDE_AIR_MIN_PERCENT:
        warnings.append(f"Outside air is {oa_percent:.1f}% of supply; check ventilation requirements")

    return CoilAnalysis(
        bypass_factor=bypass_factor,
        adp=adp,
        effective_room_sensible=round(ersh, 2),
        effective_room_latent=round(erlh, 2),
        effective_room_total=round(erth, 2),
        outside_air_sensible=round(oa_sensible, 2),
        outside_air_latent=round(oa_latent, 2),
        outside_air_total=round(oa_sensible + oa_latent, 2),
        grand_sensible=round(grand_sensible, 2),
        grand_latent=round(grand_latent, 2),
        grand_total=round(grand_total, 2),
        tonnage=round(tonnage, 4),
        eshf=round(eshf, 4),
        room_shr=round(room_sensible / (room_sensible + room_latent), 4)
        if room_sensible + room_latent > 0 else 0.0,
        grand_shr=round(grand_sensible / grand_total, 4) if grand_total > 0 else 0.0,
        dehumidified_rise=round(rise, 2),
        dehumidified_cfm=round(dehumidified_cfm, 1),
        coil_leaving_temp=round(leaving_temp, 2),
        supply_air_temp=round(supply_temp, 2),
        return_air_cfm=round(return_cfm, 1),
        return_air_percent=round(100.0 - oa_percent, 2) if dehumidified_cfm > 0 else 0.0,
        outside_air_percent=round(oa_percent, 2),
        mixed_air_temp=round(mixed_temp, 2),
        cfm_per_ton=round(cfm_per_ton, 1),
        btu_per_cfm=round(grand_total / dehumidified_cfm, 1) if dehumidified_cfm > 0 else 0.0,
    )


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def calculate_room_load(data: RoomLoadInput) -> RoomLoadResult:
    """
    Compute the itemized, safety-adjusted cooling load of one room.

    Raises:
        InputError: invalid geometry, negative counts, unknown solar hour,
            non-positive safety factor or supply-air rise
    """
    defaults: list[str] = []
    warnings: list[str] = []

    area, volume = resolve_geometry(data.geometry)
    outside = to_ip(data.outside)
    inside = to_ip(data.inside)
    internal = data.internal

    check_internal_loads(internal)
    if data.supply_air_rise <= 0:
        raise InputError(f"Supply-air rise must be positive, got {data.supply_air_rise}")

    hour = str(data.solar_hour)
    if hour not in SOLAR_HOURS:
        raise InputError(f"Solar hour must be one of {', '.join(SOLAR_HOURS)}, got {hour}")

    sensible_sf = data.safety_factor
    if data.sensible_safety_factor is not None:
        sensible_sf = data.sensible_safety_factor
    latent_sf = data.safety_factor
    if data.latent_safety_factor is not None:
        latent_sf = data.latent_safety_factor
    if sensible_sf <= 0 or latent_sf <= 0:
        raise InputError("Safety factors must be positive")
    if data.bypass_factor is not None and data.adp is None:
        raise InputError("A bypass factor needs an apparatus dew point (adp)")

    band = _resolve_band(data, defaults)
    delta_t = outside.Tdb - inside.Tdb
    delta_w = outside.W_display - inside.W_display

    sensible = SensibleComponents()
    latent = LatentComponents()

    # Envelope
    for component in data.envelope:
        if component.area < 0:
            raise InputError(f"{_describe(component)}: area cannot be negative")
        label = _describe(component)

        if component.kind == ComponentKind.GLASS:
            sc = _shading_coefficient(component, defaults)
            sensible.solar_glass += solar_gain(
                component.area, _shgf(component, band, hour, defaults), sc
            )
            sensible.glass_conduction += _clamp(
                transmission_gain(_u_factor(component, defaults), component.area, delta_t),
                f"{label} conduction",
                warnings,
            )
        elif component.kind == ComponentKind.WALL:
            sensible.walls += _clamp(
                transmission_gain(
                    _u_factor(component, defaults), component.area, _wall_cltd(component, defaults)
                ),
                label,
                warnings,
            )
        elif component.kind == ComponentKind.ROOF:
            sensible.roof += _clamp(
                transmission_gain(
                    _u_factor(component, defaults), component.area, _roof_cltd(component, defaults)
                ),
                label,
                warnings,
            )
        else:
            if component.cltd is not None:
                temp_difference = component.cltd
            elif component.adjacent_temp is not None:
                temp_difference = component.adjacent_temp - inside.Tdb
            else:
                temp_difference = delta_t - ADJACENT_SPACE_OFFSET_F
                defaults.append(
                    f"{label}: adjacent space {ADJACENT_SPACE_OFFSET_F}°F below outdoor"
                )
            gain = _clamp(
                transmission_gain(_u_factor(component, defaults), component.area, temp_difference),
                label,
                warnings,
            )
            if component.kind == ComponentKind.FLOOR:
                sensible.floor += gain
            else:
                sensible.partitions += gain

    # People
    per_sensible, per_latent = occupant_rates(internal.activity, data.room_type, defaults)
    sensible.occupants, latent.occupants = occupant_gain(
        internal.occupants, per_sensible, per_latent
    )

    # Lighting
    if internal.lighting_watts is not None:
        lighting_watts = internal.lighting_watts
    elif internal.lighting_w_per_sqft is not None:
        lighting_watts = internal.lighting_w_per_sqft * area
    else:
        lighting_watts = DEFAULT_LIGHTING_W_PER_SQFT * area
        defaults.append(f"lighting {DEFAULT_LIGHTING_W_PER_SQFT} W/sqft")
    sensible.lighting = lighting_gain(
        lighting_watts, internal.lighting_use_factor, internal.ballast_factor
    )

    # Equipment
    densities = load_tables()["equipment_densities"]
    if internal.equipment_watts is not None:
        equipment_watts = internal.equipment_watts
    elif internal.equipment_w_per_sqft is not None:
        equipment_watts = internal.equipment_w_per_sqft * area
    elif internal.equipment_profile in densities:
        equipment_watts = densities[internal.equipment_profile] * area
    else:
        equipment_watts = DEFAULT_EQUIPMENT_W_PER_SQFT * area
        defaults.append(f"equipment {DEFAULT_EQUIPMENT_W_PER_SQFT} W/sqft")
    sensible.equipment = equipment_gain(
        equipment_watts, internal.equipment_use_factor, internal.equipment_diversity
    )

    sensible.motors = motor_gain(internal.motor_hp)

    # Outdoor air
    ventilation = data.ventilation
    if ventilation.fresh_air_cfm is not None:
        fresh_air_cfm = ventilation.fresh_air_cfm
    else:
        space_type = ventilation.space_type or data.room_type
        fresh_air_cfm = required_fresh_air(
            space_type, internal.occupants, area, volume, defaults
        )
        defaults.append(f"fresh air {fresh_air_cfm:.1f} cfm from '{space_type}' rates")

    if ventilation.infiltration_cfm is not None:
        infiltration_cfm = ventilation.infiltration_cfm
    else:
        infiltration_cfm = DEFAULT_INFILTRATION_CFM_PER_SQFT * area
        defaults.append(f"infiltration {DEFAULT_INFILTRATION_CFM_PER_SQFT} cfm/sqft")

    if fresh_air_cfm < 0 or infiltration_cfm < 0:
        raise InputError("Airflow rates cannot be negative")

    sensible.ventilation = _clamp(
        air_sensible_gain(fresh_air_cfm, delta_t), "ventilation sensible", warnings
    )
    latent.ventilation = _clamp(
        air_latent_gain(fresh_air_cfm, delta_w), "ventilation latent", warnings
    )
    sensible.infiltration = _clamp(
        air_sensible_gain(infiltration_cfm, delta_t), "infiltration sensible", warnings
    )
    latent.infiltration = _clamp(
        air_latent_gain(infiltration_cfm, delta_w), "infiltration latent", warnings
    )

    sensible = SensibleComponents(**{k: round(v, 2) for k, v in sensible.model_dump().items()})
    latent = LatentComponents(**{k: round(v, 2) for k, v in latent.model_dump().items()})

    sensible_subtotal = sum(sensible.model_dump().values())
    latent_subtotal = sum(latent.model_dump().values())
    sensible_total = sensible_subtotal * sensible_sf
    latent_total = latent_subtotal * latent_sf
    grand_total = sensible_total + latent_total
    tonnage = grand_total / BTU_PER_TON

    coil = None
    if data.adp is not None:
        bypass_factor = data.bypass_factor
        if bypass_factor is None:
            bypass_factor = DEFAULT_BYPASS_FACTOR
            defaults.append(f"coil bypass factor {DEFAULT_BYPASS_FACTOR}")
        coil = coil_analysis(
            sensible, latent, sensible_sf, latent_sf,
            inside.Tdb, outside.Tdb, fresh_air_cfm,
            bypass_factor, data.adp, warnings,
        )

    logger.debug(
        "Room %s: %.0f BTU/hr sensible, %.0f BTU/hr latent, %.2f TR",
        data.name, sensible_total, latent_total, tonnage,
    )

    return RoomLoadResult(
        name=data.name,
        room_type=data.room_type,
        quantity=data.quantity,
        area=round(area, 2),
        volume=round(volume, 2),
        sensible=sensible,
        latent=latent,
        sensible_subtotal=round(sensible_subtotal, 2),
        latent_subtotal=round(latent_subtotal, 2),
        sensible_safety_factor=sensible_sf,
        latent_safety_factor=latent_sf,
        sensible_total=round(sensible_total, 2),
        latent_total=round(latent_total, 2),
        grand_total=round(grand_total, 2),
        tonnage=round(tonnage, 4),
        supply_cfm=round(sensible_total / (SENSIBLE_AIR_FACTOR * data.supply_air_rise), 1),
        fresh_air_cfm=round(fresh_air_cfm, 1),
        infiltration_cfm=round(infiltration_cfm, 1),
        shf=round(sensible_total / grand_total, 4) if grand_total > 0 else 0.0,
        btu_per_sqft=round(grand_total / area, 2) if area > 0 else 0.0,
        sqft_per_ton=round(area / tonnage, 1) if tonnage > 0 else 0.0,
        coil=coil,
        defaults_used=defaults,
        warnings=warnings,
    )
