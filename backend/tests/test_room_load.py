"""
Tests for the room cooling-load calculator.

The reference office: 500 sqft, 10 occupants, 1.5 W/sqft lighting, no
equipment or fresh air, 500 cfm infiltration, 95°F / 120 gr/lb outside and
75°F / 65 gr/lb inside (ΔT 20°F, ΔW 55 gr/lb), safety factor 1.1.
"""

import pytest

from hvacload.config import UnitSystem, ComponentKind
from hvacload.engine.errors import InputError
from hvacload.engine.psychrometrics import resolve_condition
from hvacload.engine.room_load import (
    calculate_room_load,
    resolve_geometry,
    required_fresh_air,
    transmission_gain,
    lighting_gain,
    equipment_gain,
    air_sensible_gain,
    air_latent_gain,
)
from hvacload.models.psychrometrics import ClimateCondition
from hvacload.models.room_load import (
    RoomGeometry,
    EnvelopeComponent,
    InternalLoadSource,
    VentilationSpec,
    RoomLoadInput,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def approx(value: float, rel_tol: float = 0.0001, abs_tol: float = 0.05):
    return pytest.approx(value, rel=rel_tol, abs=abs_tol)


def condition(Tdb: float, grains: float) -> ClimateCondition:
    """A fixed IP state; only Tdb and W_display enter the load formulas."""
    return ClimateCondition(
        pressure=101.325,
        Tdb=Tdb,
        Twb=Tdb - 10.0,
        Tdp=Tdb - 20.0,
        RH=50.0,
        W=grains / 7000.0,
        W_display=grains,
        h=30.0,
        v=13.8,
    )


def office(**overrides) -> RoomLoadInput:
    data = dict(
        name="Office 101",
        room_type="Office",
        geometry=RoomGeometry(length=25.0, width=20.0, height=10.0),
        outside=condition(95.0, 120.0),
        inside=condition(75.0, 65.0),
        internal=InternalLoadSource(
            occupants=10, lighting_w_per_sqft=1.5, equipment_watts=0.0
        ),
        ventilation=VentilationSpec(fresh_air_cfm=0.0, infiltration_cfm=500.0),
        latitude_band="20N",
    )
    data.update(overrides)
    return RoomLoadInput(**data)


# ---------------------------------------------------------------------------
# Addends
# ---------------------------------------------------------------------------

class TestAddends:

    def test_transmission(self):
        assert transmission_gain(0.5, 100.0, 20.0) == approx(1000.0)

    def test_lighting(self):
        assert lighting_gain(1000.0) == approx(3410.0)
        assert lighting_gain(1000.0, 0.5, 1.2) == approx(2046.0)

    def test_equipment(self):
        assert equipment_gain(1000.0, 0.75, 0.85) == approx(2175.15)

    def test_air(self):
        assert air_sensible_gain(500.0, 20.0) == approx(10800.0)
        assert air_latent_gain(500.0, 55.0) == approx(18700.0)


class TestGeometry:

    def test_length_times_width(self):
        assert resolve_geometry(RoomGeometry(length=25.0, width=20.0, height=10.0)) == (500.0, 5000.0)

    def test_explicit_area(self):
        area, volume = resolve_geometry(RoomGeometry(area=300.0, height=12.0))
        assert area == 300.0
        assert volume == 3600.0

    def test_missing_dimensions(self):
        with pytest.raises(InputError, match="area or length and width"):
            resolve_geometry(RoomGeometry(length=25.0))

    def test_negative_dimension(self):
        with pytest.raises(InputError, match="negative"):
            resolve_geometry(RoomGeometry(length=-1.0, width=10.0))


# ---------------------------------------------------------------------------
# Reference office
# ---------------------------------------------------------------------------

class TestReferenceOffice:

    def setup_method(self):
        self.result = calculate_room_load(office())

    def test_occupants(self):
        assert self.result.sensible.occupants == approx(2500.0)
        assert self.result.latent.occupants == approx(2000.0)

    def test_lighting(self):
        assert self.result.sensible.lighting == approx(2557.5)

    def test_infiltration(self):
        assert self.result.sensible.infiltration == approx(10800.0)
        assert self.result.latent.infiltration == approx(18700.0)

    def test_subtotals(self):
        assert self.result.sensible_subtotal == approx(15857.5)
        assert self.result.latent_subtotal == approx(20700.0)

    def test_safety_adjusted_totals(self):
        assert self.result.sensible_total == approx(17443.25)
        assert self.result.latent_total == approx(22770.0)
        assert self.result.grand_total == approx(40213.25)

    def test_tonnage(self):
        assert self.result.tonnage == approx(self.result.grand_total / 12000.0, abs_tol=0.0001)
        assert self.result.tonnage == approx(3.3511, abs_tol=0.0001)

    def test_derived_figures(self):
        assert self.result.area == 500.0
        assert self.result.volume == 5000.0
        assert self.result.supply_cfm == approx(807.6)
        assert self.result.shf == approx(0.4338, abs_tol=0.0001)
        assert self.result.btu_per_sqft == approx(80.43)
        assert self.result.sqft_per_ton == approx(149.2)

    def test_no_defaults_used(self):
        assert self.result.defaults_used == []
        assert self.result.warnings == []

    def test_idempotent(self):
        assert calculate_room_load(office()) == self.result


# ---------------------------------------------------------------------------
# Envelope
# ---------------------------------------------------------------------------

class TestEnvelope:

    def test_west_glass(self):
        glass = EnvelopeComponent(kind=ComponentKind.GLASS, area=100.0, orientation="West")
        result = calculate_room_load(office(envelope=[glass]))
        # SHGF 211 × SC 0.95, U 0.55 × ΔT 20
        assert result.sensible.solar_glass == approx(20045.0)
        assert result.sensible.glass_conduction == approx(1100.0)
        assert any("U-factor 0.55" in d for d in result.defaults_used)

    def test_solar_hour(self):
        glass = EnvelopeComponent(kind=ComponentKind.GLASS, area=100.0, orientation="West")
        result = calculate_room_load(office(envelope=[glass], solar_hour="9"))
        assert result.sensible.solar_glass == approx(100.0 * 28 * 0.95)

    def test_shaded_glass(self):
        glass = EnvelopeComponent(
            kind=ComponentKind.GLASS, area=100.0, orientation="West", shading="outside"
        )
        result = calculate_room_load(office(envelope=[glass]))
        assert result.sensible.solar_glass == approx(100.0 * 211 * 0.24)

    def test_latitude_from_degrees(self):
        glass = EnvelopeComponent(kind=ComponentKind.GLASS, area=100.0, orientation="East")
        result = calculate_room_load(office(envelope=[glass], latitude_band=None, latitude=28.6))
        assert result.sensible.solar_glass == approx(100.0 * 225 * 0.95)

    def test_wall_by_construction(self):
        wall = EnvelopeComponent(
            kind=ComponentKind.WALL,
            area=100.0,
            orientation="West",
            construction="230mm Brick + Plaster",
        )
        result = calculate_room_load(office(envelope=[wall]))
        # U 0.60 × CLTD 18 (Medium, West)
        assert result.sensible.walls == approx(1080.0)
        assert result.defaults_used == []

    def test_heavy_wall(self):
        wall = EnvelopeComponent(
            kind=ComponentKind.WALL, area=100.0, orientation="West",
            u_factor=0.5, wall_weight="Heavy",
        )
        result = calculate_room_load(office(envelope=[wall]))
        assert result.sensible.walls == approx(800.0)

    def test_roof_default_surface(self):
        roof = EnvelopeComponent(
            kind=ComponentKind.ROOF, area=500.0, construction="150mm RCC + 50mm Insulation"
        )
        result = calculate_room_load(office(envelope=[roof]))
        assert result.sensible.roof == approx(0.30 * 500.0 * 40)
        assert any("roof surface" in d for d in result.defaults_used)

    def test_partition_to_adjacent_space(self):
        partition = EnvelopeComponent(
            kind=ComponentKind.PARTITION, area=100.0, u_factor=0.25, adjacent_temp=85.0
        )
        result = calculate_room_load(office(envelope=[partition]))
        assert result.sensible.partitions == approx(250.0)

    def test_partition_default_adjacent_temperature(self):
        partition = EnvelopeComponent(kind=ComponentKind.PARTITION, area=100.0)
        result = calculate_room_load(office(envelope=[partition]))
        # U 0.25 × (ΔT 20 - 5)
        assert result.sensible.partitions == approx(375.0)
        assert any("adjacent space" in d for d in result.defaults_used)

    def test_floor(self):
        floor = EnvelopeComponent(
            kind=ComponentKind.FLOOR, area=500.0,
            construction="Floor over Unconditioned Space", adjacent_temp=85.0,
        )
        result = calculate_room_load(office(envelope=[floor]))
        assert result.sensible.floor == approx(0.35 * 500.0 * 10.0)

    def test_negative_component_clamped(self):
        partition = EnvelopeComponent(
            kind=ComponentKind.PARTITION, area=100.0, u_factor=0.25, adjacent_temp=70.0
        )
        result = calculate_room_load(office(envelope=[partition]))
        assert result.sensible.partitions == 0.0
        assert len(result.warnings) == 1
        assert "counted as 0" in result.warnings[0]

    def test_negative_area(self):
        wall = EnvelopeComponent(kind=ComponentKind.WALL, area=-10.0)
        with pytest.raises(InputError, match="area"):
            calculate_room_load(office(envelope=[wall]))


# ---------------------------------------------------------------------------
# Internal loads and outdoor air
# ---------------------------------------------------------------------------

class TestInternalLoads:

    def test_equipment_density(self):
        result = calculate_room_load(office(internal=InternalLoadSource(
            occupants=10, lighting_w_per_sqft=1.5, equipment_w_per_sqft=2.0
        )))
        assert result.sensible.equipment == approx(500 * 2.0 * 3.412 * 0.75 * 0.85)

    def test_equipment_profile(self):
        result = calculate_room_load(office(internal=InternalLoadSource(
            occupants=10, lighting_w_per_sqft=1.5, equipment_profile="Server Room"
        )))
        assert result.sensible.equipment == approx(500 * 30.0 * 3.412 * 0.75 * 0.85)

    def test_default_densities_marked(self):
        result = calculate_room_load(office(internal=InternalLoadSource(occupants=10)))
        assert result.sensible.lighting == approx(500 * 1.5 * 3.41)
        assert result.sensible.equipment == approx(500 * 2.0 * 3.412 * 0.75 * 0.85)
        assert any("lighting" in d for d in result.defaults_used)
        assert any("equipment" in d for d in result.defaults_used)

    def test_activity_overrides_room_type(self):
        result = calculate_room_load(office(internal=InternalLoadSource(
            occupants=10, activity="Athletics", lighting_w_per_sqft=1.5, equipment_watts=0.0
        )))
        assert result.sensible.occupants == approx(5250.0)
        assert result.latent.occupants == approx(10250.0)

    def test_unknown_activity_falls_back(self):
        result = calculate_room_load(office(room_type="Observatory", internal=InternalLoadSource(
            occupants=10, lighting_w_per_sqft=1.5, equipment_watts=0.0
        ), ventilation=VentilationSpec(fresh_air_cfm=0.0, infiltration_cfm=500.0)))
        assert result.sensible.occupants == approx(2500.0)
        assert any("occupant activity" in d for d in result.defaults_used)

    def test_motors(self):
        result = calculate_room_load(office(internal=InternalLoadSource(
            occupants=10, lighting_w_per_sqft=1.5, equipment_watts=0.0, motor_hp=2.0
        )))
        assert result.sensible.motors == approx(5090.0)

    def test_negative_occupants(self):
        with pytest.raises(InputError, match="Occupant"):
            calculate_room_load(office(internal=InternalLoadSource(occupants=-1)))

    def test_negative_lighting_and_equipment(self):
        with pytest.raises(InputError, match="lighting_watts"):
            calculate_room_load(office(geometry=RoomGeometry(area=100.0), internal=InternalLoadSource(
                lighting_watts=-5000.0, equipment_watts=-100.0
            )))
        with pytest.raises(InputError, match="equipment_w_per_sqft"):
            calculate_room_load(office(internal=InternalLoadSource(equipment_w_per_sqft=-2.0)))

    def test_factor_out_of_range(self):
        with pytest.raises(InputError, match="equipment_diversity"):
            calculate_room_load(office(internal=InternalLoadSource(equipment_diversity=1.5)))
        with pytest.raises(InputError, match="lighting_use_factor"):
            calculate_room_load(office(internal=InternalLoadSource(lighting_use_factor=-0.2)))
        with pytest.raises(InputError, match="Ballast"):
            calculate_room_load(office(internal=InternalLoadSource(ballast_factor=-1.0)))

    def test_components_never_negative(self):
        result = calculate_room_load(office(internal=InternalLoadSource(
            occupants=0, lighting_watts=0.0, equipment_watts=0.0,
            lighting_use_factor=0.0, equipment_diversity=0.0, ballast_factor=1.2,
        )))
        assert all(v >= 0 for v in result.sensible.model_dump().values())
        assert result.btu_per_sqft >= 0


class TestOutdoorAir:

    def test_fresh_air_from_table(self):
        result = calculate_room_load(office(ventilation=VentilationSpec(infiltration_cfm=0.0)))
        # max(10 × 20, 500 × 0.06)
        assert result.fresh_air_cfm == 200.0
        assert result.sensible.ventilation == approx(1.08 * 200.0 * 20.0)
        assert result.latent.ventilation == approx(0.68 * 200.0 * 55.0)
        assert any("fresh air" in d for d in result.defaults_used)

    def test_minimum_air_changes(self):
        cfm = required_fresh_air("Operating Room", 2, 400.0, 4000.0)
        assert cfm == approx(1000.0)

    def test_unknown_space_type_uses_default_rates(self):
        defaults = []
        cfm = required_fresh_air("Hangar", 10, 500.0, defaults=defaults)
        assert cfm == 200.0
        assert len(defaults) == 1

    def test_default_infiltration(self):
        result = calculate_room_load(office(ventilation=VentilationSpec(fresh_air_cfm=0.0)))
        assert result.infiltration_cfm == 25.0
        assert any("infiltration" in d for d in result.defaults_used)

    def test_negative_airflow(self):
        with pytest.raises(InputError, match="Airflow"):
            calculate_room_load(office(ventilation=VentilationSpec(
                fresh_air_cfm=-10.0, infiltration_cfm=0.0
            )))


# ---------------------------------------------------------------------------
# Safety factors, edge cases, units
# ---------------------------------------------------------------------------

class TestSafetyFactors:

    def test_split_factors(self):
        result = calculate_room_load(office(sensible_safety_factor=1.0, latent_safety_factor=1.2))
        assert result.sensible_total == approx(15857.5)
        assert result.latent_total == approx(24840.0)

    def test_non_positive_factor(self):
        with pytest.raises(InputError, match="Safety factors"):
            calculate_room_load(office(sensible_safety_factor=0.0))

    def test_bad_solar_hour(self):
        with pytest.raises(InputError, match="Solar hour"):
            calculate_room_load(office(solar_hour="18"))

    def test_bad_supply_air_rise(self):
        with pytest.raises(InputError, match="Supply-air rise"):
            calculate_room_load(office(supply_air_rise=0.0))


class TestEdgeCases:

    def test_zero_area_room(self):
        result = calculate_room_load(office(
            geometry=RoomGeometry(area=0.0),
            ventilation=VentilationSpec(fresh_air_cfm=0.0, infiltration_cfm=0.0),
        ))
        assert result.sensible.lighting == 0.0
        assert result.btu_per_sqft == 0.0
        assert result.tonnage > 0.0

    def test_empty_room(self):
        result = calculate_room_load(office(
            internal=InternalLoadSource(occupants=0, lighting_watts=0.0, equipment_watts=0.0),
            ventilation=VentilationSpec(fresh_air_cfm=0.0, infiltration_cfm=0.0),
        ))
        assert result.grand_total == 0.0
        assert result.shf == 0.0
        assert result.sqft_per_ton == 0.0

    def test_si_conditions_match_ip(self):
        ip = calculate_room_load(office(
            outside=resolve_condition(Tdb=95.0, RH=50.0),
            inside=resolve_condition(Tdb=75.0, RH=50.0),
        ))
        si = calculate_room_load(office(
            outside=resolve_condition(Tdb=35.0, RH=50.0, unit_system=UnitSystem.SI),
            inside=resolve_condition(Tdb=23.8889, RH=50.0, unit_system=UnitSystem.SI),
        ))
        assert si.grand_total == pytest.approx(ip.grand_total, rel=0.001)


# ---------------------------------------------------------------------------
# Effective-heat coil analysis
# ---------------------------------------------------------------------------

class TestCoilAnalysis:
    """200 cfm fresh air, no infiltration, ADP 50°F, BF 0.1."""

    def setup_method(self):
        self.result = calculate_room_load(office(
            ventilation=VentilationSpec(fresh_air_cfm=200.0, infiltration_cfm=0.0),
            adp=50.0,
            bypass_factor=0.1,
        ))
        self.coil = self.result.coil

    def test_effective_room_heat_excludes_ventilation(self):
        # (2500 + 2557.5) × 1.1, 2000 × 1.1
        assert self.coil.effective_room_sensible == approx(5563.25)
        assert self.coil.effective_room_latent == approx(2200.0)
        assert self.coil.effective_room_total == approx(7763.25)

    def test_outside_air_scaled_by_bypass(self):
        # 1.08 × 200 × 20 × 0.9, 0.68 × 200 × 55 × 0.9
        assert self.coil.outside_air_sensible == approx(3888.0)
        assert self.coil.outside_air_latent == approx(6732.0)
        assert self.coil.grand_total == approx(18383.25)
        assert self.coil.tonnage == approx(1.5319, abs_tol=0.0001)

    def test_heat_ratios(self):
        assert self.coil.eshf == approx(0.7166, abs_tol=0.0001)
        assert self.coil.room_shr == approx(0.7166, abs_tol=0.0001)
        assert self.coil.grand_shr == approx(0.5141, abs_tol=0.0001)

    def test_dehumidified_air(self):
        assert self.coil.dehumidified_rise == approx(22.5)
        assert self.coil.dehumidified_cfm == approx(228.9, abs_tol=0.1)
        assert self.coil.coil_leaving_temp == approx(52.5)
        assert self.coil.supply_air_temp == approx(52.5)

    def test_air_mix(self):
        assert self.coil.return_air_cfm == approx(28.9, abs_tol=0.1)
        assert self.coil.outside_air_percent == approx(87.36)
        assert self.coil.return_air_percent == approx(12.64)
        assert self.coil.mixed_air_temp == approx(92.47)
        assert self.coil.cfm_per_ton == approx(149.4, abs_tol=0.1)

    def test_low_airflow_warning(self):
        assert len(self.result.warnings) == 1
        assert "cfm/ton" in self.result.warnings[0]
        assert self.result.defaults_used == []

    def test_room_totals_unchanged(self):
        plain = calculate_room_load(office(
            ventilation=VentilationSpec(fresh_air_cfm=200.0, infiltration_cfm=0.0),
        ))
        assert plain.coil is None
        assert plain.grand_total == self.result.grand_total

    def test_low_eshf_warning(self):
        result = calculate_room_load(office(adp=55.0, bypass_factor=0.1))
        assert result.coil.eshf == approx(0.4338, abs_tol=0.0001)
        assert any("Low ESHF" in w for w in result.warnings)

    def test_cold_supply_air_warning(self):
        result = calculate_room_load(office(adp=40.0, bypass_factor=0.05))
        assert result.coil.supply_air_temp == approx(41.75)
        assert any("overcooling" in w for w in result.warnings)

    def test_default_bypass_factor(self):
        result = calculate_room_load(office(adp=55.0))
        assert result.coil.bypass_factor == 0.1
        assert any("bypass factor" in d for d in result.defaults_used)

    def test_invalid_coil_inputs(self):
        with pytest.raises(InputError, match="Bypass factor"):
            calculate_room_load(office(adp=55.0, bypass_factor=1.0))
        with pytest.raises(InputError, match="Apparatus dew point"):
            calculate_room_load(office(adp=80.0))
        with pytest.raises(InputError, match="apparatus dew point"):
            calculate_room_load(office(bypass_factor=0.1))
