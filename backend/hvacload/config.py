"""
HVAC heat-load engine configuration and constants.

Values that can change between projects (tables, catalogs, prices) live in
the JSON files under ``data/``; this module only holds fixed physical
constants and the defaults used when an input omits an optional field.
"""

import os
from enum import Enum


class UnitSystem(str, Enum):
    IP = "IP"  # Inch-Pound (°F, BTU, grains, ft³)
    SI = "SI"  # Metric (°C, kJ, g/kg, m³)


class Season(str, Enum):
    SUMMER = "summer"
    MONSOON = "monsoon"
    WINTER = "winter"


class SelectionTier(str, Enum):
    ECONOMY = "economy"
    BALANCED = "balanced"
    PREMIUM = "premium"


class ComponentKind(str, Enum):
    GLASS = "glass"
    WALL = "wall"
    ROOF = "roof"
    PARTITION = "partition"
    FLOOR = "floor"


class SelectionStrategyName(str, Enum):
    MIN_UNITS = "min_units"
    MIN_COST = "min_cost"
    MIN_OVERSIZING = "min_oversizing"


# Reference data directory. Point HVACLOAD_DATA_DIR at a copy of the bundled
# files to swap tables or catalogs without touching code.
DATA_DIR = os.environ.get(
    "HVACLOAD_DATA_DIR",
    os.path.join(os.path.dirname(__file__), "data"),
)

# Standard atmosphere at sea level
DEFAULT_PRESSURE_KPA = 101.325
KPA_TO_PSIA = 0.145037738

# Humidity ratio conversions
GRAINS_PER_LB = 7000.0
GRAMS_PER_KG = 1000.0

# Moist-air molecular weight ratio used by the moisture-content formula
MOLECULAR_WEIGHT_RATIO = 0.621945

# Refrigeration
BTU_PER_TON = 12000.0

# Standard-air heat transfer constants (sea level). Do not alter.
SENSIBLE_AIR_FACTOR = 1.08  # BTU/hr per cfm·°F
LATENT_AIR_FACTOR = 0.68  # BTU/hr per cfm·gr/lb

# Internal gain conversions
LIGHTING_BTU_PER_WATT = 3.41
EQUIPMENT_BTU_PER_WATT = 3.412
MOTOR_BTU_PER_HP = 2545.0

# Defaults applied when the input omits a value (reported in defaults_used)
DEFAULT_SAFETY_FACTOR = 1.1
DEFAULT_LIGHTING_W_PER_SQFT = 1.5
DEFAULT_EQUIPMENT_W_PER_SQFT = 2.0
DEFAULT_EQUIPMENT_USE_FACTOR = 0.75
DEFAULT_EQUIPMENT_DIVERSITY = 0.85
DEFAULT_INFILTRATION_CFM_PER_SQFT = 0.05
DEFAULT_SUPPLY_AIR_RISE_F = 20.0
DEFAULT_SOLAR_HOUR = "peak"
DEFAULT_LATITUDE_BAND = "20N"
DEFAULT_BYPASS_FACTOR = 0.1

# Root-finding defaults for psychrometric inversions
SOLVER_TOLERANCE = 0.01  # °F
SOLVER_MAX_ITERATIONS = 50

# Supplied wet-bulb may differ from the derived one by this much before a
# warning is raised (°F)
WET_BULB_MISMATCH_F = 1.0

# Selection
MAX_CONNECTION_RATIO = 1.3
SELECTION_MAX_ITERATIONS = 50
CAPACITY_STEP_TONS = 0.1

# Materials
DEFAULT_TAX_RATE = 0.18
