"""
Equipment catalog and selection-tier lookups.
"""

from typing import Optional

from hvacload.config import SelectionTier, MAX_CONNECTION_RATIO
from hvacload.engine.reference import (
    load_reference,
    lookup,
    CATALOG_FILE,
    SELECTION_FILE,
)
from hvacload.models.catalog import EquipmentCatalog, SelectionTierConfig


def load_catalog() -> EquipmentCatalog:
    return EquipmentCatalog(**load_reference(CATALOG_FILE))


def get_tier(tier: str) -> SelectionTierConfig:
    """
    Raises:
        UnknownReference: if the tier is not configured
    """
    name = tier.value if isinstance(tier, SelectionTier) else tier
    tiers = load_reference(SELECTION_FILE)["tiers"]
    return SelectionTierConfig(name=name, **lookup(tiers, name, "selection tier"))


def list_tiers() -> list[SelectionTierConfig]:
    tiers = load_reference(SELECTION_FILE)["tiers"]
    return [SelectionTierConfig(name=name, **tier) for name, tier in tiers.items()]


def max_connection_ratio(override: Optional[float] = None) -> float:
    if override is not None:
        return override
    return load_reference(SELECTION_FILE).get("max_connection_ratio", MAX_CONNECTION_RATIO)
