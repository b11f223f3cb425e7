"""
Read-only reference data loader.

Every table the engine consults (climate, load tables, diversity bands,
selection tiers, equipment catalog, accessory prices) is a versioned JSON
file in the data directory. Files are parsed once and cached.
"""

import json
import os
from functools import lru_cache

from hvacload import config
from hvacload.engine.errors import UnknownReference

CLIMATE_FILE = "climate.json"
LOAD_TABLES_FILE = "load_tables.json"
DIVERSITY_FILE = "diversity.json"
SELECTION_FILE = "selection.json"
CATALOG_FILE = "equipment_catalog.json"
ACCESSORIES_FILE = "accessories.json"


@lru_cache(maxsize=None)
def load_reference(name: str) -> dict:
    """Load and cache one reference file from the data directory."""
    path = os.path.join(config.DATA_DIR, name)
    with open(path, "r") as f:
        return json.load(f)


def clear_reference_cache() -> None:
    """Forget cached files so the next lookup re-reads the data directory."""
    load_reference.cache_clear()


def load_tables() -> dict:
    return load_reference(LOAD_TABLES_FILE)


def lookup(table: dict, key: str, kind: str):
    """
    Strict lookup in a keyed table.

    Raises:
        UnknownReference: if the key is absent
    """
    try:
        return table[key]
    except KeyError:
        raise UnknownReference(
            f"Unknown {kind} '{key}'. Known values: {', '.join(sorted(table))}"
        )


def versions() -> dict[str, str]:
    """Version tag of every bundled reference file."""
    names = (
        CLIMATE_FILE,
        LOAD_TABLES_FILE,
        DIVERSITY_FILE,
        SELECTION_FILE,
        CATALOG_FILE,
        ACCESSORIES_FILE,
    )
    return {name: load_reference(name).get("version", "") for name in names}
