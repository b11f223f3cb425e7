"""
Installation materials take-off and pricing.

Quantities scale with the indoor (IDU) and outdoor (ODU) unit counts:

  - Refrigerant piping: run per IDU × IDUs, insulated over its full length
  - Refrigerant charge: kg per TR × installed indoor tonnage (whole kg)
  - Drain piping: run per IDU × IDUs, one pump per N IDUs
  - Power cable: run per unit × (IDUs + ODUs); control cable per IDU
  - Mounting: one pad and 4 vibration isolators per ODU, one bracket per IDU
  - Accessories: 2 isolation valves per IDU, a filter drier per ODU,
    one branch box per N IDUs
  - Controls: a wired remote per IDU, a central controller above 10 IDUs

Every line is priced from the accessory price list; category subtotals,
tax and the grand total follow.
"""

import math
from typing import Optional

from hvacload.config import DEFAULT_TAX_RATE
from hvacload.engine.errors import InputError
from hvacload.engine.reference import load_reference, lookup, ACCESSORIES_FILE
from hvacload.models.materials import MaterialsOptions, MaterialLine, MaterialsEstimate
from hvacload.models.selection import SelectionResult


def _take_off(name: str, options: MaterialsOptions, defaults: dict) -> float:
    value = getattr(options, name, None)
    if value is not None:
        return value
    return defaults[name]


def material_quantities(
    indoor_count: int,
    outdoor_count: int,
    total_indoor_tons: float,
    options: Optional[MaterialsOptions] = None,
) -> dict[str, float]:
    """Unpriced take-off keyed by price-list item."""
    if indoor_count < 0 or outdoor_count < 0:
        raise InputError("Unit counts must be non-negative")
    if total_indoor_tons < 0:
        raise InputError("Installed tonnage must be non-negative")

    options = options or MaterialsOptions()
    defaults = load_reference(ACCESSORIES_FILE)["take_off"]

    piping = _take_off("piping_run_m_per_idu", options, defaults) * indoor_count
    drain = _take_off("drain_run_m_per_idu", options, defaults) * indoor_count
    cable_run = _take_off("cable_run_m_per_unit", options, defaults)
    pump_fan_out = _take_off("drain_pump_fan_out", options, defaults)
    branch_fan_out = _take_off("branch_box_fan_out", options, defaults)
    charge = _take_off("refrigerant_kg_per_ton", options, defaults)

    central = 1 if indoor_count > defaults["central_controller_above_idus"] else 0

    return {
        "copper_piping": piping,
        "pipe_insulation": piping,
        "refrigerant_gas": math.ceil(round(total_indoor_tons * charge, 6)),
        "drain_piping": drain,
        "drain_pump": math.ceil(indoor_count / pump_fan_out),
        "power_cable": cable_run * (indoor_count + outdoor_count),
        "control_cable": cable_run * indoor_count,
        "odu_mounting_pad": outdoor_count,
        "idu_mount": indoor_count,
        "vibration_isolator": defaults["vibration_isolators_per_odu"] * outdoor_count,
        "isolation_valve": defaults["isolation_valves_per_idu"] * indoor_count,
        "filter_drier": outdoor_count,
        "branch_box": math.ceil(indoor_count / branch_fan_out),
        "wired_remote": indoor_count,
        "central_controller": central,
    }


def estimate_materials(
    indoor_count: int,
    outdoor_count: int,
    total_indoor_tons: float = 0.0,
    options: Optional[MaterialsOptions] = None,
) -> MaterialsEstimate:
    """
    Price the installation materials for a set of indoor and outdoor units.

    Lines with zero quantity are left out.

    Raises:
        InputError: negative counts or tonnage
        UnknownReference: take-off item missing from the price list
    """
    options = options or MaterialsOptions()
    price_list = load_reference(ACCESSORIES_FILE)
    quantities = material_quantities(indoor_count, outdoor_count, total_indoor_tons, options)

    lines = []
    category_totals: dict[str, float] = {}
    for item, quantity in quantities.items():
        if quantity <= 0:
            continue
        entry = lookup(price_list["items"], item, "material item")
        total_price = round(quantity * entry["price"], 2)
        lines.append(MaterialLine(
            item=item,
            name=entry["name"],
            category=entry["category"],
            quantity=quantity,
            unit=entry["unit"],
            unit_price=entry["price"],
            total_price=total_price,
        ))
        category_totals[entry["category"]] = round(
            category_totals.get(entry["category"], 0.0) + total_price, 2
        )

    if options.tax_rate is not None:
        tax_rate = options.tax_rate
    else:
        tax_rate = price_list.get("tax_rate", DEFAULT_TAX_RATE)

    subtotal = round(sum(line.total_price for line in lines), 2)
    tax = round(subtotal * tax_rate, 2)

    return MaterialsEstimate(
        currency=price_list.get("currency", "INR"),
        lines=lines,
        category_totals=category_totals,
        subtotal=subtotal,
        tax_rate=tax_rate,
        tax=tax,
        total=round(subtotal + tax, 2),
    )


def estimate_for_selection(
    selection: SelectionResult, options: Optional[MaterialsOptions] = None
) -> MaterialsEstimate:
    """Materials for the units of an equipment selection."""
    return estimate_materials(
        selection.indoor_unit_count,
        selection.outdoor_unit_count,
        selection.total_indoor_tons,
        options,
    )
