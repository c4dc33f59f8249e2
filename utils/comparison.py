"""
Econ Data Explorer — County Comparison
Fetches one year of data for 2-5 counties and computes gaps between them.
"""
import logging
from dataclasses import replace

import config
from utils.errors import FetchError, ValidationError
from utils.formatting import format_value
from utils.models import ComparisonSlot, GapRecord, Location

logger = logging.getLogger(__name__)


def slot_label(slot: ComparisonSlot) -> str:
    """Display name of a slot's county."""
    if slot.county_name:
        return slot.county_name
    if slot.data is not None and slot.data.location:
        return slot.data.location
    return f"{slot.state_code}-{slot.county_fips}"


def slot_labels(slots: list[ComparisonSlot]) -> list[str]:
    """Labels for chart and table columns; a repeated county gets " (2)", " (3)", ..."""
    seen = {}
    labels = []
    for slot in slots:
        label = slot_label(slot)
        seen[label] = seen.get(label, 0) + 1
        labels.append(label if seen[label] == 1 else f"{label} ({seen[label]})")
    return labels


def add_slot(slots: list[ComparisonSlot], slot: ComparisonSlot | None = None) -> list[ComparisonSlot]:
    """New slot list with one more slot; unchanged at MAX_COMPARISON_SLOTS."""
    if len(slots) >= config.MAX_COMPARISON_SLOTS:
        logger.warning(f"Cannot compare more than {config.MAX_COMPARISON_SLOTS} counties")
        return list(slots)
    return list(slots) + [slot if slot is not None else ComparisonSlot(state_code="")]


def remove_slot(slots: list[ComparisonSlot], index: int) -> list[ComparisonSlot]:
    """New slot list without slots[index]; unchanged at MIN_COMPARISON_SLOTS."""
    if len(slots) <= config.MIN_COMPARISON_SLOTS:
        logger.warning(f"A comparison needs at least {config.MIN_COMPARISON_SLOTS} counties")
        return list(slots)
    if not 0 <= index < len(slots):
        logger.warning(f"No comparison slot at index {index}")
        return list(slots)
    return [s for i, s in enumerate(slots) if i != index]


def _slot_location(slot: ComparisonSlot) -> Location:
    return Location(
        state_code=slot.state_code,
        county_fips=slot.county_fips,
        county_name=slot.county_name,
    )


def fetch_comparison(slots: list[ComparisonSlot], year: str, variable_codes: list[str],
                     client, progress=None) -> list[ComparisonSlot]:
    """
    Fetch `year` for every slot that has no data yet, one slot at a time.

    Every slot is validated before the first request. A failing slot keeps
    data=None and gets its error message; the remaining slots still load.
    `progress`, when given, is called with (index, slot) after each slot.
    """
    if not year:
        raise ValidationError("Please select a year")
    if not variable_codes:
        raise ValidationError("Please select at least one variable")
    for i, slot in enumerate(slots):
        if not slot.state_code or not slot.county_fips:
            raise ValidationError(f"Please select a state and county for county {i + 1}")
        client.validate(_slot_location(slot), [str(year)], variable_codes)

    updated = []
    for i, slot in enumerate(slots):
        if slot.has_data:
            updated.append(slot)
            continue

        try:
            logger.info(f"Fetching comparison data for {slot_label(slot)} ({year})...")
            result = client.fetch_year(_slot_location(slot), str(year), list(variable_codes))
            slot = replace(
                slot,
                data=result,
                county_name=slot.county_name or result.location,
                loading=False,
                error="",
            )
        except FetchError as e:
            logger.warning(f"Error fetching data for {slot_label(slot)}: {e}")
            slot = replace(slot, data=None, loading=False, error=str(e))

        updated.append(slot)
        if progress is not None:
            progress(i, slot)

    loaded = sum(1 for s in updated if s.has_data)
    logger.info(f"Comparison loaded {loaded}/{len(updated)} counties")
    return updated


def gap_analysis(slot_a: ComparisonSlot, slot_b: ComparisonSlot,
                 variable_codes: list[str]) -> list[GapRecord]:
    """
    Differences from slot_a to slot_b, largest percentage gap first.

    Only codes with a non-null value in both slots are compared.
    """
    if not slot_a.has_data or not slot_b.has_data:
        return []

    label_a = slot_label(slot_a)
    label_b = slot_label(slot_b)
    records = []
    for code in variable_codes:
        var1 = slot_a.data.find(code)
        var2 = slot_b.data.find(code)
        if var1 is None or var2 is None or var1.raw_value is None or var2.raw_value is None:
            continue

        value1 = var1.raw_value
        value2 = var2.raw_value
        absolute_gap = value2 - value1
        percentage_gap = (value2 - value1) / value1 * 100 if value1 != 0 else 0.0

        records.append(GapRecord(
            code=code,
            name=var1.name,
            category=var1.category,
            value1=value1,
            value2=value2,
            absolute_gap=absolute_gap,
            percentage_gap=percentage_gap,
            higher_location=label_b if value2 > value1 else label_a,
            direction="higher" if value2 > value1 else "lower",
            formatted_value1=format_value(value1, var1.name),
            formatted_value2=format_value(value2, var1.name),
            formatted_gap=format_value(abs(absolute_gap), var1.name),
        ))

    records.sort(key=lambda r: abs(r.percentage_gap), reverse=True)
    return records


def primary_gap_analysis(slots: list[ComparisonSlot], variable_codes: list[str]) -> list[GapRecord]:
    """Gap analysis between the first two slots that hold data."""
    loaded = [s for s in slots if s.has_data]
    if len(loaded) < 2:
        return []
    return gap_analysis(loaded[0], loaded[1], variable_codes)


def _variable_name(slots: list[ComparisonSlot], code: str) -> str:
    for slot in slots:
        var = slot.data.find(code) if slot.has_data else None
        if var is not None:
            return var.name
    return code


def _slot_value(slot: ComparisonSlot, code: str) -> float | None:
    var = slot.data.find(code)
    return var.raw_value if var is not None else None


def normalize_for_radar(slots: list[ComparisonSlot], variable_codes: list[str]) -> list[dict]:
    """
    Radar points, one per variable, each county as a percent of the largest value.

    A county missing the variable, or a variable whose max is 0, plots as 0.
    """
    loaded = [s for s in slots if s.has_data]
    points = []
    for code in variable_codes:
        values = [_slot_value(s, code) for s in loaded]
        top = max([v for v in values if v is not None], default=0)

        point = {"variable": _variable_name(loaded, code), "full_mark": 100}
        for label, value in zip(slot_labels(loaded), values):
            point[label] = value / top * 100 if value is not None and top > 0 else 0
        points.append(point)
    return points


def comparison_chart_rows(slots: list[ComparisonSlot], variable_codes: list[str],
                          normalize: bool = False) -> list[dict]:
    """Bar chart rows: one per variable, a column per county."""
    loaded = [s for s in slots if s.has_data]
    rows = []
    for code in variable_codes:
        if not any(_slot_value(s, code) is not None for s in loaded):
            continue
        values = [_slot_value(s, code) for s in loaded]
        top = max([v for v in values if v is not None], default=0)

        row = {"name": _variable_name(loaded, code)}
        for label, value in zip(slot_labels(loaded), values):
            if value is None:
                row[label] = 0
            elif normalize and top > 0:
                row[label] = value / top * 100
            else:
                row[label] = value
        rows.append(row)
    return rows


def comparison_pie_slices(slots: list[ComparisonSlot], code: str) -> list[dict]:
    """One slice per county holding a value for `code`."""
    loaded = [s for s in slots if s.has_data]
    slices = []
    for slot, label in zip(loaded, slot_labels(loaded)):
        value = _slot_value(slot, code)
        if value is not None:
            slices.append({"name": label, "value": value})
    return slices
