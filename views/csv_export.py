"""
Econ Data Explorer — CSV Export
Flat rows, county comparisons and series tables as CSV text.
"""
import logging
import os

import pandas as pd

from utils.comparison import slot_labels
from utils.data_prep import aggregate
from utils.models import ComparisonSlot

logger = logging.getLogger(__name__)


def _write(text: str, path: str | None) -> str:
    if path:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        logger.info(f"Wrote {path}")
    return text


def rows_to_csv(rows: list[dict], path: str | None = None) -> str:
    """
    Header from the first row's keys, then one line per row.

    Values containing commas, quotes or newlines are quoted.
    """
    if not rows:
        return _write("", path)
    df = pd.DataFrame(rows, columns=list(rows[0].keys()))
    return _write(df.to_csv(index=False, lineterminator="\n"), path)


def comparison_to_csv(slots: list[ComparisonSlot], variable_codes: list[str],
                      path: str | None = None) -> str:
    """Variable,Category,<county...> with one line per variable; blank when a county lacks it."""
    loaded = [s for s in slots if s.has_data]
    if not loaded:
        logger.warning("No comparison data to export")
        return _write("", path)

    rows = []
    for code in variable_codes:
        var = next((s.data.find(code) for s in loaded if s.data.find(code)), None)
        row = {
            "Variable": var.name if var else code,
            "Category": var.category if var else "Other",
        }
        for slot, label in zip(loaded, slot_labels(loaded)):
            county_var = slot.data.find(code)
            value = county_var.raw_value if county_var is not None else None
            row[label] = "" if value is None else value
        rows.append(row)
    return rows_to_csv(rows, path)


def series_to_csv(series, codes: list[str] | None = None, path: str | None = None) -> str:
    """The variables x years results table."""
    table = aggregate(series).to_table(codes)
    return _write(table.to_csv(index=False, lineterminator="\n"), path)
