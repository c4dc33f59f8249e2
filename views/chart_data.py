"""
Econ Data Explorer — Chart Data
Chart rows, series configs and cross-source pairing built from YearSeries.
"""
import logging

import numpy as np

import config
from utils.catalog import variable_names
from utils.data_prep import aggregate, numeric_value, year_key

logger = logging.getLogger(__name__)


def _raw_columns(series, codes: list[str]) -> dict[str, list]:
    """Per-code value lists aligned with series.years; None where a year lacks the code."""
    columns = {}
    for code in codes:
        column = []
        for result in series:
            var = result.find(code)
            column.append(numeric_value(var) if var is not None else None)
        columns[code] = column
    return columns


def apply_percent_change(values: list, base_index: int = 0) -> list:
    """Change relative to values[base_index]; a zero or missing base leaves values as they are."""
    base = values[base_index] if 0 <= base_index < len(values) else None
    if not base:
        return list(values)
    return [None if v is None else (v - base) / base * 100 for v in values]


def apply_normalize(values: list) -> list:
    """Scale to percent of the column max; a non-positive max zeroes the column."""
    present = [v for v in values if v is not None]
    top = max(present) if present else 0
    if top <= 0:
        return [None if v is None else 0.0 for v in values]
    return [None if v is None else v / top * 100 for v in values]


def to_chart_rows(series, variable_codes: list[str], normalize: bool = False,
                  percent_change: bool = False, base_year: str | None = None) -> list[dict]:
    """
    One row per year, ascending, with a numeric column per selected code.

    Percent change is applied before normalization, and normalization
    works on the percent-change values. The percent-change base is
    base_year when given, else the earliest year. A code missing from a
    year is 0.
    """
    series = aggregate(series)
    columns = _raw_columns(series, variable_codes)
    base_index = series.years.index(base_year) if base_year in series.years else 0

    for code, values in columns.items():
        if percent_change:
            values = apply_percent_change(values, base_index)
        if normalize:
            values = apply_normalize(values)
        columns[code] = values

    rows = []
    for i, year in enumerate(series.years):
        row = {"year": year}
        for code in variable_codes:
            value = columns[code][i]
            row[code] = 0.0 if value is None else float(value)
        rows.append(row)
    return rows


def pair_by_year(series_a, series_b, code_a: str, code_b: str) -> list[dict]:
    """
    Rows pairing code_a from one series with code_b from another.

    Only years present in both series are kept. Fewer than two common
    years returns [] (not enough points to compare).
    """
    series_a = aggregate(series_a)
    series_b = aggregate(series_b)
    common = sorted(set(series_a.years) & set(series_b.years), key=year_key)
    if len(common) < 2:
        logger.info(f"Only {len(common)} common years for {code_a}/{code_b}; nothing to pair")
        return []

    rows = []
    for year in common:
        rows.append({
            "year": year,
            code_a: numeric_value(series_a.variable(year, code_a)),
            code_b: numeric_value(series_b.variable(year, code_b)),
        })
    return rows


def correlation(pairs: list[dict], code_a: str, code_b: str) -> float | None:
    """Pearson r of two paired columns, None when it is undefined."""
    if len(pairs) < 2:
        return None
    a = np.array([row[code_a] for row in pairs], dtype=float)
    b = np.array([row[code_b] for row in pairs], dtype=float)
    if np.std(a) == 0 or np.std(b) == 0:
        return None
    return float(np.corrcoef(a, b)[0, 1])


def chart_config(codes: list[str], names: dict | None = None) -> dict:
    """{code: {"label", "color"}} for the chart renderer, cycling CHART_COLORS."""
    names = names or variable_names(codes)
    palette = config.CHART_COLORS
    return {
        code: {"label": names.get(code, code), "color": palette[i % len(palette)]}
        for i, code in enumerate(codes)
    }


def to_combined_rows(census_series, fred_series, census_codes: list[str],
                     fred_codes: list[str], normalize: bool = False,
                     percent_change: bool = False) -> list[dict]:
    """
    Census and FRED columns side by side for the years both sources cover.

    Columns are prefixed census_ and fred_. Percent change is measured from
    the first common year; normalization still spans each source's full
    year range.
    """
    census_series = aggregate(census_series)
    fred_series = aggregate(fred_series)
    common = sorted(set(census_series.years) & set(fred_series.years), key=year_key)
    if not common:
        return []

    census_rows = {
        r["year"]: r for r in to_chart_rows(census_series, census_codes, normalize,
                                            percent_change, base_year=common[0])
    }
    fred_rows = {
        r["year"]: r for r in to_chart_rows(fred_series, fred_codes, normalize,
                                            percent_change, base_year=common[0])
    }

    combined = []
    for year in common:
        row = {"year": year}
        for code in census_codes:
            row[f"census_{code}"] = census_rows[year][code]
        for code in fred_codes:
            row[f"fred_{code}"] = fred_rows[year][code]
        combined.append(row)
    return combined


def year_comparison(rows: list[dict], codes: list[str], comparison_year: str,
                    names: dict | None = None) -> dict | None:
    """
    Compare a chosen year's chart row with the most recent one.

    Returns None when there are no rows or the chosen year is absent.
    """
    if not rows or not comparison_year:
        return None
    selected = next((r for r in rows if r["year"] == comparison_year), None)
    if selected is None:
        return None
    latest = max(rows, key=lambda r: year_key(r["year"]))
    names = names or {}

    data = []
    for code in codes:
        old_value = selected.get(code) or 0
        new_value = latest.get(code) or 0
        change = (new_value - old_value) / old_value * 100 if old_value != 0 else 0
        data.append({
            "code": code,
            "name": names.get(code, code),
            "old_value": old_value,
            "new_value": new_value,
            "percent_change": change,
        })
    return {"old_year": comparison_year, "new_year": latest["year"], "data": data}


def latest_year_slices(rows: list[dict], codes: list[str], names: dict | None = None) -> list[dict]:
    """Pie slices from the most recent chart row."""
    if not rows:
        return []
    latest = max(rows, key=lambda r: year_key(r["year"]))
    names = names or {}
    return [{"name": names.get(code, code), "value": latest.get(code) or 0} for code in codes]
