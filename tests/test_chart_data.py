"""
Econ Data Explorer — Chart Data Tests
Percent-change and normalize transforms, cross-source pairing and chart configs.
"""
import os
import sys

import pytest

# Ensure project root is on path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import config
from utils.models import ObservedVariable, YearResult
from views.chart_data import (
    chart_config,
    correlation,
    latest_year_slices,
    pair_by_year,
    to_chart_rows,
    to_combined_rows,
    year_comparison,
)


def make_series(values: dict, code="X"):
    """values: {year: raw value}; None leaves the variable out of that year."""
    results = []
    for year, value in values.items():
        variables = ()
        if value is not None:
            variables = (ObservedVariable(code, code, "Test", float(value), str(value)),)
        results.append(YearResult(year=year, location="Test", variables=variables))
    return results


def column(rows, code="X"):
    return {row["year"]: row[code] for row in rows}


def test_plain_rows_sorted_by_year():
    rows = to_chart_rows(make_series({"2020": 3, "2018": 1, "2019": 2}), ["X"])
    assert [r["year"] for r in rows] == ["2018", "2019", "2020"]
    assert column(rows) == {"2018": 1, "2019": 2, "2020": 3}


def test_percent_change_from_first_year():
    rows = to_chart_rows(make_series({"2018": 100, "2020": 150}), ["X"], percent_change=True)
    assert column(rows) == {"2018": 0, "2020": 50}


def test_percent_change_zero_base_leaves_values():
    rows = to_chart_rows(make_series({"2018": 0, "2020": 150}), ["X"], percent_change=True)
    assert column(rows) == {"2018": 0, "2020": 150}


@pytest.mark.parametrize("values, expected", [
    ({"2018": 50, "2019": 100}, {"2018": 50, "2019": 100}),
    ({"2018": 25, "2019": 100}, {"2018": 25, "2019": 100}),
    ({"2018": 25, "2019": 50}, {"2018": 50, "2019": 100}),
])
def test_normalize_to_percent_of_max(values, expected):
    rows = to_chart_rows(make_series(values), ["X"], normalize=True)
    assert column(rows) == expected


def test_normalize_non_positive_max_is_zero():
    rows = to_chart_rows(make_series({"2018": -5, "2019": -10}), ["X"], normalize=True)
    assert column(rows) == {"2018": 0, "2019": 0}


def test_percent_change_then_normalize():
    """
    100, 150, 120: percent change gives 0, 50, 20; normalizing that gives 0, 100, 40.
    Normalizing first would give 0, 50, 20 instead.
    """
    series = make_series({"2018": 100, "2019": 150, "2020": 120})
    rows = to_chart_rows(series, ["X"], normalize=True, percent_change=True)
    assert column(rows) == pytest.approx({"2018": 0, "2019": 100, "2020": 40})


def test_missing_variable_is_zero():
    rows = to_chart_rows(make_series({"2018": 10, "2019": None, "2020": 30}), ["X"])
    assert column(rows) == {"2018": 10, "2019": 0, "2020": 30}
    rows = to_chart_rows(make_series({"2018": 10}), ["X", "Y"])
    assert rows[0]["Y"] == 0


def test_pair_by_year_intersection():
    census = make_series({"2017": 1, "2018": 2, "2019": 3}, code="POP")
    fred = make_series({"2018": 5, "2019": 6, "2020": 7}, code="UNRATE")
    pairs = pair_by_year(census, fred, "POP", "UNRATE")
    assert pairs == [
        {"year": "2018", "POP": 2, "UNRATE": 5},
        {"year": "2019", "POP": 3, "UNRATE": 6},
    ]
    assert correlation(pairs, "POP", "UNRATE") == pytest.approx(1.0)


def test_pair_by_year_needs_two_common_years():
    census = make_series({"2018": 2, "2019": 3}, code="POP")
    fred = make_series({"2019": 6, "2020": 7}, code="UNRATE")
    assert pair_by_year(census, fred, "POP", "UNRATE") == []
    assert correlation([], "POP", "UNRATE") is None


def test_correlation_undefined_for_constant_column():
    pairs = [{"A": 1, "B": 2}, {"A": 1, "B": 3}]
    assert correlation(pairs, "A", "B") is None


def test_chart_config_cycles_palette():
    codes = [f"C{i}" for i in range(len(config.CHART_COLORS) + 1)]
    cfg = chart_config(codes, {"C0": "First"})
    assert cfg["C0"] == {"label": "First", "color": config.CHART_COLORS[0]}
    assert cfg[codes[-1]]["color"] == config.CHART_COLORS[0]
    assert chart_config(["B01003_001E"])["B01003_001E"]["label"] == "Total Population"


def test_combined_rows_prefix_sources():
    census = make_series({"2018": 10, "2019": 20}, code="POP")
    fred = make_series({"2019": 4, "2020": 5}, code="UNRATE")
    rows = to_combined_rows(census, fred, ["POP"], ["UNRATE"])
    assert rows == [{"year": "2019", "census_POP": 20, "fred_UNRATE": 4}]


def test_combined_percent_change_from_first_common_year():
    """An extra earlier Census year does not shift the percent-change base."""
    census = make_series({"2015": 50, "2017": 100, "2019": 150}, code="POP")
    fred = make_series({"2017": 4, "2019": 6}, code="UNRATE")

    rows = to_combined_rows(census, fred, ["POP"], ["UNRATE"], percent_change=True)
    assert [r["year"] for r in rows] == ["2017", "2019"]
    assert rows[0]["census_POP"] == 0, "First common year is the base"
    assert rows[1]["census_POP"] == pytest.approx(50)
    assert rows[1]["fred_UNRATE"] == pytest.approx(50)

    both = to_combined_rows(census, fred, ["POP"], ["UNRATE"], normalize=True, percent_change=True)
    assert column(both, "census_POP") == {"2017": 0, "2019": pytest.approx(100)}


def test_year_comparison_against_latest():
    rows = to_chart_rows(make_series({"2018": 100, "2019": 110, "2020": 150}), ["X"])
    comparison = year_comparison(rows, ["X"], "2018", {"X": "Metric"})
    assert comparison["old_year"] == "2018"
    assert comparison["new_year"] == "2020"
    entry = comparison["data"][0]
    assert entry["name"] == "Metric"
    assert entry["percent_change"] == pytest.approx(50)
    assert year_comparison(rows, ["X"], "1999") is None


def test_latest_year_slices():
    rows = [{"year": "2019", "A": 1, "B": 2}, {"year": "2020", "A": 3, "B": 4}]
    assert latest_year_slices(rows, ["A", "B"], {"A": "Alpha"}) == [
        {"name": "Alpha", "value": 3},
        {"name": "B", "value": 4},
    ]
    assert latest_year_slices([], ["A"]) == []
