"""
Econ Data Explorer — Aggregator Tests
"""
import os
import sys

import pytest

# Ensure project root is on path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from utils.data_prep import YearSeries, aggregate, numeric_value
from utils.errors import DuplicateYearError
from utils.models import ObservedVariable, YearResult


def var(code, value, name=None, category="Population", formatted=None):
    return ObservedVariable(
        code=code,
        name=name or code,
        category=category,
        raw_value=value,
        formatted_value=formatted if formatted is not None else ("N/A" if value is None else str(value)),
    )


def year(label, *variables, location="Test County"):
    return YearResult(year=label, location=location, variables=tuple(variables))


@pytest.fixture
def series():
    return aggregate([
        year("2019", var("POP", 120), var("INC", 60000, name="Median Household Income",
                                          category="Income")),
        year("2010", var("POP", 100)),
        year("2015", var("POP", 110), var("INC", None, name="Median Household Income",
                                          category="Income")),
    ])


def test_duplicate_year_rejected():
    """Two results for the same year are rejected rather than merged."""
    with pytest.raises(DuplicateYearError):
        aggregate([year("2019", var("POP", 1)), year("2019", var("POP", 2))])


def test_aggregate_accepts_generator():
    series = aggregate(year(label, var("POP", 1)) for label in ("2019", "2017"))
    assert series.years == ["2017", "2019"], "A one-shot iterable still yields every year"


def test_duplicate_code_within_year_rejected():
    with pytest.raises(DuplicateYearError):
        aggregate([year("2019", var("POP", 1), var("POP", 2))])


def test_duplicate_year_is_a_value_error():
    with pytest.raises(ValueError):
        aggregate([year("2019"), year("2019")])


def test_years_ascending(series):
    assert series.years == ["2010", "2015", "2019"]
    assert [r.year for r in series] == series.years
    assert "2015" in series and "2020" not in series
    assert len(series) == 3


def test_values_and_codes(series):
    assert series.value("2019", "POP") == 120
    assert series.value("2010", "INC") is None, "A year without the code has no value"
    assert series.value("2015", "INC") == 0, "A null raw value with N/A text coerces to 0"
    assert series.codes() == ["POP", "INC"]
    assert series.names()["INC"] == "Median Household Income"


def test_numeric_value_fallbacks():
    assert numeric_value(var("X", 5.5)) == 5.5
    assert numeric_value(var("X", None, formatted="$1,200")) == 1200
    assert numeric_value(var("X", None)) == 0
    assert numeric_value(None) == 0


def test_grouped_sorted():
    result = aggregate([
        year("2019",
             var("B", 1, name="Zeta", category="Housing"),
             var("A", 2, name="Alpha", category="Housing"),
             var("C", 3, name="Mid", category="Economy")),
    ])
    groups = result.grouped("2019")
    assert [category for category, _ in groups] == ["Economy", "Housing"]
    assert [v.name for v in groups[1][1]] == ["Alpha", "Zeta"]
    assert result.grouped("1999") == []


def test_to_frame_long_shape(series):
    df = series.to_frame()
    assert list(df.columns) == [
        "year", "location", "code", "name", "category", "value", "formatted_value",
    ]
    assert len(df) == 5
    assert not df.duplicated(["year", "code", "location"]).any()


def test_to_table_pivot(series):
    table = series.to_table()
    assert list(table.columns) == ["category", "name", "2010", "2015", "2019"]
    pop = table[table["name"] == "POP"].iloc[0]
    assert pop["2010"] == "100"
    income = table[table["name"] == "Median Household Income"].iloc[0]
    assert income["2010"] == "N/A", "Missing cells should read N/A"


def test_aggregate_passes_series_through(series):
    assert aggregate(series) is series
    assert isinstance(series.restrict(["2010", "2019"]), YearSeries)
    assert series.restrict(["2010", "2019"]).years == ["2010", "2019"]
