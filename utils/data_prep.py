"""
Econ Data Explorer — Data Preparation
Merge per-year results into a YearSeries and reshape it for tables and charts.
"""
import logging

import pandas as pd

from utils.errors import DuplicateYearError
from utils.formatting import parse_number
from utils.models import ObservedVariable, YearResult

logger = logging.getLogger(__name__)

FRAME_COLUMNS = ["year", "location", "code", "name", "category", "value", "formatted_value"]


def year_key(year: str) -> int:
    """Numeric sort key for a year label; unparseable labels sort first."""
    try:
        return int(year)
    except (TypeError, ValueError):
        return 0


def numeric_value(variable: ObservedVariable | None) -> float:
    """
    The number chart math uses for a variable.

    raw_value, else the parsed display string, else 0.
    """
    if variable is None:
        return 0.0
    if variable.raw_value is not None:
        return float(variable.raw_value)
    parsed = parse_number(variable.formatted_value)
    return parsed if parsed is not None else 0.0


class YearSeries:
    """
    The year-keyed results of one fetch session.

    Iterates YearResults in ascending year order.
    """

    def __init__(self, results: list[YearResult]):
        ordered = sorted(results, key=lambda r: year_key(r.year))
        self._by_year = {r.year: r for r in ordered}

    def __iter__(self):
        return iter(self._by_year.values())

    def __len__(self) -> int:
        return len(self._by_year)

    def __contains__(self, year: str) -> bool:
        return year in self._by_year

    @property
    def years(self) -> list[str]:
        return list(self._by_year)

    @property
    def results(self) -> list[YearResult]:
        return list(self._by_year.values())

    def get(self, year: str) -> YearResult | None:
        return self._by_year.get(year)

    def first(self) -> YearResult | None:
        return next(iter(self._by_year.values()), None)

    def last(self) -> YearResult | None:
        return self.results[-1] if self._by_year else None

    def variable(self, year: str, code: str) -> ObservedVariable | None:
        result = self._by_year.get(year)
        return result.find(code) if result else None

    def value(self, year: str, code: str) -> float | None:
        """Coerced value of a code in a year; None when the year lacks the variable."""
        var = self.variable(year, code)
        if var is None:
            return None
        return numeric_value(var)

    def codes(self) -> list[str]:
        seen = []
        for result in self:
            for var in result.variables:
                if var.code not in seen:
                    seen.append(var.code)
        return seen

    def names(self) -> dict[str, str]:
        names = {}
        for result in self:
            for var in result.variables:
                names.setdefault(var.code, var.name)
        return names

    def restrict(self, years) -> "YearSeries":
        wanted = set(years)
        return YearSeries([r for r in self if r.year in wanted])

    def grouped(self, year: str) -> list[tuple[str, list[ObservedVariable]]]:
        """Table layout for one year: categories A-Z, variables A-Z by name within each."""
        result = self._by_year.get(year)
        if result is None:
            return []
        groups: dict[str, list[ObservedVariable]] = {}
        for var in result.variables:
            groups.setdefault(var.category, []).append(var)
        return [
            (category, sorted(groups[category], key=lambda v: v.name))
            for category in sorted(groups)
        ]

    def to_frame(self) -> pd.DataFrame:
        """Long table keyed by (year, code, location)."""
        rows = []
        for result in self:
            for var in result.variables:
                rows.append({
                    "year": result.year,
                    "location": var.location or result.location,
                    "code": var.code,
                    "name": var.name,
                    "category": var.category,
                    "value": numeric_value(var),
                    "formatted_value": var.formatted_value,
                })
        return pd.DataFrame(rows, columns=FRAME_COLUMNS)

    def to_table(self, codes: list[str] | None = None) -> pd.DataFrame:
        """
        Variables x years of display strings, the layout of the results table.

        Rows are ordered by category then name; missing cells are "N/A".
        """
        df = self.to_frame()
        if codes is not None:
            df = df[df["code"].isin(codes)]
        if df.empty:
            return pd.DataFrame(columns=["category", "name"])
        table = df.pivot_table(
            index=["category", "name"],
            columns="year",
            values="formatted_value",
            aggfunc="first",
        )
        table = table.reindex(columns=self.years).fillna("N/A")
        table.columns.name = None
        return table.sort_index().reset_index()


def aggregate(results) -> YearSeries:
    """
    Build a YearSeries from per-year results.

    A repeated year, or a repeated code within one year, raises
    DuplicateYearError rather than silently keeping either copy.
    """
    if isinstance(results, YearSeries):
        return results

    results = list(results)
    seen_years = set()
    for result in results:
        if result.year in seen_years:
            raise DuplicateYearError(f"Year {result.year} appears more than once")
        seen_years.add(result.year)

        codes = [v.code for v in result.variables]
        duplicates = sorted({c for c in codes if codes.count(c) > 1})
        if duplicates:
            raise DuplicateYearError(
                f"Variables {duplicates} appear more than once in {result.year}"
            )

    series = YearSeries(results)
    logger.info(f"Aggregated {len(series)} years: {', '.join(series.years)}")
    return series
