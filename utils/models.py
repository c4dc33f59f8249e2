"""
Econ Data Explorer — Data Model
Records passed between the source adapters, aggregator, transforms and reports.
"""
from dataclasses import dataclass, field

from utils.errors import PartialFetchError

SOURCE_IDS = ("census", "fred", "hud")


@dataclass(frozen=True)
class VariableDescriptor:
    code: str
    name: str
    category: str
    source_id: str


@dataclass(frozen=True)
class ObservedVariable:
    """
    One measured value for a (location, year, variable) triple.

    raw_value is None exactly when upstream had no numeric value, in which
    case formatted_value is "N/A".
    """

    code: str
    name: str
    category: str
    raw_value: float | None
    formatted_value: str
    location: str | None = None


@dataclass(frozen=True)
class YearResult:
    year: str
    location: str
    variables: tuple[ObservedVariable, ...] = ()

    def find(self, code: str) -> ObservedVariable | None:
        for variable in self.variables:
            if variable.code == code:
                return variable
        return None


@dataclass(frozen=True)
class Location:
    """A selected place. county_fips is empty for national or state-wide sources."""

    state_code: str = ""
    county_fips: str = ""
    county_name: str = ""


@dataclass
class ComparisonSlot:
    state_code: str
    county_fips: str = ""
    county_name: str = ""
    data: YearResult | None = None
    loading: bool = False
    error: str = ""

    @property
    def has_data(self) -> bool:
        return self.data is not None


@dataclass(frozen=True)
class GapRecord:
    code: str
    name: str
    category: str
    value1: float
    value2: float
    absolute_gap: float
    percentage_gap: float
    higher_location: str
    direction: str
    formatted_value1: str = ""
    formatted_value2: str = ""
    formatted_gap: str = ""


@dataclass
class FetchOutcome:
    """Results of a multi-year fetch plus the per-year error messages."""

    results: list[YearResult] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def partial_error(self) -> PartialFetchError | None:
        if not self.errors:
            return None
        return PartialFetchError(self.errors)

    @property
    def warning(self) -> str:
        return "\n".join(self.errors)
