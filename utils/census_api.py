"""
Econ Data Explorer — Census ACS Adapter
Fetches ACS 5-Year county estimates per year and turns the two-row table
responses into ObservedVariable records. Also lists states and counties.
"""
import logging

import config
from utils.errors import FetchError, ResponseShapeError, ValidationError
from utils.fetching import SourceClient
from utils.formatting import format_value, parse_upstream_value
from utils.models import Location, ObservedVariable, YearResult

logger = logging.getLogger(__name__)


def state_fips(state_code: str) -> str:
    """Two-digit FIPS for a postal state code."""
    state = config.STATES.get((state_code or "").upper())
    if state is None:
        raise ValidationError(f"Unknown state code '{state_code}'")
    return state["fips"]


def parse_census_table(data) -> dict:
    """
    Map the header row of a Census API response onto its first data row.

    The API answers with [[headers...], [values...], ...]; anything else is
    a ResponseShapeError.
    """
    if not isinstance(data, list) or len(data) < 2:
        raise ResponseShapeError("Invalid response format from Census API")
    headers, values = data[0], data[1]
    if not isinstance(headers, list) or not isinstance(values, list):
        raise ResponseShapeError("Invalid response format from Census API")
    return dict(zip(headers, values))


class CensusClient(SourceClient):
    """ACS 5-Year county-level adapter."""

    source_id = "census"
    available_years = config.CENSUS_YEARS

    def validate(self, location: Location, years: list[str], codes: list[str]) -> None:
        if not location.state_code:
            raise ValidationError("Please select a state")
        state_fips(location.state_code)
        if not location.county_fips:
            raise ValidationError("Please select a county")
        self.check_years(years)
        if not codes:
            raise ValidationError("Please select at least one variable")
        if len(codes) > config.MAX_CENSUS_VARIABLES:
            raise ValidationError(
                f"Too many variables selected. Please select {config.MAX_CENSUS_VARIABLES} "
                f"or fewer variables to avoid API limitations."
            )

    def build_url(self, location: Location, year: str, codes: list[str]) -> str:
        var_str = ",".join(codes)
        url = (
            f"{config.CENSUS_API_BASE}/{year}/{config.CENSUS_DATASET}"
            f"?get=NAME,{var_str}"
            f"&for=county:{location.county_fips}&in=state:{state_fips(location.state_code)}"
        )
        if self.api_key:
            url += f"&key={self.api_key}"
        return url

    def observe(self, code: str, raw, location: str | None = None) -> ObservedVariable:
        descriptor = self.catalog.describe(code)
        value = parse_upstream_value(raw, config.CENSUS_SENTINELS)
        return ObservedVariable(
            code=code,
            name=descriptor.name,
            category=descriptor.category,
            raw_value=value,
            formatted_value=format_value(value, descriptor.name, self.source_id),
            location=location,
        )

    def fetch_year(self, location: Location, year: str, codes: list[str]) -> YearResult:
        url = self.build_url(location, year, codes)
        logger.info(f"Fetching ACS data from Census API (vintage {year})...")
        record = parse_census_table(self._get_json(url))

        place = record.get("NAME") or location.county_name or location.county_fips
        variables = [self.observe(code, record.get(code), place) for code in codes]
        variables.sort(key=lambda v: (v.category, v.name))
        return YearResult(year=str(year), location=place, variables=tuple(variables))


def fetch_states(client: CensusClient, vintage: str = "2020") -> list[dict]:
    """List states as [{"name", "id"}]; empty when the API is unavailable."""
    url = f"{config.CENSUS_API_BASE}/{vintage}/{config.CENSUS_DATASET}?get=NAME&for=state:*"
    if client.api_key:
        url += f"&key={client.api_key}"
    try:
        data = client._get_json(url)
        if not isinstance(data, list) or len(data) < 2:
            raise ResponseShapeError("Invalid response format from Census API")
    except FetchError as e:
        logger.warning(f"Error fetching states: {e}")
        return []
    return [{"name": row[0], "id": row[1]} for row in data[1:]]


def fetch_counties(client: CensusClient, state_code: str, vintage: str = "2019") -> list[dict]:
    """
    List a state's counties as [{"name", "fips"}] sorted by name.

    Falls back to config.FALLBACK_COUNTIES when the API call fails, and to
    an empty list when no fallback exists for the state.
    """
    fips = state_fips(state_code)
    url = (
        f"{config.CENSUS_API_BASE}/{vintage}/{config.CENSUS_DATASET}"
        f"?get=NAME&for=county:*&in=state:{fips}"
    )
    if client.api_key:
        url += f"&key={client.api_key}"

    try:
        data = client._get_json(url)
        if not isinstance(data, list) or len(data) < 2:
            raise ResponseShapeError("Invalid response format from Census API")
        headers, rows = data[0], data[1:]
        county_col = headers.index("county")
        counties = [
            # NAME is "County Name, State Name"
            {"name": row[0].split(",")[0], "fips": row[county_col]}
            for row in rows
        ]
    except (FetchError, ValueError) as e:
        fallback = config.FALLBACK_COUNTIES.get(state_code.upper())
        if fallback:
            logger.warning(f"Error fetching counties for {state_code}, using fallback list: {e}")
            return sorted(fallback, key=lambda c: c["name"])
        logger.warning(f"No counties available for {state_code}: {e}")
        return []

    counties.sort(key=lambda c: c["name"])
    logger.info(f"Loaded {len(counties)} counties for {state_code}")
    return counties


def check_api_health(client: CensusClient) -> bool:
    """True when the Census API answers a minimal state listing."""
    return len(fetch_states(client)) > 0
