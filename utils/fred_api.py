"""
Econ Data Explorer — FRED Adapter
Fetches the annual observation and title for each FRED series, one year at a time.
A failing series becomes an "Error" record instead of failing its year.
"""
import logging

import config
from utils.errors import FetchError, ResponseShapeError, ValidationError
from utils.fetching import SourceClient
from utils.formatting import CURRENCY, format_value, parse_upstream_value
from utils.models import Location, ObservedVariable, YearResult

logger = logging.getLogger(__name__)

NATIONAL_LOCATION = "United States"
_CURRENCY_TITLE_WORDS = ("Income", "Expenditure", "Spending")


def series_error_record(series_id: str) -> ObservedVariable:
    return ObservedVariable(
        code=series_id,
        name=series_id,
        category="Error",
        raw_value=0.0,
        formatted_value="Error fetching data",
    )


class FredClient(SourceClient):
    """
    FRED adapter.

    Talks to the FRED API directly, or to a proxy that forwards an
    `endpoint` query parameter when proxy_url is set.
    """

    source_id = "fred"
    available_years = config.FRED_YEARS

    def __init__(self, api_key: str | None = None, session=None,
                 timeout: float = config.REQUEST_TIMEOUT, proxy_url: str | None = None):
        super().__init__(api_key=api_key, session=session, timeout=timeout)
        self.proxy_url = proxy_url

    def validate(self, location: Location, years: list[str], codes: list[str]) -> None:
        self.check_years(years)
        if not codes:
            raise ValidationError("Please select at least one variable")
        if len(codes) > config.MAX_FRED_VARIABLES:
            raise ValidationError(
                f"Too many variables selected. Please select {config.MAX_FRED_VARIABLES} "
                f"or fewer variables to avoid API limitations."
            )

    def _request(self, endpoint: str, params: dict):
        params = dict(params, file_type="json")
        if self.api_key:
            params["api_key"] = self.api_key
        if self.proxy_url:
            return self._get_json(self.proxy_url, params=dict(params, endpoint=endpoint),
                                  headers={"Accept": "application/json"})
        return self._get_json(f"{config.FRED_API_BASE}/{endpoint}", params=params,
                              headers={"Accept": "application/json"})

    def fetch_series(self, series_id: str, year: str) -> ObservedVariable:
        """Most recent annual observation of a series within a calendar year."""
        observations = self._request("series/observations", {
            "series_id": series_id,
            "observation_start": f"{year}-01-01",
            "observation_end": f"{year}-12-31",
            "frequency": "a",
            "sort_order": "desc",
            "limit": 1,
        })
        info = self._request("series", {"series_id": series_id})

        try:
            title = info["seriess"][0]["title"]
            obs = observations.get("observations") or []
            raw = obs[0]["value"] if obs else None
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise ResponseShapeError(f"Unexpected FRED payload for {series_id}: {e}") from e

        # FRED marks missing observations with "."
        value = parse_upstream_value(raw)

        descriptor = self.catalog.lookup(series_id)
        name = descriptor.name if descriptor else title
        category = descriptor.category if descriptor else "Other"

        kind = None
        if series_id.startswith("GDP") or any(w in title for w in _CURRENCY_TITLE_WORDS):
            kind = CURRENCY

        return ObservedVariable(
            code=series_id,
            name=name,
            category=category,
            raw_value=value,
            formatted_value=format_value(value, name, self.source_id, kind=kind),
            location=NATIONAL_LOCATION,
        )

    def fetch_year(self, location: Location, year: str, codes: list[str]) -> YearResult:
        variables = []
        for series_id in codes:
            try:
                variables.append(self.fetch_series(series_id, year))
            except FetchError as e:
                logger.warning(f"Error fetching FRED data for {series_id} ({year}): {e}")
                variables.append(series_error_record(series_id))

        variables.sort(key=lambda v: (v.category, v.name))
        return YearResult(year=str(year), location=NATIONAL_LOCATION, variables=tuple(variables))

    def check_api_health(self) -> bool:
        try:
            info = self._request("series", {"series_id": "GDPC1"})
        except FetchError as e:
            logger.warning(f"FRED API health check failed: {e}")
            return False
        return bool(isinstance(info, dict) and info.get("seriess"))
