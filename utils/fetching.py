"""
Econ Data Explorer — Shared Fetch Plumbing
HTTP-to-error mapping and the sequential per-year loop every source adapter runs.
"""
import logging

import requests

import config
from utils.catalog import get_catalog
from utils.errors import FetchError, HttpError, NoDataError, ResponseShapeError, ValidationError
from utils.models import FetchOutcome, Location, YearResult

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = (
    "No data could be retrieved. Please try a different selection "
    "or use one of the reliable presets."
)


def unique(items) -> list:
    """Drop repeats and blanks, keeping first-seen order."""
    seen = set()
    out = []
    for item in items or []:
        if item in seen or item in ("", None):
            continue
        seen.add(item)
        out.append(item)
    return out


def preset_hints(source_id: str) -> list[str]:
    """One line per reliable preset of a source, for no-data messages."""
    return [
        "Preset: " + ", ".join(f"{key}={value}" for key, value in preset.items())
        for preset in config.RELIABLE_PRESETS.get(source_id, [])
    ]


def get_json(session, url: str, params: dict | None = None,
             timeout: float = config.REQUEST_TIMEOUT, headers: dict | None = None):
    """
    GET a JSON document.

    Network failures and non-success statuses raise HttpError; a body that
    is not JSON raises ResponseShapeError.
    """
    try:
        resp = session.get(url, params=params, timeout=timeout, headers=headers)
    except requests.RequestException as e:
        raise HttpError(f"Request failed: {e}") from e

    if not resp.ok:
        raise HttpError(f"API returned status {resp.status_code}", status=resp.status_code)

    try:
        return resp.json()
    except ValueError as e:
        raise ResponseShapeError(f"Response was not valid JSON: {e}") from e


class SourceClient:
    """
    Base for the per-source adapters.

    Subclasses implement `validate` and `fetch_year`; `fetch_years` runs
    them over the selected years one at a time, so a failing year is
    recorded and the remaining years still load.
    """

    source_id = ""
    available_years: list[str] = []

    def __init__(self, api_key: str | None = None, session=None,
                 timeout: float = config.REQUEST_TIMEOUT):
        self.api_key = api_key
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.catalog = get_catalog(self.source_id)

    def validate(self, location: Location, years: list[str], codes: list[str]) -> None:
        raise NotImplementedError

    def fetch_year(self, location: Location, year: str, codes: list[str]) -> YearResult:
        raise NotImplementedError

    def check_years(self, years: list[str]) -> None:
        """Reject years outside the source's selectable range."""
        if not years:
            raise ValidationError("Please select at least one year")
        unavailable = [y for y in years if str(y) not in self.available_years]
        if unavailable:
            raise ValidationError(
                f"{self.source_id} data is not available for {', '.join(map(str, unavailable))}"
            )

    def _get_json(self, url: str, params: dict | None = None, headers: dict | None = None):
        return get_json(self.session, url, params=params, timeout=self.timeout, headers=headers)

    def fetch_years(self, location: Location, years: list[str], codes: list[str]) -> FetchOutcome:
        years = [str(y) for y in unique(years)]
        codes = unique(codes)
        self.validate(location, years, codes)

        outcome = FetchOutcome()
        for year in years:
            try:
                logger.info(f"Fetching {self.source_id} data for {year}...")
                outcome.results.append(self.fetch_year(location, year, codes))
            except FetchError as e:
                logger.warning(f"Error fetching {self.source_id} data for {year}: {e}")
                outcome.errors.append(f"Error for {year}: {e}")

        if not outcome.results:
            message = "\n".join([NO_DATA_MESSAGE] + outcome.errors + preset_hints(self.source_id))
            raise NoDataError(message)

        logger.info(
            f"Fetched {len(outcome.results)}/{len(years)} years of {self.source_id} data"
        )
        return outcome
