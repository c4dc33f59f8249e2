"""
Econ Data Explorer — Session State
The user's current selection and its fetched series, as one immutable value.
"""
import logging
from dataclasses import dataclass, field, replace

from utils.data_prep import YearSeries, aggregate
from utils.errors import NoDataError, ValidationError
from utils.models import Location

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardSession:
    """
    Selection plus results for one source.

    Updating the selection or loading data returns a new session.
    """

    source_id: str
    state_code: str = ""
    county_fips: str = ""
    county_name: str = ""
    years: tuple[str, ...] = ()
    variable_codes: tuple[str, ...] = ()
    normalize: bool = False
    percent_change: bool = False
    series: YearSeries | None = field(default=None, compare=False)
    warning: str = ""
    error: str = ""

    @property
    def location(self) -> Location:
        return Location(
            state_code=self.state_code,
            county_fips=self.county_fips,
            county_name=self.county_name,
        )

    @property
    def has_data(self) -> bool:
        return self.series is not None and len(self.series) > 0

    def select(self, **changes) -> "DashboardSession":
        """New session with the given selection; previously fetched data is dropped."""
        for key in ("years", "variable_codes"):
            if key in changes:
                changes[key] = tuple(changes[key])
        return replace(self, series=None, warning="", error="", **changes)


def fetch_for_session(session: DashboardSession, client) -> DashboardSession:
    """
    Run the client's multi-year fetch for the session's selection.

    Validation and no-data failures end up in `error`; per-year failures
    of a partial fetch end up in `warning`.
    """
    try:
        outcome = client.fetch_years(
            session.location, list(session.years), list(session.variable_codes)
        )
    except (ValidationError, NoDataError) as e:
        logger.warning(f"Fetch failed for {session.source_id}: {e}")
        return replace(session, series=None, warning="", error=str(e))

    return replace(
        session,
        series=aggregate(outcome.results),
        warning=outcome.warning,
        error="",
    )
