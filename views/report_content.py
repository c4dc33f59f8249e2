"""
Econ Data Explorer — Report Content
Introduction, executive summary and key-finding sentences for a report.
Never raises: anything that goes wrong while deriving a finding is
replaced by a general sentence.
"""
import logging
from dataclasses import dataclass, field

from utils.comparison import slot_label
from utils.data_prep import YearSeries, numeric_value, year_key
from utils.models import ComparisonSlot, YearResult

logger = logging.getLogger(__name__)

REPORT_TYPES = ("census", "fred", "hud", "comparison", "visualization")
DEFAULT_TITLE = "Economic Data Report"

OPENING = (
    "This report analyzes economic data from multiple sources to identify key trends and insights."
)
CLOSING = (
    "The key findings presented in this report can guide decision-making processes for "
    "policymakers, businesses, and community organizations seeking to address local "
    "economic challenges and opportunities."
)
CENSUS_SUMMARY = (
    "reveals demographic patterns and housing characteristics that are critical for "
    "understanding local communities and planning economic development initiatives."
)
FRED_SUMMARY = (
    "show important macroeconomic trends that impact policy decisions and business strategies."
)
HUD_SUMMARY = (
    "demonstrates the current state of housing affordability, availability, and potential "
    "areas for housing development or intervention."
)
COMPARISON_SUMMARY = (
    "highlights significant differences and similarities between regions, which can inform "
    "targeted economic development and resource allocation strategies."
)
VISUALIZATION_SUMMARY = (
    "Multiple data sources have been visualized to identify correlations and trends that "
    "might not be apparent when looking at individual data sets in isolation."
)

CENSUS_FALLBACK = [
    "The data shows demographic and economic patterns that require further analysis in the "
    "context of local conditions.",
    "Year-over-year comparison suggests changes in population and housing characteristics "
    "that may impact economic development strategies.",
]
CENSUS_ERROR = (
    "The Census data contains demographic and housing information that can inform "
    "community planning decisions."
)
FRED_FALLBACK = [
    "The FRED economic indicators reveal trends that should be considered in context of "
    "broader economic conditions.",
    "Year-over-year economic data suggests patterns that may impact local business "
    "conditions and household financial stability.",
]
FRED_ERROR = (
    "The FRED data contains valuable economic indicators that can inform monetary and "
    "fiscal policy decisions."
)
HUD_FALLBACK = [
    "The HUD housing data provides insights into housing affordability and availability "
    "within the region.",
    "Fair Market Rents and income limits suggest housing cost burdens that may affect "
    "different household types.",
]
HUD_ERROR = (
    "The HUD data contains housing affordability metrics that can inform housing policy "
    "and assistance program design."
)
COMPARISON_ERROR = (
    "The county comparison data shows demographic and economic differences between regions."
)
GENERAL_FALLBACK = (
    "The selected data provides a starting point for further analysis of local economic conditions."
)


@dataclass
class ReportPayload:
    """
    What a report is built from.

    census/fred/hud: YearResults or a YearSeries. comparison: ComparisonSlots.
    visualization: {"census": [...], "fred": [...]}.
    """

    type: str
    data: object = None


@dataclass
class ReportContent:
    title: str
    introduction: str
    executive_summary: str
    observations: list[str] = field(default_factory=list)


def _results(data) -> list[YearResult]:
    """YearResults in ascending year order; anything unusable is treated as no data."""
    if isinstance(data, YearSeries):
        return data.results
    if not isinstance(data, (list, tuple)):
        return []
    results = [r for r in data if isinstance(r, YearResult)]
    return sorted(results, key=lambda r: year_key(r.year))


def _slots(data) -> list[ComparisonSlot]:
    if not isinstance(data, (list, tuple)):
        return []
    return [s for s in data if isinstance(s, ComparisonSlot) and s.has_data]


def _find(result: YearResult, name_part: str, *codes: str):
    """The variable with one of codes, else the first whose name contains name_part."""
    for code in codes:
        var = result.find(code)
        if var is not None:
            return var
    for var in result.variables:
        if name_part in (var.name or ""):
            return var
    return None


def _years_text(results: list[YearResult]) -> str:
    return ", ".join(r.year for r in results if r.year) or "the selected period"


def _change_sentence(label: str, results: list[YearResult], name_part: str, *codes: str) -> str | None:
    """Percent change of one indicator from the oldest to the newest year."""
    oldest, newest = results[0], results[-1]
    old_var = _find(oldest, name_part, *codes)
    new_var = _find(newest, name_part, *codes)
    if old_var is None or new_var is None:
        return None
    old = numeric_value(old_var)
    new = numeric_value(new_var)
    if old <= 0 or new <= 0:
        return None
    change = (new - old) / old * 100
    direction = "increased" if change > 0 else "decreased"
    return (
        f"The {label} has {direction} by approximately {abs(change):.1f}% "
        f"from {oldest.year} to {newest.year}."
    )


def census_observations(results: list[YearResult]) -> list[str]:
    observations = []
    try:
        if len(results) > 1:
            for sentence in (
                _change_sentence("population", results, "Population", "B01003_001E"),
                _change_sentence("median household income", results,
                                 "Median Household Income", "B19013_001E"),
            ):
                if sentence:
                    observations.append(sentence)

        if results:
            latest = results[-1]
            total = _find(latest, "Total Population", "B01003_001E")
            youth = _find(latest, "Population Age 0-17", "B09001_001E")
            if total and youth:
                total_value, youth_value = numeric_value(total), numeric_value(youth)
                if total_value > 0 and youth_value > 0:
                    share = youth_value / total_value * 100
                    observations.append(
                        f"Youth under 18 constitute approximately {share:.1f}% of the total "
                        f"population in {latest.year}."
                    )

            units = _find(latest, "Total Housing Units", "B25001_001E")
            owned = _find(latest, "Owner Occupied", "B25003_002E")
            if units and owned:
                units_value, owned_value = numeric_value(units), numeric_value(owned)
                if units_value > 0 and owned_value > 0:
                    share = owned_value / units_value * 100
                    observations.append(
                        f"Approximately {share:.1f}% of housing units are owner-occupied "
                        f"in {latest.year}."
                    )
    except Exception as e:
        logger.warning(f"Error generating Census observations: {e}")
        return [CENSUS_ERROR]

    return observations or list(CENSUS_FALLBACK)


def fred_observations(results: list[YearResult]) -> list[str]:
    observations = []
    try:
        if len(results) > 1:
            gdp = _change_sentence("GDP", results, "GDP", "GDPC1", "GDP")
            if gdp:
                observations.append(gdp)

            oldest, newest = results[0], results[-1]
            old_var = _find(oldest, "Unemployment Rate", "UNRATE")
            new_var = _find(newest, "Unemployment Rate", "UNRATE")
            if old_var and new_var:
                old, new = numeric_value(old_var), numeric_value(new_var)
                if old > 0 and new > 0:
                    change = new - old
                    direction = "increased" if change > 0 else "decreased"
                    observations.append(
                        f"The unemployment rate has {direction} by {abs(change):.1f} "
                        f"percentage points from {oldest.year} to {newest.year}."
                    )
    except Exception as e:
        logger.warning(f"Error generating FRED observations: {e}")
        return [FRED_ERROR]

    return observations or list(FRED_FALLBACK)


def hud_observations(results: list[YearResult]) -> list[str]:
    observations = []
    try:
        if results:
            latest = results[-1]
            studio = _find(latest, "0 Bedroom", "0br_fmr")
            two_bed = _find(latest, "2 Bedroom", "2br_fmr")
            if studio and two_bed:
                studio_value, two_bed_value = numeric_value(studio), numeric_value(two_bed)
                if studio_value > 0 and two_bed_value > 0:
                    difference = two_bed_value - studio_value
                    ratio = two_bed_value / studio_value
                    observations.append(
                        f"The Fair Market Rent for a 2-bedroom unit is ${difference:.0f} "
                        f"({ratio * 100 - 100:.1f}%) higher than a studio apartment."
                    )
    except Exception as e:
        logger.warning(f"Error generating HUD observations: {e}")
        return [HUD_ERROR]

    return observations or list(HUD_FALLBACK)


def comparison_observations(slots: list[ComparisonSlot]) -> list[str]:
    if len(slots) < 2:
        return ["Insufficient data for comparison."]

    observations = []
    try:
        populations = []
        for slot in slots:
            var = _find(slot.data, "Total Population", "B01003_001E")
            if var is not None and numeric_value(var) > 0:
                populations.append((numeric_value(var), slot_label(slot)))

        if len(populations) >= 2:
            largest = max(populations)
            smallest = min(populations)
            ratio = largest[0] / smallest[0]
            observations.append(
                f"{largest[1]} has approximately {ratio:.1f} times the population of {smallest[1]}."
            )

        if not observations:
            observations.append(
                f"The comparison between {slot_label(slots[0])} and {slot_label(slots[1])} "
                f"reveals economic and demographic differences that may influence "
                f"development strategies."
            )
    except Exception as e:
        logger.warning(f"Error generating comparison observations: {e}")
        return [COMPARISON_ERROR]

    return observations


def _introduction(kind: str, data) -> str:
    intro = "This report provides an analysis of economic data"
    if kind == "census":
        results = _results(data)
        intro += " from the U.S. Census Bureau"
        if results:
            intro += f" for {_years_text(results)}"
    elif kind == "fred":
        results = _results(data)
        intro += " from the Federal Reserve Economic Data (FRED)"
        if results:
            intro += f" for {_years_text(results)}"
    elif kind == "hud":
        results = _results(data)
        intro += " from the Department of Housing and Urban Development (HUD)"
        if results:
            intro += f" for {results[-1].location or 'the selected area'}"
    elif kind == "comparison":
        names = ", ".join(slot_label(s) for s in _slots(data))
        intro += f" comparing data from {names or 'selected counties'}"
    elif kind == "visualization":
        intro += " using multiple data sources to identify correlations and trends"
    return intro + "."


def _summary(kind: str, data) -> str:
    parts = [OPENING]

    if kind == "census":
        results = _results(data)
        if results:
            parts.append(f"The Census data for {_years_text(results)} {CENSUS_SUMMARY}")
            latest = results[-1]
            population = _find(latest, "Population", "B01003_001E")
            if population is not None:
                parts.append(
                    f"The population data shows {population.formatted_value} for the selected "
                    f"area, which can inform community planning and resource allocation."
                )
            if any("Housing" in v.name or "B25" in v.code for v in latest.variables):
                parts.append(
                    "Housing data indicates patterns in occupancy and ownership that impact "
                    "community stability and economic mobility."
                )
        else:
            parts.append(f"The Census data {CENSUS_SUMMARY}")

    elif kind == "fred":
        results = _results(data)
        if results:
            parts.append(f"The FRED economic indicators for {_years_text(results)} {FRED_SUMMARY}")
            if len(results) > 1:
                parts.append(
                    "Year-over-year comparison of economic indicators reveals patterns that "
                    "can inform fiscal and monetary policy decisions."
                )
        else:
            parts.append(f"The FRED economic indicators {FRED_SUMMARY}")

    elif kind == "hud":
        results = _results(data)
        if results and results[-1].variables:
            latest = results[-1]
            parts.append(
                f"HUD housing data for {latest.location or 'the selected area'} {HUD_SUMMARY}"
            )
            if any("FMR" in v.name or "fmr" in v.code for v in latest.variables):
                parts.append(
                    "Fair Market Rent data provides insights into housing costs across "
                    "different unit sizes, which is essential for understanding "
                    "affordability challenges."
                )
        else:
            parts.append(f"HUD housing data {HUD_SUMMARY}")

    elif kind == "comparison":
        slots = _slots(data)
        if len(slots) > 1:
            names = ", ".join(slot_label(s) for s in slots)
            parts.append(f"The county comparison analysis between {names} {COMPARISON_SUMMARY}")
        elif len(slots) == 1:
            parts.append(
                f"The analysis of {slot_label(slots[0])} provides insights into local "
                f"economic conditions and demographic characteristics."
            )
        else:
            parts.append(f"The county comparison analysis {COMPARISON_SUMMARY}")

    elif kind == "visualization":
        parts.append(VISUALIZATION_SUMMARY)

    parts.append(CLOSING)
    return "\n\n".join(parts)


def _observations(kind: str, data) -> list[str]:
    if kind == "census":
        return census_observations(_results(data))
    if kind == "fred":
        return fred_observations(_results(data))
    if kind == "hud":
        return hud_observations(_results(data))
    if kind == "comparison":
        return comparison_observations(_slots(data))
    if kind == "visualization":
        data = data if isinstance(data, dict) else {}
        observations = []
        if _results(data.get("census")):
            observations += census_observations(_results(data.get("census")))
        if _results(data.get("fred")):
            observations += fred_observations(_results(data.get("fred")))
        return observations
    return []


def build_report_content(payload: ReportPayload, title: str = DEFAULT_TITLE) -> ReportContent:
    """
    Assemble report text for a payload.

    The observation list always has at least one sentence.
    """
    kind = payload.type if payload.type in REPORT_TYPES else ""
    if not kind:
        logger.warning(f"Unknown report type '{payload.type}'; using general content")

    try:
        introduction = _introduction(kind, payload.data)
        summary = _summary(kind, payload.data)
    except Exception as e:
        logger.warning(f"Error generating report summary: {e}")
        introduction = "This report provides an analysis of economic data."
        summary = "\n\n".join([OPENING, CLOSING])

    try:
        observations = _observations(kind, payload.data)
    except Exception as e:
        logger.warning(f"Error generating report observations: {e}")
        observations = []

    return ReportContent(
        title=title,
        introduction=introduction,
        executive_summary=summary,
        observations=observations or [GENERAL_FALLBACK],
    )
