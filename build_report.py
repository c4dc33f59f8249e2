"""
Econ Data Explorer — Build Script
Fetches the default selection, exports table and chart CSVs, and writes a PDF report.
"""
import logging
import os
import sys

# Ensure project root is on path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import requests

from utils.census_api import CensusClient
from utils.fred_api import FredClient
from utils.session import DashboardSession, fetch_for_session
from views.chart_data import chart_config, correlation, pair_by_year, to_chart_rows
from views.csv_export import rows_to_csv, series_to_csv
from views.pdf_report import write_pdf_report
from views.report_content import ReportPayload, build_report_content
import config

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)


def main():
    logger.info("=== Econ Data Explorer — Report Pipeline ===")
    http = requests.Session()

    # 1. Fetch Census data for the default selection
    session = DashboardSession(
        source_id=config.DEFAULT_SOURCE,
        state_code=config.DEFAULT_STATE,
        county_fips=config.DEFAULT_COUNTY,
        years=tuple(config.DEFAULT_YEARS),
        variable_codes=tuple(config.DEFAULT_VARIABLES),
    )
    census = CensusClient(api_key=config.CENSUS_API_KEY, session=http)
    session = fetch_for_session(session, census)
    if session.error:
        logger.error(f"Census fetch failed: {session.error}")
        return
    if session.warning:
        logger.warning(f"Some years could not be loaded:\n{session.warning}")
    logger.info(f"Census series: {len(session.series)} years ({', '.join(session.series.years)})")

    # 2. Table and chart exports
    series_to_csv(session.series, path=config.TABLE_EXPORT)
    rows = to_chart_rows(
        session.series,
        list(session.variable_codes),
        normalize=session.normalize,
        percent_change=session.percent_change,
    )
    rows_to_csv(rows, path=config.CHART_EXPORT)
    for code, entry in chart_config(list(session.variable_codes)).items():
        logger.info(f"  {entry['label']} ({code}): {entry['color']}")

    # 3. Cross-source correlation against FRED, when FRED is reachable
    if config.FRED_API_KEY or config.FRED_PROXY_URL:
        fred = FredClient(api_key=config.FRED_API_KEY, session=http,
                          proxy_url=config.FRED_PROXY_URL)
        fred_session = fetch_for_session(
            DashboardSession(
                source_id="fred",
                years=tuple(config.DEFAULT_YEARS),
                variable_codes=("UNRATE",),
            ),
            fred,
        )
        if fred_session.has_data:
            pairs = pair_by_year(session.series, fred_session.series,
                                 config.DEFAULT_VARIABLES[0], "UNRATE")
            r = correlation(pairs, config.DEFAULT_VARIABLES[0], "UNRATE")
            if r is None:
                logger.info("Not enough overlapping years for a correlation")
            else:
                logger.info(f"Correlation with unemployment rate: {r:.2f}")
        else:
            logger.warning(f"Could not load FRED data: {fred_session.error}")
    else:
        logger.info("No FRED API key or proxy configured; skipping correlation")

    # 4. Report
    content = build_report_content(ReportPayload(type="census", data=session.series))
    for observation in content.observations:
        logger.info(f"  - {observation}")
    write_pdf_report(config.REPORT_PDF, content, results=session.series)

    logger.info("Build complete. Open the PDF in the output directory to review.")


if __name__ == "__main__":
    main()
