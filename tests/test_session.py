"""
Econ Data Explorer — Session Tests
"""
import os
import sys

# Ensure project root is on path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from utils.census_api import CensusClient
from utils.hud_api import HudClient
from utils.session import DashboardSession, fetch_for_session


def test_fetch_fills_series_and_warning(fake_session, response):
    def handler(url, params):
        if "/2018/" in url:
            return response(None, status_code=503)
        return response([["NAME", "B01003_001E"], ["Los Angeles County, California", "10039107"]])

    session = DashboardSession(
        source_id="census", state_code="CA", county_fips="037",
        years=("2018", "2019"), variable_codes=("B01003_001E",),
    )
    updated = fetch_for_session(session, CensusClient(session=fake_session(handler)))

    assert updated.series.years == ["2019"]
    assert updated.warning == "Error for 2018: API returned status 503"
    assert updated.error == ""
    assert session.series is None, "The original session is unchanged"


def test_validation_error_lands_in_error(offline_session):
    session = DashboardSession(source_id="census", state_code="CA", years=("2019",),
                               variable_codes=("B01003_001E",))
    updated = fetch_for_session(session, CensusClient(session=offline_session))
    assert updated.error == "Please select a county"
    assert not updated.has_data


def test_no_data_error_lands_in_error(offline_session):
    session = DashboardSession(source_id="census", state_code="CA", county_fips="037",
                               years=("2019",), variable_codes=("B01003_001E",))
    updated = fetch_for_session(session, CensusClient(session=offline_session))
    assert updated.error.startswith("No data could be retrieved")


def test_select_drops_loaded_data():
    session = DashboardSession(source_id="hud", state_code="UT", years=("2020",),
                               variable_codes=("2br_fmr",))
    loaded = fetch_for_session(session, HudClient())
    assert loaded.has_data

    changed = loaded.select(years=["2021", "2022"])
    assert changed.years == ("2021", "2022")
    assert changed.series is None
    assert changed.state_code == "UT"
