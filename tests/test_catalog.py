"""
Econ Data Explorer — Variable Catalog Tests
"""
import os
import sys

import pytest

# Ensure project root is on path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from utils.catalog import CATALOGS, VariableCatalog, get_catalog, variable_names


def test_every_source_has_a_catalog():
    for source_id in ("census", "fred", "hud"):
        assert len(get_catalog(source_id)) > 0, f"{source_id} catalog is empty"


def test_codes_resolve_to_descriptors():
    descriptor = get_catalog("census").lookup("B01003_001E")
    assert descriptor.name == "Total Population"
    assert descriptor.category == "Population"
    assert descriptor.source_id == "census"


def test_unknown_code_describes_as_other():
    descriptor = get_catalog("fred").describe("NOTASERIES")
    assert descriptor.name == "NOTASERIES"
    assert descriptor.category == "Other"


def test_duplicate_code_rejected():
    with pytest.raises(ValueError):
        VariableCatalog("census", {
            "A": {"Total Population": "B01003_001E"},
            "B": {"Population": "B01003_001E"},
        })


def test_unknown_source_rejected():
    with pytest.raises(ValueError):
        get_catalog("bls")


def test_category_listing_and_search():
    hud = CATALOGS["hud"]
    assert "Fair Market Rents" in hud.categories()
    fmr_codes = [d.code for d in hud.variables_in("Fair Market Rents")]
    assert fmr_codes == ["0br_fmr", "1br_fmr", "2br_fmr", "3br_fmr", "4br_fmr"]
    assert {d.code for d in hud.search("homeless")} == {
        "total_sheltered", "total_unsheltered", "total_homeless",
    }


def test_variable_names_across_catalogs():
    names = variable_names(["B01003_001E", "UNRATE", "missing"])
    assert names == {
        "B01003_001E": "Total Population",
        "UNRATE": "Unemployment Rate",
        "missing": "missing",
    }
