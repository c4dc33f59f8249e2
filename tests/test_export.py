"""
Econ Data Explorer — Export Tests
CSV text and PDF reports written to a temporary directory.
"""
import os
import sys

# Ensure project root is on path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from utils.models import ComparisonSlot, ObservedVariable, YearResult
from views.csv_export import comparison_to_csv, rows_to_csv, series_to_csv
from views.pdf_report import write_pdf_report
from views.report_content import ReportPayload, build_report_content


def population(year, value, location="Test County"):
    var = ObservedVariable("B01003_001E", "Total Population", "Population", value,
                           "N/A" if value is None else f"{value:,.0f}")
    return YearResult(year=year, location=location, variables=(var,))


def test_rows_to_csv_plain():
    rows = [{"year": "2018", "X": 1}, {"year": "2019", "X": 2}]
    assert rows_to_csv(rows) == "year,X\n2018,1\n2019,2\n"


def test_rows_to_csv_quotes_commas():
    """Values with commas are quoted instead of splitting the column."""
    rows = [{"name": "Los Angeles County, California", "value": "10,039,107"}]
    assert rows_to_csv(rows) == (
        'name,value\n"Los Angeles County, California","10,039,107"\n'
    )


def test_rows_to_csv_empty():
    assert rows_to_csv([]) == ""


def test_rows_to_csv_writes_file(tmp_path):
    path = tmp_path / "out" / "rows.csv"
    rows_to_csv([{"year": "2019", "X": 5}], path=str(path))
    assert path.read_text() == "year,X\n2019,5\n"


def test_comparison_csv():
    slots = [
        ComparisonSlot("CA", "037", "Los Angeles County", data=population("2019", 10000000.0)),
        ComparisonSlot("CA", "073", "San Diego County", data=population("2019", None)),
        ComparisonSlot("CA", "001", "Alameda County"),
    ]
    text = comparison_to_csv(slots, ["B01003_001E"])
    assert text.splitlines() == [
        "Variable,Category,Los Angeles County,San Diego County",
        "Total Population,Population,10000000.0,",
    ]
    assert comparison_to_csv([ComparisonSlot("CA")], ["B01003_001E"]) == ""


def test_series_csv():
    text = series_to_csv([population("2017", 9.0), population("2019", 10.0)])
    assert text.splitlines() == ["category,name,2017,2019", "Population,Total Population,9,10"]


def test_pdf_report_written(tmp_path):
    results = [population("2017", 10000000.0), population("2019", 10039107.0)]
    content = build_report_content(ReportPayload("census", results))
    path = write_pdf_report(str(tmp_path / "report.pdf"), content, results=results)

    with open(path, "rb") as f:
        head = f.read(5)
    assert head == b"%PDF-", "Output is not a PDF"
    assert os.path.getsize(path) > 1000


def test_pdf_comparison_report(tmp_path):
    slots = [
        ComparisonSlot("CA", "037", "Los Angeles County", data=population("2019", 10000000.0)),
        ComparisonSlot("CA", "073", "San Diego County", data=population("2019", 3300000.0)),
    ]
    content = build_report_content(ReportPayload("comparison", slots))
    path = write_pdf_report(str(tmp_path / "compare.pdf"), content, slots=slots, color_scheme="green")
    assert os.path.getsize(path) > 1000


def test_comparison_csv_repeated_county():
    slots = [
        ComparisonSlot("CA", "037", "Los Angeles County", data=population("2019", 1.0)),
        ComparisonSlot("CA", "037", "Los Angeles County", data=population("2019", 2.0)),
    ]
    assert comparison_to_csv(slots, ["B01003_001E"]).splitlines() == [
        "Variable,Category,Los Angeles County,Los Angeles County (2)",
        "Total Population,Population,1.0,2.0",
    ]
