"""
Econ Data Explorer — PDF Report
Cover page, executive summary, key findings and a data table, drawn with reportlab.
"""
import logging
import os
from datetime import date

from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import letter
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

import config
from utils.comparison import slot_labels
from utils.data_prep import aggregate

logger = logging.getLogger(__name__)

MARGIN = 54
LINE = 14
BODY_FONT = ("Helvetica", 10)
TABLE_FONT = ("Helvetica", 8)
MAX_TABLE_COLUMNS = 6


class ReportCanvas:
    """A reportlab canvas with a cursor that starts a new page when it runs out of room."""

    def __init__(self, path: str, colors: dict):
        self.c = canvas.Canvas(path, pagesize=letter)
        self.width, self.height = letter
        self.colors = {k: HexColor(v) for k, v in colors.items()}
        self.y = self.height - MARGIN

    def ensure(self, needed: float) -> None:
        if self.y - needed < MARGIN:
            self.new_page()

    def new_page(self) -> None:
        self.c.showPage()
        self.y = self.height - MARGIN

    def heading(self, text: str, size: int = 14) -> None:
        self.ensure(size + LINE)
        self.c.setFillColor(self.colors["primary"])
        self.c.setFont("Helvetica-Bold", size)
        self.c.drawString(MARGIN, self.y, text)
        self.y -= size + 8

    def paragraph(self, text: str, indent: float = 0) -> None:
        font, size = BODY_FONT
        width = self.width - 2 * MARGIN - indent
        for block in text.split("\n\n"):
            for line in simpleSplit(block, font, size, width):
                self.ensure(LINE)
                self.c.setFillColor(self.colors["text"])
                self.c.setFont(font, size)
                self.c.drawString(MARGIN + indent, self.y, line)
                self.y -= LINE
            self.y -= LINE / 2

    def table(self, header: list[str], rows: list[list[str]]) -> None:
        font, size = TABLE_FONT
        col_width = (self.width - 2 * MARGIN) / max(len(header), 1)
        max_chars = int(col_width / (size * 0.5))

        def draw_row(cells, bold=False):
            self.ensure(LINE)
            self.c.setFillColor(self.colors["secondary" if bold else "text"])
            self.c.setFont(f"{font}-Bold" if bold else font, size)
            for i, cell in enumerate(cells):
                self.c.drawString(MARGIN + i * col_width, self.y, str(cell)[:max_chars])
            self.y -= LINE

        draw_row(header, bold=True)
        for row in rows:
            draw_row(row)
        self.y -= LINE

    def save(self) -> None:
        self.c.save()


def _series_table(results) -> tuple[list[str], list[list[str]]]:
    table = aggregate(results).to_table()
    years = [c for c in table.columns if c not in ("category", "name")][-MAX_TABLE_COLUMNS + 1:]
    header = ["Variable"] + years
    rows = [[row["name"]] + [row[y] for y in years] for _, row in table.iterrows()]
    return header, rows


def _comparison_table(slots) -> tuple[list[str], list[list[str]]]:
    loaded = [s for s in slots if s.has_data][:MAX_TABLE_COLUMNS - 1]
    header = ["Variable"] + slot_labels(loaded)
    codes = []
    for slot in loaded:
        codes += [v.code for v in slot.data.variables if v.code not in codes]

    rows = []
    for code in codes:
        found = [s.data.find(code) for s in loaded]
        name = next(v.name for v in found if v is not None)
        rows.append([name] + [v.formatted_value if v is not None else "N/A" for v in found])
    return header, rows


def write_pdf_report(path: str, content, results=None, slots=None,
                     color_scheme: str = "blue") -> str:
    """
    Write a report PDF from ReportContent plus the data behind it.

    `results` (YearResults or a YearSeries) or `slots` supply the data table.
    """
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    colors = config.REPORT_COLOR_SCHEMES.get(color_scheme, config.REPORT_COLOR_SCHEMES["blue"])
    doc = ReportCanvas(path, colors)

    # Cover
    doc.c.setFillColor(doc.colors["primary"])
    doc.c.setFont("Helvetica-Bold", 24)
    doc.c.drawCentredString(doc.width / 2, doc.height / 2 + 40, content.title)
    doc.c.setFillColor(doc.colors["text"])
    doc.c.setFont("Helvetica", 12)
    doc.c.drawCentredString(doc.width / 2, doc.height / 2,
                            f"Generated on: {date.today().strftime('%B %d, %Y')}")
    doc.new_page()

    doc.heading("Introduction")
    doc.paragraph(content.introduction)

    doc.heading("Executive Summary")
    doc.paragraph(content.executive_summary)

    doc.heading("Key Findings")
    for i, observation in enumerate(content.observations, start=1):
        doc.paragraph(f"{i}. {observation}", indent=10)

    header, rows = [], []
    if results:
        header, rows = _series_table(results)
    elif slots:
        header, rows = _comparison_table(slots)
    if rows:
        doc.heading("Data Table")
        doc.table(header, rows)

    doc.save()
    logger.info(f"Saved report to {path}")
    return path
