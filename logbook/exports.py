"""
CSV and PDF renderings of the logbook reports.

CSV files start with a UTF-8 byte order mark so spreadsheet programs pick up
the encoding, and every field is quoted. PDFs are built with reportlab's
platypus layer; long tables split across pages and repeat their header.
"""

import csv
import io
import logging
import re

from django.utils.html import escape
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .aggregation import format_hours
from .exceptions import ExportFailure

logger = logging.getLogger(__name__)

BOM = "\ufeff"
NO_RECORDS = "No records found"
DATE_FORMAT = "%d/%m/%Y"

HISTORY_COLUMNS = [
    "Date",
    "Flight type",
    "Aircraft",
    "Pilot",
    "Instructor",
    "Purpose",
    "Duration",
    "Notes",
]
BILLING_COLUMNS = [
    "Date",
    "Type",
    "Aircraft",
    "Notes / Purpose",
    "Billable minutes",
    "Tows",
]
INSTRUCTION_TOTALS_NOTE = (
    "For instructional flights only one of the two logged records is counted "
    "in the totals."
)

HEADER_BLUE = colors.Color(30 / 255, 100 / 255, 160 / 255)
FOOTER_GREY = colors.Color(100 / 255, 100 / 255, 100 / 255)


def export_filename(prefix, subject, day, extension):
    """e.g. ``unified_history_john_smith_20240515.pdf``"""
    slug = re.sub(r"[^a-z0-9]+", "_", (subject or "").lower()).strip("_")
    parts = [prefix, slug, day.strftime("%Y%m%d")]
    return "_".join(p for p in parts if p) + f".{extension}"


def write_csv(rows):
    """Quote every field, prepend the BOM."""
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL)
    writer.writerows(rows)
    return BOM + output.getvalue()


def _history_row(row):
    return [
        row.date.strftime(DATE_FORMAT),
        row.kind_label,
        row.aircraft_name,
        row.pilot_label,
        row.instructor_label,
        row.purpose_name,
        f"{row.duration:.1f}",
        row.notes,
    ]


def history_csv(history):
    try:
        rows = [HISTORY_COLUMNS]
        if history.is_empty:
            rows.append([NO_RECORDS])
        rows.extend(_history_row(row) for row in history.rows)
        return write_csv(rows)
    except Exception as e:
        logger.error("History CSV export failed: %s", e, exc_info=True)
        raise ExportFailure("Could not generate the CSV file.") from e


def billing_csv(report):
    try:
        rows = [BILLING_COLUMNS]
        if report.is_empty:
            rows.append([NO_RECORDS])
        for item in report.items:
            rows.append(
                [
                    item.date.strftime(DATE_FORMAT),
                    item.type,
                    item.aircraft,
                    item.notes,
                    "" if item.billable_minutes is None else item.billable_minutes,
                    item.tow_count or "",
                ]
            )
        return write_csv(rows)
    except Exception as e:
        logger.error("Billing CSV export failed: %s", e, exc_info=True)
        raise ExportFailure("Could not generate the CSV file.") from e


def _styles():
    styles = getSampleStyleSheet()
    cell = ParagraphStyle("Cell", parent=styles["Normal"], fontSize=8, leading=10)
    return styles, cell


def build_pdf(title, subtitle, table_data, style_commands, col_widths=None):
    """Lay out a titled, landscape table and return the PDF bytes."""
    output = io.BytesIO()
    doc = SimpleDocTemplate(
        output,
        pagesize=landscape(A4),
        rightMargin=10 * mm,
        leftMargin=10 * mm,
        topMargin=12 * mm,
        bottomMargin=12 * mm,
        title=title,
    )
    styles, _ = _styles()
    elements = [
        Paragraph(title, styles["Heading2"]),
        Paragraph(subtitle, styles["Normal"]),
        Spacer(1, 6 * mm),
    ]
    table = Table(table_data, repeatRows=1, colWidths=col_widths)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), HEADER_BLUE),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 8),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
            ]
            + list(style_commands)
        )
    )
    elements.append(table)
    doc.build(elements)
    return output.getvalue()


def history_pdf(history, title, subtitle):
    try:
        _, cell = _styles()
        data = [HISTORY_COLUMNS]
        for row in history.rows:
            values = _history_row(row)
            values[-1] = Paragraph(escape(values[-1] or "-"), cell)
            data.append(values)
        if history.is_empty:
            data.append([NO_RECORDS] + [""] * (len(HISTORY_COLUMNS) - 1))

        note_row = len(data)
        data.append([INSTRUCTION_TOTALS_NOTE] + [""] * 7)
        totals_row = len(data)
        data.append(
            ["TOTAL HOURS", "", "", "", "", ""]
            + [
                f"Engine: {format_hours(history.totals['engine'])}, "
                f"Glider: {format_hours(history.totals['glider'])}",
                "",
            ]
        )
        commands = [
            ("SPAN", (0, note_row), (-1, note_row)),
            ("BACKGROUND", (0, note_row), (-1, note_row), FOOTER_GREY),
            ("TEXTCOLOR", (0, note_row), (-1, note_row), colors.white),
            ("FONTNAME", (0, note_row), (-1, totals_row), "Helvetica-Bold"),
            ("SPAN", (0, totals_row), (5, totals_row)),
            ("ALIGN", (0, totals_row), (5, totals_row), "RIGHT"),
            ("SPAN", (6, totals_row), (7, totals_row)),
        ]
        widths = [20 * mm, 20 * mm, 35 * mm, 50 * mm, 40 * mm, 32 * mm, 18 * mm, None]
        return build_pdf(title, subtitle, data, commands, col_widths=widths)
    except Exception as e:
        logger.error("History PDF export failed: %s", e, exc_info=True)
        raise ExportFailure("Could not generate the PDF file.") from e


def billing_pdf(report, title, subtitle):
    try:
        _, cell = _styles()
        data = [BILLING_COLUMNS]
        grey_rows = []
        for item in report.items:
            if item.non_billable:
                grey_rows.append(len(data))
            data.append(
                [
                    item.date.strftime(DATE_FORMAT),
                    item.type,
                    item.aircraft,
                    Paragraph(escape(item.notes), cell),
                    "-" if item.billable_minutes is None else str(item.billable_minutes),
                    str(item.tow_count or "-"),
                ]
            )
        if report.is_empty:
            data.append([NO_RECORDS, "", "", "", "", ""])
        totals_row = len(data)
        data.append(
            [
                "TOTALS",
                "",
                "",
                "",
                f"{report.total_billable_minutes} min",
                str(report.total_tows),
            ]
        )
        commands = [
            ("SPAN", (0, totals_row), (3, totals_row)),
            ("ALIGN", (0, totals_row), (3, totals_row), "RIGHT"),
            ("FONTNAME", (0, totals_row), (-1, totals_row), "Helvetica-Bold"),
        ]
        for row in grey_rows:
            commands.append(("TEXTCOLOR", (0, row), (-1, row), colors.grey))
        return build_pdf(title, subtitle, data, commands)
    except Exception as e:
        logger.error("Billing PDF export failed: %s", e, exc_info=True)
        raise ExportFailure("Could not generate the PDF file.") from e
