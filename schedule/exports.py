"""
Agenda exports: share text, CSV and PDF.

All three walk the same AgendaDay list and use ``grouped`` for headers.
Days without slots, observations or warnings are left out.
"""

import io
import logging

from django.utils.html import escape
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import (
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from logbook.exceptions import ExportFailure
from logbook.exports import write_csv

from .grouping import grouped, is_instructor_slot, is_tow_pilot_slot
from .models import ScheduleEntry

logger = logging.getLogger(__name__)

NO_SLOTS = "No slots scheduled for this date."
COLUMNS = ["Time", "Pilot", "Category", "Tow pilot available", "Flight type", "Aircraft"]
INSTRUCTION_TYPES = (
    ScheduleEntry.FlightType.INSTRUCTION_TAKEN,
    ScheduleEntry.FlightType.INSTRUCTION_GIVEN,
)
GROUP_FILL = colors.Color(214 / 255, 234 / 255, 248 / 255)
GROUP_TEXT = colors.Color(21 / 255, 67 / 255, 96 / 255)
HEADER_BLUE = colors.Color(41 / 255, 128 / 255, 185 / 255)


def long_date(day):
    return day.strftime("%A %d %B %Y")


def agenda_title(start, end):
    title = f"Flight agenda: {long_date(start)}"
    if end != start:
        title += f" - {long_date(end)}"
    return title


def format_entry(entry):
    """Display values for one slot, shared by all export formats."""
    tow_available = ""
    if is_tow_pilot_slot(entry):
        tow_available = "Yes" if entry.is_tow_pilot_available else "No"
    highlight = is_tow_pilot_slot(entry) or (
        is_instructor_slot(entry) and entry.flight_type in INSTRUCTION_TYPES
    )
    return {
        "time": entry.start_time.strftime("%H:%M"),
        "pilot": entry.pilot.display_name if entry.pilot_id else "Unknown Pilot",
        "category": entry.pilot_category.name,
        "tow_available": tow_available,
        "flight_type": entry.get_flight_type_display(),
        "aircraft": str(entry.aircraft) if entry.aircraft_id else "N/A",
        "highlight": highlight,
    }


def agenda_text(days, start, end):
    lines = [agenda_title(start, end)]
    first = True
    for day in days:
        if not day.has_content:
            continue
        if not first:
            lines.append("")
        first = False
        lines.append("")
        lines.append(f"=== {long_date(day.date)} ===")
        if day.observation:
            lines.extend(["", "Observations:", day.observation])
        if day.warnings:
            lines.append("")
            lines.extend(day.warnings)
        if not day.entries:
            lines.append(NO_SLOTS)
            continue
        for group, entry in grouped(day.entries):
            if group is not None:
                lines.extend(["", f"--- {group.label} ---"])
            f = format_entry(entry)
            category = f["category"]
            if f["tow_available"]:
                category += f" - Tow: {f['tow_available']}"
            flight_type = f"*{f['flight_type']}*" if f["highlight"] else f["flight_type"]
            line = f"{f['time']} - {f['pilot']} ({category}) - {flight_type}"
            if f["aircraft"] != "N/A":
                line += f" - Aircraft: {f['aircraft']}"
            lines.append(line)
    return "\n".join(lines) + "\n"


def agenda_csv(days, start, end):
    try:
        title = f"Flight agenda {start:%Y-%m-%d}"
        if end != start:
            title += f" to {end:%Y-%m-%d}"
        rows = [[title]]
        first = True
        for day in days:
            if not day.has_content:
                continue
            if not first:
                rows.append([])
            first = False
            rows.append([day.date.strftime("%d/%m/%Y")])
            if day.observation:
                rows.append(["Observations:", day.observation])
            for warning in day.warnings:
                rows.append([warning])
            if not day.entries:
                rows.append([NO_SLOTS])
                continue
            rows.append(COLUMNS)
            for group, entry in grouped(day.entries):
                if group is not None:
                    rows.append([group.label])
                f = format_entry(entry)
                rows.append(
                    [
                        f["time"],
                        f["pilot"],
                        f["category"],
                        f["tow_available"],
                        f["flight_type"],
                        f["aircraft"],
                    ]
                )
        return write_csv(rows)
    except Exception as e:
        logger.error("Agenda CSV export failed: %s", e, exc_info=True)
        raise ExportFailure("Could not generate the CSV file.") from e


def _day_table(day):
    data = [COLUMNS]
    commands = [
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_BLUE),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ]
    for group, entry in grouped(day.entries):
        if group is not None:
            row = len(data)
            data.append([group.label] + [""] * (len(COLUMNS) - 1))
            commands += [
                ("SPAN", (0, row), (-1, row)),
                ("BACKGROUND", (0, row), (-1, row), GROUP_FILL),
                ("TEXTCOLOR", (0, row), (-1, row), GROUP_TEXT),
                ("FONTNAME", (0, row), (-1, row), "Helvetica-Bold"),
            ]
        f = format_entry(entry)
        row = len(data)
        data.append(
            [
                f["time"],
                f["pilot"],
                f["category"],
                f["tow_available"] or "-",
                f["flight_type"],
                f["aircraft"],
            ]
        )
        if f["highlight"]:
            commands.append(("FONTNAME", (4, row), (4, row), "Helvetica-Bold"))
    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle(commands))
    return table


def agenda_pdf(days, start, end):
    """One page per day with content; the title repeats on every page."""
    try:
        output = io.BytesIO()
        title = agenda_title(start, end)
        doc = SimpleDocTemplate(
            output,
            pagesize=landscape(A4),
            rightMargin=10 * mm,
            leftMargin=10 * mm,
            topMargin=12 * mm,
            bottomMargin=12 * mm,
            title=title,
        )
        styles = getSampleStyleSheet()
        warning_style = ParagraphStyle(
            "Warning",
            parent=styles["Normal"],
            textColor=colors.Color(200 / 255, 0, 0),
            fontName="Helvetica-Bold",
            fontSize=9,
        )

        elements = []
        for day in days:
            if not day.has_content:
                continue
            if elements:
                elements.append(PageBreak())
            elements.append(Paragraph(title, styles["Heading2"]))
            elements.append(Paragraph(f"Date: {long_date(day.date)}", styles["Heading3"]))
            if day.observation:
                elements.append(Paragraph("Observations:", styles["Normal"]))
                for line in day.observation.splitlines():
                    elements.append(Paragraph(escape(line) or "&nbsp;", styles["Normal"]))
                elements.append(Spacer(1, 3 * mm))
            for warning in day.warnings:
                elements.append(Paragraph(warning, warning_style))
            if day.warnings:
                elements.append(Spacer(1, 2 * mm))
            if day.entries:
                elements.append(_day_table(day))
            else:
                elements.append(Paragraph(NO_SLOTS, styles["Normal"]))

        if not elements:
            elements.append(Paragraph(title, styles["Heading2"]))
            elements.append(Paragraph("Nothing scheduled in this period.", styles["Normal"]))
        doc.build(elements)
        return output.getvalue()
    except Exception as e:
        logger.error("Agenda PDF export failed: %s", e, exc_info=True)
        raise ExportFailure("Could not generate the PDF file.") from e
