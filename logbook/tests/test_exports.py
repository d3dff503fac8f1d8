import csv
import io
import re

import pytest

from logbook.aggregation import aggregate
from logbook.billing import billing_report
from logbook.exceptions import ExportFailure
from logbook.exports import (
    BOM,
    HISTORY_COLUMNS,
    NO_RECORDS,
    billing_csv,
    billing_pdf,
    export_filename,
    history_csv,
    history_pdf,
)

from .helpers import REFERENCE, engine, glider


def _rows(text):
    assert text.startswith(BOM)
    return list(csv.reader(io.StringIO(text[len(BOM):])))


def test_history_csv_quotes_every_field_and_doubles_quotes():
    history = aggregate(
        [engine(notes='Said "hello" to the tower', duration="1.5")], [], REFERENCE
    )

    text = history_csv(history)
    rows = _rows(text)

    assert rows[0] == HISTORY_COLUMNS
    assert rows[1][1] == "Engine"
    assert rows[1][6] == "1.5"
    assert rows[1][7] == 'Said "hello" to the tower'
    assert '"Said ""hello"" to the tower"' in text
    assert text[len(BOM):].startswith('"Date"')
    # no totals row
    assert len(rows) == 2


def test_history_csv_empty_has_placeholder_row():
    rows = _rows(history_csv(aggregate([], [], REFERENCE)))
    assert rows == [HISTORY_COLUMNS, [NO_RECORDS]]


def test_history_pdf_is_a_pdf():
    history = aggregate(
        [engine(notes="Fuel <50> & oil")],
        [glider(instructor=11, purpose="instruction_received")],
        REFERENCE,
    )
    content = history_pdf(history, "Unified flight history: All pilots", "Period")
    assert content.startswith(b"%PDF")


def test_history_pdf_with_many_rows_spans_pages():
    records = [engine(day="2024-06-01", departure="10:00") for _ in range(120)]
    content = history_pdf(aggregate(records, [], REFERENCE), "Title", "Subtitle")
    page_count = max(int(n) for n in re.findall(rb"/Count (\d+)", content))
    assert page_count > 1


def test_history_pdf_empty_still_renders():
    content = history_pdf(aggregate([], [], REFERENCE), "Title", "Subtitle")
    assert content.startswith(b"%PDF")


def test_billing_exports():
    report = billing_report(
        [engine(pilot=10, billable_minutes=30)],
        [glider(pilot=10, tow_pilot_id=12, tow_aircraft_id=3)],
        10,
        REFERENCE,
    )
    rows = _rows(billing_csv(report))
    assert rows[1][4] == "30"
    assert rows[2][5] == "1"
    assert billing_pdf(report, "Billing", "Period").startswith(b"%PDF")


def test_render_errors_become_export_failure():
    with pytest.raises(ExportFailure):
        history_csv(object())
    with pytest.raises(ExportFailure):
        history_pdf(object(), "Title", "Subtitle")


def test_export_filename():
    from datetime import date

    assert (
        export_filename("unified_history", "Ana Gómez, Jr.", date(2024, 5, 15), "pdf")
        == "unified_history_ana_g_mez_jr_20240515.pdf"
    )
