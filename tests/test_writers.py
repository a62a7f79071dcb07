"""Tests for the CSV and XLSX writers."""

import csv
import io
from datetime import datetime

import pytest
from openpyxl import load_workbook

from adsreport.core.exceptions import SinkWriteError
from adsreport.sinks.csv_writer import CsvWriter, escape_field
from adsreport.sinks.excel_writer import ExcelWriter


@pytest.mark.parametrize(
    "value, expected",
    [
        ("plain", "plain"),
        ("Sale, Summer", '"Sale, Summer"'),
        ('The "best" ad', '"The ""best"" ad"'),
        (None, ""),
        (0, "0"),
        ("line\nbreak", "line\nbreak"),
    ],
)
def test_escape_field(value, expected):
    assert escape_field(value) == expected


def test_csv_round_trips_through_a_standard_reader():
    matrix = [
        ["Date", "Campaing Name", "Amount Spent"],
        ["2025-04-10", 'Summer "Big", Sale', "100"],
        ["2025-04-11", "Winter", "0"],
    ]
    writer = CsvWriter()

    text = writer.write(matrix)

    assert list(csv.reader(io.StringIO(text))) == matrix
    assert "\r" not in text
    assert writer.last_result.rows_written == 2


def test_excel_writer_types_dates_and_numbers():
    matrix = [
        ["Date", "Campaing Name", "Amount Spent"],
        ["2025-04-10", "Summer Sale", "100.5"],
        ["not a date", "Winter", "7"],
    ]
    writer = ExcelWriter(numeric_headers=["Amount Spent"])

    content = writer.write(matrix)

    sheet = load_workbook(io.BytesIO(content)).active
    assert sheet.title == "Facebook Ads"
    assert [c.value for c in sheet[1]] == ["Date", "Campaing Name", "Amount Spent"]

    date_cell = sheet.cell(row=2, column=1)
    assert isinstance(date_cell.value, datetime)
    assert date_cell.value.date().isoformat() == "2025-04-10"
    assert date_cell.number_format == "yyyy-mm-dd"
    assert sheet.cell(row=2, column=3).value == 100.5

    assert sheet.cell(row=3, column=1).value == "not a date"
    assert sheet.cell(row=3, column=3).value == 7
    assert writer.last_result.rows_written == 2


def test_excel_writer_named_date_column():
    matrix = [["Type", "Date"], ["Ad", "2025-04-10"]]

    content = ExcelWriter(date_header="Date").write(matrix)

    sheet = load_workbook(io.BytesIO(content)).active
    assert sheet.cell(row=2, column=1).value == "Ad"
    assert isinstance(sheet.cell(row=2, column=2).value, datetime)


def test_excel_writer_rejects_unwritable_cells():
    with pytest.raises(SinkWriteError):
        ExcelWriter().write([["Date"], [object()]])


def test_excel_writer_strips_control_characters():
    content = ExcelWriter().write([["Date", "Ad Name"], ["2025-04-10", "Promo\x0bSpring"]])

    sheet = load_workbook(io.BytesIO(content)).active
    assert sheet["B2"].value == "PromoSpring"
