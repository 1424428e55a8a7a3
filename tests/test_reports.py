from datetime import date

import pytest
from openpyxl import load_workbook

from models.attendance import Timesheet
from scripts.fetch_timesheets import get_date_range
from services.reports import create_timesheet_excel_report, format_timesheet_table


@pytest.fixture
def timesheets():
    return [
        Timesheet(id=1, name="Tanaka Taro", total_hours=40.0, overtime=5.0),
        Timesheet(id=12, name="Sato Hanako", total_hours=38.5, overtime=2.1),
    ]


def test_format_timesheet_table(timesheets):
    lines = format_timesheet_table(timesheets).splitlines()

    assert lines[0].split() == ["ID", "Name", "Total", "Hours", "Overtime"]
    assert lines[2].split() == ["1", "Tanaka", "Taro", "40.0", "5.0"]
    assert lines[3].split() == ["12", "Sato", "Hanako", "38.5", "2.1"]


def test_format_empty_table_has_headers_only():
    assert len(format_timesheet_table([]).splitlines()) == 2


def test_excel_report_has_table_and_chart(timesheets, tmp_path):
    output = tmp_path / "reports" / "hours.xlsx"

    create_timesheet_excel_report(timesheets, output)

    ws = load_workbook(output)["Timesheets"]
    rows = list(ws.iter_rows(values_only=True))
    assert rows[0] == ("ID", "Name", "Total Hours", "Overtime")
    assert rows[1] == (1, "Tanaka Taro", 40.0, 5.0)
    assert rows[2] == (12, "Sato Hanako", 38.5, 2.1)
    assert ws["A1"].font.bold


def test_excel_report_without_timesheets(tmp_path):
    output = tmp_path / "empty.xlsx"

    create_timesheet_excel_report([], output)

    rows = list(load_workbook(output)["Timesheets"].iter_rows(values_only=True))
    assert rows == [("ID", "Name", "Total Hours", "Overtime")]


# =============================================================================
# CLI DATE RANGE
# =============================================================================


def test_date_range_explicit():
    assert get_date_range("2025-11-03", "2025-11-09", None) == (date(2025, 11, 3), date(2025, 11, 9))


def test_date_range_month():
    assert get_date_range(None, None, "2024-02") == (date(2024, 2, 1), date(2024, 2, 29))


def test_date_range_defaults_to_current_month(monkeypatch):
    monkeypatch.setattr("scripts.fetch_timesheets.DEFAULT_FROM", "")
    monkeypatch.setattr("scripts.fetch_timesheets.DEFAULT_TO", "")

    assert get_date_range(None, None, None, today=date(2025, 11, 19)) == (
        date(2025, 11, 1),
        date(2025, 11, 19),
    )


def test_date_range_rejects_reversed_dates():
    with pytest.raises(ValueError):
        get_date_range("2025-11-10", "2025-11-01", None)
