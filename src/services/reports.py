"""
Report generation for timesheets: console table and Excel workbook.
"""

from pathlib import Path

from loguru import logger
from openpyxl import Workbook
from openpyxl.chart import BarChart, Reference
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from core.config import TIMESHEET_HEADERS
from models.attendance import Timesheet

SHEET_TITLE = "Timesheets"


def format_timesheet_table(timesheets: list[Timesheet]) -> str:
    """Render timesheets as a fixed-width text table."""
    rows = [
        [str(t.id), t.name, f"{t.total_hours:.1f}", f"{t.overtime:.1f}"] for t in timesheets
    ]
    widths = [
        max([len(header)] + [len(row[idx]) for row in rows])
        for idx, header in enumerate(TIMESHEET_HEADERS)
    ]

    def fmt(cells: list[str]) -> str:
        # Name column left-aligned, numbers right-aligned
        return "  ".join(
            cell.ljust(width) if idx == 1 else cell.rjust(width)
            for idx, (cell, width) in enumerate(zip(cells, widths))
        ).rstrip()

    lines = [fmt(TIMESHEET_HEADERS), fmt(["-" * w for w in widths])]
    lines.extend(fmt(row) for row in rows)
    return "\n".join(lines)


# =============================================================================
# EXCEL REPORT GENERATION
# =============================================================================


def write_excel_timesheet_sheet(ws, timesheets: list[Timesheet]):
    """
    Write the timesheet table to an Excel worksheet.

    Uses TIMESHEET_HEADERS: ID, Name, Total Hours, Overtime
    """
    for col_idx, header in enumerate(TIMESHEET_HEADERS, start=1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = Font(bold=True)

    for row_idx, t in enumerate(timesheets, start=2):
        row_data = [t.id, t.name, t.total_hours, t.overtime]
        for col_idx, value in enumerate(row_data, start=1):
            ws.cell(row=row_idx, column=col_idx, value=value)

    # Name column sized to the longest name
    name_width = max([len(TIMESHEET_HEADERS[1])] + [len(t.name) for t in timesheets])
    ws.column_dimensions[get_column_letter(2)].width = name_width + 2


def add_hours_bar_chart(ws, row_count: int, title: str):
    """Add a clustered bar chart of total hours and overtime per employee."""
    chart = BarChart()
    chart.type = "col"
    chart.grouping = "clustered"
    chart.title = title
    chart.y_axis.title = "Hours"
    chart.x_axis.title = "Employee"

    data = Reference(ws, min_col=3, max_col=4, min_row=1, max_row=row_count + 1)
    categories = Reference(ws, min_col=2, min_row=2, max_row=row_count + 1)
    chart.add_data(data, titles_from_data=True)
    chart.set_categories(categories)

    ws.add_chart(chart, f"{get_column_letter(len(TIMESHEET_HEADERS) + 2)}2")


def create_timesheet_excel_report(
    timesheets: list[Timesheet], output_path: Path, title: str = "Working hours"
):
    """
    Create an Excel report with the timesheet table and a bar chart.

    The chart is omitted when there are no timesheets.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE
    write_excel_timesheet_sheet(ws, timesheets)

    if timesheets:
        add_hours_bar_chart(ws, len(timesheets), title)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(str(output_path))
    logger.info(f"Saved Excel report to: {output_path}")
