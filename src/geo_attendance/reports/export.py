from __future__ import annotations

import csv
import io
from typing import Iterable

# Column key -> header shown in the exported file.
CSV_COLUMNS = [
    ("employee_name", "Employee Name"),
    ("employee_code", "Employee ID"),
    ("work_date", "Date"),
    ("check_in", "Check In"),
    ("check_out", "Check Out"),
    ("total_hours", "Total Hours"),
    ("overtime_hours", "Overtime"),
    ("status", "Status"),
    ("late", "Late"),
    ("check_in_location", "Check In Location"),
    ("check_out_location", "Check Out Location"),
    ("check_in_photo", "Check In Selfie URL"),
    ("check_out_photo", "Check Out Selfie URL"),
]


def write_report_csv(rows: Iterable[dict]) -> bytes:
    """Serialize projected report rows; every cell quoted, UTF-8 with BOM for Excel."""

    out = io.StringIO()
    writer = csv.DictWriter(
        out,
        fieldnames=[key for key, _ in CSV_COLUMNS],
        quoting=csv.QUOTE_ALL,
        extrasaction="ignore",
        lineterminator="\n",
    )
    writer.writerow({key: header for key, header in CSV_COLUMNS})
    for row in rows:
        writer.writerow(row)

    return out.getvalue().encode("utf-8-sig")


def report_filename(scope: str) -> str:
    return f"attendance-report-{scope}.csv"
