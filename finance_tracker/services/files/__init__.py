"""Import/export file services package."""

from finance_tracker.services.files.csv_io import (
    CSV_HEADER,
    FileFormatError,
    format_csv_line,
    parse_csv_line,
    read_csv,
    write_csv,
)
from finance_tracker.services.files.text_report import (
    REPORT_TITLE,
    render_text_report,
    write_text_report,
)

__all__ = [
    "CSV_HEADER",
    "FileFormatError",
    "format_csv_line",
    "parse_csv_line",
    "read_csv",
    "write_csv",
    "REPORT_TITLE",
    "render_text_report",
    "write_text_report",
]
