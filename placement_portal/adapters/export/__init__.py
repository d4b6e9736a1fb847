from .csv_report import REPORT_HEADERS, build_placement_csv, format_report_date, report_filename

__all__ = ["REPORT_HEADERS", "build_placement_csv", "format_report_date", "report_filename"]
