"""
导出适配器：录用报告 CSV。

表头不加引号，每个值用双引号包裹，行之间用 LF 连接，末尾无换行。
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Iterable, Optional

from ...domain.models import PlacementReportRow, parse_iso

REPORT_HEADERS = ("Student Name", "Email", "Company", "Job Title", "Status", "Date Applied")


def format_report_date(value: str) -> str:
    """en-US 短日期（M/D/YYYY）；无法解析时原样输出"""
    dt = parse_iso(value)
    if dt is None:
        return value or ""
    return f"{dt.month}/{dt.day}/{dt.year}"


def _quote(value: str) -> str:
    return '"' + str(value).replace('"', '""') + '"'


def build_placement_csv(rows: Iterable[PlacementReportRow]) -> str:
    lines = [",".join(REPORT_HEADERS)]
    for row in rows:
        lines.append(",".join(_quote(v) for v in (
            row.student_name,
            row.student_email,
            row.company_name,
            row.job_title,
            row.status,
            format_report_date(row.applied_at),
        )))
    return "\n".join(lines)


def report_filename(today: Optional[date] = None) -> str:
    today = today or datetime.now(timezone.utc).date()
    return f"placement_report_{today.isoformat()}.csv"
