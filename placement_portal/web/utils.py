from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from placement_portal.domain.models import parse_iso


def format_date(value: str) -> str:
    """'2024-03-05T10:00:00Z' -> 'Mar 5, 2024'"""
    dt = parse_iso(value)
    if dt is None:
        return value or ""
    return f"{dt.strftime('%b')} {dt.day}, {dt.year}"


def time_ago(value: str, now: Optional[datetime] = None) -> str:
    dt = parse_iso(value)
    if dt is None:
        return ""
    now = now or datetime.now(timezone.utc)
    days = (now - dt).days
    if days <= 0:
        return "Today"
    if days == 1:
        return "1 day ago"
    if days < 7:
        return f"{days} days ago"
    if days < 30:
        return f"{days // 7} weeks ago"
    return f"{days // 30} months ago"


def plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"
