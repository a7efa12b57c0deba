"""Display helpers shared by the dashboards.

Colours match the ones the web front end uses for status badges and due
dates, so text renderings and the browser agree.
"""

from datetime import date, datetime
from typing import Any, Dict, Optional, Union

STATUSES = ["Pending", "In Progress", "Completed"]

STATUS_COLORS = {
    "Pending": "#ffc107",
    "In Progress": "#17a2b8",
    "Completed": "#28a745",
}
DEFAULT_STATUS_COLOR = "#6c757d"

OVERDUE_COLOR = "#dc3545"
DUE_VERY_SOON_COLOR = "#fd7e14"
DUE_SOON_COLOR = "#ffc107"
NOT_URGENT_COLOR = "#28a745"

DateLike = Union[str, date, datetime]


def status_color(status: str) -> str:
    return STATUS_COLORS.get(status, DEFAULT_STATUS_COLOR)


def status_badge_class(status: str) -> str:
    """CSS-style class for a status, e.g. "In Progress" -> "in-progress" """
    return status.lower().replace(" ", "-")


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    if len(text) == 10:
        return date.fromisoformat(text)
    return datetime.fromisoformat(text.replace("Z", "+00:00")).date()


def days_until(due: DateLike, today: Optional[date] = None) -> int:
    today = today or date.today()
    return (_as_date(due) - today).days


def due_date_color(due: DateLike, today: Optional[date] = None) -> str:
    """Urgency colour: overdue, due within a day, within three days, later"""
    diff = days_until(due, today)
    if diff < 0:
        return OVERDUE_COLOR
    if diff <= 1:
        return DUE_VERY_SOON_COLOR
    if diff <= 3:
        return DUE_SOON_COLOR
    return NOT_URGENT_COLOR


def format_date(value: Optional[DateLike]) -> str:
    """M/D/YYYY, the way the browser prints dates for en-US"""
    if not value:
        return ""
    d = _as_date(value)
    return f"{d.month}/{d.day}/{d.year}"


def pager_label(pagination: Dict[str, Any]) -> str:
    return f"Page {pagination.get('page', 1)} of {pagination.get('pages', 0)}"


def has_previous(pagination: Dict[str, Any]) -> bool:
    return pagination.get("page", 1) > 1


def has_next(pagination: Dict[str, Any]) -> bool:
    return pagination.get("page", 1) < pagination.get("pages", 0)


def show_pager(pagination: Dict[str, Any]) -> bool:
    return pagination.get("pages", 0) > 1


def build_query(filters: Dict[str, Any]) -> Dict[str, Any]:
    """Drop empty filter values so they are not sent at all"""
    return {key: value for key, value in filters.items() if value not in (None, "", 0)}
