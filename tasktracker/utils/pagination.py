# tasktracker/utils/pagination.py
import math


def page_offset(page: int, limit: int) -> int:
    """Rows to skip before the first row of ``page`` (1-indexed)"""
    return (page - 1) * limit


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


def pagination_envelope(page: int, limit: int, total: int) -> dict:
    """The {page, limit, total, pages} block returned next to list results"""
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "pages": page_count(total, limit),
    }
