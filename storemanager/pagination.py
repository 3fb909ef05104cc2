import math
from collections import namedtuple

DEFAULT_PAGE_SIZE = 10

Pagination = namedtuple("Pagination", ["current_page", "total_pages", "offset"])


def _positive_int(value):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def page_size(limit):
    """Caller supplied page size, falling back to the default of 10."""
    return _positive_int(limit) or DEFAULT_PAGE_SIZE


def paginate(total_rows, size, requested_page=None):
    """Work out which page to serve and where it starts.

    Callers short-circuit on ``total_rows == 0``; here the page is at least 1
    and never past the last page.
    """
    total_pages = math.ceil(total_rows / size)
    current_page = _positive_int(requested_page) or 1
    if current_page > total_pages:
        current_page = max(total_pages, 1)
    offset = (current_page - 1) * size
    return Pagination(current_page, total_pages, offset)


def paginated_result(rows, total_pages, current_page):
    return {"rows": rows, "totalPages": total_pages, "currentPage": current_page}


def paginate_empty_result(message):
    return {"rows": [], "totalPages": 0, "currentPage": 0, "message": message}
