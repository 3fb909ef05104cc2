import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from storemanager.errors import ApiError, BadRequest
from storemanager.pagination import paginate, paginate_empty_result, paginated_result

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"


def _is_unique_violation(error):
    # PostgreSQL reports a SQLSTATE; SQLite only has the message text
    if getattr(error.orig, "sqlstate", None) == UNIQUE_VIOLATION:
        return True
    return "UNIQUE constraint failed" in str(error.orig)


class BaseHelper:
    """Shared plumbing for the resource helpers: store calls and paging."""

    def __init__(self, store):
        self.store = store

    def run(self, query, duplicate_message=None):
        """Execute a query, turning store failures into API errors.

        A unique constraint violation becomes a 400 with ``duplicate_message``
        when one is given; it means a concurrent writer got there first.
        Any other constraint violation is a 400 of its own.
        """
        try:
            return self.store.execute(query)
        except IntegrityError as error:
            if duplicate_message and _is_unique_violation(error):
                logger.warning("Unique constraint rejected write: %s", error.orig)
                raise BadRequest(duplicate_message) from error
            logger.warning("Constraint rejected write: %s", error.orig)
            raise BadRequest("The data provided breaks a store constraint.") from error
        except (SQLAlchemyError, OverflowError) as error:
            logger.exception("Store query failed")
            raise ApiError("Database error", 500) from error

    def count(self, query):
        result = self.run(query)
        return int(next(iter(result.rows[0].values()))) if result.rows else 0

    def page(self, count_query, page_query, size, requested_page, empty_message):
        """Count, bail out with the empty result, then fetch one page.

        ``page_query`` is called with ``(limit, offset)`` only when there is
        something to show.
        """
        total = self.count(count_query)
        if not total:
            return paginate_empty_result(empty_message)
        pagination = paginate(total, size, requested_page)
        rows = self.run(page_query(size, pagination.offset)).rows
        return paginated_result(rows, pagination.total_pages, pagination.current_page)
