import logging
from collections import namedtuple
from decimal import Decimal

from sqlalchemy import (
    BigInteger, Column, ForeignKey, Integer, MetaData, Numeric, String, Table, Text, create_engine, text
)

logger = logging.getLogger(__name__)

metadata = MetaData()

categories = Table(
    "categories", metadata,
    Column("category_id", Integer, primary_key=True),
    Column("category_name", String(100), unique=True, nullable=False),
)

products = Table(
    "products", metadata,
    Column("product_id", Integer, primary_key=True),
    Column("product_name", String(150), unique=True, nullable=False),
    Column("category_id", Integer, ForeignKey("categories.category_id"), nullable=False),
    Column("price", Numeric(12, 2), nullable=False, default=0),
    Column("quantity", BigInteger, nullable=False, default=0),
    Column("description", Text),
)

users = Table(
    "users", metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String(100), nullable=False),
    Column("email", String(150), unique=True, nullable=False),
    Column("password", String(255), nullable=False),
    Column("role", String(20), nullable=False, default="Attendant"),
)

QueryResult = namedtuple("QueryResult", ["row_count", "rows"])

# Largest integer the database drivers bind; quantities are stored as BIGINT
MAX_INTEGER = 2 ** 63 - 1


def fits_integer(value):
    return isinstance(value, int) and -MAX_INTEGER - 1 <= value <= MAX_INTEGER


def _plain(value):
    # Numeric columns come back as Decimal from PostgreSQL; JSON wants numbers
    if isinstance(value, Decimal):
        return float(value)
    return value


class Store:
    """Relational store the helpers run their queries against."""

    def __init__(self, url, echo=False):
        connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
        self.url = url
        self.engine = create_engine(url, echo=echo, future=True, connect_args=connect_args)

    def execute(self, query):
        """Run one ``(sql, params)`` pair in its own transaction.

        SELECT and RETURNING statements report the number of rows fetched,
        everything else the number of rows affected.
        """
        sql, params = query
        with self.engine.begin() as conn:
            result = conn.execute(text(sql), params)
            if result.returns_rows:
                rows = [{key: _plain(value) for key, value in row._mapping.items()} for row in result]
                return QueryResult(len(rows), rows)
            return QueryResult(result.rowcount, [])

    def scalar(self, query):
        result = self.execute(query)
        if not result.rows:
            return None
        return next(iter(result.rows[0].values()))

    def create_all(self):
        metadata.create_all(self.engine)
        logger.info("Database tables ready on %s", self.engine.url.render_as_string(hide_password=True))

    def close(self):
        self.engine.dispose()
