from enum import Enum

from sqlalchemy import text
from sqlalchemy.engine import Connection

from ..exc import ConfigurationError, BuilderConsumedError, ParameterCountError
from ..helpers.utils import PLACEHOLDER, BACKSLASH_ESCAPE_DIALECTS, bind_name, count_placeholders, to_named_binds
from ..logger import logger
from .cursor import fetch_records, fetch_unique, fetch_first, fetch_count


class Operation(Enum):
    RAW_SQL = "raw_sql"
    INSERT = "insert"
    SELECT = "select"
    UPDATE = "update"
    DELETE = "delete"


def _split_columns(column_spec):
    columns = [column.strip() for column in column_spec.split(",")]
    if not all(columns):
        raise ConfigurationError(f"Invalid column list: {column_spec!r}")
    return columns


class StatementBuilder:
    """
    Fluent builder for a single parameterized SQL statement.

    Configuration methods return the builder itself so calls can be chained;
    a terminal method (``execute``, ``query``, ``query_unique``,
    ``query_first``, ``query_count``) assembles the statement, binds the
    parameters in the order they were added and runs it once.

    SQL fragments given to ``fields``, ``from_``, ``where`` and ``order_by``
    are inserted verbatim. Only the values added with ``param``/``params`` are
    bound, so fragments must never be built from untrusted input.
    """

    def __init__(self, connection: Connection, operation: Operation, target=None, projection=None, raw=None):
        self.connection = connection
        self.operation = operation
        self.target = target
        self.projection = projection
        self.raw = raw

        self.columns = []
        self.filter = None
        self.ordering = None
        self.parameters = []

        self._consumed = False

    def __repr__(self):
        return f"StatementBuilder({self.operation.name}, params={self.parameters})"

    def _require(self, method, *operations):
        if self.operation in operations:
            return

        allowed = ", ".join(op.name for op in operations)
        raise ConfigurationError(
            f"{method}() is not supported on a {self.operation.name} statement (only {allowed})"
        )

    def fields(self, column_spec):
        """
        Columns receiving values: VALUES columns for an INSERT, SET columns
        for an UPDATE. ``column_spec`` is a comma-separated list.
        """
        self._require("fields", Operation.INSERT, Operation.UPDATE)
        self.columns = _split_columns(column_spec)
        return self

    def from_(self, table):
        self._require("from_", Operation.SELECT)
        self.target = table
        return self

    def where(self, filter_expr):
        self._require("where", Operation.SELECT, Operation.UPDATE, Operation.DELETE)
        self.filter = filter_expr
        return self

    def order_by(self, order_expr):
        self._require("order_by", Operation.SELECT)
        self.ordering = order_expr
        return self

    def param(self, value):
        self.parameters.append(value)
        return self

    def params(self, *values):
        self.parameters.extend(values)
        return self

    # Statement assembly

    def _require_target(self):
        if not self.target:
            raise ConfigurationError(f"{self.operation.name} statement has no table")

    def _require_columns(self):
        if not self.columns:
            raise ConfigurationError(f"{self.operation.name} statement has no columns, call fields() first")

    def _with_filter(self, sql):
        if self.filter:
            sql += f" WHERE {self.filter}"
        return sql

    def _build_raw(self):
        return self.raw

    def _build_insert(self):
        self._require_target()
        self._require_columns()
        columns = ", ".join(self.columns)
        placeholders = ", ".join(PLACEHOLDER for _ in self.columns)
        return f"INSERT INTO {self.target} ({columns}) VALUES ({placeholders})"

    def _build_select(self):
        self._require_target()
        projection = "*" if self.projection is None else self.projection.strip()
        if not projection:
            raise ConfigurationError("SELECT statement has an empty column list")
        sql = self._with_filter(f"SELECT {projection} FROM {self.target}")
        if self.ordering:
            sql += f" ORDER BY {self.ordering}"
        return sql

    def _build_update(self):
        self._require_target()
        self._require_columns()
        assignments = ", ".join(f"{column} = {PLACEHOLDER}" for column in self.columns)
        return self._with_filter(f"UPDATE {self.target} SET {assignments}")

    def _build_delete(self):
        self._require_target()
        return self._with_filter(f"DELETE FROM {self.target}")

    @property
    def statement(self):
        """
        The assembled statement text, with ``?`` placeholders.
        """
        builders = {
            Operation.RAW_SQL: self._build_raw,
            Operation.INSERT: self._build_insert,
            Operation.SELECT: self._build_select,
            Operation.UPDATE: self._build_update,
            Operation.DELETE: self._build_delete,
        }
        return builders[self.operation]()

    # Terminal operations

    def _run(self, consume):
        statement = self.statement

        if self._consumed:
            raise BuilderConsumedError(statement)

        backslash_escapes = self.connection.dialect.name in BACKSLASH_ESCAPE_DIALECTS
        expected = count_placeholders(statement, backslash_escapes)
        if expected != len(self.parameters):
            raise ParameterCountError(statement, expected, len(self.parameters))

        self._consumed = True

        clause = text(to_named_binds(statement, backslash_escapes))
        parameters = {bind_name(idx): value for idx, value in enumerate(self.parameters)}

        logger.debug(f"Executing: {statement} with parameters {self.parameters}")

        if self.connection.in_transaction():
            # Caller controls the transaction
            return consume(self.connection.execute(clause, parameters))

        with self.connection.begin():
            return consume(self.connection.execute(clause, parameters))

    def execute(self):
        """
        Run an INSERT, UPDATE, DELETE, DDL or raw statement and return the
        number of affected rows as reported by the driver (``-1`` when the
        driver does not know, e.g. for DDL).
        """
        rowcount = self._run(lambda result: result.rowcount)
        logger.debug(f"{self.operation.name} affected {rowcount} row(s)")
        return rowcount

    def query(self):
        records = self._run(fetch_records)
        logger.debug(f"Query returned {len(records)} row(s)")
        return records

    def query_unique(self):
        """
        Return the only row matched by the query.

        Raises ``sqlalchemy.exc.NoResultFound`` when no row matches and
        ``sqlalchemy.exc.MultipleResultsFound`` when several do; use
        ``query_first()`` to take the first row instead.
        """
        return self._run(fetch_unique)

    def query_first(self):
        return self._run(fetch_first)

    def query_count(self):
        """
        Return the integer produced by a single-row, single-column query such
        as ``SELECT count(*) FROM book``.
        """
        return self._run(fetch_count)
