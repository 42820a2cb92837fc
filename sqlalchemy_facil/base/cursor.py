import json

from sqlalchemy.engine import Result

from ..exc import ResultShapeError


class RecordList(list):
    """
    Rows returned by a query, each one a ``dict`` of column name to value,
    in the order the database produced them.
    """

    def to_json(self, indent=None):
        return records_to_json(self, indent=indent)


def _ensure_rows(result: Result):
    if not result.returns_rows:
        raise ResultShapeError("Statement did not return any rows to fetch")


def fetch_records(result: Result):
    _ensure_rows(result)
    return RecordList(dict(row) for row in result.mappings())


def fetch_unique(result: Result):
    """
    Exactly one row, or ``NoResultFound`` / ``MultipleResultsFound``.
    """
    _ensure_rows(result)
    return dict(result.mappings().one())


def fetch_first(result: Result):
    _ensure_rows(result)
    row = result.mappings().first()
    return dict(row) if row is not None else None


def fetch_count(result: Result):
    _ensure_rows(result)

    columns = list(result.keys())
    if len(columns) != 1:
        raise ResultShapeError(f"Expected a single count column, got {len(columns)}: {columns}")

    value = result.scalar_one()

    if isinstance(value, bool) or value is None:
        raise ResultShapeError(f"Count query returned a non-numeric value: {value!r}")

    try:
        count = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ResultShapeError(f"Count query returned a non-numeric value: {value!r}") from None

    if count != value:
        raise ResultShapeError(f"Count query returned a non-integral value: {value!r}")

    return count


def records_to_json(records, indent=None):
    # Decimal, date and datetime values have no JSON type: render them as text
    return json.dumps(records, indent=indent, default=str)
