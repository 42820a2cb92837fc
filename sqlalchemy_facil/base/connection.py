from sqlalchemy import create_engine, URL
from sqlalchemy.engine import Connection, Engine

from ..exc import ConfigurationError
from ..logger import logger
from .statement import StatementBuilder, Operation


class FacilDB:
    """
    Entry point for building statements against one database connection.

    ``bind`` is either an open SQLAlchemy ``Connection``, used as is, or an
    ``Engine``, from which a connection is opened. Use ``from_url()`` or
    ``create()`` to let ``FacilDB`` create and later dispose the engine too.

    The connection is released by ``close_connection()``, or on leaving a
    ``with`` block, whatever the outcome of the statements run through it.
    """

    def __init__(self, bind):
        self._owned_engine = None

        if isinstance(bind, Engine):
            self.connection = bind.connect()
        elif isinstance(bind, Connection):
            self.connection = bind
        else:
            raise TypeError(f"Expected a SQLAlchemy Engine or Connection, got {type(bind).__name__}")

    @classmethod
    def from_url(cls, url, **engine_kwargs):
        engine = create_engine(url, **engine_kwargs)
        try:
            db = cls(engine)
        except Exception:
            engine.dispose()
            raise
        db._owned_engine = engine
        return db

    @classmethod
    def create(cls, drivername, host=None, port=None, database=None, username=None, password=None, **engine_kwargs):
        url = URL.create(
            drivername,
            username=username or None,
            password=password or None,
            host=host or None,
            port=int(port) if port else None,
            database=database or None,
        )
        return cls.from_url(url, **engine_kwargs)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close_connection()

    @property
    def closed(self):
        return self.connection.closed

    def close_connection(self):
        if not self.connection.closed:
            logger.debug("Closing connection ...")
            self.connection.close()

        if self._owned_engine is not None:
            self._owned_engine.dispose()
            self._owned_engine = None

    def sql(self, raw_statement):
        """
        Wrap a complete SQL statement. Positional ``?`` placeholders are bound
        from ``param()`` values.
        """
        if not raw_statement or not raw_statement.strip():
            raise ConfigurationError("Empty SQL statement")
        return StatementBuilder(self.connection, Operation.RAW_SQL, raw=raw_statement)

    def insert(self, table):
        return StatementBuilder(self.connection, Operation.INSERT, target=table)

    def select(self, column_spec="*"):
        if not column_spec or not column_spec.strip():
            raise ConfigurationError("Empty column list")
        return StatementBuilder(self.connection, Operation.SELECT, projection=column_spec)

    def update(self, table):
        return StatementBuilder(self.connection, Operation.UPDATE, target=table)

    def delete(self, table):
        return StatementBuilder(self.connection, Operation.DELETE, target=table)
