"""Exceptions raised by the statement builder.

Errors reported by the database itself are not wrapped: they surface as the
``sqlalchemy.exc.DBAPIError`` subclasses SQLAlchemy raises.
"""


class FacilError(Exception):
    """Base exception for sqlalchemy_facil"""


class ConfigurationError(FacilError):
    """A builder method was called in the wrong mode or too early"""


class BuilderConsumedError(ConfigurationError):
    """A terminal operation was called on a builder that already ran"""

    def __init__(self, statement):
        self.statement = statement
        super().__init__(f"Statement already executed: {statement}")


class ParameterCountError(FacilError):
    """The bound parameters do not match the statement placeholders"""

    def __init__(self, statement, expected, supplied):
        self.statement = statement
        self.expected = expected
        self.supplied = supplied
        super().__init__(
            f"Statement expects {expected} parameter(s) but {supplied} were supplied: {statement}"
        )


class ResultShapeError(FacilError):
    """A scalar query did not return a single integral column"""
