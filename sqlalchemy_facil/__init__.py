from .base.connection import FacilDB
from .base.statement import StatementBuilder, Operation
from .base.cursor import RecordList, records_to_json
from .exc import (
    FacilError,
    ConfigurationError,
    BuilderConsumedError,
    ParameterCountError,
    ResultShapeError,
)

__all__ = [
    "FacilDB",
    "StatementBuilder",
    "Operation",
    "RecordList",
    "records_to_json",
    "FacilError",
    "ConfigurationError",
    "BuilderConsumedError",
    "ParameterCountError",
    "ResultShapeError",
]

__version__ = '0.1.0'
