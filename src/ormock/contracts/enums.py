"""All tags, shapes, and kinds used across subsystem boundaries.

The engine never branches on an operation name. Everything it needs to
decide how to package a result is carried by these enums.
"""

from enum import StrEnum


class OutcomeKind(StrEnum):
    """Kind of a queued outcome.

    Values:
        SUCCESS: The query resolves with the queued content
        FAILURE: The query is rejected with the queued content
    """

    SUCCESS = "success"
    FAILURE = "failure"


class ResultShape(StrEnum):
    """How a queue-resolved success is packaged for the caller.

    Handler and fallback results are never reshaped; only outcomes taken
    from a result queue are.

    Values:
        PLAIN: The content itself
        WITH_CREATED_FLAG: ``(content, created)`` as used by find-or-create
        WITH_AFFECTED_ROWS: ``(content, affected_rows)`` as used by update
    """

    PLAIN = "plain"
    WITH_CREATED_FLAG = "with_created_flag"
    WITH_AFFECTED_ROWS = "with_affected_rows"


class ErrorKind(StrEnum):
    """Closed set of error kinds mirrored from the ORM.

    Values are the ORM's own error names so code matching on the name
    keeps working against the mock.
    """

    BASE = "SequelizeBaseError"
    VALIDATION = "SequelizeValidationError"
    DATABASE = "SequelizeDatabaseError"
    TIMEOUT = "SequelizeTimeoutError"
    UNIQUE_CONSTRAINT = "SequelizeUniqueConstraintError"
    FOREIGN_KEY_CONSTRAINT = "SequelizeForeignKeyConstraintError"
    EXCLUSION_CONSTRAINT = "SequelizeExclusionConstraintError"
    CONNECTION = "SequelizeConnectionError"
    CONNECTION_REFUSED = "SequelizeConnectionRefusedError"
    ACCESS_DENIED = "SequelizeAccessDeniedError"
    HOST_NOT_FOUND = "SequelizeHostNotFoundError"
    HOST_NOT_REACHABLE = "SequelizeHostNotReachableError"
    INVALID_CONNECTION = "SequelizeInvalidConnectionError"
    CONNECTION_TIMED_OUT = "SequelizeConnectionTimedOutError"
    INSTANCE = "SequelizeInstanceError"
    INVALID_QUERY_RESULT = "SequelizeMockInvalidQueryResultError"
    EMPTY_QUERY_QUEUE = "SequelizeMockEmptyQueryQueueError"
    REJECTED_VALUE = "SequelizeMockRejectedValueError"


class DataTypeKind(StrEnum):
    """Column data types available on the mock."""

    STRING = "STRING"
    CHAR = "CHAR"
    TEXT = "TEXT"
    INTEGER = "INTEGER"
    BIGINT = "BIGINT"
    FLOAT = "FLOAT"
    REAL = "REAL"
    DOUBLE = "DOUBLE"
    DECIMAL = "DECIMAL"
    BOOLEAN = "BOOLEAN"
    TIME = "TIME"
    DATE = "DATE"
    DATEONLY = "DATEONLY"
    HSTORE = "HSTORE"
    JSON = "JSON"
    JSONB = "JSONB"
    NOW = "NOW"
    BLOB = "BLOB"
    RANGE = "RANGE"
    UUID = "UUID"
    UUIDV1 = "UUIDV1"
    UUIDV4 = "UUIDV4"
    VIRTUAL = "VIRTUAL"
    ENUM = "ENUM"
    ARRAY = "ARRAY"
    GEOMETRY = "GEOMETRY"
    GEOGRAPHY = "GEOGRAPHY"


class QueryType(StrEnum):
    """Raw query types, exposed for code that passes them to ``query()``."""

    SELECT = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    BULKUPDATE = "BULKUPDATE"
    BULKDELETE = "BULKDELETE"
    DELETE = "DELETE"
    UPSERT = "UPSERT"
    VERSION = "VERSION"
    SHOWTABLES = "SHOWTABLES"
    SHOWINDEXES = "SHOWINDEXES"
    DESCRIBE = "DESCRIBE"
    RAW = "RAW"
    FOREIGNKEYS = "FOREIGNKEYS"
