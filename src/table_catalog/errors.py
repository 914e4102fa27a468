"""Error hierarchy for data catalog operations.

Every failure a catalog backend reports derives from ``DataCatalogError`` so
callers can tell catalog problems apart from storage engine problems, and can
branch on the concrete type (or on ``error_code``) when they need to.

None of these errors is marked retryable: retry policy belongs to the caller
or to the transport, never to the catalog layer itself.
"""

from typing import Any, Dict, Optional


class DataCatalogError(Exception):
    """Base exception for all data catalog errors.

    All errors include:
    - error_code: Machine-readable error code
    - message: Human-readable error message
    - details: Optional additional context
    - retryable: Whether the error is retryable
    """

    error_code: str = "DATA_CATALOG_ERROR"
    retryable: bool = False

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        retryable: Optional[bool] = None,
    ):
        """Initialize data catalog error.

        Args:
            message: Human-readable error message
            error_code: Optional error code override
            details: Optional additional context
            retryable: Optional retryable flag override
        """
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        self.details = details or {}
        if retryable is not None:
            self.retryable = retryable

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary.

        Returns:
            Dictionary with error information
        """
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "retryable": self.retryable,
            "type": self.__class__.__name__,
        }


class ClientConstructionError(DataCatalogError):
    """The catalog client (transport or credential provider) could not be built."""

    error_code = "CLIENT_CONSTRUCTION_ERROR"


class MissingMetadataError(DataCatalogError):
    """A required field was absent from the catalog's table description."""

    error_code = "MISSING_METADATA"

    def __init__(self, metadata: str, details: Optional[Dict[str, Any]] = None):
        self.metadata = metadata
        super().__init__(
            f"Missing metadata: {metadata}",
            details={"metadata": metadata, **(details or {})},
        )


class InconsistentMetadataError(DataCatalogError):
    """Caller-supplied table metadata lacks a field the catalog requires."""

    error_code = "INCONSISTENT_METADATA"

    def __init__(self, metadata: str, details: Optional[Dict[str, Any]] = None):
        self.metadata = metadata
        super().__init__(
            f"Inconsistent table metadata, missing field: {metadata}",
            details={"metadata": metadata, **(details or {})},
        )


class RemoteOperationError(DataCatalogError):
    """A request to the remote catalog service failed.

    The original transport or service exception is kept on ``source`` and is
    also chained as ``__cause__`` by the raising code.
    """

    error_code = "REMOTE_OPERATION_ERROR"

    def __init__(
        self,
        message: str,
        source: Optional[BaseException] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.source = source
        context = dict(details or {})
        if source is not None:
            context.setdefault("original_error", type(source).__name__)
            context.setdefault("original_message", str(source))
        super().__init__(message, details=context)


class GetTableError(RemoteOperationError):
    """The remote "get table" call failed."""

    error_code = "GET_TABLE_ERROR"


class CreateTableError(RemoteOperationError):
    """The remote "create table" call failed."""

    error_code = "CREATE_TABLE_ERROR"


class InvalidDataCatalogError(DataCatalogError):
    """No catalog backend is registered under the requested name."""

    error_code = "INVALID_DATA_CATALOG"

    def __init__(self, data_catalog: str):
        self.data_catalog = data_catalog
        super().__init__(
            f"Invalid data catalog: {data_catalog}",
            details={"data_catalog": data_catalog},
        )


def is_retryable_error(error: Exception) -> bool:
    """Check if an error is retryable.

    Args:
        error: Exception to check

    Returns:
        True if error is retryable, False otherwise
    """
    if isinstance(error, DataCatalogError):
        return error.retryable
    return False


def get_error_code(error: Exception) -> str:
    """Get error code from exception.

    Args:
        error: Exception to extract code from

    Returns:
        Error code string
    """
    if isinstance(error, DataCatalogError):
        return error.error_code
    return "UNKNOWN_ERROR"


def wrap_exception(
    error: Exception,
    error_class: type = RemoteOperationError,
    message: Optional[str] = None,
) -> DataCatalogError:
    """Wrap an arbitrary exception in a catalog error.

    Catalog errors are returned untouched. Remote operation classes receive
    the original exception as their ``source``.

    Args:
        error: Original exception
        error_class: Catalog error class to wrap with
        message: Optional custom message

    Returns:
        Wrapped catalog error
    """
    if isinstance(error, DataCatalogError):
        return error

    error_message = message or str(error)
    if issubclass(error_class, RemoteOperationError):
        wrapped = error_class(error_message, source=error)
    else:
        wrapped = error_class(
            error_message,
            details={
                "original_error": type(error).__name__,
                "original_message": str(error),
            },
        )
    wrapped.__cause__ = error
    return wrapped
