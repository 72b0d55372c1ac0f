class ConnectorError(Exception):
    """
    Base exception for all connector errors
    """
    pass


class EmptySchemaError(ConnectorError):
    """
    Raised when no fields can be resolved from the supplied documents
    """
    pass


class QueryResultError(ConnectorError):
    """
    Raised when a query result is malformed or reports a failed status
    """

    def __init__(self, message: str, status: str = "unknown", errors=None):
        super().__init__(message)
        self.status = status
        self.errors = errors or []


class ConfigValidationError(ConnectorError, ValueError):
    """
    Raised when connection configuration is invalid
    """
    pass
