"""Custom exception classes for the apiassist service."""


class ApiAssistError(Exception):
    """Base exception for apiassist."""

    def __init__(self, code: str, message: str, details=None, status_code: int = 500):
        self.code = code
        self.message = message
        self.details = details
        self.status_code = status_code
        super().__init__(message)


class ValidationError(ApiAssistError):
    """Request or input validation failure."""

    def __init__(self, message: str, details=None):
        super().__init__("VALIDATION_ERROR", message, details, status_code=400)


class NotFoundError(ApiAssistError):
    """Resource not found."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            "NOT_FOUND",
            f"{resource} '{resource_id}' not found",
            status_code=404,
        )


class PipelineBusyError(ApiAssistError):
    """An operation of the same class is already in flight."""

    def __init__(self, operation: str):
        super().__init__(
            "PIPELINE_BUSY",
            f"A {operation} operation is already in progress",
            status_code=409,
        )


class AgentCallError(ApiAssistError):
    """Remote agent reported failure or could not be reached."""

    def __init__(self, message: str, details=None):
        super().__init__("AGENT_CALL_FAILED", message, details, status_code=502)


class PersistenceError(ApiAssistError):
    """Durable storage could not be written."""

    def __init__(self, message: str):
        super().__init__("PERSISTENCE_ERROR", message, status_code=500)
