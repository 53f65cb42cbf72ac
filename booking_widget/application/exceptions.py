class ValidationError(ValueError):
    """Raised when a request is missing required fields. Rejected before any state mutation."""
    pass


class NotFoundError(LookupError):
    """Raised when a business identifier is unknown on a read."""
    pass


class UnauthorizedError(PermissionError):
    """Raised when the admin token is missing or does not match."""
    pass


class ClassifierDegraded(RuntimeError):
    """Raised by intent classifier adapters. Recovered by the use case, never surfaced to the user."""
    pass


class LLMUpstreamError(ClassifierDegraded):
    """Raised when LLM provider fails (timeouts, network errors, service unavailable)."""
    pass


class LLMContractError(ClassifierDegraded):
    """Raised when LLM adapter violates contract (bad format or missing data)."""
    pass


class DispatchError(RuntimeError):
    """Raised when the email service rejects a send or cannot be reached."""

    def __init__(self, message: str, status: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class StorageError(RuntimeError):
    """Raised when the business record store is unreachable or fails."""
    pass
