"""Exception types for the messaging hub client library."""


class HubError(Exception):
    """Base exception for all hub client errors."""
    pass


class HubTransportError(HubError):
    """Network communication error."""
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class HubRequestError(HubError):
    """The hub answered with an error response."""
    def __init__(self, message: str, status_code: int, code: str | None = None,
                 details: dict | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.details = details
