"""Failure taxonomy for calls to the document service.

Every failure a caller can see is one of:

- ``ValidationError``   a required field is missing, caught before any network call
- ``RemoteRejected``    the service answered non-2xx with a reason it explains
- ``RemoteUnexpected``  the service answered in a shape we do not recognize
- ``TransportFailure``  no response was received at all
- ``ServiceNotConfigured`` the client cannot be built from the configuration

``status_code`` is what the HTTP layer relays to its own caller.
"""


class DocumentServiceError(Exception):
    """Base class for all document-service failures."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def __str__(self) -> str:
        return self.message


class ValidationError(DocumentServiceError):
    status_code = 400


class RemoteRejected(DocumentServiceError):
    """Non-2xx response carrying a ``detail`` the service meant for us."""


class RemoteUnexpected(DocumentServiceError):
    def __init__(self, message: str = "Unexpected response format."):
        super().__init__(message, status_code=500)


class TransportFailure(DocumentServiceError):
    def __init__(self, reason: str):
        super().__init__(f"Network error: {reason}", status_code=500)


class ServiceNotConfigured(DocumentServiceError, ValueError):
    """The client cannot be built, e.g. the credential is not set."""

    def __init__(self, reason: str):
        super().__init__(reason, status_code=500)
