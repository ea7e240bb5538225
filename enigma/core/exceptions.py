"""Custom exception hierarchy."""

from __future__ import annotations


class EnigmaError(Exception):
    """Base exception for all library errors."""

    pass


class ConfigurationError(EnigmaError, ValueError):
    """Client configuration is missing or unusable."""

    pass


class QueryConsumedError(EnigmaError):
    """A one-shot query was executed a second time."""

    pass


class TransportError(EnigmaError):
    """Network or connection failure while talking to the service.

    The underlying exception is kept on ``cause`` and chained as ``__cause__``.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class APIError(EnigmaError):
    """Non-success HTTP status returned by the service.

    The message is the server-supplied ``info.additional`` text when the error
    body could be decoded, otherwise the raw HTTP status line.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(EnigmaError):
    """Success response body does not match the expected shape."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ExportError(EnigmaError):
    """Export job did not produce a downloadable file."""

    def __init__(self, message: str, export_url: str | None = None) -> None:
        super().__init__(message)
        self.export_url = export_url


class ExportNotReadyError(ExportError):
    """Export polling reached its ceiling before the file was ready."""

    pass


class ExportCancelledError(ExportError):
    """Export polling was cancelled by the caller."""

    pass
