"""Precise unit tests for exception hierarchy.

Tests focus on meaningful behavior, not just field access.
"""

from enigma.core import (
    APIError,
    DecodeError,
    EnigmaError,
    ExportCancelledError,
    ExportError,
    ExportNotReadyError,
    TransportError,
)


def test_api_error_with_status_code():
    error = APIError("not found", status_code=404)
    assert str(error) == "not found"
    assert error.status_code == 404
    assert isinstance(error, EnigmaError)


def test_transport_error_keeps_cause():
    cause = ConnectionResetError("reset")
    error = TransportError("failed", cause=cause)
    assert error.cause is cause
    assert isinstance(error, EnigmaError)


def test_decode_error_keeps_cause():
    cause = ValueError("bad json")
    error = DecodeError("unexpected payload", cause=cause)
    assert error.cause is cause


def test_export_errors_share_base():
    exhausted = ExportNotReadyError("not ready", export_url="https://x/f.gz")
    cancelled = ExportCancelledError("cancelled")
    assert isinstance(exhausted, ExportError)
    assert isinstance(cancelled, ExportError)
    assert exhausted.export_url == "https://x/f.gz"
    assert cancelled.export_url is None
