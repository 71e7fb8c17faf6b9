"""
Error Codes and Exceptions for CereVoice API calls.

Two things can go wrong locally during a call:
    - TransportError: the HTTP exchange itself failed (DNS, connect,
      timeout, invalid URL). Nothing is decoded.
    - DecodeError: a response arrived but its body is empty, not XML, or
      not shaped like the operation's response.

Business failures reported by the provider (bad credentials, unknown
voice, ...) are not exceptions. They arrive in the resultCode and
resultDescription fields of an otherwise successful response.

API operations never raise these; they attach them to the returned
result. Call result.raise_for_error() to get exception semantics.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class ErrorCode:
    """Standardized error codes carried by CereVoiceError."""
    TRANSPORT_ERROR = "TRANSPORT_ERROR"     # HTTP exchange failed
    DECODE_ERROR = "DECODE_ERROR"           # Response body unusable
    INTERNAL_ERROR = "INTERNAL_ERROR"       # Unexpected error


class CereVoiceError(Exception):
    """
    Base exception for CereVoice client errors.

    Attributes:
        message: Human-readable error message.
        code: Error code from ErrorCode class.
        details: Optional dictionary with additional context.
    """
    def __init__(self, message: str, code: str = ErrorCode.INTERNAL_ERROR, details: Optional[Dict] = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly error dict."""
        result = {
            "ok": False,
            "error": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class TransportError(CereVoiceError):
    """Raised when the HTTP request could not be completed."""
    def __init__(self, message: str, details: Optional[Dict] = None):
        super().__init__(message, ErrorCode.TRANSPORT_ERROR, details)


class DecodeError(CereVoiceError):
    """Raised when the response body cannot be decoded."""
    def __init__(self, message: str, details: Optional[Dict] = None):
        super().__init__(message, ErrorCode.DECODE_ERROR, details)
