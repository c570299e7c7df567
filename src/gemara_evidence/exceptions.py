"""Custom exceptions for gemara-evidence."""

from __future__ import annotations

__all__ = [
    "DocumentDecodeError",
    "EvidenceError",
    "EvidenceTimeoutError",
    "InvalidInputError",
    "ParseFailureError",
    "UnsupportedFormatError",
]


class EvidenceError(Exception):
    """Base exception for all gemara-evidence errors."""


class InvalidInputError(EvidenceError):
    """Raised when a request is rejected before any parsing happens."""


class UnsupportedFormatError(EvidenceError):
    """Raised when no registered parser claims an evidence source."""

    def __init__(self, message: str, source_id: str = "", format_hint: str = "") -> None:
        super().__init__(message)
        self.source_id = source_id
        self.format_hint = format_hint


class DocumentDecodeError(EvidenceError):
    """Raised by a parser when its declared input cannot be decoded at all."""


class ParseFailureError(EvidenceError):
    """A parser accepted a source but failed to turn it into chunks.

    The original exception is always available as ``__cause__``.
    """

    def __init__(self, message: str, parser_name: str) -> None:
        super().__init__(message)
        self.parser_name = parser_name


class EvidenceTimeoutError(EvidenceError):
    """Raised when a pipeline run outlives its deadline."""
