"""
Logbook import errors.

Every failure the import pipeline surfaces to a caller derives from
LogbookImportError. Malformed numeric cells are not errors: they read as zero.
"""

from __future__ import annotations
from typing import Any, Dict, Optional


class LogbookImportError(ValueError):
    """Base exception for logbook import and analysis errors."""

    def __init__(
        self,
        message: str,
        code: str = "LOGBOOK_IMPORT_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class InvalidFormatError(LogbookImportError):
    """The first line of the document lacks the product signature."""

    def __init__(self, first_line: str = "", message: Optional[str] = None):
        super().__init__(
            message=message or "Not a valid ForeFlight export",
            code="INVALID_FORMAT",
            details={"first_line": first_line[:80]},
        )


class MissingSectionError(LogbookImportError):
    """No flights table header could be located."""

    def __init__(self, section: str = "Flights Table", message: Optional[str] = None):
        super().__init__(
            message=message or f"Could not find {section} in CSV",
            code="MISSING_SECTION",
            details={"section": section},
        )


class EmptyResultError(LogbookImportError):
    """The export parsed fine but no row passed the validity filter."""

    def __init__(self, rows_read: int = 0, message: Optional[str] = None):
        super().__init__(
            message=message or "No valid flights found",
            code="EMPTY_RESULT",
            details={"rows_read": rows_read},
        )


class UnknownCertificateError(LogbookImportError):
    def __init__(self, certificate: str):
        super().__init__(
            message=f"Unknown certificate: {certificate!r}",
            code="UNKNOWN_CERTIFICATE",
            details={"certificate": certificate},
        )
