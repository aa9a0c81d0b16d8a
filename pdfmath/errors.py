"""Error types raised by the converters and mapped to JSON responses by the app."""

from typing import Any, Dict, Optional


class ConversionError(Exception):
    status = 500

    def __init__(self, message: str, details: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        if status is not None:
            self.status = status

    def to_dict(self) -> Dict[str, Any]:
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(ConversionError):
    """Bad request: missing field, wrong file type."""
    status = 400


class PdfProcessingError(ConversionError):
    """The uploaded PDF could not be decoded."""

    def __init__(self, details: Optional[str] = None):
        super().__init__("Failed to process PDF. Make sure the file is not corrupted.", details=details)


class RenderError(ConversionError):
    """Rasterization, encoding or PDF writing failed."""
