"""
Failures surfaced to callers of the document analysis service.

Only input validation and the upstream Azure call can fail. Anything the
extraction engine cannot determine is left unset on the result instead.

    DocumentAnalysisError (base)
    ├── EmptyDocumentError
    ├── UnsupportedDocumentError
    ├── ServiceNotConfiguredError
    └── AnalysisServiceError
"""


class DocumentAnalysisError(Exception):
    """Base class for all document analysis failures."""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class EmptyDocumentError(DocumentAnalysisError):
    """No document bytes were supplied."""


class UnsupportedDocumentError(DocumentAnalysisError):
    """The document has a disallowed content type or is too large."""


class ServiceNotConfiguredError(DocumentAnalysisError):
    """Azure Document Intelligence endpoint or key is missing."""


class AnalysisServiceError(DocumentAnalysisError):
    """The Azure Document Intelligence call failed or timed out."""
