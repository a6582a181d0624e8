"""Exceptions raised by the generation pipeline."""

from __future__ import annotations


class ResumeBuilderError(Exception):
    """Base class for fatal generation failures."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class MissingCredentialError(ResumeBuilderError):
    """Raised before any model call when no API key is configured."""


class TransportError(ResumeBuilderError):
    """The completion call failed or returned nothing."""


class RepairExhaustedError(ResumeBuilderError):
    """The repaired response still failed validation."""

    def __init__(self, issues: list[str]) -> None:
        super().__init__("AI response failed validation: " + "; ".join(issues))
        self.issues = list(issues)


class PdfExportError(ResumeBuilderError):
    """LibreOffice is missing or the DOCX to PDF conversion failed."""
