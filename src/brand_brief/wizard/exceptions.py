"""
Brand Brief Wizard Exceptions

Custom exception types for better error handling and remediation suggestions.
"""

from typing import Dict, List, Optional


class BrandBriefError(Exception):
    """Base exception for all Brand Brief errors."""

    def __init__(
        self,
        message: str,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        """Initialize the error.

        Args:
            message: Human-readable error message
            remediation: Suggested fix for the user
            details: Technical details for debugging
        """
        super().__init__(message)
        self.message = message
        self.remediation = remediation
        self.details = details

    def __str__(self) -> str:
        parts = [self.message]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.remediation:
            parts.append(f"To fix: {self.remediation}")
        return "\n".join(parts)


class ConfigError(BrandBriefError):
    """Configuration-related errors (missing template or spreadsheet ids)."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.config_key = config_key
        if not remediation and config_key:
            remediation = f"Set '{config_key}' in brand-brief.yaml or the matching BRAND_BRIEF_* variable in .env"
        super().__init__(message, remediation, details)


class CredentialError(BrandBriefError):
    """OAuth credential errors (missing token, failed refresh)."""

    def __init__(
        self,
        message: str,
        credential_type: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.credential_type = credential_type
        if not remediation:
            remediation = "Run 'brand-brief auth' to authorize Google Docs, Drive and Sheets access"
        super().__init__(message, remediation, details)


class NetworkError(BrandBriefError):
    """Network-related errors (timeouts, connection issues)."""

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.endpoint = endpoint
        if not remediation:
            remediation = "Check your internet connection and try again. If the issue persists, the service may be temporarily unavailable."
        super().__init__(message, remediation, details)


class StepValidationError(BrandBriefError):
    """A step value did not pass its schema."""

    def __init__(
        self,
        message: str,
        step: Optional[str] = None,
        errors: Optional[Dict[str, List[str]]] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.step = step
        self.errors = errors or {}
        if not details and self.errors:
            details = "; ".join(
                f"{path}: {', '.join(messages)}" for path, messages in self.errors.items()
            )
        super().__init__(message, remediation, details)


class StepSequenceError(BrandBriefError):
    """The wizard was driven out of order (programming contract violation)."""

    def __init__(
        self,
        message: str,
        step: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.step = step
        super().__init__(message, remediation, details)


class SubmissionError(BrandBriefError):
    """The document or spreadsheet service failed while submitting a brief."""

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.service = service
        if not remediation:
            remediation = "Your answers were kept. Try submitting again in a moment."
        super().__init__(message, remediation, details)


class SubmissionTimeoutError(SubmissionError):
    """The submission did not complete within the configured timeout."""

    def __init__(
        self,
        message: str,
        timeout_seconds: Optional[float] = None,
        remediation: Optional[str] = None,
        details: Optional[str] = None
    ):
        self.timeout_seconds = timeout_seconds
        if not details and timeout_seconds:
            details = f"No response after {timeout_seconds:g}s"
        super().__init__(message, service=None, remediation=remediation, details=details)


class SubmissionInProgressError(BrandBriefError):
    """A submission was requested while another one is still pending."""


# Error code mapping for CLI exit codes
ERROR_CODES = {
    ConfigError: 10,
    CredentialError: 11,
    NetworkError: 13,
    StepValidationError: 14,
    StepSequenceError: 15,
    SubmissionTimeoutError: 17,
    SubmissionError: 16,
    SubmissionInProgressError: 18,
    BrandBriefError: 1,
}


def get_error_code(error: Exception) -> int:
    """Get the exit code for an error type."""
    for error_type, code in ERROR_CODES.items():
        if isinstance(error, error_type):
            return code
    return 1
