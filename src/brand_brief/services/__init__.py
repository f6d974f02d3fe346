"""
Brand Brief Services

Document, spreadsheet and PDF outputs for a submitted brief.
"""

from brand_brief.services.submission import (
    BriefSubmissionService,
    DryRunSubmitter,
    SubmissionResult,
    build_submission_service,
)

__all__ = [
    "BriefSubmissionService",
    "DryRunSubmitter",
    "SubmissionResult",
    "build_submission_service",
]
