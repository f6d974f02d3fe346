"""
Brand Brief Wizard

Seven-step interactive wizard with local validation and a single final
submission.
"""

from brand_brief.wizard.orchestrator import (
    SubmissionStatus,
    SubmitOutcome,
    WizardOrchestrator,
    WizardState,
)
from brand_brief.wizard.ui import WizardUI

__all__ = [
    "SubmissionStatus",
    "SubmitOutcome",
    "WizardOrchestrator",
    "WizardState",
    "WizardUI",
]
