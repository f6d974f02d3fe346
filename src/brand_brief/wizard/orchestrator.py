"""
Brand Brief Wizard Orchestrator

Manages step sequencing, the accumulator of validated step values and the
final asynchronous submission.
"""

import asyncio
import copy
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence

from brand_brief.wizard.exceptions import (
    BrandBriefError,
    StepSequenceError,
    StepValidationError,
    SubmissionError,
    SubmissionInProgressError,
    SubmissionTimeoutError,
)
from brand_brief.wizard.logging_config import get_logger
from brand_brief.wizard.normalizer import CanonicalSubmissionPayload, normalize
from brand_brief.wizard.schemas import StepSchema, validate_step
from brand_brief.wizard.steps import WIZARD_STEPS, StepDefinition
from brand_brief.wizard.ui import WizardUI


logger = get_logger("orchestrator")

DEFAULT_SUBMIT_TIMEOUT = 60.0

SUBMIT_FAILED_MESSAGE = "No pudimos enviar su brief. Sus respuestas se conservaron, intente nuevamente."

# The worker thread is not cancelled when the wait times out
TIMEOUT_REMEDIATION = (
    "The request may still finish in the background. Check the spreadsheet for a new "
    "row before retrying, or the brief may be sent twice."
)


class SubmissionStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"
    FAILED = "failed"


@dataclass
class WizardState:
    """In-memory state for one wizard session."""
    current_step_index: int = 1
    accumulator: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    submission_status: SubmissionStatus = SubmissionStatus.IDLE
    last_error: Optional[str] = None
    result: Any = None
    started_at: str = ""


@dataclass
class SubmitOutcome:
    """Result of a submission attempt."""
    ok: bool
    result: Any = None
    error: Optional[str] = None
    exception: Optional[BaseException] = None


class WizardOrchestrator:
    """Orchestrates the Brand Brief wizard flow.

    `submitter` is any object with an ``async submit(payload)`` method.
    """

    def __init__(
        self,
        submitter: Any,
        steps: Optional[Sequence[StepDefinition]] = None,
        timeout: float = DEFAULT_SUBMIT_TIMEOUT,
        today: Optional[Callable[[], date]] = None
    ):
        self.submitter = submitter
        self.steps: List[StepDefinition] = list(steps or WIZARD_STEPS)
        self.timeout = timeout
        self._today = today or date.today
        self.state = WizardState(started_at=datetime.now().isoformat())

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def current_step(self) -> StepDefinition:
        return self.steps[self.state.current_step_index - 1]

    @property
    def is_submitting(self) -> bool:
        return self.state.submission_status == SubmissionStatus.SUBMITTING

    def step(self, key: str) -> StepDefinition:
        for step in self.steps:
            if step.key == key:
                return step
        raise KeyError(f"Unknown wizard step: {key}")

    def initial_value(self, n: Optional[int] = None) -> Dict[str, Any]:
        """Accumulated value of step `n` (1-based), or its schema defaults."""
        if n is None:
            n = self.state.current_step_index
        if not 1 <= n <= self.total_steps:
            raise StepSequenceError(f"Step {n} is out of range 1-{self.total_steps}")
        step = self.steps[n - 1]
        stored = self.state.accumulator.get(step.key)
        if stored is None:
            return step.default_value
        return copy.deepcopy(stored)

    def _coerce(self, step: StepDefinition, value: Any) -> StepSchema:
        if isinstance(value, step.schema):
            return value
        result = validate_step(step.key, value.model_dump() if isinstance(value, StepSchema) else value)
        if not result.ok:
            raise StepValidationError(
                f"Invalid value for step '{step.key}'",
                step=step.key,
                errors=result.errors
            )
        return result.value

    async def continue_step(self, key: str, value: Any) -> Optional[SubmitOutcome]:
        """Store the validated value of the current step and advance.

        At the last step the brief is submitted and the outcome returned;
        otherwise returns None.
        """
        if self.is_submitting:
            raise SubmissionInProgressError("A submission is already in progress")
        if self.state.submission_status == SubmissionStatus.SUBMITTED:
            raise StepSequenceError("The brief was already submitted", step=key)

        step = self.current_step
        if key != step.key:
            raise StepSequenceError(
                f"Expected step '{step.key}' but got '{key}'",
                step=key,
                remediation="Steps must be completed in order"
            )

        validated = self._coerce(step, value)
        self.state.accumulator[key] = validated.model_dump()
        logger.debug("Step %d/%d '%s' stored", step.ordinal, self.total_steps, key)

        if self.state.current_step_index < self.total_steps:
            self.state.current_step_index += 1
            return None

        return await self.submit()

    def back(self) -> bool:
        """Move to the previous step without touching the accumulator.

        Returns:
            False when already on the first step
        """
        if self.is_submitting:
            raise StepSequenceError("Cannot go back while the brief is being submitted")
        if self.state.submission_status == SubmissionStatus.SUBMITTED:
            raise StepSequenceError("The brief was already submitted")
        if self.state.current_step_index == 1:
            return False
        self.state.current_step_index -= 1
        return True

    def missing_steps(self) -> List[str]:
        return [step.key for step in self.steps if step.key not in self.state.accumulator]

    def build_payload(self) -> CanonicalSubmissionPayload:
        return normalize(copy.deepcopy(self.state.accumulator), today=self._today())

    def preview_payload(self) -> CanonicalSubmissionPayload:
        """Payload from the answers so far; unanswered steps use their defaults."""
        accumulator = {step.key: self.initial_value(step.ordinal) for step in self.steps}
        return normalize(accumulator, today=self._today())

    async def submit(self) -> SubmitOutcome:
        """Normalize the accumulator and hand it to the submitter.

        Failures never modify the accumulator; the status moves to FAILED
        and submit() may be called again.
        """
        if self.is_submitting:
            raise SubmissionInProgressError("A submission is already in progress")
        if self.state.submission_status == SubmissionStatus.SUBMITTED:
            raise StepSequenceError("The brief was already submitted")
        missing = self.missing_steps()
        if missing:
            raise StepSequenceError(
                f"Cannot submit before completing every step (missing: {', '.join(missing)})",
                step=missing[0]
            )

        payload = self.build_payload()
        self.state.submission_status = SubmissionStatus.SUBMITTING
        self.state.last_error = None
        logger.info("Submitting brief for '%s'", payload.project_name)

        try:
            result = await asyncio.wait_for(self.submitter.submit(payload), timeout=self.timeout)
        except asyncio.TimeoutError:
            return self._fail(SubmissionTimeoutError(
                "Submission timed out",
                timeout_seconds=self.timeout,
                remediation=TIMEOUT_REMEDIATION
            ))
        except BrandBriefError as e:
            return self._fail(e)
        except Exception as e:
            logger.exception("Unexpected submission failure")
            return self._fail(SubmissionError("Unexpected submission failure", details=str(e)))

        self.state.submission_status = SubmissionStatus.SUBMITTED
        self.state.result = result
        logger.info("Brief submitted")
        return SubmitOutcome(ok=True, result=result)

    def _fail(self, error: BrandBriefError) -> SubmitOutcome:
        logger.warning("Submission failed: %s", error.message)
        if error.details:
            logger.debug("Submission failure details: %s", error.details)
        self.state.submission_status = SubmissionStatus.FAILED
        self.state.last_error = SUBMIT_FAILED_MESSAGE
        return SubmitOutcome(ok=False, error=SUBMIT_FAILED_MESSAGE, exception=error)

    async def run(self, ui: Optional[WizardUI] = None) -> SubmitOutcome:
        """Run the wizard interactively until the brief is submitted or abandoned.

        Returns:
            The last submission outcome
        """
        ui = ui or WizardUI(total_steps=self.total_steps)
        ui.print_header()

        while True:
            step = self.current_step
            ui.print_step_header(step.ordinal, step.title, step.description)
            if step.ordinal == self.total_steps:
                ui.show_summary_table("Resumen de su brief", self.preview_payload().labelled())
            draft = step.controller.render(self.initial_value())
            outcome = step.controller.prompt(ui, draft, allow_back=step.ordinal > 1)
            if outcome.back:
                self.back()
                continue

            if step.ordinal == self.total_steps:
                ui.print_info("Enviando su brief...")
            result = await self.continue_step(step.key, outcome.value)
            if result is None:
                continue

            while not result.ok:
                ui.print_error(result.error)
                if isinstance(result.exception, BrandBriefError) and result.exception.remediation:
                    ui.print_info(result.exception.remediation)
                if not ui.prompt_confirm("¿Reintentar el envío?", default=True):
                    return result
                result = await self.submit()
            return result
