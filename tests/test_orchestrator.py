"""Tests for the Brand Brief wizard orchestrator."""

import asyncio
import copy
import dataclasses
from datetime import date
from unittest.mock import MagicMock, patch

import pytest


class RecordingSubmitter:
    """Async submitter that records payloads and can fail on demand."""

    def __init__(self, failures=0, error=None):
        self.failures = failures
        self.error = error
        self.payloads = []

    async def submit(self, payload):
        self.payloads.append(payload)
        if self.failures:
            self.failures -= 1
            raise self.error
        return {"document_url": "https://docs.google.com/document/d/doc1/edit"}


class SlowSubmitter:
    def __init__(self, gate=None):
        self.gate = gate

    async def submit(self, payload):
        if self.gate is None:
            await asyncio.sleep(10)
        else:
            await self.gate.wait()
        return "done"


def make_wizard(submitter, **kwargs):
    from brand_brief.wizard.orchestrator import WizardOrchestrator

    return WizardOrchestrator(submitter, today=lambda: date(2025, 3, 7), **kwargs)


def fill(wizard, accumulator):
    """Put the wizard on the last step with every answer stored."""
    wizard.state.accumulator = copy.deepcopy(accumulator)
    wizard.state.current_step_index = wizard.total_steps


async def complete(wizard, brief):
    outcome = None
    for step in wizard.steps:
        outcome = await wizard.continue_step(step.key, brief[step.key])
    return outcome


class TestSequencing:
    """Test continue/back sequencing."""

    def test_initial_state(self):
        from brand_brief.wizard.orchestrator import SubmissionStatus

        wizard = make_wizard(RecordingSubmitter())
        assert wizard.state.current_step_index == 1
        assert wizard.state.accumulator == {}
        assert wizard.state.submission_status == SubmissionStatus.IDLE
        assert wizard.total_steps == 7

    def test_initial_value_is_schema_default(self):
        wizard = make_wizard(RecordingSubmitter())
        assert wizard.initial_value(1)["founders"] == [{"name": "", "role": ""}]

    def test_continue_advances(self, full_brief):
        wizard = make_wizard(RecordingSubmitter())
        result = asyncio.run(wizard.continue_step("about_you", full_brief["about_you"]))
        assert result is None
        assert wizard.state.current_step_index == 2
        assert wizard.state.accumulator["about_you"]["project_name"] == "Luna Joyas"

    def test_continue_accepts_schema_instance(self, full_brief):
        from brand_brief.wizard.schemas import AboutYouStep

        wizard = make_wizard(RecordingSubmitter())
        value = AboutYouStep.model_validate(full_brief["about_you"])
        asyncio.run(wizard.continue_step("about_you", value))
        assert wizard.state.accumulator["about_you"] == value.model_dump()

    def test_continue_wrong_step(self, full_brief):
        from brand_brief.wizard.exceptions import StepSequenceError

        wizard = make_wizard(RecordingSubmitter())
        with pytest.raises(StepSequenceError):
            asyncio.run(wizard.continue_step("services", full_brief["services"]))
        assert wizard.state.accumulator == {}

    def test_continue_invalid_value(self):
        from brand_brief.wizard.exceptions import StepValidationError

        wizard = make_wizard(RecordingSubmitter())
        with pytest.raises(StepValidationError) as exc_info:
            asyncio.run(wizard.continue_step("about_you", {"project_name": "A"}))
        assert "project_name" in exc_info.value.errors
        assert wizard.state.current_step_index == 1

    def test_continue_only_touches_its_step(self, full_brief):
        wizard = make_wizard(RecordingSubmitter())
        asyncio.run(wizard.continue_step("about_you", full_brief["about_you"]))
        asyncio.run(wizard.continue_step("services", full_brief["services"]))
        assert set(wizard.state.accumulator) == {"about_you", "services"}

    def test_back_at_first_step(self):
        wizard = make_wizard(RecordingSubmitter())
        assert wizard.back() is False
        assert wizard.state.current_step_index == 1

    def test_back_preserves_data(self, minimal_brief):
        wizard = make_wizard(RecordingSubmitter())
        asyncio.run(wizard.continue_step("about_you", minimal_brief["about_you"]))
        before = copy.deepcopy(wizard.state.accumulator)

        assert wizard.back() is True
        assert wizard.state.current_step_index == 1
        assert wizard.state.accumulator == before

        draft = wizard.current_step.controller.render(wizard.initial_value())
        assert draft.get("project_name") == "Acme"

    def test_initial_value_out_of_range(self):
        from brand_brief.wizard.exceptions import StepSequenceError

        wizard = make_wizard(RecordingSubmitter())
        with pytest.raises(StepSequenceError):
            wizard.initial_value(8)
        with pytest.raises(StepSequenceError):
            wizard.initial_value(0)


class TestSubmission:
    """Test the final submission."""

    def test_end_to_end(self, minimal_brief):
        from brand_brief.wizard.normalizer import FALLBACK
        from brand_brief.wizard.orchestrator import SubmissionStatus

        submitter = RecordingSubmitter()
        wizard = make_wizard(submitter)
        outcome = asyncio.run(complete(wizard, minimal_brief))

        assert outcome.ok
        assert wizard.state.submission_status == SubmissionStatus.SUBMITTED
        assert wizard.state.result == outcome.result
        payload = submitter.payloads[0]
        assert payload.founders == "Ana (CEO)"
        assert payload.project_name == "Acme"
        assert payload.company == FALLBACK
        assert payload.logo == FALLBACK
        assert payload.date == "7/3/2025"

    def test_submit_incomplete_never_normalizes(self, full_brief):
        from brand_brief.wizard.exceptions import StepSequenceError

        submitter = RecordingSubmitter()
        wizard = make_wizard(submitter)
        asyncio.run(wizard.continue_step("about_you", full_brief["about_you"]))

        with patch("brand_brief.wizard.orchestrator.normalize") as mock_normalize:
            with pytest.raises(StepSequenceError):
                asyncio.run(wizard.submit())
            mock_normalize.assert_not_called()
        assert submitter.payloads == []

    def test_failure_keeps_accumulator(self, full_accumulator):
        from brand_brief.wizard.exceptions import SubmissionError
        from brand_brief.wizard.orchestrator import SubmissionStatus

        submitter = RecordingSubmitter(failures=1, error=SubmissionError("Sheets down", service="sheets"))
        wizard = make_wizard(submitter)
        fill(wizard, full_accumulator)
        before = copy.deepcopy(wizard.state.accumulator)

        outcome = asyncio.run(wizard.submit())
        assert not outcome.ok
        assert isinstance(outcome.exception, SubmissionError)
        assert outcome.error
        assert wizard.state.submission_status == SubmissionStatus.FAILED
        assert wizard.state.last_error == outcome.error
        assert wizard.state.accumulator == before

    def test_retry_after_failure(self, full_accumulator):
        from brand_brief.wizard.exceptions import SubmissionError
        from brand_brief.wizard.orchestrator import SubmissionStatus

        submitter = RecordingSubmitter(failures=1, error=SubmissionError("boom"))
        wizard = make_wizard(submitter)
        fill(wizard, full_accumulator)

        assert not asyncio.run(wizard.submit()).ok
        assert asyncio.run(wizard.submit()).ok
        assert wizard.state.submission_status == SubmissionStatus.SUBMITTED
        assert wizard.state.last_error is None
        assert len(submitter.payloads) == 2

    def test_unexpected_error_becomes_failure(self, full_accumulator):
        from brand_brief.wizard.exceptions import SubmissionError

        wizard = make_wizard(RecordingSubmitter(failures=1, error=RuntimeError("socket closed")))
        fill(wizard, full_accumulator)

        outcome = asyncio.run(wizard.submit())
        assert not outcome.ok
        assert isinstance(outcome.exception, SubmissionError)
        assert "socket closed" in outcome.exception.details

    def test_timeout(self, full_accumulator):
        from brand_brief.wizard.exceptions import SubmissionTimeoutError
        from brand_brief.wizard.orchestrator import SubmissionStatus

        wizard = make_wizard(SlowSubmitter(), timeout=0.01)
        fill(wizard, full_accumulator)

        outcome = asyncio.run(wizard.submit())
        assert isinstance(outcome.exception, SubmissionTimeoutError)
        assert wizard.state.submission_status == SubmissionStatus.FAILED
        assert "background" in outcome.exception.remediation

    def test_second_submit_refused_while_pending(self, full_accumulator):
        from brand_brief.wizard.exceptions import StepSequenceError, SubmissionInProgressError

        async def scenario():
            gate = asyncio.Event()
            wizard = make_wizard(SlowSubmitter(gate))
            fill(wizard, full_accumulator)

            pending = asyncio.create_task(wizard.submit())
            await asyncio.sleep(0)
            assert wizard.is_submitting
            with pytest.raises(SubmissionInProgressError):
                await wizard.submit()
            with pytest.raises(StepSequenceError):
                wizard.back()
            gate.set()
            return await pending

        outcome = asyncio.run(scenario())
        assert outcome.ok
        assert outcome.result == "done"

    def test_back_allowed_after_failure(self, full_accumulator):
        from brand_brief.wizard.exceptions import SubmissionError

        wizard = make_wizard(RecordingSubmitter(failures=1, error=SubmissionError("boom")))
        fill(wizard, full_accumulator)
        asyncio.run(wizard.submit())
        assert wizard.back() is True
        assert wizard.state.current_step_index == 6

    def test_no_changes_after_submitted(self, full_brief):
        from brand_brief.wizard.exceptions import StepSequenceError

        submitter = RecordingSubmitter()
        wizard = make_wizard(submitter)
        asyncio.run(complete(wizard, full_brief))
        with pytest.raises(StepSequenceError):
            asyncio.run(wizard.continue_step("value_content", full_brief["value_content"]))
        with pytest.raises(StepSequenceError):
            wizard.back()
        with pytest.raises(StepSequenceError):
            asyncio.run(wizard.submit())
        assert len(submitter.payloads) == 1


class ScriptedController:
    """Controller stand-in that answers a step without prompting."""

    def __init__(self, key, value, go_back_once=False):
        self.key = key
        self.value = value
        self.go_back_once = go_back_once
        self.rendered = []

    def render(self, initial_value=None):
        self.rendered.append(initial_value)
        return initial_value

    def prompt(self, ui, draft, allow_back=False):
        from brand_brief.wizard.schemas import get_schema
        from brand_brief.wizard.steps import StepOutcome

        if self.go_back_once and allow_back:
            self.go_back_once = False
            return StepOutcome(self.key, back=True)
        return StepOutcome(self.key, value=get_schema(self.key).model_validate(self.value))


def scripted_steps(brief, back_on=None):
    from brand_brief.wizard.steps import WIZARD_STEPS

    return [
        dataclasses.replace(
            step,
            controller=ScriptedController(step.key, brief[step.key], go_back_once=step.key == back_on)
        )
        for step in WIZARD_STEPS
    ]


class TestRun:
    """Test the interactive loop with scripted steps."""

    def test_run_submits(self, full_brief):
        submitter = RecordingSubmitter()
        wizard = make_wizard(submitter, steps=scripted_steps(full_brief))
        ui = MagicMock()

        outcome = asyncio.run(wizard.run(ui))
        assert outcome.ok
        assert len(submitter.payloads) == 1
        assert ui.print_step_header.call_count == 7

    def test_run_back_renders_stored_value(self, full_brief):
        steps = scripted_steps(full_brief, back_on="services")
        wizard = make_wizard(RecordingSubmitter(), steps=steps)

        asyncio.run(wizard.run(MagicMock()))
        about = steps[0].controller
        assert len(about.rendered) == 2
        assert about.rendered[1]["project_name"] == "Luna Joyas"

    def test_run_retries_on_request(self, full_brief):
        from brand_brief.wizard.exceptions import SubmissionError

        submitter = RecordingSubmitter(failures=1, error=SubmissionError("boom"))
        wizard = make_wizard(submitter, steps=scripted_steps(full_brief))
        ui = MagicMock()
        ui.prompt_confirm.return_value = True

        outcome = asyncio.run(wizard.run(ui))
        assert outcome.ok
        assert len(submitter.payloads) == 2
        ui.print_error.assert_called_once()

    def test_run_gives_up(self, full_brief):
        from brand_brief.wizard.exceptions import SubmissionError

        submitter = RecordingSubmitter(failures=1, error=SubmissionError("boom"))
        wizard = make_wizard(submitter, steps=scripted_steps(full_brief))
        ui = MagicMock()
        ui.prompt_confirm.return_value = False

        outcome = asyncio.run(wizard.run(ui))
        assert not outcome.ok
        assert set(wizard.state.accumulator) == set(full_brief)

    def test_run_shows_summary_before_final_step(self, full_brief):
        wizard = make_wizard(RecordingSubmitter(), steps=scripted_steps(full_brief))
        ui = MagicMock()
        events = []
        ui.show_summary_table.side_effect = lambda title, data: events.append(("summary", data))
        ui.print_step_header.side_effect = lambda ordinal, *args: events.append(("step", ordinal))

        asyncio.run(wizard.run(ui))

        ui.show_summary_table.assert_called_once()
        assert events[-2] == ("step", 7)
        summary = events[-1][1]
        assert summary["Proyecto"] == "Luna Joyas"
        assert summary["Empresa"] == "Luna SpA"


class TestPreviewPayload:
    """Test the payload shown for review before the last step."""

    def test_unanswered_steps_use_defaults(self, full_accumulator):
        from brand_brief.wizard.normalizer import FALLBACK

        wizard = make_wizard(RecordingSubmitter())
        partial = {key: value for key, value in full_accumulator.items() if key != "value_content"}
        wizard.state.accumulator = copy.deepcopy(partial)

        payload = wizard.preview_payload()
        assert payload.project_name == "Luna Joyas"
        assert payload.topics_to_cover == FALLBACK
        assert wizard.state.accumulator == partial
