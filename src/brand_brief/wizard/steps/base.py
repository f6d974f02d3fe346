"""
Step Controller Base

A step controller owns one wizard step: it renders a mutable draft from an
initial value, revalidates the draft on every change, hides conditional
sub-fields, manages repeated entries and emits either the validated step
value or the error map.
"""

import copy
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Tuple, Type

from brand_brief.wizard.schemas import (
    ErrorMap,
    StepSchema,
    get_schema,
    schema_defaults,
    validate_step,
)

if TYPE_CHECKING:
    from brand_brief.wizard.ui import WizardUI


@dataclass(frozen=True)
class RepeatedField:
    """A list field edited as add/remove entries."""

    template: Dict[str, Any]
    minimum: int = 1
    maximum: Optional[int] = None


@dataclass
class StepOutcome:
    """What a controller emits: a validated value, errors, or a back signal."""

    step_key: str
    value: Optional[StepSchema] = None
    errors: ErrorMap = field(default_factory=dict)
    back: bool = False

    @property
    def ok(self) -> bool:
        return self.value is not None and not self.errors


@dataclass(frozen=True)
class StepDefinition:
    """Definition of a wizard step, fixed at import time."""

    ordinal: int
    key: str
    title: str
    description: str
    schema: Type[StepSchema]
    controller: "StepController"

    @property
    def default_value(self) -> Dict[str, Any]:
        return schema_defaults(self.key)


def _split(path: str) -> List[Any]:
    return [int(part) if part.isdigit() else part for part in path.split(".")]


class StepDraft:
    """Mutable form state for one step, revalidated after every change."""

    def __init__(self, controller: "StepController", values: Dict[str, Any]):
        self.controller = controller
        self.values = copy.deepcopy(values)
        self.errors: ErrorMap = {}
        self.revalidate()

    def get(self, path: str, default: Any = None) -> Any:
        node: Any = self.values
        for part in _split(path):
            try:
                node = node[part]
            except (KeyError, IndexError, TypeError):
                return default
        return node

    def set(self, path: str, value: Any) -> None:
        """Set a dotted path such as ``founders.0.name`` and revalidate."""
        parts = _split(path)
        node: Any = self.values
        for part in parts[:-1]:
            node = node[part]
        node[parts[-1]] = value
        self.revalidate()

    def revalidate(self) -> ErrorMap:
        result = validate_step(self.controller.key, self.controller.candidate(self))
        self.errors = result.errors
        return self.errors

    def errors_for(self, path: str) -> List[str]:
        return self.errors.get(path, [])

    @property
    def can_continue(self) -> bool:
        return not self.errors


class StepController:
    """Base controller; subclasses declare the step and its prompts."""

    key: str = ""
    title: str = ""
    description: str = ""
    repeated: Dict[str, RepeatedField] = {}
    labels: Dict[str, str] = {}

    @property
    def schema(self) -> Type[StepSchema]:
        return get_schema(self.key)

    def render(self, initial_value: Optional[Dict[str, Any]] = None) -> StepDraft:
        """Create a draft from the schema defaults overlaid with `initial_value`."""
        values = schema_defaults(self.key)
        if initial_value:
            values.update(copy.deepcopy(dict(initial_value)))
        return StepDraft(self, values)

    def hidden_paths(self, draft: StepDraft) -> List[str]:
        """Top-level fields currently hidden by a condition."""
        return []

    def is_visible(self, draft: StepDraft, path: str) -> bool:
        return path.split(".")[0] not in self.hidden_paths(draft)

    def candidate(self, draft: StepDraft) -> Dict[str, Any]:
        """Draft values minus hidden fields; hidden values stay in the draft."""
        hidden = set(self.hidden_paths(draft))
        return {
            name: copy.deepcopy(value)
            for name, value in draft.values.items()
            if name not in hidden
        }

    def submit(self, draft: StepDraft) -> StepOutcome:
        result = validate_step(self.key, self.candidate(draft))
        draft.errors = result.errors
        if not result.ok:
            return StepOutcome(self.key, errors=result.errors)
        return StepOutcome(self.key, value=result.value)

    def back(self) -> StepOutcome:
        return StepOutcome(self.key, back=True)

    # Repeated entries

    def _repeated(self, path: str) -> RepeatedField:
        try:
            return self.repeated[path]
        except KeyError:
            raise KeyError(f"'{path}' is not a repeated field of step {self.key}") from None

    def can_add(self, draft: StepDraft, path: str) -> bool:
        repeated = self._repeated(path)
        return repeated.maximum is None or len(draft.get(path, [])) < repeated.maximum

    def can_remove(self, draft: StepDraft, path: str) -> bool:
        return len(draft.get(path, [])) > self._repeated(path).minimum

    def add_entry(self, draft: StepDraft, path: str) -> bool:
        if not self.can_add(draft, path):
            return False
        draft.values[path].append(copy.deepcopy(self._repeated(path).template))
        draft.revalidate()
        return True

    def remove_entry(self, draft: StepDraft, path: str, index: int) -> bool:
        if not self.can_remove(draft, path):
            return False
        entries = draft.values[path]
        if not 0 <= index < len(entries):
            return False
        del entries[index]
        draft.revalidate()
        return True

    # Interactive rendition

    def field_label(self, path: str) -> str:
        parts = _split(path)
        names = [str(p) for p in parts if not isinstance(p, int)]
        indexes = [p for p in parts if isinstance(p, int)]
        label = self.labels.get(".".join(names), path)
        if indexes:
            label = f"{label} #{indexes[0] + 1}"
        return label

    def ask(self, ui: "WizardUI", draft: StepDraft) -> None:
        """Prompt for every visible field; implemented per step."""
        raise NotImplementedError

    def prompt(self, ui: "WizardUI", draft: StepDraft, allow_back: bool = False) -> StepOutcome:
        """Drive the step in the terminal until it is valid or the user goes back."""
        while True:
            if allow_back and ui.prompt_confirm("¿Volver al paso anterior?", default=False):
                return self.back()
            self.ask(ui, draft)
            outcome = self.submit(draft)
            if outcome.ok:
                return outcome
            ui.show_errors(outcome.errors, {path: self.field_label(path) for path in outcome.errors})
            ui.print_warning("Corrija los campos marcados para continuar.")

    # Prompt helpers

    def _text(self, ui: "WizardUI", draft: StepDraft, path: str, required: bool = False) -> None:
        value = ui.prompt_text(self.field_label(path), default=draft.get(path) or "", required=required)
        draft.set(path, value)

    def _choice(self, ui: "WizardUI", draft: StepDraft, path: str, options: Sequence[Tuple[str, str]]) -> None:
        labels = [label for _, label in options]
        current = dict(options).get(draft.get(path))
        picked = ui.prompt_choice(self.field_label(path), labels, default=current)
        draft.set(path, dict((label, value) for value, label in options)[picked])

    def _multi(self, ui: "WizardUI", draft: StepDraft, path: str, options: Sequence[str]) -> None:
        draft.set(path, ui.prompt_multi_choice(self.field_label(path), options, selected=draft.get(path)))

    def _confirm(self, ui: "WizardUI", draft: StepDraft, path: str) -> None:
        draft.set(path, ui.prompt_confirm(self.field_label(path), default=bool(draft.get(path))))

    def _entries(self, ui: "WizardUI", draft: StepDraft, path: str, keys: Sequence[str], noun: str) -> None:
        index = 0
        while index < len(draft.get(path, [])):
            for key in keys:
                self._text(ui, draft, f"{path}.{index}.{key}")
            if self.can_remove(draft, path) and ui.prompt_confirm(f"¿Eliminar este {noun}?", default=False):
                self.remove_entry(draft, path, index)
                continue
            index += 1
            if index == len(draft.get(path, [])) and self.can_add(draft, path):
                if ui.prompt_confirm(f"¿Agregar otro {noun}?", default=False):
                    self.add_entry(draft, path)
