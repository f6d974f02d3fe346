"""
Target Audience Step
"""

from typing import TYPE_CHECKING

from brand_brief.wizard.schemas import AGE_RANGES
from brand_brief.wizard.steps.base import RepeatedField, StepController, StepDraft

if TYPE_CHECKING:
    from brand_brief.wizard.ui import WizardUI


class TargetAudienceController(StepController):
    key = "target_audience"
    title = "A quién ayudan"
    description = "Su cliente ideal, qué le preocupa y qué quiere lograr"
    repeated = {
        "ideal_clients": RepeatedField(template={"description": ""}, minimum=1),
    }
    labels = {
        "ideal_clients": "Clientes ideales",
        "ideal_clients.description": "Cliente ideal",
        "age_range": "Rango de edad",
        "decision_maker": "¿Quién toma la decisión de compra?",
        "client_concerns": "¿Qué dudas o miedos tiene su cliente?",
        "client_goals": "¿Qué quiere lograr su cliente?",
    }

    def ask(self, ui: "WizardUI", draft: StepDraft) -> None:
        self._entries(ui, draft, "ideal_clients", ("description",), noun="cliente ideal")
        current = draft.get("age_range") or None
        draft.set("age_range", ui.prompt_choice(self.field_label("age_range"), AGE_RANGES, default=current))
        self._text(ui, draft, "decision_maker", required=True)
        self._text(ui, draft, "client_concerns", required=True)
        self._text(ui, draft, "client_goals", required=True)
