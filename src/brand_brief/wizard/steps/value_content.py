"""
Value Content Step

Final step: educational topics, existing material and the review
acknowledgement.
"""

from typing import TYPE_CHECKING

from brand_brief.wizard.schemas import TOPIC_OPTIONS
from brand_brief.wizard.steps.base import StepController, StepDraft

if TYPE_CHECKING:
    from brand_brief.wizard.ui import WizardUI


class ValueContentController(StepController):
    key = "value_content"
    title = "Contenido y revisión"
    description = "Temas de contenido de valor y revisión final"
    labels = {
        "explain_services": "¿Quieren contenido que explique sus servicios?",
        "topics_to_cover": "Temas a abordar",
        "existing_content": "Información o contenido existente",
        "references": "Referencias",
        "data_verified": "Confirmo que la información es correcta",
    }

    def ask(self, ui: "WizardUI", draft: StepDraft) -> None:
        self._confirm(ui, draft, "explain_services")
        self._multi(ui, draft, "topics_to_cover", TOPIC_OPTIONS)
        self._text(ui, draft, "existing_content")
        self._text(ui, draft, "references")
        self._confirm(ui, draft, "data_verified")
