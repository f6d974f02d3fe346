"""
Visual Style Step

Visual style, communication tone and up to three inspiration links.
"""

from typing import TYPE_CHECKING

from brand_brief.wizard.schemas import MAX_INSPIRATION_LINKS, TONES, VISUAL_STYLE_OPTIONS
from brand_brief.wizard.steps.base import RepeatedField, StepController, StepDraft

if TYPE_CHECKING:
    from brand_brief.wizard.ui import WizardUI


class VisualStyleController(StepController):
    key = "visual_style"
    title = "Estilo visual"
    description = "Cómo se ve y cómo suena su marca"
    repeated = {
        "inspiration_links": RepeatedField(
            template={"url": ""}, minimum=1, maximum=MAX_INSPIRATION_LINKS
        ),
    }
    labels = {
        "visual_style": "Estilo visual",
        "tone": "Tono de comunicación",
        "inspiration_links": "Enlaces de inspiración",
        "inspiration_links.url": "Enlace de inspiración (opcional)",
        "avoid_content": "¿Qué contenido quieren evitar?",
    }

    def ask(self, ui: "WizardUI", draft: StepDraft) -> None:
        self._multi(ui, draft, "visual_style", VISUAL_STYLE_OPTIONS)
        self._choice(ui, draft, "tone", TONES)
        self._entries(ui, draft, "inspiration_links", ("url",), noun="enlace")
        self._text(ui, draft, "avoid_content")
