"""
Content Production Step
"""

from typing import TYPE_CHECKING

from brand_brief.wizard.schemas import AVAILABILITY_OPTIONS, VIDEO_TYPES
from brand_brief.wizard.steps.base import StepController, StepDraft

if TYPE_CHECKING:
    from brand_brief.wizard.ui import WizardUI


class ContentProductionController(StepController):
    key = "content_production"
    title = "Producción"
    description = "Preferencias y logística para grabar contenido"
    labels = {
        "willing_to_appear": "¿Están dispuestos a aparecer en videos?",
        "video_types": "Tipos de video",
        "key_messages": "Mensajes clave",
        "availability": "Disponibilidad para grabar",
        "location": "Dirección de grabación",
        "resources": "Recursos disponibles (opcional)",
    }

    def ask(self, ui: "WizardUI", draft: StepDraft) -> None:
        self._confirm(ui, draft, "willing_to_appear")
        self._multi(ui, draft, "video_types", VIDEO_TYPES)
        self._text(ui, draft, "key_messages", required=True)
        current = draft.get("availability") or None
        draft.set(
            "availability",
            ui.prompt_choice(self.field_label("availability"), AVAILABILITY_OPTIONS, default=current)
        )
        self._text(ui, draft, "location", required=True)
        self._text(ui, draft, "resources")
