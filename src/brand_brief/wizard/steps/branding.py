"""
Branding Step

Brand colors, logo, moodboard and typography. Logo and moodboard accept a
URL or an upload token.
"""

from typing import TYPE_CHECKING

from brand_brief.wizard.schemas import MAX_ACCENT_COLORS
from brand_brief.wizard.steps.base import StepController, StepDraft

if TYPE_CHECKING:
    from brand_brief.wizard.ui import WizardUI


class BrandingController(StepController):
    key = "branding"
    title = "Branding"
    description = "Colores, logo y referencias visuales de la marca"
    labels = {
        "primary_color": "Color primario (HEX)",
        "secondary_color": "Color secundario (HEX)",
        "accent_colors": "Colores de acento (HEX, separados por coma)",
        "logo_url": "Logo (URL o archivo subido)",
        "moodboard_url": "Moodboard (URL o archivo subido)",
        "typography_style": "Estilo de tipografía",
        "visual_elements": "Elementos visuales",
    }

    def ask(self, ui: "WizardUI", draft: StepDraft) -> None:
        self._text(ui, draft, "primary_color", required=True)
        self._text(ui, draft, "secondary_color", required=True)
        current = ", ".join(draft.get("accent_colors") or [])
        answer = ui.prompt_text(self.field_label("accent_colors"), default=current)
        colors = [c.strip() for c in answer.split(",") if c.strip()]
        if len(colors) > MAX_ACCENT_COLORS:
            ui.print_warning(f"Solo se guardan los primeros {MAX_ACCENT_COLORS} colores")
            colors = colors[:MAX_ACCENT_COLORS]
        draft.set("accent_colors", colors)
        self._text(ui, draft, "logo_url")
        self._text(ui, draft, "moodboard_url")
        self._text(ui, draft, "typography_style")
        self._text(ui, draft, "visual_elements")
