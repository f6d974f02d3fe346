"""
About You Step

Project name, company, founders, motivation, brand identity, sector and
contact email.
"""

from typing import TYPE_CHECKING

from brand_brief.wizard.schemas import SECTORS
from brand_brief.wizard.steps.base import RepeatedField, StepController, StepDraft

if TYPE_CHECKING:
    from brand_brief.wizard.ui import WizardUI


class AboutYouController(StepController):
    key = "about_you"
    title = "Sobre ustedes"
    description = "Cuéntennos quiénes son y por qué empezaron este proyecto"
    repeated = {
        "founders": RepeatedField(template={"name": "", "role": ""}, minimum=1),
    }
    labels = {
        "project_name": "Nombre del proyecto",
        "company": "Empresa (opcional)",
        "founders": "Fundadores",
        "founders.name": "Nombre del fundador",
        "founders.role": "Rol del fundador",
        "motivation": "¿Qué los motivó a crear este proyecto?",
        "brand_identity": "¿Cómo quieren que los recuerden como marca?",
        "sector": "Sector",
        "contact_email": "Email de contacto",
    }

    def ask(self, ui: "WizardUI", draft: StepDraft) -> None:
        self._text(ui, draft, "project_name", required=True)
        self._text(ui, draft, "company")
        self._entries(ui, draft, "founders", ("name", "role"), noun="fundador")
        self._text(ui, draft, "motivation", required=True)
        self._text(ui, draft, "brand_identity", required=True)
        self._choice(ui, draft, "sector", SECTORS)
        self._text(ui, draft, "contact_email", required=True)
