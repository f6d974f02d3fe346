"""
Services Step

What the business offers. Prices, promotion details and the custom service
description are conditional on earlier answers in the same step.
"""

from typing import TYPE_CHECKING, List

from brand_brief.wizard.schemas import (
    BUDGET_RANGES,
    OTHER_SERVICE,
    PRICE_CHOICES,
    SERVICE_OPTIONS,
    TIMELINES,
)
from brand_brief.wizard.steps.base import StepController, StepDraft

if TYPE_CHECKING:
    from brand_brief.wizard.ui import WizardUI


PRICE_FIELDS = ("service1", "service2", "service3", "packages")


class ServicesController(StepController):
    key = "services"
    title = "Qué ofrecen"
    description = "Servicios, precios y promociones de lanzamiento"
    labels = {
        "services": "¿Qué servicios van a ofrecer desde el primer día?",
        "custom_service": "Describe tu servicio personalizado",
        "has_prices": "¿Ya tienen precios definidos?",
        "prices.service1": "Servicio 1",
        "prices.service2": "Servicio 2",
        "prices.service3": "Servicio 3",
        "prices.packages": "Paquetes o promociones",
        "has_promotion": "¿Tienen alguna promoción de lanzamiento?",
        "promotion_details": "Detalles de la promoción",
        "timeline": "Plazo",
        "budget_range": "Rango de presupuesto",
    }

    def hidden_paths(self, draft: StepDraft) -> List[str]:
        hidden = []
        if OTHER_SERVICE not in (draft.get("services") or []):
            hidden.append("custom_service")
        if draft.get("has_prices") != "yes":
            hidden.append("prices")
        if not draft.get("has_promotion"):
            hidden.append("promotion_details")
        return hidden

    def ask(self, ui: "WizardUI", draft: StepDraft) -> None:
        self._multi(ui, draft, "services", SERVICE_OPTIONS)
        if self.is_visible(draft, "custom_service"):
            self._text(ui, draft, "custom_service", required=True)
        self._choice(ui, draft, "has_prices", PRICE_CHOICES)
        if self.is_visible(draft, "prices"):
            for name in PRICE_FIELDS:
                self._text(ui, draft, f"prices.{name}")
        self._confirm(ui, draft, "has_promotion")
        if self.is_visible(draft, "promotion_details"):
            self._text(ui, draft, "promotion_details")
        self._choice(ui, draft, "timeline", TIMELINES)
        self._choice(ui, draft, "budget_range", BUDGET_RANGES)
