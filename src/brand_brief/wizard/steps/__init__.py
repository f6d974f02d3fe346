"""
Brand Brief Wizard Steps

Step controllers and the ordered step definitions for the wizard orchestrator.
"""

from typing import List

from brand_brief.wizard.schemas import get_schema
from brand_brief.wizard.steps.base import (
    RepeatedField,
    StepController,
    StepDefinition,
    StepDraft,
    StepOutcome,
)
from brand_brief.wizard.steps.about_you import AboutYouController
from brand_brief.wizard.steps.services import ServicesController
from brand_brief.wizard.steps.target_audience import TargetAudienceController
from brand_brief.wizard.steps.visual_style import VisualStyleController
from brand_brief.wizard.steps.branding import BrandingController
from brand_brief.wizard.steps.content_production import ContentProductionController
from brand_brief.wizard.steps.value_content import ValueContentController


def _define(controllers: List[StepController]) -> List[StepDefinition]:
    return [
        StepDefinition(
            ordinal=ordinal,
            key=controller.key,
            title=controller.title,
            description=controller.description,
            schema=get_schema(controller.key),
            controller=controller,
        )
        for ordinal, controller in enumerate(controllers, 1)
    ]


# Step definitions for the wizard orchestrator, in the only allowed order
WIZARD_STEPS = _define([
    AboutYouController(),
    ServicesController(),
    TargetAudienceController(),
    VisualStyleController(),
    BrandingController(),
    ContentProductionController(),
    ValueContentController(),
])

STEP_KEYS = [step.key for step in WIZARD_STEPS]

__all__ = [
    "AboutYouController",
    "ServicesController",
    "TargetAudienceController",
    "VisualStyleController",
    "BrandingController",
    "ContentProductionController",
    "ValueContentController",
    "RepeatedField",
    "StepController",
    "StepDefinition",
    "StepDraft",
    "StepOutcome",
    "WIZARD_STEPS",
    "STEP_KEYS",
]
