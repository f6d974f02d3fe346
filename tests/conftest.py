"""Shared fixtures for Brand Brief tests."""

import copy

import pytest


FULL_BRIEF = {
    "about_you": {
        "project_name": "Luna Joyas",
        "company": "Luna SpA",
        "founders": [{"name": "Ana Pérez", "role": "Diseñadora"}],
        "motivation": "Queremos crear joyas sostenibles",
        "brand_identity": "Como una marca cercana y honesta",
        "sector": "joyeria",
        "contact_email": "ana@luna.cl",
    },
    "services": {
        "services": ["Productos físicos", "Otro"],
        "custom_service": "Talleres de orfebrería",
        "has_prices": "yes",
        "prices": {"service1": "Anillos - $50", "service2": "", "service3": "", "packages": "Pack 3 - $120"},
        "has_promotion": True,
        "promotion_details": "10% de descuento",
        "timeline": "1 mes",
        "budget_range": "1000-5000",
    },
    "target_audience": {
        "ideal_clients": [{"description": "Mujeres que valoran lo artesanal"}],
        "age_range": "26-35 años",
        "decision_maker": "La clienta",
        "client_concerns": "Que la joya no sea de calidad",
        "client_goals": "Regalar algo único y duradero",
    },
    "visual_style": {
        "visual_style": ["Elegante y sofisticado", "Artesanal y auténtico"],
        "tone": "cercano",
        "inspiration_links": [{"url": "https://instagram.com/luna"}, {"url": ""}],
        "avoid_content": "Fotos de stock",
    },
    "branding": {
        "primary_color": "#1A2B3C",
        "secondary_color": "#fff",
        "accent_colors": ["#C0A060"],
        "logo_url": "upload:logo-1.png",
        "moodboard_url": "",
        "typography_style": "Serif",
        "visual_elements": "",
    },
    "content_production": {
        "willing_to_appear": True,
        "video_types": ["Behind the scenes"],
        "key_messages": "Hecho a mano con amor",
        "availability": "Fines de semana",
        "location": "Santiago Centro",
        "resources": "",
    },
    "value_content": {
        "explain_services": False,
        "topics_to_cover": ["Proceso de trabajo"],
        "existing_content": "",
        "references": "",
        "data_verified": True,
    },
}

MINIMAL_BRIEF = {
    "about_you": {
        "project_name": "Acme",
        "founders": [{"name": "Ana", "role": "CEO"}],
        "motivation": "Resolver un problema real",
        "brand_identity": "Simple y confiable",
        "sector": "tecnologia",
        "contact_email": "ana@acme.io",
    },
    "services": {
        "services": ["Servicios digitales"],
        "has_prices": "no",
        "timeline": "2-3 meses",
        "budget_range": "menos-1000",
    },
    "target_audience": {
        "ideal_clients": [{"description": "Pymes que venden en línea"}],
        "age_range": "26-35 años",
        "decision_maker": "El dueño",
        "client_concerns": "Perder tiempo y dinero",
        "client_goals": "Vender más en línea",
    },
    "visual_style": {
        "visual_style": ["Minimalista y limpio"],
        "tone": "formal",
    },
    "branding": {},
    "content_production": {
        "video_types": ["Tutoriales paso a paso"],
        "key_messages": "Tecnología simple para todos",
        "availability": "Flexible, cualquier día",
        "location": "Remoto, Chile",
    },
    "value_content": {
        "topics_to_cover": ["Consejos y tips"],
        "data_verified": True,
    },
}


@pytest.fixture
def full_brief():
    return copy.deepcopy(FULL_BRIEF)


@pytest.fixture
def minimal_brief():
    return copy.deepcopy(MINIMAL_BRIEF)


@pytest.fixture
def full_accumulator(full_brief):
    """Validated, model_dump()-ed step values."""
    from brand_brief.wizard.schemas import validate_step

    return {key: validate_step(key, value).value.model_dump() for key, value in full_brief.items()}


@pytest.fixture
def payload(full_accumulator):
    from datetime import date

    from brand_brief.wizard.normalizer import normalize

    return normalize(full_accumulator, today=date(2025, 3, 7))
