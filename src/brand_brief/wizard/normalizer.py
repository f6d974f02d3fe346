"""
Brand Brief Submission Normalizer

Flattens the accumulated step values into the canonical payload consumed by
the document template, the spreadsheet row and the PDF renderer.
"""

from dataclasses import astuple, dataclass, fields
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from brand_brief.wizard.exceptions import StepSequenceError
from brand_brief.wizard.schemas import (
    BUDGET_RANGES,
    OTHER_SERVICE,
    SECTORS,
    STEP_SCHEMAS,
    TIMELINES,
    TONES,
    label_for,
)


FALLBACK = "Sin especificar"
SEPARATOR = ", "
PRICE_KEYS = ("service1", "service2", "service3", "packages")


@dataclass(frozen=True)
class CanonicalSubmissionPayload:
    """Display-ready brief, one string per sheet column."""

    date: str
    company: str
    project_name: str
    founders: str
    motivation: str
    brand_identity: str
    services: str
    prices: str
    promotion_details: str
    age_range: str
    decision_maker: str
    client_concerns: str
    client_goals: str
    visual_style: str
    inspiration_links: str
    avoid_content: str
    primary_color: str
    secondary_color: str
    logo: str
    moodboard: str
    typography_style: str
    visual_elements: str
    willing_to_appear: str
    video_types: str
    key_messages: str
    availability: str
    location: str
    resources: str
    topics_to_cover: str
    existing_content: str
    references: str
    email: str
    sector: str
    tone: str
    timeline: str
    budget_range: str
    accent_colors: str
    ideal_clients: str
    explain_services: str

    def as_row(self) -> List[str]:
        """Values in spreadsheet column order."""
        return list(astuple(self))

    def as_dict(self) -> Dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def replacements(self) -> Dict[str, str]:
        """Document placeholder -> value."""
        return {placeholder: getattr(self, name) for name, _, placeholder in CANONICAL_FIELDS}

    def labelled(self) -> Dict[str, str]:
        """Column header -> value, for previews."""
        return {header: getattr(self, name) for name, header, _ in CANONICAL_FIELDS}


# (field, sheet header, document placeholder)
CANONICAL_FIELDS: List[Tuple[str, str, str]] = [
    ("date", "Fecha", "[FECHA]"),
    ("company", "Empresa", "[NOMBRE_EMPRESA]"),
    ("project_name", "Proyecto", "[PROYECTO]"),
    ("founders", "Fundadores", "[FUNDADORES]"),
    ("motivation", "Motivación", "[MOTIVACION]"),
    ("brand_identity", "Identidad", "[IDENTIDAD]"),
    ("services", "Servicios", "[SERVICIOS]"),
    ("prices", "Precios", "[PRECIOS]"),
    ("promotion_details", "Promociones", "[PROMOCIONES]"),
    ("age_range", "Edad Cliente", "[EDAD]"),
    ("decision_maker", "Tomador Decisiones", "[DECISIONES]"),
    ("client_concerns", "Miedos Cliente", "[MIEDOS]"),
    ("client_goals", "Objetivos Cliente", "[OBJETIVOS]"),
    ("visual_style", "Estilo Visual", "[ESTILO]"),
    ("inspiration_links", "Redes Sociales", "[REDES]"),
    ("avoid_content", "Contenido a Evitar", "[EVITAR]"),
    ("primary_color", "Color Primario", "[COLOR_PRIMARIO]"),
    ("secondary_color", "Color Secundario", "[COLOR_SECUNDARIO]"),
    ("logo", "Logo", "[LOGO]"),
    ("moodboard", "Moodboard", "[MOODBOARD]"),
    ("typography_style", "Estilo Tipografía", "[TIPOGRAFIA]"),
    ("visual_elements", "Elementos Visuales", "[ELEMENTOS_VISUALES]"),
    ("willing_to_appear", "Aparecer en Videos", "[VIDEOS]"),
    ("video_types", "Tipos de Video", "[TIPOS_VIDEO]"),
    ("key_messages", "Mensajes Clave", "[MENSAJES]"),
    ("availability", "Disponibilidad", "[DISPONIBILIDAD]"),
    ("location", "Ubicación", "[UBICACION]"),
    ("resources", "Recursos", "[RECURSOS]"),
    ("topics_to_cover", "Temas a Abordar", "[TEMAS_ABORDAR]"),
    ("existing_content", "Información Existente", "[INFO_EXISTENTE]"),
    ("references", "Referencias", "[REFERENCIAS]"),
    ("email", "Email", "[EMAIL]"),
    ("sector", "Sector", "[SECTOR]"),
    ("tone", "Tono", "[TONO]"),
    ("timeline", "Plazo", "[PLAZO]"),
    ("budget_range", "Presupuesto", "[PRESUPUESTO]"),
    ("accent_colors", "Colores de Acento", "[COLORES_ACENTO]"),
    ("ideal_clients", "Clientes Ideales", "[CLIENTES_IDEALES]"),
    ("explain_services", "Explicar Servicios", "[TEMAS_EXPLICAR]"),
]


def headers() -> List[str]:
    """Spreadsheet header row."""
    return [header for _, header, _ in CANONICAL_FIELDS]


def format_date(day: date) -> str:
    """Spanish short date, d/m/yyyy without zero padding."""
    return f"{day.day}/{day.month}/{day.year}"


def _text(value: Any) -> str:
    if value is None:
        return FALLBACK
    text = str(value).strip()
    return text or FALLBACK


def _join(values: Iterable[Any]) -> str:
    parts = [str(v).strip() for v in values if v is not None and str(v).strip()]
    return SEPARATOR.join(parts) if parts else FALLBACK


def _yes_no(value: Any) -> str:
    if value is None:
        return FALLBACK
    return "Sí" if value else "No"


def _label(options: List[Tuple[str, str]], value: Optional[str]) -> str:
    if not value:
        return FALLBACK
    return _text(label_for(options, value))


def _services(step: Mapping[str, Any]) -> str:
    custom = (step.get("custom_service") or "").strip()
    rendered = []
    for service in step.get("services") or []:
        if service == OTHER_SERVICE and custom:
            rendered.append(custom)
        else:
            rendered.append(service)
    return _join(rendered)


def _prices(step: Mapping[str, Any]) -> str:
    if step.get("has_prices") != "yes":
        return FALLBACK
    prices = step.get("prices") or {}
    return _join(prices.get(key) for key in PRICE_KEYS)


def _promotion(step: Mapping[str, Any]) -> str:
    if not step.get("has_promotion"):
        return FALLBACK
    return _text(step.get("promotion_details"))


def _founders(step: Mapping[str, Any]) -> str:
    rendered = []
    for founder in step.get("founders") or []:
        name = (founder.get("name") or "").strip()
        role = (founder.get("role") or "").strip()
        if name and role:
            rendered.append(f"{name} ({role})")
        elif name:
            rendered.append(name)
    return _join(rendered)


def _missing_steps(accumulator: Mapping[str, Any]) -> List[str]:
    return [key for key in STEP_SCHEMAS if accumulator.get(key) is None]


def normalize(accumulator: Mapping[str, Mapping[str, Any]], today: Optional[date] = None) -> CanonicalSubmissionPayload:
    """Build the canonical payload from a complete accumulator.

    Args:
        accumulator: Step key -> validated step value (plain dict)
        today: Submission date; defaults to the local current date

    Returns:
        CanonicalSubmissionPayload

    Raises:
        StepSequenceError: if any step is missing from the accumulator
    """
    missing = _missing_steps(accumulator)
    if missing:
        raise StepSequenceError(
            f"Cannot normalize an incomplete brief (missing: {', '.join(missing)})",
            step=missing[0]
        )

    about = accumulator["about_you"]
    services = accumulator["services"]
    audience = accumulator["target_audience"]
    visual = accumulator["visual_style"]
    branding = accumulator["branding"]
    production = accumulator["content_production"]
    content = accumulator["value_content"]

    return CanonicalSubmissionPayload(
        date=format_date(today or date.today()),
        company=_text(about.get("company")),
        project_name=_text(about.get("project_name")),
        founders=_founders(about),
        motivation=_text(about.get("motivation")),
        brand_identity=_text(about.get("brand_identity")),
        services=_services(services),
        prices=_prices(services),
        promotion_details=_promotion(services),
        age_range=_text(audience.get("age_range")),
        decision_maker=_text(audience.get("decision_maker")),
        client_concerns=_text(audience.get("client_concerns")),
        client_goals=_text(audience.get("client_goals")),
        visual_style=_join(visual.get("visual_style") or []),
        inspiration_links=_join(link.get("url") for link in visual.get("inspiration_links") or []),
        avoid_content=_text(visual.get("avoid_content")),
        primary_color=_text(branding.get("primary_color")),
        secondary_color=_text(branding.get("secondary_color")),
        logo=_text(branding.get("logo_url")),
        moodboard=_text(branding.get("moodboard_url")),
        typography_style=_text(branding.get("typography_style")),
        visual_elements=_text(branding.get("visual_elements")),
        willing_to_appear=_yes_no(production.get("willing_to_appear")),
        video_types=_join(production.get("video_types") or []),
        key_messages=_text(production.get("key_messages")),
        availability=_text(production.get("availability")),
        location=_text(production.get("location")),
        resources=_text(production.get("resources")),
        topics_to_cover=_join(content.get("topics_to_cover") or []),
        existing_content=_text(content.get("existing_content")),
        references=_text(content.get("references")),
        email=_text(about.get("contact_email")),
        sector=_label(SECTORS, about.get("sector")),
        tone=_label(TONES, visual.get("tone")),
        timeline=_label(TIMELINES, services.get("timeline")),
        budget_range=_label(BUDGET_RANGES, services.get("budget_range")),
        accent_colors=_join(branding.get("accent_colors") or []),
        ideal_clients=_join(client.get("description") for client in audience.get("ideal_clients") or []),
        explain_services=_yes_no(content.get("explain_services")),
    )
