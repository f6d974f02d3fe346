"""
Brand Brief Step Schemas

Pydantic models for the seven wizard steps. Each step validates a candidate
dict and yields either the typed step value or an error map keyed by dotted
field path (``founders.0.name``) with every violation reported at once.
"""

from dataclasses import dataclass, field
from typing import Annotated, Any, Dict, List, Optional, Tuple, Type

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from brand_brief.wizard.validators import (
    validate_asset_reference,
    validate_cardinality,
    validate_choice,
    validate_choices,
    validate_email,
    validate_hex_color,
    validate_min_length,
    validate_url,
)


ErrorMap = Dict[str, List[str]]

# Sentinel option that requires a companion free-text field
OTHER_SERVICE = "Otro"

SECTORS = [
    ("joyeria", "Joyería"),
    ("moda", "Moda"),
    ("belleza", "Belleza"),
    ("turismo", "Turismo"),
    ("alimentos", "Alimentos"),
    ("tecnologia", "Tecnología"),
    ("educacion", "Educación"),
    ("salud", "Salud"),
    ("otro", "Otro"),
]

TONES = [
    ("formal", "Formal"),
    ("casual", "Casual"),
    ("creativo", "Creativo"),
    ("cercano", "Cercano"),
]

TIMELINES = [
    ("1-2 semanas", "1-2 semanas"),
    ("1 mes", "1 mes"),
    ("2-3 meses", "2-3 meses"),
    ("3-6 meses", "3-6 meses"),
    ("6+ meses", "6+ meses"),
]

BUDGET_RANGES = [
    ("menos-1000", "Menos de $1,000 USD"),
    ("1000-5000", "$1,000 - $5,000 USD"),
    ("5000-15000", "$5,000 - $15,000 USD"),
    ("15000-50000", "$15,000 - $50,000 USD"),
    ("mas-50000", "Más de $50,000 USD"),
]

PRICE_CHOICES = [
    ("yes", "Sí"),
    ("no", "Aún no"),
]

SERVICE_OPTIONS = [
    "Consultoría individual",
    "Servicios grupales",
    "Productos físicos",
    "Servicios digitales",
    "Cursos y capacitaciones",
    "Mantenimiento y soporte",
    "Servicios de instalación",
    OTHER_SERVICE,
]

AGE_RANGES = [
    "0-5 años",
    "6-12 años",
    "13-17 años",
    "18-25 años",
    "26-35 años",
    "36-45 años",
    "46-55 años",
    "56-65 años",
    "65+ años",
    "Todas las edades",
]

VISUAL_STYLE_OPTIONS = [
    "Elegante y sofisticado",
    "Minimalista y limpio",
    "Vibrante y energético",
    "Orgánico y natural",
    "Lujoso y premium",
    "Artesanal y auténtico",
    "Tecnológico y moderno",
    "Cálido y acogedor",
    "Profesional y confiable",
    "Creativo y artístico",
]

VIDEO_TYPES = [
    "Videos educativos/explicativos",
    "Testimonios de clientes",
    "Behind the scenes",
    "Tutoriales paso a paso",
    "Videos de presentación personal",
    "Contenido motivacional",
    "Videos de procesos",
    "Q&A (Preguntas y respuestas)",
]

AVAILABILITY_OPTIONS = [
    "Lunes a viernes, mañanas",
    "Lunes a viernes, tardes",
    "Fines de semana",
    "Solo sábados",
    "Solo domingos",
    "Flexible, cualquier día",
]

TOPIC_OPTIONS = [
    "Beneficios del servicio",
    "Proceso de trabajo",
    "Casos de éxito",
    "Testimonios de clientes",
    "Consejos y tips",
    "Tendencias del mercado",
    "Innovación y tecnología",
    "Calidad y excelencia",
    "Valor agregado",
    "Diferenciación competitiva",
]

MAX_INSPIRATION_LINKS = 3
MAX_ACCENT_COLORS = 3

# Messages for pydantic's built-in error types
ERROR_MESSAGES = {
    "missing": "Este campo es obligatorio",
    "string_type": "Debe ser un texto",
    "bool_type": "Debe ser sí o no",
    "bool_parsing": "Debe ser sí o no",
    "list_type": "Debe ser una lista",
    "model_type": "Formato inválido",
    "model_attributes_type": "Formato inválido",
    "dict_type": "Formato inválido",
}

FORM_ERROR_PATH = "_form"


def option_values(options: List[Tuple[str, str]]) -> List[str]:
    """Return the stored values of a (value, label) option list."""
    return [value for value, _ in options]


def label_for(options: List[Tuple[str, str]], value: Optional[str]) -> Optional[str]:
    """Return the display label for a stored option value."""
    for option_value, label in options:
        if option_value == value:
            return label
    return value


def _raise_if_invalid(result: Tuple[bool, str]) -> None:
    is_valid, message = result
    if not is_valid:
        raise PydanticCustomError("brief_field", message)


def min_text(minimum: int, message: str) -> AfterValidator:
    """Annotated validator enforcing a minimum text length."""

    def check(value: str) -> str:
        _raise_if_invalid(validate_min_length(value, minimum, message))
        return value

    return AfterValidator(check)


def one_of(choices: List[str], message: str) -> AfterValidator:
    """Annotated validator enforcing membership of a fixed option set."""

    def check(value: str) -> str:
        _raise_if_invalid(validate_choice(value, choices, message))
        return value

    return AfterValidator(check)


def selection(choices: List[str], message: str) -> AfterValidator:
    """Annotated validator for a multi-select: at least one known option."""

    def check(value: List[str]) -> List[str]:
        _raise_if_invalid(validate_cardinality(value, minimum=1, min_message=message))
        _raise_if_invalid(validate_choices(value, choices))
        return value

    return AfterValidator(check)


def _check_hex_color(value: str) -> str:
    _raise_if_invalid(validate_hex_color(value))
    return value


HexColor = Annotated[str, AfterValidator(_check_hex_color)]


class StepSchema(BaseModel):
    """Base model for a wizard step; defaults are validated like user input."""

    model_config = ConfigDict(validate_default=True, extra="ignore")


# Step 1: Sobre ustedes

class Founder(StepSchema):
    """A founder and the role they play in the project."""

    name: Annotated[str, min_text(2, "El nombre es requerido")] = ""
    role: Annotated[str, min_text(2, "El rol es requerido")] = ""


class AboutYouStep(StepSchema):
    """Project identity, founders and contact details."""

    project_name: Annotated[str, min_text(2, "El nombre del proyecto debe tener al menos 2 caracteres")] = ""
    company: str = Field(default="", description="Legal or commercial name, optional")
    founders: List[Founder] = Field(default_factory=lambda: [{"name": "", "role": ""}])
    motivation: Annotated[str, min_text(10, "Cuéntanos más sobre su motivación (mínimo 10 caracteres)")] = ""
    brand_identity: Annotated[str, min_text(10, "Describa cómo quieren ser recordados como marca")] = ""
    sector: Annotated[str, one_of(option_values(SECTORS), "Selecciona un sector")] = ""
    contact_email: str = ""

    @field_validator("company")
    @classmethod
    def check_company(cls, value: str) -> str:
        if value.strip():
            _raise_if_invalid(validate_min_length(value, 2, "El nombre de la empresa debe tener al menos 2 caracteres"))
        return value

    @field_validator("founders")
    @classmethod
    def check_founders(cls, value: List[Founder]) -> List[Founder]:
        _raise_if_invalid(validate_cardinality(value, minimum=1, min_message="Debe haber al menos un fundador"))
        return value

    @field_validator("contact_email")
    @classmethod
    def check_contact_email(cls, value: str) -> str:
        _raise_if_invalid(validate_email(value))
        return value


# Step 2: Qué ofrecen

class Prices(StepSchema):
    """Optional price list, only collected when prices are already defined."""

    service1: str = ""
    service2: str = ""
    service3: str = ""
    packages: str = ""


class ServicesStep(StepSchema):
    """Services offered, pricing, launch promotion, timeline and budget."""

    services: Annotated[List[str], selection(SERVICE_OPTIONS, "Seleccione al menos un servicio")] = Field(
        default_factory=list
    )
    custom_service: str = ""
    has_prices: Annotated[str, one_of(option_values(PRICE_CHOICES), "Indique si ya tienen precios definidos")] = ""
    prices: Prices = Field(
        default_factory=lambda: {"service1": "", "service2": "", "service3": "", "packages": ""}
    )
    has_promotion: bool = False
    promotion_details: str = ""
    timeline: Annotated[str, one_of(option_values(TIMELINES), "Selecciona un plazo")] = ""
    budget_range: Annotated[str, one_of(option_values(BUDGET_RANGES), "Selecciona un rango de presupuesto")] = ""

    @field_validator("custom_service")
    @classmethod
    def check_custom_service(cls, value: str, info: ValidationInfo) -> str:
        # services is declared first, so its validated value is available here
        if OTHER_SERVICE in info.data.get("services", []) and not value.strip():
            raise PydanticCustomError("brief_field", "Debe describir su servicio personalizado")
        return value


# Step 3: A quién ayudan

class IdealClient(StepSchema):
    description: Annotated[str, min_text(10, "Describa a su cliente ideal")] = ""


class TargetAudienceStep(StepSchema):
    """Who the business serves and what moves them."""

    ideal_clients: List[IdealClient] = Field(default_factory=lambda: [{"description": ""}])
    age_range: Annotated[str, one_of(AGE_RANGES, "Seleccione el rango de edad")] = ""
    decision_maker: Annotated[str, min_text(5, "Describa quién toma la decisión de compra")] = ""
    client_concerns: Annotated[str, min_text(10, "Describa las dudas o miedos de su cliente")] = ""
    client_goals: Annotated[str, min_text(10, "Describa qué quiere lograr su cliente")] = ""

    @field_validator("ideal_clients")
    @classmethod
    def check_ideal_clients(cls, value: List[IdealClient]) -> List[IdealClient]:
        _raise_if_invalid(validate_cardinality(
            value, minimum=1, min_message="Describa al menos un tipo de cliente ideal"
        ))
        return value


# Step 4: Estilo visual

class InspirationLink(StepSchema):
    url: str = ""

    @field_validator("url")
    @classmethod
    def check_url(cls, value: str) -> str:
        _raise_if_invalid(validate_url(value, allow_empty=True))
        return value


class VisualStyleStep(StepSchema):
    """Visual style, communication tone and inspiration."""

    visual_style: Annotated[List[str], selection(VISUAL_STYLE_OPTIONS, "Seleccione al menos un estilo visual")] = Field(
        default_factory=list
    )
    tone: Annotated[str, one_of(option_values(TONES), "Selecciona un tono de comunicación")] = ""
    inspiration_links: List[InspirationLink] = Field(default_factory=lambda: [{"url": ""}])
    avoid_content: str = ""

    @field_validator("inspiration_links")
    @classmethod
    def check_inspiration_links(cls, value: List[InspirationLink]) -> List[InspirationLink]:
        _raise_if_invalid(validate_cardinality(
            value,
            maximum=MAX_INSPIRATION_LINKS,
            max_message=f"Máximo {MAX_INSPIRATION_LINKS} enlaces de inspiración"
        ))
        return value


# Step 5: Branding

class BrandingStep(StepSchema):
    """Brand colors, logo, moodboard and typography."""

    primary_color: HexColor = "#000000"
    secondary_color: HexColor = "#FFFFFF"
    accent_colors: List[HexColor] = Field(default_factory=list)
    logo_url: str = ""
    moodboard_url: str = ""
    typography_style: str = ""
    visual_elements: str = ""

    @field_validator("accent_colors")
    @classmethod
    def check_accent_colors(cls, value: List[str]) -> List[str]:
        _raise_if_invalid(validate_cardinality(
            value, maximum=MAX_ACCENT_COLORS, max_message=f"Máximo {MAX_ACCENT_COLORS} colores"
        ))
        return value

    @field_validator("logo_url", "moodboard_url")
    @classmethod
    def check_asset_reference(cls, value: str) -> str:
        _raise_if_invalid(validate_asset_reference(value))
        return value


# Step 6: Producción

class ContentProductionStep(StepSchema):
    """Video production preferences and logistics."""

    willing_to_appear: bool = False
    video_types: Annotated[List[str], selection(VIDEO_TYPES, "Seleccione al menos un tipo de video")] = Field(
        default_factory=list
    )
    key_messages: Annotated[str, min_text(10, "Describa los mensajes clave")] = ""
    availability: Annotated[str, one_of(AVAILABILITY_OPTIONS, "Seleccione su disponibilidad")] = ""
    location: Annotated[str, min_text(5, "Ingrese la dirección")] = ""
    resources: str = ""


# Step 7: Contenido y revisión

class ValueContentStep(StepSchema):
    """Educational content topics and the final review acknowledgement."""

    explain_services: bool = False
    topics_to_cover: Annotated[List[str], selection(TOPIC_OPTIONS, "Seleccione al menos un tema")] = Field(
        default_factory=list
    )
    existing_content: str = ""
    references: str = ""
    data_verified: bool = False

    @field_validator("data_verified")
    @classmethod
    def check_data_verified(cls, value: bool) -> bool:
        if value is not True:
            raise PydanticCustomError("brief_field", "Debes verificar que la información es correcta")
        return value


STEP_SCHEMAS: Dict[str, Type[StepSchema]] = {
    "about_you": AboutYouStep,
    "services": ServicesStep,
    "target_audience": TargetAudienceStep,
    "visual_style": VisualStyleStep,
    "branding": BrandingStep,
    "content_production": ContentProductionStep,
    "value_content": ValueContentStep,
}


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one step candidate."""

    value: Optional[StepSchema] = None
    errors: ErrorMap = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.value is not None and not self.errors


def field_path(loc: Tuple[Any, ...]) -> str:
    """Convert a pydantic error location into a dotted field path."""
    if not loc:
        return FORM_ERROR_PATH
    return ".".join(str(part) for part in loc)


def errors_from_exception(error: ValidationError) -> ErrorMap:
    """Collect every violation of a pydantic ValidationError into an error map."""
    errors: ErrorMap = {}
    for detail in error.errors():
        if detail["type"] == "brief_field":
            message = detail["msg"]
        else:
            message = ERROR_MESSAGES.get(detail["type"], detail["msg"])
        messages = errors.setdefault(field_path(detail["loc"]), [])
        if message not in messages:
            messages.append(message)
    return errors


def get_schema(step_key: str) -> Type[StepSchema]:
    """Return the schema registered for a step key."""
    try:
        return STEP_SCHEMAS[step_key]
    except KeyError:
        raise KeyError(f"Unknown wizard step: {step_key}") from None


def validate_step(step_key: str, candidate: Any) -> ValidationResult:
    """Validate a candidate value for one step.

    Args:
        step_key: Key of the step whose schema applies
        candidate: Untyped step data, usually a dict built from the form draft

    Returns:
        ValidationResult with the typed value, or the error map
    """
    schema = get_schema(step_key)
    try:
        return ValidationResult(value=schema.model_validate(candidate))
    except ValidationError as e:
        return ValidationResult(errors=errors_from_exception(e))


def schema_defaults(step_key: str) -> Dict[str, Any]:
    """Return the default draft value for a step (plain, JSON-compatible data)."""
    schema = get_schema(step_key)
    return {
        name: info.get_default(call_default_factory=True)
        for name, info in schema.model_fields.items()
    }
