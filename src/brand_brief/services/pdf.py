"""
Brand Brief PDF Renderer

Renders the canonical payload as a one-document A4 brief with a header and
four fixed sections, using the brand's primary and secondary colors as
accents.
"""

import io
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from brand_brief.wizard.logging_config import get_logger
from brand_brief.wizard.normalizer import FALLBACK, CanonicalSubmissionPayload


logger = get_logger("services.pdf")

RGB = Tuple[float, float, float]

# Used when a brand color cannot be parsed
DEFAULT_PRIMARY: RGB = (0.23, 0.51, 0.96)
DEFAULT_SECONDARY: RGB = (0.12, 0.25, 0.69)

HEX_RE = re.compile(r'^#?([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$')


@dataclass(frozen=True)
class PdfSection:
    title: str
    rows: List[Tuple[str, str]]


def hex_to_rgb(value: Optional[str], fallback: RGB = DEFAULT_PRIMARY) -> RGB:
    """Convert ``#RRGGBB``, ``RRGGBB`` or ``#RGB`` to 0-1 floats.

    Anything else yields `fallback`.
    """
    match = HEX_RE.match((value or "").strip())
    if not match:
        return fallback
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return tuple(int(digits[i:i + 2], 16) / 255 for i in (0, 2, 4))


def build_sections(payload: CanonicalSubmissionPayload) -> List[PdfSection]:
    """The four body sections in display order."""
    return [
        PdfSection("1. Información básica", [
            ("Empresa", payload.company),
            ("Proyecto", payload.project_name),
            ("Sector", payload.sector),
            ("Fundadores", payload.founders),
            ("Contacto", payload.email),
            ("Motivación", payload.motivation),
            ("Identidad", payload.brand_identity),
            ("Servicios", payload.services),
            ("Precios", payload.prices),
            ("Promociones", payload.promotion_details),
            ("Plazo", payload.timeline),
            ("Presupuesto", payload.budget_range),
        ]),
        PdfSection("2. Identidad visual", [
            ("Color primario", payload.primary_color),
            ("Color secundario", payload.secondary_color),
            ("Colores de acento", payload.accent_colors),
            ("Logo", payload.logo),
            ("Moodboard", payload.moodboard),
            ("Tipografía", payload.typography_style),
            ("Elementos visuales", payload.visual_elements),
        ]),
        PdfSection("3. Estilo y tono", [
            ("Estilo visual", payload.visual_style),
            ("Tono", payload.tone),
            ("Inspiración", payload.inspiration_links),
            ("Contenido a evitar", payload.avoid_content),
            ("Mensajes clave", payload.key_messages),
        ]),
        PdfSection("4. Uso de marca", [
            ("Clientes ideales", payload.ideal_clients),
            ("Edad del cliente", payload.age_range),
            ("Toma de decisiones", payload.decision_maker),
            ("Miedos del cliente", payload.client_concerns),
            ("Objetivos del cliente", payload.client_goals),
            ("Aparecer en videos", payload.willing_to_appear),
            ("Tipos de video", payload.video_types),
            ("Disponibilidad", payload.availability),
            ("Ubicación", payload.location),
            ("Recursos", payload.resources),
            ("Explicar servicios", payload.explain_services),
            ("Temas a abordar", payload.topics_to_cover),
            ("Información existente", payload.existing_content),
            ("Referencias", payload.references),
        ]),
    ]


def _styles(primary: colors.Color, secondary: colors.Color) -> dict:
    base = getSampleStyleSheet()
    return {
        "title": ParagraphStyle("BriefTitle", parent=base["Title"], fontSize=24, textColor=primary, alignment=0),
        "subtitle": ParagraphStyle("BriefSubtitle", parent=base["Normal"], fontSize=12, textColor=secondary),
        "client": ParagraphStyle("BriefClient", parent=base["Normal"], fontSize=14, textColor=colors.HexColor("#666666")),
        "date": ParagraphStyle("BriefDate", parent=base["Normal"], fontSize=10, textColor=colors.HexColor("#808080")),
        "heading": ParagraphStyle("BriefHeading", parent=base["Heading2"], fontSize=16, textColor=primary),
        "label": ParagraphStyle("BriefLabel", parent=base["Normal"], fontName="Helvetica-Bold", fontSize=10),
        "body": ParagraphStyle("BriefBody", parent=base["Normal"], fontSize=10, leading=13),
    }


def _section_table(section: PdfSection, styles: dict, accent: colors.Color) -> Table:
    data = [
        [Paragraph(escape(label), styles["label"]), Paragraph(escape(value or FALLBACK), styles["body"])]
        for label, value in section.rows
    ]
    table = Table(data, colWidths=[4.5 * cm, 12 * cm])
    table.setStyle(TableStyle([
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("LINEBELOW", (0, 0), (-1, -1), 0.25, colors.HexColor("#CCCCCC")),
        ("LINEBEFORE", (0, 0), (0, -1), 2, accent),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
    ]))
    return table


def _palette(primary: colors.Color, secondary: colors.Color) -> Table:
    swatches = Table([["", ""]], colWidths=[1.5 * cm, 1.5 * cm], rowHeights=[0.6 * cm])
    swatches.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (0, 0), primary),
        ("BACKGROUND", (1, 0), (1, 0), secondary),
        ("BOX", (0, 0), (-1, -1), 0.25, colors.HexColor("#999999")),
    ]))
    return swatches


def render_pdf(
    payload: CanonicalSubmissionPayload,
    output: Optional[Union[str, Path]] = None
) -> bytes:
    """Render the brief.

    Args:
        payload: Canonical submission payload
        output: Optional file path; the PDF is also written there

    Returns:
        The PDF bytes
    """
    primary = colors.Color(*hex_to_rgb(payload.primary_color, DEFAULT_PRIMARY))
    secondary = colors.Color(*hex_to_rgb(payload.secondary_color, DEFAULT_SECONDARY))
    styles = _styles(primary, secondary)

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=2 * cm,
        rightMargin=2 * cm,
        topMargin=2 * cm,
        bottomMargin=2 * cm,
        title=f"Brand Brief - {payload.project_name}",
        author="Digit Ads",
    )

    client = payload.company if payload.company != FALLBACK else payload.project_name
    story = [
        Paragraph("BRAND BRIEF", styles["title"]),
        Paragraph("Generado por Digit Ads", styles["subtitle"]),
        Spacer(1, 0.3 * cm),
        Paragraph(f"Cliente: {escape(client)}", styles["client"]),
        Paragraph(f"Fecha: {escape(payload.date)}", styles["date"]),
        Spacer(1, 0.3 * cm),
        _palette(primary, secondary),
        Spacer(1, 0.5 * cm),
    ]

    for index, section in enumerate(build_sections(payload)):
        accent = primary if index % 2 == 0 else secondary
        story.append(Paragraph(escape(section.title.upper()), styles["heading"]))
        story.append(_section_table(section, styles, accent))
        story.append(Spacer(1, 0.5 * cm))

    doc.build(story)
    pdf = buffer.getvalue()

    if output is not None:
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(pdf)
        logger.info("Wrote brief PDF to %s", path)

    return pdf
