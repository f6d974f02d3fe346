"""
Brand Brief Field Validators

Field-level validation primitives shared by the step schemas.
Every validator returns a (is_valid, message) tuple; messages are the
Spanish texts shown next to the offending field.
"""

import re
from typing import Iterable, List, Optional, Sized, Tuple


EMAIL_PATTERN = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
URL_PATTERN = r'^https?://[a-zA-Z0-9][-a-zA-Z0-9]*(\.[a-zA-Z0-9][-a-zA-Z0-9]*)+(:\d+)?(/\S*)?$'
HEX_COLOR_PATTERN = r'^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$'
# Files uploaded through the form are referenced by token instead of URL
UPLOAD_TOKEN_PATTERN = r'^upload:[A-Za-z0-9._-]+$'


def validate_min_length(value: Optional[str], minimum: int, message: str) -> Tuple[bool, str]:
    """Validate that a text field holds at least `minimum` non-blank characters.

    Args:
        value: The text to validate
        minimum: Minimum number of characters once surrounding blanks are removed
        message: Error message to return on failure

    Returns:
        Tuple of (is_valid, message)
    """
    if value is None or len(value.strip()) < minimum:
        return False, message
    return True, "Valid"


def validate_email(email: Optional[str]) -> Tuple[bool, str]:
    """Validate email format.

    Args:
        email: The email to validate

    Returns:
        Tuple of (is_valid, message)
    """
    if not email:
        return False, "El email es obligatorio"

    if not re.match(EMAIL_PATTERN, email.strip()):
        return False, "Email inválido"

    return True, "Valid email format"


def validate_url(url: Optional[str], allow_empty: bool = False) -> Tuple[bool, str]:
    """Validate URL format.

    Args:
        url: The URL to validate
        allow_empty: If True, an empty string is accepted in lieu of a URL

    Returns:
        Tuple of (is_valid, message)
    """
    if not url or not url.strip():
        if allow_empty:
            return True, "Empty URL allowed"
        return False, "La URL es obligatoria"

    if not re.match(URL_PATTERN, url.strip()):
        return False, "Ingrese una URL válida"

    return True, "Valid URL format"


def validate_asset_reference(reference: Optional[str]) -> Tuple[bool, str]:
    """Validate an optional asset reference (logo, moodboard).

    Accepts an empty value, an http(s) URL or an upload token
    such as ``upload:logo-123.png``.
    """
    if not reference or not reference.strip():
        return True, "Empty reference allowed"

    reference = reference.strip()
    if re.match(UPLOAD_TOKEN_PATTERN, reference):
        return True, "Valid upload token"

    if re.match(URL_PATTERN, reference):
        return True, "Valid URL format"

    return False, "Ingrese una URL válida o adjunte un archivo"


def validate_hex_color(color: Optional[str]) -> Tuple[bool, str]:
    """Validate a hex color such as #fff or #A1B2C3.

    Args:
        color: The color to validate

    Returns:
        Tuple of (is_valid, message)
    """
    if not color:
        return False, "Seleccione un color"

    if not re.match(HEX_COLOR_PATTERN, color):
        return False, "Color HEX inválido"

    return True, "Valid hex color"


def validate_choice(value: Optional[str], choices: Iterable[str], message: str) -> Tuple[bool, str]:
    """Validate that a value is a member of a fixed set of options."""
    if value is None or value not in set(choices):
        return False, message
    return True, "Valid choice"


def validate_choices(values: Iterable[str], choices: Iterable[str]) -> Tuple[bool, str]:
    """Validate that every selected value belongs to the allowed options."""
    allowed = set(choices)
    unknown: List[str] = [v for v in values if v not in allowed]
    if unknown:
        return False, f"Opción no válida: {', '.join(unknown)}"
    return True, "Valid choices"


def validate_cardinality(
    items: Sized,
    minimum: int = 0,
    maximum: Optional[int] = None,
    min_message: str = "",
    max_message: str = ""
) -> Tuple[bool, str]:
    """Validate the number of entries in a collection field.

    Args:
        items: The collection to check
        minimum: Minimum number of entries
        maximum: Maximum number of entries (None for unbounded)
        min_message: Message when below the minimum
        max_message: Message when above the maximum

    Returns:
        Tuple of (is_valid, message)
    """
    if len(items) < minimum:
        return False, min_message
    if maximum is not None and len(items) > maximum:
        return False, max_message
    return True, "Valid"
