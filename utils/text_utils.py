"""
Text utilities for handling Spanish text with accents.

Used for item identifiers and case/accent-insensitive search.
"""

import re
import unicodedata
from typing import Optional

# Only these letters are folded when building identifiers; anything else
# outside [a-z0-9] becomes an underscore.
_IDENTIFIER_FOLDS = str.maketrans({
    "á": "a", "à": "a", "ä": "a", "â": "a",
    "é": "e", "è": "e", "ë": "e", "ê": "e",
    "í": "i", "ì": "i", "ï": "i", "î": "i",
    "ó": "o", "ò": "o", "ö": "o", "ô": "o",
    "ú": "u", "ù": "u", "ü": "u", "û": "u",
    "ñ": "n",
})


def slugify_identifier(text: str) -> str:
    """
    Build a lowercase ASCII identifier from a display name.

    - "Hamburguesa Clásica" → "hamburguesa_clasica"
    - "  Piña  Colada!! " → "pina_colada"
    - "Año 2024 / Edición" → "ano_2024_edicion"

    Args:
        text: Display name (may have accents, spaces, punctuation)

    Returns:
        Identifier made of [a-z0-9_], possibly empty
    """
    slug = text.lower().translate(_IDENTIFIER_FOLDS)
    slug = re.sub(r"[^a-z0-9]", "_", slug)
    slug = re.sub(r"_+", "_", slug)
    return slug.strip("_")


def normalize_search_text(text: Optional[str]) -> str:
    """
    Normalize text for search comparison.

    Handles Spanish accents and case:
    - "Mecánica Los Hermanos" → "mecanica los hermanos"
    - None → ""

    Args:
        text: Original text

    Returns:
        Lowercase text without accent marks
    """
    if not text:
        return ""

    # NFD decomposition separates base chars from accents
    normalized = unicodedata.normalize('NFD', str(text))

    # Remove accent marks (combining characters in Unicode category 'Mn')
    return ''.join(
        c for c in normalized
        if unicodedata.category(c) != 'Mn'
    ).lower().strip()


def matches_search(term: Optional[str], *values: Optional[str]) -> bool:
    """True if term is empty or contained in any of the values."""
    needle = normalize_search_text(term)
    if not needle:
        return True
    return any(needle in normalize_search_text(v) for v in values)
