"""URL slug generation for post titles."""

import re
import unicodedata

_INVALID_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def slugify(title: str) -> str:
    """
    Lower-case, accent-free, hyphen-separated slug.

    "Post com Título Acentuado!" -> "post-com-titulo-acentuado"
    """
    text = unicodedata.normalize("NFD", title.lower())
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    text = _INVALID_CHARS.sub("", text)
    text = _WHITESPACE.sub("-", text)
    text = _HYPHENS.sub("-", text)
    return text.strip("-")
