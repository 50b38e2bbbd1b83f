# services/text_normalizer.py
import re
import unicodedata
from typing import Optional

_whitespace_re = re.compile(r"\s+")


def normalize_text(text: Optional[str]) -> str:
    """
    Lower-case, strip diacritics and collapse whitespace.

    "Příští  Rok" -> "pristi rok"
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", text.lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _whitespace_re.sub(" ", stripped).strip()
