# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Text normalization for comparing free-text names coming from the directory.

``normalize`` keeps punctuation (group identifiers depend on it);
``normalize_strict`` also drops it and is used for person names.
"""

import re
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")


def normalize(value) -> str:
    """Lowercase, strip diacritics and surrounding whitespace. Non-strings become ''."""
    if not isinstance(value, str):
        return ""
    decomposed = unicodedata.normalize("NFD", value.lower())
    stripped = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
    return stripped.strip()


def normalize_strict(value) -> str:
    """``normalize`` plus removal of anything outside ``[a-z0-9\\s]``."""
    return _NON_ALNUM.sub("", normalize(value)).strip()
