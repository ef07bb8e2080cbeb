"""
French-aware string collation.

Comparison is case-insensitive and accent-insensitive: accented letters sort
next to their base letter, ligatures expand (``œ`` -> ``oe``) and typographic
apostrophes fold to ``'``, so "L’Atelier" sorts before "La Ferme" as in a
base-sensitivity French collation.
"""

import unicodedata
from typing import Iterable, List, Optional

_FOLDED_CHARS = str.maketrans({"œ": "oe", "Œ": "OE", "æ": "ae", "Æ": "AE", "’": "'", "‘": "'"})


def fold(text: Optional[str]) -> str:
    """Case- and diacritic-folded form used for matching and ordering."""
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text.translate(_FOLDED_CHARS))
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def collation_key(text: Optional[str]) -> str:
    return fold(text)


def compare(a: Optional[str], b: Optional[str]) -> int:
    ka, kb = collation_key(a), collation_key(b)
    return (ka > kb) - (ka < kb)


def contains(haystack: Optional[str], needle: str) -> bool:
    """True when the folded needle occurs in the folded haystack."""
    return fold(needle) in fold(haystack)


def sort_unique(values: Iterable[str]) -> List[str]:
    unique = dict.fromkeys(v for v in values if v)
    return sorted(unique, key=lambda v: (collation_key(v), v))
