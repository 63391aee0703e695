"""Sort key approximating a case-insensitive locale comparison."""

import unicodedata


def strip_accents(text: str) -> str:
    """Drop combining marks, so ``élan`` compares like ``elan``."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def locale_sort_key(name: str) -> tuple[str, str, str]:
    """Order by base letters, then accents, then lowercase before uppercase."""
    folded = name.casefold()
    return (strip_accents(folded), folded, name.swapcase())
