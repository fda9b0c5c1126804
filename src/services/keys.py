"""Canonical cache keys for ingredient lists."""

KEY_DELIMITER = ","


def canonicalize_ingredients(ingredients: list[str]) -> str:
    """Derive the cache key for an ingredient list.

    Sorts a copy by codepoint (case-sensitive, no locale folding) and joins it
    with a comma. No trimming or case folding: "Tomato" and "tomato " produce
    different keys. Callers must reject empty input before calling.

    Example:
        >>> canonicalize_ingredients(["Tomato", "Cheese"])
        'Cheese,Tomato'
    """
    return KEY_DELIMITER.join(sorted(list(ingredients)))
