import unicodedata


def normalize_string(value: str) -> str:
    """
    Lower-case a string and keep only letters (any script) and ASCII digits.
    Args:
        value: String to normalize
    Returns:
        Normalized string, e.g. "Łódź 50%" -> "łódź50"
    """
    return "".join(
        char
        for char in value.lower()
        if unicodedata.category(char).startswith("L") or char in "0123456789"
    )
