# Shade blocks ordered from empty to full: space, light, medium, dark, full block
DEFAULT_CHARSET = " ░▒▓█"


def validate_charset(charset: str) -> str:
    """Return the charset unchanged, or raise ValueError if it has no glyphs."""
    if not charset:
        raise ValueError("Charset must contain at least one character")
    return charset
