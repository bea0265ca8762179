"""Color helpers for day tinting.

Tint colors are free-form user strings. Only hex colors are converted; anything
too short to be a hex color is passed through untouched.
"""

import string

_HEX_DIGITS = frozenset(string.hexdigits)


def _parse_hex_prefix(value: str) -> int:
    """Parse the leading hex number of value as an unsigned 32-bit integer.

    Surrounding whitespace, one sign and a ``0x`` prefix are accepted before
    the digits, and parsing stops at the first non-hex character. Negative
    numbers wrap to their two's complement. No digits at all gives 0.
    """
    text = value.strip()
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    if text[:2].lower() == "0x":
        text = text[2:]

    digits = []
    for char in text:
        if char not in _HEX_DIGITS:
            break
        digits.append(char)
    if not digits:
        return 0
    return (sign * int("".join(digits), 16)) & 0xFFFFFFFF


def _format_alpha(alpha: float) -> str:
    if isinstance(alpha, float) and alpha.is_integer():
        return str(int(alpha))
    return str(alpha)


def hex_to_rgba(hex_color: str | None, alpha: float) -> str | None:
    """Convert a hex color to an ``rgba(r,g,b,alpha)`` string.

    Accepts 3- or 6-digit hex, with or without a leading ``#``. Shorthand is
    expanded by doubling each digit. Inputs that are empty or shorter than
    4 characters are returned unchanged.

    Malformed longer strings are not rejected: their leading hex digits are
    still parsed, which yields a well-formed but arbitrary color.

    Args:
        hex_color: Color string such as ``"#4fc3f7"`` or ``"fff"``
        alpha: Opacity written verbatim into the result

    Returns:
        ``rgba(...)`` string, or the input itself when it is not convertible
    """
    if not hex_color or len(hex_color) < 4:
        return hex_color

    digits = hex_color.replace("#", "", 1)
    if len(digits) == 3:
        digits = "".join(char * 2 for char in digits)

    value = _parse_hex_prefix(digits)
    red = (value >> 16) & 255
    green = (value >> 8) & 255
    blue = value & 255
    return f"rgba({red},{green},{blue},{_format_alpha(alpha)})"
