"""Plain-text cleaning for single-line form fields."""

import re

_SCRIPT_STYLE_RE = re.compile(r"<(script|style)[^>]*?>.*?</\1>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>")
_LONE_LT_RE = re.compile(r"<(?=[^a-zA-Z/!?])")
_OCTET_RE = re.compile(r"%[a-fA-F0-9]{2}")
_WHITESPACE_RE = re.compile(r"[\r\n\t ]+")


def sanitize_text_field(value: object) -> str:
    """Clean a single-line text field.

    Strips markup (dropping script/style bodies), percent-encoded octets,
    line breaks and repeated whitespace, then trims the result.
    """
    if value is None:
        return ""
    text = str(value)
    text = _LONE_LT_RE.sub("&lt;", text)
    text = _SCRIPT_STYLE_RE.sub("", text)
    text = _TAG_RE.sub("", text)
    text = _OCTET_RE.sub("", text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()


def to_port(value: object) -> int:
    """Coerce a submitted port to a non-negative integer (0 when invalid)."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        # "587.0" and 587.9 both truncate to 587
        port = int(float(str(value).strip()))
    except (ValueError, OverflowError):
        return 0
    return port if port >= 0 else 0
