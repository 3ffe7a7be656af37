import html
from typing import Optional


def sanitize_string(value: Optional[str]) -> Optional[str]:
    """
    Sanitize a string by escaping HTML special characters to prevent XSS.
    Returns None if input is None.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        return value
    return html.escape(value.strip(), quote=True)


def sanitize_text(value: Optional[str], max_length: int = 5000) -> Optional[str]:
    """Escape free text and clamp it to ``max_length`` characters"""
    cleaned = sanitize_string(value)
    if cleaned is None:
        return None
    return cleaned[:max_length]
