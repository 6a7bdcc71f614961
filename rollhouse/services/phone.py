"""
Phone number normalization for SMS delivery.
"""

import re

_NON_DIALABLE = re.compile(r"[^\d+]")


def format_phone_e164(phone: str, country_code: str = "+34") -> str:
    """
    Normalize a phone number into international (E.164-style) format.

    This is a best-effort syntactic rewrite, not a validator: digit counts
    and regions are never checked.

    Examples:
        >>> format_phone_e164("0612345678", "+34")
        '+34612345678'
        >>> format_phone_e164("612 345 678")
        '+34612345678'
        >>> format_phone_e164("+34612345678")
        '+34612345678'
    """
    cleaned = _NON_DIALABLE.sub("", phone)

    # Already international
    if cleaned.startswith("+"):
        return cleaned

    # Local trunk prefix
    if cleaned.startswith("0"):
        return country_code + cleaned[1:]

    if not cleaned.startswith(country_code.replace("+", "")):
        return country_code + cleaned

    return "+" + cleaned
