"""Display formatting helpers for people and phone numbers."""

import re
from typing import Optional

_PHONE = re.compile(r"^(\d{2})(\d{2})(\d{2})(\d{4})$")


def capitalize_first_letter(text: str) -> str:
    return text[:1].upper() + text[1:]


def format_full_name(first_name: Optional[str], last_name: Optional[str], email: Optional[str] = None) -> str:
    """Return "First Last", falling back to the email's local part, then a placeholder."""

    parts = [part for part in (first_name, last_name) if part]
    if parts:
        return " ".join(parts)
    if email:
        return capitalize_first_letter(email.split("@")[0])
    return "Non renseigné"


def format_phone_number(phone_number: str) -> str:
    """Group a ten-digit number as "XX XX XX XXXX"; anything else is returned as is."""

    match = _PHONE.match(re.sub(r"\D", "", str(phone_number)))
    if match is None:
        return phone_number
    return " ".join(match.groups())
