"""Lightweight validation helpers for article fields."""

from email.utils import formataddr, getaddresses
from typing import Any, List, Optional

from pydantic.networks import validate_email

from utils.error_handling import InvalidAddressError


def ensure_present(value: Any, field: str) -> None:
    """Raise ValueError if value is falsy."""
    if value in (None, "", []):
        raise ValueError(f"{field} is required")


def parse_addresses(value: Optional[str], field: str) -> List[str]:
    """Split a recipient list and validate each address.

    Entries keep their display name, so ``"Braun, Nicole" <n@example.com>``
    stays one recipient.
    """
    raw = (value or "").strip()
    if not raw.replace(",", "").strip():
        return []

    addresses = []
    for name, address in getaddresses([raw]):
        if not address:
            raise InvalidAddressError(field, raw)
        try:
            _, normalized = validate_email(address)
        except ValueError:
            raise InvalidAddressError(field, address)
        addresses.append(formataddr((name, normalized)) if name else normalized)
    return addresses
