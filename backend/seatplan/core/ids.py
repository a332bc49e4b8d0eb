"""Identifier and display color helpers."""

import secrets
import string
from typing import Container

ID_ALPHABET = string.digits + string.ascii_lowercase
ID_LENGTH = 9
HEX_DIGITS = "0123456789ABCDEF"


def generate_id(prefix: str, taken: Container[str] = ()) -> str:
    """
    Generate an opaque identifier: prefix plus random base-36 suffix.

    Example:
        >>> generate_id("table_")
        'table_4fk2m0q9z'
    """
    while True:
        candidate = prefix + "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_LENGTH))
        if candidate not in taken:
            return candidate


def random_color() -> str:
    """Random display color in `#RRGGBB` form."""
    return "#" + "".join(secrets.choice(HEX_DIGITS) for _ in range(6))
