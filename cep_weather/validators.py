"""
Input validation for postal codes (CEP).
"""

import re

# Eight ASCII digits, no separators or surrounding whitespace.
CEP_PATTERN = re.compile(r"[0-9]{8}")


def is_valid_cep(cep: str) -> bool:
    """Return True if the CEP is exactly eight ASCII decimal digits."""
    return CEP_PATTERN.fullmatch(cep) is not None
