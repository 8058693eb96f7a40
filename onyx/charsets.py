# -*- coding: utf-8 -*-
"""Code tables shared by the command line and the filters."""

import string
from typing import Dict, List, Sequence, Tuple

ALLOWED_CODES: Dict[str, str] = {
    "l": string.ascii_lowercase,
    "u": string.ascii_uppercase,
    "d": string.digits,
    "s": "!@#$%^&*()-_=+[]{}|;:,.<>?/",
}

ALL_LOWER = "all-lower"
ALL_UPPER = "all-upper"
ALL_DIGITS = "all-digits"
NO_SYMBOLS = "no-symbols"

EXCLUDE_CODES: Dict[str, str] = {
    "x": ALL_LOWER,
    "y": ALL_UPPER,
    "z": ALL_DIGITS,
    "w": NO_SYMBOLS,
}

EXCLUSION_RULES = frozenset(EXCLUDE_CODES.values())


def dedupe(chars: str) -> str:
    """Drop repeated characters, keeping first occurrences in order."""
    seen = set()
    return "".join(c for c in chars if not (c in seen or seen.add(c)))


def resolve_alphabet(codes: Sequence[str], extra: str = "") -> Tuple[str, List[str]]:
    """
    "l/u/d" style codes -> ordered, deduplicated alphabet.
    Returns (alphabet, unknown_codes).
    """
    unknown: List[str] = []
    chars = ""
    for code in codes:
        if code in ALLOWED_CODES:
            chars += ALLOWED_CODES[code]
        elif code:
            unknown.append(code)
    return dedupe(chars + (extra or "")), unknown


def split_codes(spec: str) -> List[str]:
    if not spec:
        return []
    return [c.strip() for c in spec.split("/") if c.strip()]
