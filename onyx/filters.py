# -*- coding: utf-8 -*-
"""
Weak-pattern exclusion rules.

Rules are OR-combined: a candidate is excluded as soon as any enabled rule
matches it.
"""

import itertools
from typing import AbstractSet, Callable, Dict, FrozenSet, Iterable, List

from .charsets import ALL_DIGITS, ALL_LOWER, ALL_UPPER, EXCLUDE_CODES, EXCLUSION_RULES, NO_SYMBOLS
from .errors import ConfigurationError

# str.islower()/isupper() already mean "has a cased letter, and every cased
# letter is lower/upper", so digits and symbols do not count either way.
RULES: Dict[str, Callable[[str], bool]] = {
    ALL_LOWER: str.islower,
    ALL_UPPER: str.isupper,
    ALL_DIGITS: str.isdecimal,
    NO_SYMBOLS: str.isalnum,
}


def parse_rules(names: Iterable[str]) -> FrozenSet[str]:
    """Accept canonical names ("all-lower") or single-letter codes ("x")."""
    rules = set()
    for name in names:
        rule = EXCLUDE_CODES.get(name, name)
        if rule not in EXCLUSION_RULES:
            raise ConfigurationError("Unknown exclusion rule: %r" % name)
        rules.add(rule)
    return frozenset(rules)


def is_excluded(candidate: str, exclusions: AbstractSet[str]) -> bool:
    for rule in exclusions:
        if RULES[rule](candidate):
            return True
    return False


# -------- Satisfiability --------
def _char_class(ch: str) -> str:
    if ch.islower():
        return "lower"
    if ch.isupper():
        return "upper"
    if ch.istitle():
        return "title"
    if ch.isdecimal():
        return "digit"
    if ch.isalnum():
        return "alnum"
    return "symbol"


def _excluded_classes(classes: AbstractSet[str], exclusions: AbstractSet[str]) -> bool:
    """Same verdict as is_excluded() for any string made of exactly these classes."""
    cased_other = bool(classes & {"upper", "title"})
    if ALL_LOWER in exclusions and "lower" in classes and not cased_other:
        return True
    if ALL_UPPER in exclusions and "upper" in classes and not (classes & {"lower", "title"}):
        return True
    if ALL_DIGITS in exclusions and classes == {"digit"}:
        return True
    if NO_SYMBOLS in exclusions and "symbol" not in classes:
        return True
    return False


def is_satisfiable(alphabet: Iterable[str], max_length: int, exclusions: AbstractSet[str]) -> bool:
    """
    True if at least one string over `alphabet` of length <= max_length survives
    the filter. The verdict only depends on which character classes a string
    contains, and any k <= max_length classes fit in one string, so checking
    the class subsets is enough.
    """
    if not exclusions:
        return True
    present: List[str] = sorted({_char_class(c) for c in alphabet})
    for size in range(1, min(len(present), max_length) + 1):
        for combo in itertools.combinations(present, size):
            if not _excluded_classes(set(combo), exclusions):
                return True
    return False
