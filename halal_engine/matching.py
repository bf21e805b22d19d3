"""
Pattern matching of ingredient rules against normalized ingredient text.

The haystack is expected to be lowercased and normalized already. Every mode
first tries the pattern verbatim and only then retries with diacritics
stripped from both sides, so "lactosérum" still matches a rule written
without accents.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from functools import lru_cache
from typing import Iterable, List, Optional, Pattern, Tuple

from .models import IngredientRulingRecord, MatchType

logger = logging.getLogger(__name__)


def strip_diacritics(text: str) -> str:
    """'gélatine' -> 'gelatine'. Length is preserved for composed Latin text."""
    decomposed = unicodedata.normalize("NFD", text or "")
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return unicodedata.normalize("NFC", stripped)


@lru_cache(maxsize=2048)
def _word_boundary_regex(pattern: str) -> Pattern[str]:
    # str patterns use Unicode \w, so accented letters count as word characters.
    return re.compile(r"(?<!\w)" + re.escape(pattern) + r"(?!\w)")


@lru_cache(maxsize=1024)
def compile_rule_regex(pattern: str) -> Pattern[str]:
    """Compile a stored regex rule; raises re.error for malformed patterns."""
    return re.compile(pattern, re.IGNORECASE)


def _exact(haystack: str, pattern: str) -> bool:
    if haystack == pattern:
        return True
    return strip_diacritics(haystack) == strip_diacritics(pattern)


def _contains(haystack: str, pattern: str) -> bool:
    if pattern in haystack:
        return True
    return strip_diacritics(pattern) in strip_diacritics(haystack)


def _word_boundary(haystack: str, pattern: str) -> bool:
    if _word_boundary_regex(pattern).search(haystack):
        return True
    stripped_pattern = strip_diacritics(pattern)
    return bool(_word_boundary_regex(stripped_pattern).search(strip_diacritics(haystack)))


def _regex(haystack: str, pattern: str) -> bool:
    try:
        compiled = compile_rule_regex(pattern)
    except re.error as exc:
        logger.warning("Invalid regex rule pattern %r: %s", pattern, exc)
        return False
    return bool(compiled.search(haystack))


def matches(haystack: str, pattern: str, mode: MatchType) -> bool:
    """
    Boolean test of one rule pattern against normalized text. Never raises
    for malformed rule data; an unknown mode or bad regex is a non-match.
    """
    if not haystack or not pattern:
        return False
    try:
        mode = MatchType(mode)
    except ValueError:
        logger.warning("Unknown match type %r for pattern %r", mode, pattern)
        return False
    if mode == MatchType.REGEX:
        return _regex(haystack, pattern)

    needle = pattern.lower()
    if mode == MatchType.EXACT:
        return _exact(haystack.strip(), needle.strip())
    if mode == MatchType.CONTAINS:
        return _contains(haystack, needle)
    return _word_boundary(haystack, needle)


def rule_matches(haystack: str, rule: IngredientRulingRecord) -> bool:
    return matches(haystack, rule.compound_pattern, rule.match_type)


def validate_rules(
    rules: Iterable[IngredientRulingRecord],
) -> Tuple[List[IngredientRulingRecord], List[IngredientRulingRecord]]:
    """
    Split rules into (usable, quarantined). Regex rules are compiled once here
    so a malformed stored pattern is rejected at load time instead of on
    every request.
    """
    usable: List[IngredientRulingRecord] = []
    quarantined: List[IngredientRulingRecord] = []
    for rule in rules:
        error = _pattern_error(rule)
        if error:
            logger.warning(
                "Quarantining ingredient rule %r (%s): %s",
                rule.compound_pattern,
                rule.match_type.value,
                error,
            )
            quarantined.append(rule)
            continue
        usable.append(rule)
    return usable, quarantined


def _pattern_error(rule: IngredientRulingRecord) -> Optional[str]:
    if not rule.compound_pattern:
        return "empty pattern"
    if rule.match_type == MatchType.REGEX:
        try:
            compile_rule_regex(rule.compound_pattern)
        except re.error as exc:
            return str(exc)
    return None
