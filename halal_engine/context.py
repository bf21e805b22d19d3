"""
Contextual overrides for ambiguous animal-or-plant sourcing.

Two checks can upgrade a doubtful result to halal:
- a vegetal-origin qualifier within a short window after the item in the raw
  ingredient text ("mono- et diglycérides (origine végétale)");
- a vegan analysis tag on the product, which needs no textual proximity.

Haram results are never touched by either check.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Iterable, List, Optional

from .matching import strip_diacritics
from .models import AdditiveResult, HalalStatus, MatchResult

VEGETAL_WINDOW = 150

VEGETAL_ORIGIN = re.compile(
    r"(?:d['’]\s*)?origine\s+v[ée]g[ée]tale"
    r"|(?:of\s+)?(?:vegetable|plant)\s+origin"
    r"|(?:vegetable|plant)[\s-](?:based|derived)"
    r"|\(\s*v[ée]g[ée]tale?s?\s*\)",
    re.IGNORECASE,
)

_MIN_NAME_WORD = 4

_E_CODE = re.compile(r"^e\s?-?(\d{3,4})[a-z]?$")

MESSAGES = {
    "fr": {
        "vegetal": "Origine végétale déclarée par le fabricant.",
        "vegan": "Produit étiqueté vegan : aucune origine animale.",
    },
    "en": {
        "vegetal": "Plant origin stated by the manufacturer.",
        "vegan": "Product labeled vegan: no animal origin.",
    },
}


def has_vegan_label(analysis_tags: Optional[Iterable[str]]) -> bool:
    """'en:vegan' counts; 'en:non-vegan' and 'en:maybe-vegan' do not."""
    for tag in analysis_tags or []:
        if (tag or "").lower().rsplit(":", 1)[-1] == "vegan":
            return True
    return False


def pattern_e_code(pattern: str) -> Optional[str]:
    """'e471', 'e 471', 'e-471i' -> 'E471'; None for anything else."""
    match = _E_CODE.match((pattern or "").strip().lower())
    return f"E{match.group(1)}" if match else None


def match_search_terms(pattern: str) -> List[str]:
    """E-code patterns are searched under every spelling the raw text may use."""
    code = pattern_e_code(pattern)
    if code:
        return additive_search_terms(code)
    return [pattern]


def additive_search_terms(code: str, name: Optional[str] = None) -> List[str]:
    terms: List[str] = []
    lowered = (code or "").lower()
    if lowered:
        digits = lowered[1:] if lowered.startswith("e") else lowered
        terms.extend([lowered, f"e {digits}", f"e-{digits}"])
    for word in re.split(r"[\s,;/()]+", (name or "").lower()):
        word = word.strip("-.'’")
        if len(word) >= _MIN_NAME_WORD and word not in terms:
            terms.append(word)
    return terms


def vegetal_origin_near(raw_text: Optional[str], terms: Iterable[str]) -> bool:
    """
    True when the window starting at the first occurrence of any term
    carries a vegetal-origin qualifier. Accented text is searched first,
    then both sides with diacritics stripped.
    """
    if not raw_text:
        return False
    lowered = raw_text.lower()
    stripped = strip_diacritics(lowered)
    for term in terms:
        term = (term or "").lower()
        if not term:
            continue
        for haystack, needle in ((lowered, term), (stripped, strip_diacritics(term))):
            index = haystack.find(needle)
            if index < 0:
                continue
            if VEGETAL_ORIGIN.search(haystack[index:index + VEGETAL_WINDOW]):
                return True
            break
    return False


class ContextualOverrideDetector:
    def __init__(self, lang: str = "fr"):
        self.lang = lang if lang in MESSAGES else "fr"
        self.log = logging.getLogger(self.__class__.__name__)

    def override_additive(
        self, result: AdditiveResult, raw_text: Optional[str], vegan: bool
    ) -> AdditiveResult:
        if result.status != HalalStatus.DOUBTFUL:
            return result
        reason = self._reason(
            raw_text, additive_search_terms(result.code, result.name), vegan
        )
        if reason is None:
            return result
        self.log.debug("Additive %s upgraded to halal (%s)", result.code, reason)
        return replace(
            result, status=HalalStatus.HALAL, explanation=MESSAGES[self.lang][reason]
        )

    def override_match(
        self, match: MatchResult, raw_text: Optional[str], vegan: bool
    ) -> MatchResult:
        if match.ruling != HalalStatus.DOUBTFUL:
            return match
        reason = self._reason(raw_text, match_search_terms(match.pattern), vegan)
        if reason is None:
            return match
        self.log.debug("Ingredient %r upgraded to halal (%s)", match.pattern, reason)
        return replace(
            match, ruling=HalalStatus.HALAL, explanation=MESSAGES[self.lang][reason]
        )

    @staticmethod
    def _reason(raw_text: Optional[str], terms: List[str], vegan: bool) -> Optional[str]:
        if vegetal_origin_near(raw_text, terms):
            return "vegetal"
        if vegan:
            return "vegan"
        return None
