"""
Tier aggregation of additive and ingredient evidence into one verdict.

The fold keeps the worst status seen (haram > doubtful > halal/unknown) and
the highest confidence inside that severity bucket. Additives are folded
before ingredient matches so an emulsifier already reported by code is not
reported a second time through the ingredient text.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Set, Tuple

from .context import ContextualOverrideDetector, pattern_e_code
from .corpus import EMULSIFIER_PATTERN_CODES
from .models import (
    AdditiveResult,
    HalalAnalysis,
    HalalReason,
    HalalStatus,
    HalalTier,
    MatchResult,
)

ADDITIVE_CONFIDENCE = 0.9
CLEAN_CONFIDENCE = 0.8

SEVERITY = {
    HalalStatus.UNKNOWN: 0,
    HalalStatus.HALAL: 0,
    HalalStatus.DOUBTFUL: 1,
    HalalStatus.HARAM: 2,
}

NO_ISSUES = {
    "fr": "Aucun ingrédient ou additif problématique détecté",
    "en": "No problematic ingredient or additive detected",
}
NO_DATA = {
    "fr": "Aucune liste d'ingrédients ni d'additifs disponible",
    "en": "No ingredient list or additives available",
}


def equivalent_additive_code(pattern: str) -> Optional[str]:
    """E-number an ingredient pattern stands for ('e471', 'mono-' -> 'E471')."""
    key = (pattern or "").strip().lower()
    if key in EMULSIFIER_PATTERN_CODES:
        return EMULSIFIER_PATTERN_CODES[key]
    return pattern_e_code(key)


def fold(
    worst: HalalStatus, confidence: float, status: HalalStatus, item_confidence: float
) -> Tuple[HalalStatus, float]:
    """One step of the monotonic severity fold."""
    if SEVERITY[status] > SEVERITY[worst]:
        return status, item_confidence
    if SEVERITY[status] == SEVERITY[worst]:
        return worst, max(confidence, item_confidence)
    return worst, confidence


class TierAggregator:
    def __init__(self, detector: Optional[ContextualOverrideDetector] = None, lang: str = "fr"):
        self.lang = lang if lang in NO_ISSUES else "fr"
        self.detector = detector or ContextualOverrideDetector(lang=self.lang)
        self.log = logging.getLogger(self.__class__.__name__)

    def aggregate(
        self,
        additives: Iterable[AdditiveResult],
        matches: Iterable[MatchResult],
        raw_text: Optional[str] = None,
        has_additive_tags: bool = False,
        vegan: bool = False,
    ) -> HalalAnalysis:
        has_text = bool(raw_text and raw_text.strip())
        if not has_text and not has_additive_tags:
            return HalalAnalysis(
                status=HalalStatus.UNKNOWN,
                confidence=0.0,
                tier=HalalTier.DOUBTFUL,
                reasons=[
                    HalalReason(
                        type="analysis",
                        name="no_data",
                        status=HalalStatus.UNKNOWN,
                        explanation=NO_DATA[self.lang],
                    )
                ],
                analysis_source="no_data",
            )

        worst = HalalStatus.UNKNOWN
        confidence = 0.0
        reasons: List[HalalReason] = []
        reported_codes: Set[str] = set()

        for result in additives:
            result = self.detector.override_additive(result, raw_text, vegan)
            reported_codes.add(result.code)
            reasons.append(
                HalalReason(
                    type="additive",
                    name=result.name,
                    status=result.status,
                    explanation=result.explanation,
                    code=result.code,
                    confidence=ADDITIVE_CONFIDENCE,
                )
            )
            worst, confidence = fold(worst, confidence, result.status, ADDITIVE_CONFIDENCE)

        for match in matches:
            if match.category == "emulsifier":
                code = equivalent_additive_code(match.pattern)
                if code and code in reported_codes:
                    self.log.debug(
                        "Ingredient %r suppressed, already reported as %s", match.pattern, code
                    )
                    continue
            match = self.detector.override_match(match, raw_text, vegan)
            reasons.append(
                HalalReason(
                    type="ingredient",
                    name=match.pattern,
                    status=match.ruling,
                    explanation=match.explanation,
                    confidence=match.confidence,
                    scholarly_reference=match.scholarly_reference,
                )
            )
            worst, confidence = fold(worst, confidence, match.ruling, match.confidence)

        source = "ingredients" if has_text else "additives"
        if worst == HalalStatus.HARAM:
            return HalalAnalysis(
                status=HalalStatus.HARAM,
                confidence=confidence,
                tier=HalalTier.HARAM,
                reasons=reasons,
                analysis_source=source,
            )
        if worst == HalalStatus.DOUBTFUL:
            return HalalAnalysis(
                status=HalalStatus.DOUBTFUL,
                confidence=confidence,
                tier=HalalTier.DOUBTFUL,
                reasons=reasons,
                analysis_source=source,
            )
        if not reasons:
            reasons.append(
                HalalReason(
                    type="analysis",
                    name="no_issues",
                    status=HalalStatus.HALAL,
                    explanation=NO_ISSUES[self.lang],
                )
            )
        return HalalAnalysis(
            status=HalalStatus.HALAL,
            confidence=CLEAN_CONFIDENCE,
            tier=HalalTier.ANALYZED_CLEAN,
            reasons=reasons,
            analysis_source=source,
        )
