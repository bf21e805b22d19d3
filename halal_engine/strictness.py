"""
Strictness overlay applied to a finished analysis. Reasons are never touched.

- relaxed: doubtful becomes halal at 0.5
- moderate: unchanged
- strict: doubtful stays doubtful, confidence raised to at least 0.7
- very_strict: anything not certified and not haram becomes doubtful at 0.3
"""

from __future__ import annotations

from dataclasses import replace

from .models import HalalAnalysis, HalalStatus, HalalTier, Strictness, derive_tier


def apply_strictness(analysis: HalalAnalysis, strictness: Strictness) -> HalalAnalysis:
    strictness = Strictness(strictness)

    if strictness == Strictness.RELAXED:
        if analysis.status != HalalStatus.DOUBTFUL:
            return analysis
        return replace(
            analysis,
            status=HalalStatus.HALAL,
            confidence=0.5,
            tier=derive_tier(HalalStatus.HALAL),
        )

    if strictness == Strictness.STRICT:
        if analysis.status != HalalStatus.DOUBTFUL:
            return analysis
        return replace(analysis, confidence=max(analysis.confidence, 0.7))

    if strictness == Strictness.VERY_STRICT:
        if analysis.tier == HalalTier.CERTIFIED or analysis.status == HalalStatus.HARAM:
            return analysis
        return replace(
            analysis,
            status=HalalStatus.DOUBTFUL,
            confidence=0.3,
            tier=derive_tier(HalalStatus.DOUBTFUL),
        )

    return analysis
