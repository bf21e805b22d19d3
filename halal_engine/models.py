"""
Shared domain models used by the halal engine.

- HalalStatus / HalalTier: verdict and provenance bucket of an analysis.
- Madhab / Strictness: user options that steer resolution and presentation.
- AdditiveRecord / MadhabRuling / IngredientRulingRecord: read-only rule data.
- MatchResult / AdditiveResult / HalalReason: per-request evidence items.
- ProductInfo: normalized product representation independent of source.
- HalalAnalysis: final verdict returned to callers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class HalalStatus(str, Enum):
    HALAL = "halal"
    HARAM = "haram"
    DOUBTFUL = "doubtful"
    UNKNOWN = "unknown"


class HalalTier(str, Enum):
    CERTIFIED = "certified"
    ANALYZED_CLEAN = "analyzed_clean"
    DOUBTFUL = "doubtful"
    HARAM = "haram"


class Madhab(str, Enum):
    HANAFI = "hanafi"
    SHAFII = "shafii"
    MALIKI = "maliki"
    HANBALI = "hanbali"
    GENERAL = "general"


# The four schools that can carry their own ruling; GENERAL means "use the default".
SCHOOLS = (Madhab.HANAFI, Madhab.SHAFII, Madhab.MALIKI, Madhab.HANBALI)

MADHAB_LABELS: Dict[Madhab, str] = {
    Madhab.HANAFI: "Hanafi",
    Madhab.SHAFII: "Shafi'i",
    Madhab.MALIKI: "Maliki",
    Madhab.HANBALI: "Hanbali",
    Madhab.GENERAL: "General",
}


class Strictness(str, Enum):
    RELAXED = "relaxed"
    MODERATE = "moderate"
    STRICT = "strict"
    VERY_STRICT = "very_strict"


class MatchType(str, Enum):
    EXACT = "exact"
    CONTAINS = "contains"
    WORD_BOUNDARY = "word_boundary"
    REGEX = "regex"


def derive_tier(status: HalalStatus, certified: bool = False) -> HalalTier:
    """
    Map a status to its tier. The tier is never chosen independently of the
    status; only a recognized certification label yields CERTIFIED.
    """
    if certified and status == HalalStatus.HALAL:
        return HalalTier.CERTIFIED
    if status == HalalStatus.HARAM:
        return HalalTier.HARAM
    if status == HalalStatus.HALAL:
        return HalalTier.ANALYZED_CLEAN
    return HalalTier.DOUBTFUL


@dataclass(frozen=True)
class AdditiveRecord:
    """
    Mirrors additives rows. `code` is the canonical uppercase E-number
    without a variant suffix (E322, never E322i).
    """

    code: str
    name_fr: str
    category: str
    halal_status_default: HalalStatus
    name_en: Optional[str] = None
    explanation_fr: Optional[str] = None
    explanation_en: Optional[str] = None
    origin: str = "synthetic"
    risk_pregnant: bool = False
    risk_children: bool = False
    risk_allergic: bool = False
    is_active: bool = True

    def display_name(self, lang: str = "fr") -> str:
        if lang == "en" and self.name_en:
            return self.name_en
        return self.name_fr

    def default_explanation(self, lang: str = "fr") -> str:
        if lang == "en" and self.explanation_en:
            return self.explanation_en
        return self.explanation_fr or self.explanation_en or ""

    def risk_flags(self) -> List[str]:
        flags = []
        if self.risk_pregnant:
            flags.append("pregnant")
        if self.risk_children:
            flags.append("children")
        if self.risk_allergic:
            flags.append("allergic")
        return flags


@dataclass(frozen=True)
class MadhabRuling:
    """
    Mirrors additive_madhab_rulings rows, keyed by (code, madhab).
    A null ruling means "defer to the additive's default status".
    """

    code: str
    madhab: Madhab
    ruling: Optional[HalalStatus]
    explanation: str = ""
    scholarly_reference: Optional[str] = None


@dataclass(frozen=True)
class IngredientRulingRecord:
    """
    Mirrors ingredient_rulings rows: one pattern, how to match it, and the
    ruling per school (None = follow ruling_default).
    """

    compound_pattern: str
    match_type: MatchType
    priority: int
    ruling_default: HalalStatus
    confidence: float
    explanation_fr: str = ""
    explanation_en: Optional[str] = None
    ruling_hanafi: Optional[HalalStatus] = None
    ruling_shafii: Optional[HalalStatus] = None
    ruling_maliki: Optional[HalalStatus] = None
    ruling_hanbali: Optional[HalalStatus] = None
    overrides_keyword: Optional[str] = None
    category: Optional[str] = None
    scholarly_reference: Optional[str] = None
    is_active: bool = True

    def school_ruling(self, madhab: Madhab) -> Optional[HalalStatus]:
        """Raw per-school column, without falling back to the default."""
        return {
            Madhab.HANAFI: self.ruling_hanafi,
            Madhab.SHAFII: self.ruling_shafii,
            Madhab.MALIKI: self.ruling_maliki,
            Madhab.HANBALI: self.ruling_hanbali,
        }.get(madhab)

    def explanation(self, lang: str = "fr") -> str:
        if lang == "en" and self.explanation_en:
            return self.explanation_en
        return self.explanation_fr or self.explanation_en or ""


@dataclass
class MatchResult:
    pattern: str
    ruling: HalalStatus
    confidence: float
    priority: int
    category: Optional[str] = None
    explanation: str = ""
    scholarly_reference: Optional[str] = None


@dataclass
class AdditiveResult:
    code: str
    name: str
    status: HalalStatus
    explanation: str
    category: Optional[str] = None
    origin: Optional[str] = None
    risk_flags: List[str] = field(default_factory=list)
    madhab_applied: bool = False
    source: str = "repository"

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "name": self.name,
            "status": self.status.value,
            "explanation": self.explanation,
            "category": self.category,
            "origin": self.origin,
            "risk_flags": list(self.risk_flags),
            "madhab_applied": self.madhab_applied,
            "source": self.source,
        }


@dataclass
class HalalReason:
    """One human-readable justification attached to an analysis."""

    type: str  # additive, ingredient, label, analysis
    name: str
    status: HalalStatus
    explanation: str
    code: Optional[str] = None
    confidence: Optional[float] = None
    scholarly_reference: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "name": self.name,
            "status": self.status.value,
            "explanation": self.explanation,
            "code": self.code,
            "confidence": self.confidence,
            "scholarly_reference": self.scholarly_reference,
        }


@dataclass
class AnalysisOptions:
    madhab: Madhab = Madhab.GENERAL
    strictness: Strictness = Strictness.MODERATE


@dataclass
class ProductInfo:
    """
    Standardized product model independent of the external provider.
    """

    ean: str
    name: str
    brand: Optional[str] = None
    source: str = "openfoodfacts"
    ingredients_text: Optional[str] = None
    additives_tags: List[str] = field(default_factory=list)
    labels_tags: List[str] = field(default_factory=list)
    ingredients_analysis_tags: List[str] = field(default_factory=list)
    raw_payload: Optional[dict] = None


@dataclass
class HalalAnalysis:
    status: HalalStatus
    confidence: float
    tier: HalalTier
    reasons: List[HalalReason] = field(default_factory=list)
    certifier_name: Optional[str] = None
    certifier_id: Optional[str] = None
    analysis_source: str = "ingredients"

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "confidence": self.confidence,
            "tier": self.tier.value,
            "reasons": [reason.to_dict() for reason in self.reasons],
            "certifier_name": self.certifier_name,
            "certifier_id": self.certifier_id,
            "analysis_source": self.analysis_source,
        }
