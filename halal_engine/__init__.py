"""
Halal engine package for resolving a food product's halal status from its
ingredient text, additive codes and certification labels.

Expose the main classes so consumers can import directly from the package.
"""

from .models import (
    AdditiveRecord,
    AdditiveResult,
    AnalysisOptions,
    HalalAnalysis,
    HalalReason,
    HalalStatus,
    HalalTier,
    IngredientRulingRecord,
    Madhab,
    MadhabRuling,
    MatchResult,
    MatchType,
    ProductInfo,
    Strictness,
)
from .additives import AdditiveResolver, canonicalize_additive_tag
from .cache import RuleCache
from .certification import CertificationResolver
from .db_repository import PostgresRuleRepository
from .halal_engine import HalalEngine, ProductAssessment
from .normalizer import DefaultTextNormalizer, TextNormalizer
from .openfoodfacts_client import OpenFoodFactsClient, ProductDataSource
from .rule_repository import RuleRepository, StaticRuleRepository
from .strictness import apply_strictness

__all__ = [
    "AdditiveRecord",
    "AdditiveResolver",
    "AdditiveResult",
    "AnalysisOptions",
    "CertificationResolver",
    "DefaultTextNormalizer",
    "HalalAnalysis",
    "HalalEngine",
    "HalalReason",
    "HalalStatus",
    "HalalTier",
    "IngredientRulingRecord",
    "Madhab",
    "MadhabRuling",
    "MatchResult",
    "MatchType",
    "OpenFoodFactsClient",
    "PostgresRuleRepository",
    "ProductAssessment",
    "ProductDataSource",
    "ProductInfo",
    "RuleCache",
    "RuleRepository",
    "StaticRuleRepository",
    "Strictness",
    "TextNormalizer",
    "apply_strictness",
    "canonicalize_additive_tag",
]
