"""
Central halal engine: resolves a product's halal status from its ingredient
text, additive tags and label tags.

Key stages:
- short-circuit on a recognized halal certification label
- normalize the ingredient text and match it against the cached rule snapshot
- resolve overrides and project rulings onto the requested madhab
- resolve additive tags through the repository (legacy table as fallback)
- fold everything into one verdict, applying contextual upgrades on the way
- apply the user's strictness overlay
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from . import config
from .additives import AdditiveResolver
from .aggregator import TierAggregator
from .cache import RuleCache
from .certification import CertificationResolver
from .context import has_vegan_label
from .models import (
    SCHOOLS,
    AnalysisOptions,
    HalalAnalysis,
    Madhab,
    ProductInfo,
    Strictness,
)
from .normalizer import DefaultTextNormalizer, TextNormalizer
from .openfoodfacts_client import ProductDataSource
from .rule_repository import RuleRepository, StaticRuleRepository
from .rulings import match_ingredient_rulings
from .strictness import apply_strictness


@dataclass
class ProductAssessment:
    product: ProductInfo
    analysis: HalalAnalysis

    def to_dict(self) -> dict:
        return {
            "ean": self.product.ean,
            "name": self.product.name,
            "brand": self.product.brand,
            "source": self.product.source,
            "analysis": self.analysis.to_dict(),
        }


class HalalEngine:
    """
    Orchestrates rule lookup, matching and aggregation into a HalalAnalysis.
    Inject a different repository, normalizer or product source to adapt to
    your stack.
    """

    def __init__(
        self,
        repository: Optional[RuleRepository] = None,
        normalizer: Optional[TextNormalizer] = None,
        certification_resolver: Optional[CertificationResolver] = None,
        rule_cache: Optional[RuleCache] = None,
        aggregator: Optional[TierAggregator] = None,
        product_source: Optional[ProductDataSource] = None,
        lang: str = "fr",
    ):
        self.repository = repository or StaticRuleRepository()
        self.normalizer = normalizer or DefaultTextNormalizer()
        self.certification_resolver = certification_resolver or CertificationResolver()
        self.rule_cache = rule_cache or RuleCache(
            self.repository.fetch_active_ingredient_rulings,
            ttl_seconds=config.get_rule_cache_ttl(),
        )
        self.lang = lang
        self.additive_resolver = AdditiveResolver(self.repository, lang=lang)
        self.aggregator = aggregator or TierAggregator(lang=lang)
        self.product_source = product_source
        self.log = logging.getLogger(self.__class__.__name__)

    def analyze(
        self,
        ingredients_text: Optional[str] = None,
        additives_tags: Optional[Iterable[str]] = None,
        labels_tags: Optional[Iterable[str]] = None,
        ingredients_analysis_tags: Optional[Iterable[str]] = None,
        options: Optional[AnalysisOptions] = None,
    ) -> HalalAnalysis:
        options = options or AnalysisOptions()
        madhab = Madhab(options.madhab)
        strictness = Strictness(options.strictness)
        additives_tags = [tag for tag in additives_tags or [] if tag]

        certified = self.certification_resolver.resolve(labels_tags, lang=self.lang)
        if certified is not None:
            return apply_strictness(certified, strictness)

        normalized = self.normalizer.normalize(ingredients_text)
        matches = (
            match_ingredient_rulings(normalized, self.rule_cache.get(), madhab, self.lang)
            if normalized
            else []
        )
        additives = self.additive_resolver.resolve(additives_tags, madhab)

        analysis = self.aggregator.aggregate(
            additives,
            matches,
            raw_text=ingredients_text,
            has_additive_tags=bool(additives_tags),
            vegan=has_vegan_label(ingredients_analysis_tags),
        )
        return apply_strictness(analysis, strictness)

    def analyze_product(
        self, product: ProductInfo, options: Optional[AnalysisOptions] = None
    ) -> HalalAnalysis:
        return self.analyze(
            ingredients_text=product.ingredients_text,
            additives_tags=product.additives_tags,
            labels_tags=product.labels_tags,
            ingredients_analysis_tags=product.ingredients_analysis_tags,
            options=options,
        )

    def analyze_all_madhabs(
        self,
        ingredients_text: Optional[str] = None,
        additives_tags: Optional[Iterable[str]] = None,
        labels_tags: Optional[Iterable[str]] = None,
        ingredients_analysis_tags: Optional[Iterable[str]] = None,
        strictness: Strictness = Strictness.MODERATE,
    ) -> Dict[Madhab, HalalAnalysis]:
        """One analysis per school plus the general default."""
        additives_tags = list(additives_tags or [])
        labels_tags = list(labels_tags or [])
        ingredients_analysis_tags = list(ingredients_analysis_tags or [])
        return {
            madhab: self.analyze(
                ingredients_text=ingredients_text,
                additives_tags=additives_tags,
                labels_tags=labels_tags,
                ingredients_analysis_tags=ingredients_analysis_tags,
                options=AnalysisOptions(madhab=madhab, strictness=strictness),
            )
            for madhab in (Madhab.GENERAL,) + SCHOOLS
        }

    def assess(
        self, ean: str, options: Optional[AnalysisOptions] = None
    ) -> Optional[ProductAssessment]:
        """
        Fetch a product by EAN from the injected product source and analyze it.
        Returns None when the product is unknown.
        """
        if self.product_source is None:
            raise RuntimeError("HalalEngine.assess requires a product_source")
        product = self.product_source.get_product(ean)
        if not product:
            self.log.info("No product data for %s", ean)
            return None
        return ProductAssessment(product=product, analysis=self.analyze_product(product, options))
