"""
Read-only access to the rule corpus.

RuleRepository is the contract the engine consumes; StaticRuleRepository
serves the bundled corpus from memory. The legacy additive fallback table is
exposed through the same abstraction as the lowest-priority ruleset, so every
backend answers it identically unless it overrides `fetch_legacy_additives`.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from . import corpus
from .models import AdditiveRecord, IngredientRulingRecord, Madhab, MadhabRuling


class RuleRepository:
    """
    Base interface for any rule source (bundled corpus, DB).
    """

    def fetch_additives_by_codes(self, codes: List[str]) -> List[AdditiveRecord]:
        raise NotImplementedError

    def fetch_madhab_rulings(
        self, codes: List[str], madhab: Optional[Madhab] = None
    ) -> List[MadhabRuling]:
        """Rulings for `codes`; every school when `madhab` is None."""
        raise NotImplementedError

    def fetch_active_ingredient_rulings(self) -> List[IngredientRulingRecord]:
        raise NotImplementedError

    def fetch_legacy_additives(self, tags: List[str]) -> Dict[str, AdditiveRecord]:
        """Lowest-priority fallback, keyed by the original lowercase tag."""
        table = corpus.build_legacy_additives()
        return {
            tag.lower(): table[tag.lower()] for tag in tags if tag.lower() in table
        }


class StaticRuleRepository(RuleRepository):
    """
    In-memory repository. Defaults to the bundled corpus; tests inject their
    own records.
    """

    def __init__(
        self,
        additives: Optional[Iterable[AdditiveRecord]] = None,
        madhab_rulings: Optional[Iterable[MadhabRuling]] = None,
        ingredient_rulings: Optional[Iterable[IngredientRulingRecord]] = None,
        legacy_additives: Optional[Dict[str, AdditiveRecord]] = None,
    ):
        if additives is None:
            additives = corpus.build_additives().values()
        if madhab_rulings is None:
            madhab_rulings = corpus.build_madhab_rulings()
        if ingredient_rulings is None:
            ingredient_rulings = corpus.build_ingredient_rulings()
        if legacy_additives is None:
            legacy_additives = corpus.build_legacy_additives()

        self.additives: Dict[str, AdditiveRecord] = {a.code: a for a in additives}
        self.madhab_rulings: List[MadhabRuling] = list(madhab_rulings)
        self.ingredient_rulings: List[IngredientRulingRecord] = list(ingredient_rulings)
        self.legacy_additives = {k.lower(): v for k, v in legacy_additives.items()}

    def fetch_additives_by_codes(self, codes: List[str]) -> List[AdditiveRecord]:
        return [
            self.additives[code]
            for code in codes
            if code in self.additives and self.additives[code].is_active
        ]

    def fetch_madhab_rulings(
        self, codes: List[str], madhab: Optional[Madhab] = None
    ) -> List[MadhabRuling]:
        wanted = set(codes)
        return [
            ruling
            for ruling in self.madhab_rulings
            if ruling.code in wanted and (madhab is None or ruling.madhab == madhab)
        ]

    def fetch_active_ingredient_rulings(self) -> List[IngredientRulingRecord]:
        return [rule for rule in self.ingredient_rulings if rule.is_active]

    def fetch_legacy_additives(self, tags: List[str]) -> Dict[str, AdditiveRecord]:
        found: Dict[str, AdditiveRecord] = {}
        for tag in tags:
            key = tag.lower()
            if key in self.legacy_additives:
                found[key] = self.legacy_additives[key]
        return found
