"""
Override & priority resolution of ingredient rule hits.

Every active rule is tested against the normalized text. Hits are then
ordered by priority (highest first, ties keep rule order) and filtered:
- a pattern already emitted is not emitted twice;
- a generic keyword is dropped when a higher-priority hit declares
  `overrides_keyword` for it ("vinaigre de vin" supersedes "vin").
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from .madhab import resolve_ruling_for_madhab
from .matching import rule_matches
from .models import IngredientRulingRecord, Madhab, MatchResult


def _keyword(pattern: str) -> str:
    return (pattern or "").strip().lower()


def find_rule_hits(
    normalized_text: str, rules: Iterable[IngredientRulingRecord]
) -> List[IngredientRulingRecord]:
    return [
        rule
        for rule in rules
        if rule.is_active and rule_matches(normalized_text, rule)
    ]


def resolve_overrides(
    hits: List[IngredientRulingRecord],
) -> List[IngredientRulingRecord]:
    """Deduplicate and apply keyword overrides; output is priority-ordered."""
    max_override: Dict[str, int] = {}
    for hit in hits:
        if hit.overrides_keyword:
            key = _keyword(hit.overrides_keyword)
            max_override[key] = max(max_override.get(key, hit.priority), hit.priority)

    # sorted() is stable: equal priorities keep their original rule order.
    ordered = sorted(hits, key=lambda rule: -rule.priority)

    seen = set()
    survivors: List[IngredientRulingRecord] = []
    for hit in ordered:
        key = _keyword(hit.compound_pattern)
        if key in seen:
            continue
        if key in max_override and max_override[key] > hit.priority:
            continue
        seen.add(key)
        survivors.append(hit)
    return survivors


def match_ingredient_rulings(
    normalized_text: str,
    rules: Iterable[IngredientRulingRecord],
    madhab: Madhab = Madhab.GENERAL,
    lang: str = "fr",
) -> List[MatchResult]:
    """Ordered, override-aware match results with rulings projected onto `madhab`."""
    if not normalized_text:
        return []
    survivors = resolve_overrides(find_rule_hits(normalized_text, rules))
    return [
        MatchResult(
            pattern=rule.compound_pattern,
            ruling=resolve_ruling_for_madhab(rule, madhab),
            confidence=rule.confidence,
            priority=rule.priority,
            category=rule.category,
            explanation=rule.explanation(lang),
            scholarly_reference=rule.scholarly_reference,
        )
        for rule in survivors
    ]
