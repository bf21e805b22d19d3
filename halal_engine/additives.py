"""
Additive resolution from OpenFoodFacts-style tags.

Tags such as "en:e322i" are canonicalized to repository codes ("E322"),
deduplicated and resolved with two batched repository reads: one for the
additive records and one for the madhab rulings of the codes that were found.
Tags that stay unresolved fall back to the legacy table keyed by the original
lowercase tag, then are dropped silently.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .madhab import resolve_additive_explanation, resolve_additive_status
from .models import AdditiveRecord, AdditiveResult, Madhab, MadhabRuling
from .rule_repository import RuleRepository

_VARIANT_SUFFIX = re.compile(r"(?<=\d)[a-z]$")


def canonicalize_additive_tag(tag: str) -> str:
    """
    'en:e322i' -> 'E322'. Only one trailing lowercase letter after a digit is
    treated as a variant suffix.
    """
    code = (tag or "").strip()
    if ":" in code:
        code = code.split(":", 1)[1]
    code = _VARIANT_SUFFIX.sub("", code)
    return code.upper()


@dataclass
class AdditiveLookup:
    additive: AdditiveRecord
    rulings: List[MadhabRuling] = field(default_factory=list)

    def to_dict(self, lang: str = "fr") -> dict:
        return {
            "code": self.additive.code,
            "name": self.additive.display_name(lang),
            "category": self.additive.category,
            "status": self.additive.halal_status_default.value,
            "explanation": self.additive.default_explanation(lang),
            "origin": self.additive.origin,
            "risk_flags": self.additive.risk_flags(),
            "madhab_rulings": [
                {
                    "madhab": ruling.madhab.value,
                    "ruling": ruling.ruling.value if ruling.ruling else None,
                    "explanation": ruling.explanation,
                    "scholarly_reference": ruling.scholarly_reference,
                }
                for ruling in self.rulings
            ],
        }


class AdditiveResolver:
    def __init__(self, repository: RuleRepository, lang: str = "fr"):
        self.repository = repository
        self.lang = lang
        self.log = logging.getLogger(self.__class__.__name__)

    def resolve(
        self, tags: Iterable[str], madhab: Madhab = Madhab.GENERAL
    ) -> List[AdditiveResult]:
        tags = [tag for tag in tags or [] if tag]
        if not tags:
            return []

        codes: List[str] = []
        for tag in tags:
            code = canonicalize_additive_tag(tag)
            if code and code not in codes:
                codes.append(code)

        records = {a.code: a for a in self.repository.fetch_additives_by_codes(codes)}
        rulings = self._rulings_for(list(records), madhab)

        results: List[AdditiveResult] = []
        for code in codes:
            additive = records.get(code)
            if additive is None:
                continue
            ruling = rulings.get(code)
            results.append(self._to_result(additive, ruling, source="repository"))

        missing = [tag for tag in tags if canonicalize_additive_tag(tag) not in records]
        if missing:
            results.extend(self._legacy_results(missing, seen={r.code for r in results}))
        return results

    def lookup(self, code: str) -> Optional[AdditiveLookup]:
        """Additive record plus every school's ruling, or None when unknown."""
        canonical = canonicalize_additive_tag(code)
        found = self.repository.fetch_additives_by_codes([canonical])
        if not found:
            return None
        rulings = self.repository.fetch_madhab_rulings([canonical], None)
        return AdditiveLookup(additive=found[0], rulings=rulings)

    def _rulings_for(self, codes: List[str], madhab: Madhab) -> Dict[str, MadhabRuling]:
        if not codes or madhab == Madhab.GENERAL:
            return {}
        rows = self.repository.fetch_madhab_rulings(codes, madhab)
        return {ruling.code: ruling for ruling in rows if ruling.madhab == madhab}

    def _legacy_results(self, tags: List[str], seen: set) -> List[AdditiveResult]:
        table = self.repository.fetch_legacy_additives(tags)
        results: List[AdditiveResult] = []
        for tag in tags:
            additive = table.get(tag.lower())
            if additive is None:
                self.log.debug("Dropping unresolved additive tag %s", tag)
                continue
            if additive.code in seen:
                continue
            seen.add(additive.code)
            results.append(self._to_result(additive, None, source="legacy"))
        return results

    def _to_result(
        self, additive: AdditiveRecord, ruling: Optional[MadhabRuling], source: str
    ) -> AdditiveResult:
        return AdditiveResult(
            code=additive.code,
            name=additive.display_name(self.lang),
            status=resolve_additive_status(additive, ruling),
            explanation=resolve_additive_explanation(additive, ruling, self.lang),
            category=additive.category,
            origin=additive.origin,
            risk_flags=additive.risk_flags(),
            madhab_applied=ruling is not None and ruling.ruling is not None,
            source=source,
        )
