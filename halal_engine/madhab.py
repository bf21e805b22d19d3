"""
Projection of multi-school rulings onto one requested madhab.

Both ingredient rules and additive madhab rulings follow the same logic:
GENERAL reads the default; a school reads its own ruling and falls back to
the default when that ruling is absent.
"""

from __future__ import annotations

from typing import Optional

from .models import (
    MADHAB_LABELS,
    AdditiveRecord,
    HalalStatus,
    IngredientRulingRecord,
    Madhab,
    MadhabRuling,
)


def resolve_ruling_for_madhab(
    rule: IngredientRulingRecord, madhab: Madhab
) -> HalalStatus:
    if madhab == Madhab.GENERAL:
        return rule.ruling_default
    school = rule.school_ruling(Madhab(madhab))
    return school if school is not None else rule.ruling_default


def resolve_additive_status(
    additive: AdditiveRecord, ruling: Optional[MadhabRuling]
) -> HalalStatus:
    if ruling is None or ruling.ruling is None:
        return additive.halal_status_default
    return ruling.ruling


def resolve_additive_explanation(
    additive: AdditiveRecord, ruling: Optional[MadhabRuling], lang: str = "fr"
) -> str:
    """School explanation annotated with the school name, else the default."""
    if ruling is not None and ruling.ruling is not None and ruling.explanation:
        return f"[{MADHAB_LABELS[Madhab(ruling.madhab)]}] {ruling.explanation}"
    return additive.default_explanation(lang)
