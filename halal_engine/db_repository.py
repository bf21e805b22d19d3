from __future__ import annotations

from contextlib import closing
from typing import List, Optional

try:
    import psycopg2
    from psycopg2.extras import RealDictCursor
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    psycopg2 = None  # type: ignore
    RealDictCursor = None  # type: ignore

from .models import (
    AdditiveRecord,
    HalalStatus,
    IngredientRulingRecord,
    Madhab,
    MadhabRuling,
    MatchType,
)
from .rule_repository import RuleRepository


def _status(value) -> Optional[HalalStatus]:
    return HalalStatus(value) if value else None


class PostgresRuleRepository(RuleRepository):
    """
    PostgreSQL-backed rule source over the additives, additive_madhab_rulings
    and ingredient_rulings tables. Each fetch is a single batched query.
    """

    def __init__(self, dsn: str):
        if psycopg2 is None:
            raise ModuleNotFoundError(
                "psycopg2 is required for PostgresRuleRepository. Install via "
                "'pip install psycopg2-binary'."
            )
        self.dsn = dsn

    def _query(self, sql: str, params: tuple = ()) -> List[dict]:
        with closing(psycopg2.connect(self.dsn, cursor_factory=RealDictCursor)) as conn:
            with conn, conn.cursor() as cur:
                cur.execute(sql, params)
                return cur.fetchall()

    def fetch_additives_by_codes(self, codes: List[str]) -> List[AdditiveRecord]:
        if not codes:
            return []
        rows = self._query(
            """
            SELECT code, name_fr, name_en, category, halal_status_default,
                   explanation_fr, explanation_en, origin,
                   risk_pregnant, risk_children, risk_allergic, is_active
            FROM additives
            WHERE code = ANY(%s) AND is_active
            """,
            (list(codes),),
        )
        return [
            AdditiveRecord(
                code=row["code"],
                name_fr=row["name_fr"],
                name_en=row.get("name_en"),
                category=row.get("category") or "other",
                halal_status_default=HalalStatus(row["halal_status_default"]),
                explanation_fr=row.get("explanation_fr"),
                explanation_en=row.get("explanation_en"),
                origin=row.get("origin") or "synthetic",
                risk_pregnant=bool(row.get("risk_pregnant")),
                risk_children=bool(row.get("risk_children")),
                risk_allergic=bool(row.get("risk_allergic")),
                is_active=bool(row.get("is_active", True)),
            )
            for row in rows
        ]

    def fetch_madhab_rulings(
        self, codes: List[str], madhab: Optional[Madhab] = None
    ) -> List[MadhabRuling]:
        if not codes:
            return []
        sql = """
            SELECT additive_code, madhab, ruling, explanation_fr, scholarly_reference
            FROM additive_madhab_rulings
            WHERE additive_code = ANY(%s)
        """
        params: tuple = (list(codes),)
        if madhab is not None:
            sql += " AND madhab = %s"
            params = (list(codes), Madhab(madhab).value)
        rows = self._query(sql, params)
        return [
            MadhabRuling(
                code=row["additive_code"],
                madhab=Madhab(row["madhab"]),
                ruling=_status(row.get("ruling")),
                explanation=row.get("explanation_fr") or "",
                scholarly_reference=row.get("scholarly_reference"),
            )
            for row in rows
        ]

    def fetch_active_ingredient_rulings(self) -> List[IngredientRulingRecord]:
        rows = self._query(
            """
            SELECT compound_pattern, match_type, priority, ruling_default,
                   ruling_hanafi, ruling_shafii, ruling_maliki, ruling_hanbali,
                   confidence, explanation_fr, explanation_en, scholarly_reference,
                   overrides_keyword, category, is_active
            FROM ingredient_rulings
            WHERE is_active
            ORDER BY id
            """
        )
        return [
            IngredientRulingRecord(
                compound_pattern=row["compound_pattern"],
                match_type=MatchType(row["match_type"]),
                priority=int(row["priority"]),
                ruling_default=HalalStatus(row["ruling_default"]),
                confidence=float(row["confidence"]),
                explanation_fr=row.get("explanation_fr") or "",
                explanation_en=row.get("explanation_en"),
                ruling_hanafi=_status(row.get("ruling_hanafi")),
                ruling_shafii=_status(row.get("ruling_shafii")),
                ruling_maliki=_status(row.get("ruling_maliki")),
                ruling_hanbali=_status(row.get("ruling_hanbali")),
                overrides_keyword=row.get("overrides_keyword"),
                category=row.get("category"),
                scholarly_reference=row.get("scholarly_reference"),
                is_active=bool(row.get("is_active", True)),
            )
            for row in rows
        ]
