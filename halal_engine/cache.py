"""
In-memory snapshot of active ingredient rules with a TTL.

The snapshot is a single (loaded_at, rules) pair replaced wholesale on
refresh. Concurrent callers that both see an expired snapshot may both
reload; the second write replaces the first with equivalent data.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Iterable, List, Optional, Tuple

from .matching import validate_rules
from .models import IngredientRulingRecord

DEFAULT_TTL_SECONDS = 600.0


class RuleCache:
    def __init__(
        self,
        loader: Callable[[], Iterable[IngredientRulingRecord]],
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.loader = loader
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self.quarantined: List[IngredientRulingRecord] = []
        self._snapshot: Optional[Tuple[float, List[IngredientRulingRecord]]] = None
        self.log = logging.getLogger(self.__class__.__name__)

    @property
    def is_stale(self) -> bool:
        return self._expired(self._snapshot)

    def _expired(self, snapshot) -> bool:
        if snapshot is None:
            return True
        loaded_at, _ = snapshot
        return self.clock() - loaded_at >= self.ttl_seconds

    def get(self) -> List[IngredientRulingRecord]:
        """Current rules, reloading lazily once the TTL has elapsed."""
        return self.refresh_if_stale()

    def refresh_if_stale(self) -> List[IngredientRulingRecord]:
        snapshot = self._snapshot
        if self._expired(snapshot):
            return self.refresh()
        return snapshot[1]

    def refresh(self) -> List[IngredientRulingRecord]:
        active = [rule for rule in self.loader() if rule.is_active]
        usable, quarantined = validate_rules(active)
        self.quarantined = quarantined
        self._snapshot = (self.clock(), usable)
        self.log.info(
            "Loaded %s ingredient rules (%s quarantined)", len(usable), len(quarantined)
        )
        return usable

    def invalidate(self) -> None:
        self._snapshot = None
