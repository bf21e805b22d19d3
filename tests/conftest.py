"""
Shared fixtures: bundled-corpus repository, a spy repository that counts
queries, and an engine driven by a fake clock.
"""

import pytest

from halal_engine import HalalEngine, RuleCache, StaticRuleRepository


class SpyRepository(StaticRuleRepository):
    """StaticRuleRepository that records every call it receives."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = []

    def fetch_additives_by_codes(self, codes):
        self.calls.append(("additives", list(codes)))
        return super().fetch_additives_by_codes(codes)

    def fetch_madhab_rulings(self, codes, madhab=None):
        self.calls.append(("madhab_rulings", list(codes), madhab))
        return super().fetch_madhab_rulings(codes, madhab)

    def fetch_active_ingredient_rulings(self):
        self.calls.append(("ingredient_rulings",))
        return super().fetch_active_ingredient_rulings()

    def fetch_legacy_additives(self, tags):
        self.calls.append(("legacy", list(tags)))
        return super().fetch_legacy_additives(tags)

    def count(self, kind):
        return sum(1 for call in self.calls if call[0] == kind)


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def repository():
    return StaticRuleRepository()


@pytest.fixture
def spy_repository():
    return SpyRepository()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine(spy_repository, clock):
    cache = RuleCache(spy_repository.fetch_active_ingredient_rulings, ttl_seconds=600, clock=clock)
    return HalalEngine(repository=spy_repository, rule_cache=cache)
