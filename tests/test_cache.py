from halal_engine.cache import RuleCache
from halal_engine.models import HalalStatus, IngredientRulingRecord, MatchType


def _rule(pattern, match_type=MatchType.WORD_BOUNDARY, active=True):
    return IngredientRulingRecord(
        compound_pattern=pattern,
        match_type=match_type,
        priority=10,
        ruling_default=HalalStatus.HARAM,
        confidence=0.9,
        is_active=active,
    )


class CountingLoader:
    def __init__(self, rules):
        self.rules = rules
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return list(self.rules)


def test_snapshot_is_reused_within_ttl(clock):
    loader = CountingLoader([_rule("porc")])
    cache = RuleCache(loader, ttl_seconds=600, clock=clock)
    cache.get()
    clock.advance(599)
    cache.get()
    assert loader.calls == 1


def test_snapshot_reloads_after_ttl(clock):
    loader = CountingLoader([_rule("porc")])
    cache = RuleCache(loader, ttl_seconds=600, clock=clock)
    cache.get()
    clock.advance(600)
    assert cache.is_stale
    cache.refresh_if_stale()
    assert loader.calls == 2
    assert not cache.is_stale


def test_invalidate_forces_reload(clock):
    loader = CountingLoader([_rule("porc")])
    cache = RuleCache(loader, clock=clock)
    cache.get()
    cache.invalidate()
    assert cache.is_stale
    cache.get()
    assert loader.calls == 2


def test_load_filters_inactive_and_quarantines_bad_regex(clock):
    good = _rule("porc")
    inactive = _rule("lard", active=False)
    bad = _rule("(porc", match_type=MatchType.REGEX)
    cache = RuleCache(CountingLoader([good, inactive, bad]), clock=clock)
    assert cache.get() == [good]
    assert cache.quarantined == [bad]


def test_engine_reads_rules_through_cache(engine, spy_repository, clock):
    """Repeated analyses within the TTL hit the repository once."""
    engine.analyze(ingredients_text="sucre")
    engine.analyze(ingredients_text="sel")
    assert spy_repository.count("ingredient_rulings") == 1
    clock.advance(601)
    engine.analyze(ingredients_text="sel")
    assert spy_repository.count("ingredient_rulings") == 2


def test_invalidate_during_staleness_check_keeps_checked_snapshot():
    """A concurrent invalidate between the check and the read still returns rules."""
    loader = CountingLoader([_rule("porc")])
    cache = RuleCache(loader, ttl_seconds=600)
    cache.clock = lambda: 1000.0
    cache.refresh()

    def clock_with_invalidate():
        cache.invalidate()
        return 1001.0

    cache.clock = clock_with_invalidate
    rules = cache.refresh_if_stale()
    assert [rule.compound_pattern for rule in rules] == ["porc"]
    assert loader.calls == 1
