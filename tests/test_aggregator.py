from halal_engine.aggregator import TierAggregator, equivalent_additive_code, fold
from halal_engine.models import AdditiveResult, HalalStatus, HalalTier, MatchResult


def _additive(code, status):
    return AdditiveResult(code=code, name=code, status=status, explanation="")


def _match(pattern, ruling, confidence=0.9, category=None):
    return MatchResult(
        pattern=pattern, ruling=ruling, confidence=confidence, priority=10, category=category
    )


def test_no_input_is_unknown():
    analysis = TierAggregator().aggregate([], [], raw_text=None, has_additive_tags=False)
    assert analysis.status == HalalStatus.UNKNOWN
    assert analysis.tier == HalalTier.DOUBTFUL
    assert analysis.confidence == 0
    assert analysis.analysis_source == "no_data"


def test_whitespace_text_counts_as_absent():
    analysis = TierAggregator().aggregate([], [], raw_text="   ")
    assert analysis.status == HalalStatus.UNKNOWN


def test_haram_is_terminal_whatever_the_order():
    items = [
        _match("vinaigre", HalalStatus.HALAL, 0.95),
        _match("porc", HalalStatus.HARAM, 0.99),
        _match("gélatine", HalalStatus.DOUBTFUL, 0.6),
    ]
    for ordering in (items, list(reversed(items))):
        analysis = TierAggregator().aggregate([], ordering, raw_text="x")
        assert analysis.status == HalalStatus.HARAM
        assert analysis.tier == HalalTier.HARAM
        assert analysis.confidence == 0.99


def test_doubtful_keeps_max_confidence_of_bucket():
    items = [
        _match("gélatine", HalalStatus.DOUBTFUL, 0.6),
        _match("vinaigre", HalalStatus.HALAL, 0.95),
        _match("présure", HalalStatus.DOUBTFUL, 0.75),
    ]
    analysis = TierAggregator().aggregate([], items, raw_text="x")
    assert analysis.status == HalalStatus.DOUBTFUL
    assert analysis.tier == HalalTier.DOUBTFUL
    assert analysis.confidence == 0.75


def test_clean_text_gets_default_reason():
    analysis = TierAggregator(lang="en").aggregate([], [], raw_text="sucre, sel")
    assert analysis.status == HalalStatus.HALAL
    assert analysis.tier == HalalTier.ANALYZED_CLEAN
    assert analysis.confidence == 0.8
    assert [r.name for r in analysis.reasons] == ["no_issues"]


def test_additives_are_reported_before_ingredients():
    analysis = TierAggregator().aggregate(
        [_additive("E300", HalalStatus.HALAL)],
        [_match("vinaigre", HalalStatus.HALAL)],
        raw_text="vinaigre",
        has_additive_tags=True,
    )
    assert [r.type for r in analysis.reasons] == ["additive", "ingredient"]
    assert analysis.reasons[0].confidence == 0.9


def test_emulsifier_match_suppressed_when_additive_reported():
    analysis = TierAggregator().aggregate(
        [_additive("E471", HalalStatus.DOUBTFUL)],
        [
            _match("mono-", HalalStatus.DOUBTFUL, category="emulsifier"),
            _match("e471", HalalStatus.DOUBTFUL, category="emulsifier"),
            _match("gélatine", HalalStatus.DOUBTFUL, category="gelatin"),
        ],
        raw_text="mono- et diglycérides (e471), gélatine",
        has_additive_tags=True,
    )
    assert [(r.type, r.name) for r in analysis.reasons] == [
        ("additive", "E471"),
        ("ingredient", "gélatine"),
    ]


def test_emulsifier_kept_without_matching_additive():
    analysis = TierAggregator().aggregate(
        [_additive("E322", HalalStatus.HALAL)],
        [_match("mono-", HalalStatus.DOUBTFUL, category="emulsifier")],
        raw_text="lécithine, mono-",
        has_additive_tags=True,
    )
    assert [r.name for r in analysis.reasons] == ["E322", "mono-"]
    assert analysis.status == HalalStatus.DOUBTFUL


def test_additives_only_source():
    analysis = TierAggregator().aggregate(
        [_additive("E300", HalalStatus.HALAL)], [], raw_text=None, has_additive_tags=True
    )
    assert analysis.status == HalalStatus.HALAL
    assert analysis.analysis_source == "additives"


def test_equivalent_additive_code():
    assert equivalent_additive_code("mono-") == "E471"
    assert equivalent_additive_code("diglycerides") == "E471"
    assert equivalent_additive_code("e471") == "E471"
    assert equivalent_additive_code("e 322") == "E322"
    assert equivalent_additive_code("lécithine") is None


def test_fold_is_monotonic():
    worst, conf = fold(HalalStatus.UNKNOWN, 0.0, HalalStatus.HARAM, 0.9)
    worst, conf = fold(worst, conf, HalalStatus.DOUBTFUL, 0.95)
    worst, conf = fold(worst, conf, HalalStatus.HALAL, 1.0)
    assert (worst, conf) == (HalalStatus.HARAM, 0.9)
