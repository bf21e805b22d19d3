import pytest

from halal_engine.models import HalalAnalysis, HalalReason, HalalStatus, HalalTier, Strictness
from halal_engine.strictness import apply_strictness


def _analysis(status, confidence, tier):
    return HalalAnalysis(
        status=status,
        confidence=confidence,
        tier=tier,
        reasons=[HalalReason(type="ingredient", name="x", status=status, explanation="")],
    )


DOUBTFUL = _analysis(HalalStatus.DOUBTFUL, 0.6, HalalTier.DOUBTFUL)
CLEAN = _analysis(HalalStatus.HALAL, 0.8, HalalTier.ANALYZED_CLEAN)
CERTIFIED = _analysis(HalalStatus.HALAL, 0.95, HalalTier.CERTIFIED)
HARAM = _analysis(HalalStatus.HARAM, 0.99, HalalTier.HARAM)
UNKNOWN = _analysis(HalalStatus.UNKNOWN, 0.0, HalalTier.DOUBTFUL)


def test_relaxed_turns_doubtful_into_halal():
    result = apply_strictness(DOUBTFUL, Strictness.RELAXED)
    assert (result.status, result.confidence, result.tier) == (
        HalalStatus.HALAL,
        0.5,
        HalalTier.ANALYZED_CLEAN,
    )
    assert result.reasons == DOUBTFUL.reasons


def test_relaxed_leaves_haram_alone():
    assert apply_strictness(HARAM, Strictness.RELAXED) is HARAM


@pytest.mark.parametrize("analysis", [DOUBTFUL, CLEAN, CERTIFIED, HARAM, UNKNOWN])
def test_moderate_is_identity(analysis):
    assert apply_strictness(analysis, Strictness.MODERATE) is analysis


def test_strict_raises_doubtful_confidence():
    result = apply_strictness(DOUBTFUL, Strictness.STRICT)
    assert result.status == HalalStatus.DOUBTFUL
    assert result.confidence == 0.7
    high = _analysis(HalalStatus.DOUBTFUL, 0.9, HalalTier.DOUBTFUL)
    assert apply_strictness(high, Strictness.STRICT).confidence == 0.9
    assert apply_strictness(CLEAN, Strictness.STRICT) is CLEAN


def test_very_strict_downgrades_uncertified_halal():
    result = apply_strictness(CLEAN, Strictness.VERY_STRICT)
    assert (result.status, result.confidence, result.tier) == (
        HalalStatus.DOUBTFUL,
        0.3,
        HalalTier.DOUBTFUL,
    )


def test_very_strict_keeps_certified_and_haram():
    assert apply_strictness(CERTIFIED, Strictness.VERY_STRICT) is CERTIFIED
    assert apply_strictness(HARAM, Strictness.VERY_STRICT) is HARAM


def test_very_strict_lifts_unknown():
    result = apply_strictness(UNKNOWN, Strictness.VERY_STRICT)
    assert result.status == HalalStatus.DOUBTFUL
    assert result.confidence == 0.3


def test_input_is_not_mutated():
    apply_strictness(DOUBTFUL, Strictness.RELAXED)
    assert DOUBTFUL.status == HalalStatus.DOUBTFUL
    assert DOUBTFUL.confidence == 0.6
