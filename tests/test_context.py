from halal_engine.context import (
    ContextualOverrideDetector,
    additive_search_terms,
    has_vegan_label,
    match_search_terms,
    pattern_e_code,
    vegetal_origin_near,
)
from halal_engine.models import AdditiveResult, HalalStatus, MatchResult


def _match(pattern, ruling):
    return MatchResult(pattern=pattern, ruling=ruling, confidence=0.9, priority=15, explanation="orig")


def test_vegetal_qualifier_upgrades_doubtful_match():
    detector = ContextualOverrideDetector()
    raw = "Farine, mono- et diglycérides d'acides gras (origine végétale), sel"
    result = detector.override_match(_match("mono-", HalalStatus.DOUBTFUL), raw, vegan=False)
    assert result.ruling == HalalStatus.HALAL
    assert "végétale" in result.explanation


def test_vegetal_qualifier_never_touches_haram():
    """Certainty outranks a plant-origin claim."""
    detector = ContextualOverrideDetector()
    raw = "gélatine porcine (origine végétale)"
    result = detector.override_match(_match("gélatine porcine", HalalStatus.HARAM), raw, vegan=True)
    assert result.ruling == HalalStatus.HARAM
    assert result.explanation == "orig"


def test_qualifier_outside_window_is_ignored():
    raw = "mono- et diglycérides, " + "x" * 200 + " (origine végétale)"
    assert not vegetal_origin_near(raw, ["mono-"])


def test_english_qualifier():
    assert vegetal_origin_near("Emulsifier: E471 (of plant origin)", ["e471"])
    assert vegetal_origin_near("mono- and diglycerides (vegetable origin)", ["diglycerides"])
    assert vegetal_origin_near("glycerol, plant-based", ["glycerol"])


def test_search_in_accent_free_fallback():
    """An unaccented term still finds accented raw text."""
    assert vegetal_origin_near("Monoglycérides (d'origine végétale)", ["monoglycerides"])


def test_additive_code_spellings():
    terms = additive_search_terms("E471", "Mono- et diglycérides d'acides gras")
    assert terms[:3] == ["e471", "e 471", "e-471"]
    assert "diglycérides" in terms
    assert "et" not in terms
    assert vegetal_origin_near("émulsifiant : E-471 (origine végétale)", terms)


def test_additive_override_by_name_in_text():
    detector = ContextualOverrideDetector(lang="en")
    additive = AdditiveResult(
        code="E422", name="Glycérol", status=HalalStatus.DOUBTFUL, explanation="orig"
    )
    result = detector.override_additive(additive, "sucre, glycérol (origine végétale)", vegan=False)
    assert result.status == HalalStatus.HALAL
    assert result.explanation == "Plant origin stated by the manufacturer."


def test_vegan_label_upgrades_without_proximity():
    detector = ContextualOverrideDetector()
    result = detector.override_match(_match("gélatine", HalalStatus.DOUBTFUL), "gélatine", vegan=True)
    assert result.ruling == HalalStatus.HALAL
    assert "vegan" in result.explanation


def test_no_context_leaves_result_unchanged():
    detector = ContextualOverrideDetector()
    original = _match("gélatine", HalalStatus.DOUBTFUL)
    assert detector.override_match(original, "gélatine, sucre", vegan=False) is original


def test_vegan_label_detection():
    assert has_vegan_label(["en:palm-oil-free", "en:vegan"])
    assert not has_vegan_label(["en:non-vegan"])
    assert not has_vegan_label(["en:maybe-vegan", "en:vegetarian"])
    assert not has_vegan_label(None)


def test_e_code_match_found_under_spaced_spelling():
    """Matched against normalized 'e471', qualified in the raw text as 'E 471'."""
    detector = ContextualOverrideDetector()
    raw = "Émulsifiant : E 471 (origine végétale), sel"
    result = detector.override_match(_match("e471", HalalStatus.DOUBTFUL), raw, vegan=False)
    assert result.ruling == HalalStatus.HALAL


def test_match_search_terms():
    assert match_search_terms("e471") == ["e471", "e 471", "e-471"]
    assert match_search_terms("mono-") == ["mono-"]
    assert pattern_e_code("e-322i") == "E322"
    assert pattern_e_code("gélatine") is None
