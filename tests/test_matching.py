import logging

from halal_engine.matching import matches, strip_diacritics, validate_rules
from halal_engine.models import HalalStatus, IngredientRulingRecord, MatchType


def _rule(pattern, match_type=MatchType.CONTAINS):
    return IngredientRulingRecord(
        compound_pattern=pattern,
        match_type=match_type,
        priority=10,
        ruling_default=HalalStatus.DOUBTFUL,
        confidence=0.5,
    )


def test_strip_diacritics():
    """Accents are removed, base letters kept."""
    assert strip_diacritics("gélatine végétale") == "gelatine vegetale"
    assert strip_diacritics("lactosérum") == "lactoserum"


def test_exact_verbatim_and_stripped():
    """Exact mode compares whole strings, with an accent-free fallback."""
    assert matches("gélatine", "gélatine", MatchType.EXACT)
    assert matches("gelatine", "gélatine", MatchType.EXACT)
    assert not matches("gélatine de porc", "gélatine", MatchType.EXACT)


def test_contains_falls_back_to_stripped_text():
    """A pattern without accents still finds accented text."""
    assert matches("sucre, présure, sel", "présure", MatchType.CONTAINS)
    assert matches("sucre, présure, sel", "presure", MatchType.CONTAINS)
    assert not matches("sucre, sel", "presure", MatchType.CONTAINS)


def test_word_boundary_treats_accented_letters_as_word_characters():
    """'vin' must not match inside 'vinaigre'; 'lard' must not match inside a longer word."""
    assert matches("vin rouge, sel", "vin", MatchType.WORD_BOUNDARY)
    assert not matches("vinaigre", "vin", MatchType.WORD_BOUNDARY)
    assert not matches("lactosérum", "sérum", MatchType.WORD_BOUNDARY)
    assert not matches("épinards", "pinard", MatchType.WORD_BOUNDARY)
    assert matches("lait, lactosérum", "lactosérum", MatchType.WORD_BOUNDARY)


def test_word_boundary_stripped_retry():
    """Unaccented pattern matches accented token via the stripped retry."""
    assert matches("mono- et diglycérides", "diglycerides", MatchType.WORD_BOUNDARY)


def test_pattern_is_case_insensitive():
    assert matches("graisse de porc", "Porc", MatchType.WORD_BOUNDARY)


def test_regex_mode_is_case_insensitive():
    assert matches("contient du rhum", r"\b(?:rhum|rum)\b", MatchType.REGEX)
    assert matches("Contient du RHUM", r"\brhum\b", MatchType.REGEX)


def test_malformed_regex_is_a_non_match(caplog):
    """A broken stored pattern is logged and never raises."""
    with caplog.at_level(logging.WARNING):
        assert matches("anything", "(unclosed", MatchType.REGEX) is False
    assert "Invalid regex" in caplog.text


def test_unknown_mode_is_a_non_match():
    assert matches("porc", "porc", "fuzzy") is False


def test_empty_inputs():
    assert not matches("", "porc", MatchType.CONTAINS)
    assert not matches("porc", "", MatchType.CONTAINS)


def test_validate_rules_quarantines_bad_regex():
    """Malformed regex rules are split out at load time."""
    good = _rule("porc", MatchType.WORD_BOUNDARY)
    bad = _rule("([a-z", MatchType.REGEX)
    empty = _rule("", MatchType.CONTAINS)
    usable, quarantined = validate_rules([good, bad, empty])
    assert usable == [good]
    assert quarantined == [bad, empty]
