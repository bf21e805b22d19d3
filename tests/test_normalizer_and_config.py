import pytest

from halal_engine import config
from halal_engine.models import Madhab, Strictness
from halal_engine.normalizer import DefaultTextNormalizer


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Émulsifiant : E 471", "émulsifiant : e471"),
        ("E-322i, E.330", "e322i, e330"),
        ("Vinaigre  d’alcool\n", "vinaigre d'alcool"),
        ("", ""),
        (None, ""),
    ],
)
def test_default_normalizer(raw, expected):
    assert DefaultTextNormalizer().normalize(raw) == expected


def test_normalizer_composes_decomposed_accents():
    decomposed = "Ge\u0301latine"
    assert DefaultTextNormalizer().normalize(decomposed) == "gélatine"


def test_normalizer_leaves_quantities_alone():
    assert DefaultTextNormalizer().normalize("pâte 100 g") == "pâte 100 g"


def test_config_defaults(monkeypatch):
    for name in (
        "HALAL_RULE_CACHE_TTL",
        "HALAL_DB_DSN",
        "OPENFOODFACTS_BASE_URL",
        "HALAL_DEFAULT_MADHAB",
        "HALAL_DEFAULT_STRICTNESS",
    ):
        monkeypatch.delenv(name, raising=False)
    assert config.get_rule_cache_ttl() == 600
    assert config.get_db_dsn() is None
    assert config.get_openfoodfacts_base_url() == "https://world.openfoodfacts.org/api/v2"
    assert config.get_default_madhab() == Madhab.GENERAL
    assert config.get_default_strictness() == Strictness.MODERATE


def test_config_from_environment(monkeypatch):
    monkeypatch.setenv("HALAL_RULE_CACHE_TTL", "30")
    monkeypatch.setenv("HALAL_DEFAULT_MADHAB", "Hanafi")
    monkeypatch.setenv("HALAL_DEFAULT_STRICTNESS", "very_strict")
    monkeypatch.setenv("OPENFOODFACTS_BASE_URL", "https://off.test/api/v2/")
    assert config.get_rule_cache_ttl() == 30
    assert config.get_default_madhab() == Madhab.HANAFI
    assert config.get_default_strictness() == Strictness.VERY_STRICT
    assert config.get_openfoodfacts_base_url() == "https://off.test/api/v2"


def test_history_path_is_under_repo_root():
    path = config.get_history_path()
    assert path.parts[-3:] == ("db", "history", "history.csv")
