from halal_engine.certification import CertificationResolver, label_variants
from halal_engine.models import HalalStatus, HalalTier


def test_prefix_stripped_certifier_lookup():
    """'fr:certification-avs' resolves to the AVS certifier."""
    analysis = CertificationResolver().resolve(["fr:certification-avs"])
    assert analysis.status == HalalStatus.HALAL
    assert analysis.tier == HalalTier.CERTIFIED
    assert analysis.confidence == 0.95
    assert analysis.certifier_id == "avs"
    assert "AVS" in analysis.certifier_name
    assert analysis.analysis_source == "certified_label"


def test_longest_prefix_is_stripped_first():
    assert label_variants("fr:certification-halal-achahada") == [
        "certification-halal-achahada",
        "achahada",
    ]
    assert label_variants("fr:certifié-argml") == ["certifié-argml", "argml"]


def test_bare_certifier_tag():
    match = CertificationResolver().detect(["en:organic", "fr:achahada"])
    assert match.certifier_id == "achahada"


def test_generic_halal_label():
    analysis = CertificationResolver().resolve(["en:halal"], lang="en")
    assert analysis.tier == HalalTier.CERTIFIED
    assert analysis.certifier_id is None
    assert analysis.certifier_name is None
    assert analysis.analysis_source == "halal_label"
    assert analysis.reasons[0].explanation == "Product carries a halal label"


def test_named_certifier_wins_over_generic_label():
    match = CertificationResolver().detect(["en:halal", "fr:certification-mosquee-de-paris"])
    assert match.certifier_id == "mosquee_de_paris"


def test_unrelated_labels_do_not_certify():
    resolver = CertificationResolver()
    assert resolver.resolve(["en:organic", "fr:ab-agriculture-biologique"]) is None
    assert resolver.resolve([]) is None
    assert resolver.resolve(None) is None


def test_custom_tables():
    resolver = CertificationResolver(
        certifiers={"acme": "Acme Halal"},
        certifier_tags={"acme": "acme"},
        generic_tags=[],
    )
    assert resolver.resolve(["xx:certification-acme"]).certifier_name == "Acme Halal"
    assert resolver.resolve(["en:halal"]) is None
