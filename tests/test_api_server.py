from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from halal_engine import HalalEngine, ProductInfo, StaticRuleRepository


@pytest.fixture
def client():
    import api_server

    return TestClient(api_server.app)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_analyze_raw_inputs(client):
    response = client.post(
        "/halal/analyze",
        json={"ingredients_text": "Graisse de porc, sel, eau"},
    )
    assert response.status_code == 200
    analysis = response.json()["analysis"]
    assert analysis["status"] == "haram"
    assert analysis["tier"] == "haram"


def test_analyze_all_madhabs(client):
    response = client.post(
        "/halal/analyze",
        json={"additives_tags": ["en:e120"], "madhab": "maliki", "all_madhabs": True},
    )
    body = response.json()
    assert body["analysis"]["status"] == "halal"
    assert body["by_madhab"]["hanafi"]["status"] == "haram"
    assert set(body["by_madhab"]) == {"general", "hanafi", "shafii", "maliki", "hanbali"}


def test_invalid_madhab_is_rejected(client):
    response = client.post("/halal/analyze", json={"madhab": "zahiri"})
    assert response.status_code == 422


def test_product_endpoint(client):
    import api_server

    class FakeSource:
        def get_product(self, ean):
            if ean != "123":
                return None
            return ProductInfo(ean="123", name="Bonbons", labels_tags=["fr:certification-avs"])

    engine = HalalEngine(repository=StaticRuleRepository(), product_source=FakeSource())
    with patch.object(api_server, "engine", engine):
        found = client.post("/halal/product", json={"barcode": "123"})
        missing = client.post("/halal/product", json={"barcode": "999"})

    assert found.status_code == 200
    body = found.json()
    assert body["product"]["name"] == "Bonbons"
    assert body["analysis"]["tier"] == "certified"
    assert body["analysis"]["certifier_id"] == "avs"
    assert missing.status_code == 404


def test_additive_lookup(client):
    response = client.get("/additives/en:e471", params={"lang": "en"})
    assert response.status_code == 200
    body = response.json()
    assert body["code"] == "E471"
    assert body["name"] == "Mono- and Diglycerides"


def test_unknown_additive(client):
    assert client.get("/additives/E9999").status_code == 404
