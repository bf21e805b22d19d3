"""
Data source implementation for OpenFoodFacts.
Fetches product JSON and exposes the fields the halal engine reads
(ingredient text, additive, label and ingredient-analysis tags) as a
ProductInfo.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import requests

from . import config
from .models import ProductInfo

FIELDS = (
    "product_name",
    "product_name_fr",
    "brands",
    "ingredients_text",
    "ingredients_text_fr",
    "ingredients_text_en",
    "additives_tags",
    "labels_tags",
    "ingredients_analysis_tags",
)


class ProductDataSource:
    """
    Base interface for any product data source (API, DB, cache).
    """

    def get_product(self, ean: str) -> Optional[ProductInfo]:
        raise NotImplementedError


class OpenFoodFactsClient(ProductDataSource):
    """
    Thin wrapper around the OpenFoodFacts public API.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
    ):
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else config.get_openfoodfacts_timeout()
        self.base_url = (base_url or config.get_openfoodfacts_base_url()).rstrip("/")
        self.user_agent = user_agent or config.get_openfoodfacts_user_agent()
        self.log = logging.getLogger(self.__class__.__name__)

    def product_url(self, ean: str) -> str:
        return f"{self.base_url}/product/{ean}.json"

    def get_product(self, ean: str) -> Optional[ProductInfo]:
        try:
            response = self.session.get(
                self.product_url(ean),
                params={"fields": ",".join(FIELDS)},
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            self.log.warning("OpenFoodFacts fetch failed for %s: %s", ean, exc)
            return None

        if not data or data.get("status") != 1:
            self.log.info("Product %s not found on OpenFoodFacts", ean)
            return None

        product_data = data.get("product", {}) or {}
        return ProductInfo(
            ean=ean,
            name=product_data.get("product_name")
            or product_data.get("product_name_fr")
            or "Unknown product",
            brand=(product_data.get("brands") or "").split(",")[0].strip() or None,
            source="openfoodfacts",
            ingredients_text=self._ingredients_text(product_data),
            additives_tags=self._tags(product_data, "additives_tags"),
            labels_tags=self._tags(product_data, "labels_tags"),
            ingredients_analysis_tags=self._tags(product_data, "ingredients_analysis_tags"),
            raw_payload=product_data,
        )

    @staticmethod
    def _ingredients_text(product_data: dict) -> Optional[str]:
        for key in ("ingredients_text_fr", "ingredients_text", "ingredients_text_en"):
            value = (product_data.get(key) or "").strip()
            if value:
                return value
        return None

    @staticmethod
    def _tags(product_data: dict, key: str) -> List[str]:
        return [tag for tag in product_data.get(key, []) or [] if isinstance(tag, str)]
