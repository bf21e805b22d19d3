"""
FastAPI wrapper for the halal engine.

Endpoints:
- GET /health            : readiness probe
- POST /halal/analyze    : resolve halal status from raw ingredient/additive/label data
- POST /halal/product    : resolve halal status for a barcode (OpenFoodFacts)
- GET /additives/{code}  : additive detail with per-school rulings

Run locally:
    uvicorn api_server:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, validator

from halal_engine import (
    AnalysisOptions,
    HalalEngine,
    Madhab,
    OpenFoodFactsClient,
    PostgresRuleRepository,
    StaticRuleRepository,
    Strictness,
)
from halal_engine import config

logging.basicConfig(
    level=config.get_log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Halal Engine API",
    description="REST API for halal status resolution (ingredient rules, additives, certification labels).",
    version="1.0.0",
)

# CORS for broad consumption; tighten in production by setting allowed origins.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class AnalysisSettings(BaseModel):
    madhab: Optional[Madhab] = Field(None, description="School of jurisprudence (default: general)")
    strictness: Optional[Strictness] = Field(None, description="Strictness level (default: moderate)")
    all_madhabs: bool = Field(False, description="Also return the verdict for every school.")

    def options(self) -> AnalysisOptions:
        return AnalysisOptions(
            madhab=self.madhab or config.get_default_madhab(),
            strictness=self.strictness or config.get_default_strictness(),
        )


class AnalyzeRequest(AnalysisSettings):
    ingredients_text: Optional[str] = Field(None, description="Raw ingredient list")
    additives_tags: List[str] = Field(default_factory=list, description="e.g. en:e471, en:e322i")
    labels_tags: List[str] = Field(default_factory=list, description="e.g. fr:certification-avs")
    ingredients_analysis_tags: List[str] = Field(default_factory=list, description="e.g. en:vegan")

    @validator("additives_tags", "labels_tags", "ingredients_analysis_tags", pre=True)
    def _clean_tags(cls, v):
        if v is None:
            return []
        return [str(tag).strip() for tag in v if str(tag).strip()]


class ProductRequest(AnalysisSettings):
    barcode: str = Field(..., description="Product EAN/UPC barcode")

    @validator("barcode")
    def _strip_barcode(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("barcode must not be empty")
        return v


class AnalysisResponse(BaseModel):
    analysis: Dict
    by_madhab: Optional[Dict[str, Dict]] = None
    product: Optional[Dict] = None


def build_engine() -> HalalEngine:
    dsn = config.get_db_dsn()
    repository = PostgresRuleRepository(dsn) if dsn else StaticRuleRepository()
    return HalalEngine(repository=repository, product_source=OpenFoodFactsClient())


# Shared singleton
engine = build_engine()
config.log_config()


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


def _by_madhab(inputs: Dict, request: AnalysisSettings) -> Optional[Dict[str, Dict]]:
    if not request.all_madhabs:
        return None
    results = engine.analyze_all_madhabs(strictness=request.options().strictness, **inputs)
    return {madhab.value: analysis.to_dict() for madhab, analysis in results.items()}


@app.post("/halal/analyze", response_model=AnalysisResponse)
def analyze(request: AnalyzeRequest):
    inputs = {
        "ingredients_text": request.ingredients_text,
        "additives_tags": request.additives_tags,
        "labels_tags": request.labels_tags,
        "ingredients_analysis_tags": request.ingredients_analysis_tags,
    }
    analysis = engine.analyze(options=request.options(), **inputs)
    return {"analysis": analysis.to_dict(), "by_madhab": _by_madhab(inputs, request)}


@app.post("/halal/product", response_model=AnalysisResponse)
def product(request: ProductRequest):
    assessment = engine.assess(request.barcode, request.options())
    if not assessment:
        raise HTTPException(status_code=404, detail="Product not found on OpenFoodFacts")

    found = assessment.product
    inputs = {
        "ingredients_text": found.ingredients_text,
        "additives_tags": found.additives_tags,
        "labels_tags": found.labels_tags,
        "ingredients_analysis_tags": found.ingredients_analysis_tags,
    }
    return {
        "analysis": assessment.analysis.to_dict(),
        "by_madhab": _by_madhab(inputs, request),
        "product": {
            "ean": found.ean,
            "name": found.name,
            "brand": found.brand,
            "source": found.source,
            "ingredients_text": found.ingredients_text,
            "additives_tags": found.additives_tags,
            "labels_tags": found.labels_tags,
        },
    }


@app.get("/additives/{code}")
def additive(code: str, lang: str = "fr"):
    lookup = engine.additive_resolver.lookup(code)
    if not lookup:
        raise HTTPException(status_code=404, detail=f"Unknown additive {code}")
    return lookup.to_dict(lang=lang)


if __name__ == "__main__":
    uvicorn.run("api_server:app", host="0.0.0.0", port=8000, reload=False)
