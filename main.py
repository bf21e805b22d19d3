"""
CLI entrypoint to resolve the halal status of a product.

Flow:
- Parse user inputs (EAN or raw ingredient/additive/label data, madhab,
  strictness, output format, rule source).
- Choose the rule source (bundled corpus or PostgreSQL) and the product
  source (OpenFoodFacts).
- Build the HalalEngine and analyze the product, for one madhab or all.
- Render either a text report or JSON payload and append a history record.
"""

import argparse
import csv
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from halal_engine import (
    AnalysisOptions,
    HalalAnalysis,
    HalalEngine,
    Madhab,
    OpenFoodFactsClient,
    PostgresRuleRepository,
    StaticRuleRepository,
    Strictness,
)
from halal_engine import config
from halal_engine.models import MADHAB_LABELS

# Simple i18n table for CLI output (extendable with more locales).
TRANSLATIONS = {
    "en": {
        "title": "=== Halal Check ===",
        "verdict": "Verdict",
        "confidence": "Confidence",
        "tier": "Tier",
        "certifier": "Certifier",
        "madhab": "School",
        "strictness": "Strictness",
        "reasons": "Reasons",
        "by_madhab": "=== By school ===",
        "product_not_found": "Product not found.",
        "no_input": "Provide --ean or at least one of --ingredients/--additives/--labels.",
        "status_halal": "halal",
        "status_haram": "haram",
        "status_doubtful": "doubtful",
        "status_unknown": "unknown",
        "tier_certified": "certified",
        "tier_analyzed_clean": "analyzed, no issue found",
        "tier_doubtful": "doubtful",
        "tier_haram": "haram",
    },
    "fr": {
        "title": "=== Vérification halal ===",
        "verdict": "Verdict",
        "confidence": "Confiance",
        "tier": "Niveau",
        "certifier": "Certificateur",
        "madhab": "École",
        "strictness": "Rigueur",
        "reasons": "Justifications",
        "by_madhab": "=== Par école ===",
        "product_not_found": "Produit introuvable.",
        "no_input": "Indiquez --ean ou au moins --ingredients/--additives/--labels.",
        "status_halal": "halal",
        "status_haram": "haram",
        "status_doubtful": "douteux",
        "status_unknown": "inconnu",
        "tier_certified": "certifié",
        "tier_analyzed_clean": "analysé, aucun problème",
        "tier_doubtful": "douteux",
        "tier_haram": "haram",
    },
}


def _t(key: str, lang: str = "en") -> str:
    """Translate a key to the requested language with English fallback."""
    bundle = TRANSLATIONS.get(lang, TRANSLATIONS["en"])
    return bundle.get(key) or TRANSLATIONS["en"].get(key, key)


def _split(value: Optional[str]) -> List[str]:
    return [item.strip() for item in (value or "").split(",") if item.strip()]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Configure and parse CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Resolve the halal status of a product"
    )
    parser.add_argument("--ean", default=None, help="Product barcode/EAN (looked up on OpenFoodFacts)")
    parser.add_argument("--ingredients", default=None, help="Raw ingredient list text")
    parser.add_argument(
        "--additives",
        default=None,
        help="Comma-separated additive tags (e.g. en:e471,en:e322i)",
    )
    parser.add_argument(
        "--labels",
        default=None,
        help="Comma-separated label tags (e.g. fr:certification-avs)",
    )
    parser.add_argument(
        "--analysis-tags",
        default=None,
        help="Comma-separated ingredient analysis tags (e.g. en:vegan)",
    )
    parser.add_argument(
        "--madhab",
        choices=[m.value for m in Madhab],
        default=None,
        help="School of jurisprudence (default: HALAL_DEFAULT_MADHAB or general)",
    )
    parser.add_argument(
        "--strictness",
        choices=[s.value for s in Strictness],
        default=None,
        help="Strictness level (default: HALAL_DEFAULT_STRICTNESS or moderate)",
    )
    parser.add_argument(
        "--all-madhabs",
        action="store_true",
        default=False,
        help="Report the verdict for every school",
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--db-dsn",
        default=None,
        help="PostgreSQL DSN. If set, rules are read from DB instead of the bundled corpus.",
    )
    parser.add_argument(
        "--lang",
        choices=["en", "fr"],
        default="en",
        help="Language for output labels and explanations. Defaults to en.",
    )
    return parser.parse_args(argv)


def render_text_result(
    analysis: HalalAnalysis,
    lang: str = "en",
    headline: Optional[str] = None,
    options: Optional[AnalysisOptions] = None,
) -> str:
    """Pretty-print a verdict followed by its reasons."""
    lines = [_t("title", lang)]
    if headline:
        lines.append(headline)
    lines.append(
        f"{_t('verdict', lang)}: {_t('status_' + analysis.status.value, lang).upper()} "
        f"({_t('confidence', lang)} {analysis.confidence:.0%})"
    )
    lines.append(f"{_t('tier', lang)}: {_t('tier_' + analysis.tier.value, lang)}")
    if analysis.certifier_name:
        lines.append(f"{_t('certifier', lang)}: {analysis.certifier_name}")
    if options:
        lines.append(
            f"{_t('madhab', lang)}: {MADHAB_LABELS[options.madhab]} · "
            f"{_t('strictness', lang)}: {options.strictness.value}"
        )
    if analysis.reasons:
        lines.append(f"\n{_t('reasons', lang)}:")
        for reason in analysis.reasons:
            label = f"{reason.code} {reason.name}" if reason.code and reason.code != reason.name else reason.name
            lines.append(
                f"  - [{_t('status_' + reason.status.value, lang)}] {label}: {reason.explanation}"
            )
    return "\n".join(lines)


def render_madhab_table(results: Dict[Madhab, HalalAnalysis], lang: str = "en") -> str:
    lines = [_t("by_madhab", lang)]
    for madhab, analysis in results.items():
        lines.append(
            f"  {MADHAB_LABELS[madhab]:<8} {_t('status_' + analysis.status.value, lang):<10} "
            f"{analysis.confidence:.0%}"
        )
    return "\n".join(lines)


def _next_history_id(path: Path) -> int:
    """Return the next numeric ID for the history CSV."""
    if not path.exists():
        return 1
    last_id = 0
    with path.open("r", newline="", encoding="utf-8") as fh:
        for row in csv.DictReader(fh):
            try:
                last_id = max(last_id, int(row.get("id", 0)))
            except ValueError:
                continue
    return last_id + 1


def append_history(
    args: argparse.Namespace,
    analysis: Optional[HalalAnalysis],
    options: AnalysisOptions,
    product_name: str = "",
    command_label: str = "cli",
    history_path: Optional[Path] = None,
) -> None:
    """Persist the last analysis to a simple CSV audit log."""
    history_path = history_path or config.get_history_path()
    history_path.parent.mkdir(parents=True, exist_ok=True)

    fieldnames = [
        "id",
        "ean",
        "command",
        "lang",
        "madhab",
        "strictness",
        "product_name",
        "status",
        "tier",
        "confidence",
        "certifier",
        "reasons",
    ]
    row = {
        "id": _next_history_id(history_path),
        "ean": args.ean or "",
        "command": command_label,
        "lang": args.lang,
        "madhab": options.madhab.value,
        "strictness": options.strictness.value,
        "product_name": product_name,
        "status": "",
        "tier": "",
        "confidence": "",
        "certifier": "",
        "reasons": "",
    }
    if analysis:
        row["status"] = analysis.status.value
        row["tier"] = analysis.tier.value
        row["confidence"] = f"{analysis.confidence:.2f}"
        row["certifier"] = analysis.certifier_id or ""
        row["reasons"] = json.dumps(
            [reason.to_dict() for reason in analysis.reasons], ensure_ascii=False
        )
    else:
        row["product_name"] = "NOT_FOUND"

    write_header = not history_path.exists()
    with history_path.open("a", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=fieldnames)
        if write_header:
            writer.writeheader()
        writer.writerow(row)


def build_engine(args: argparse.Namespace) -> HalalEngine:
    dsn = args.db_dsn or config.get_db_dsn()
    repository = PostgresRuleRepository(dsn) if dsn else StaticRuleRepository()
    return HalalEngine(
        repository=repository,
        product_source=OpenFoodFactsClient(),
        lang=args.lang,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Entrypoint: build the engine, run the analysis, render output, and log history."""
    logging.basicConfig(
        level=config.get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = parse_args(argv)
    config.log_config()

    options = AnalysisOptions(
        madhab=Madhab(args.madhab) if args.madhab else config.get_default_madhab(),
        strictness=Strictness(args.strictness) if args.strictness else config.get_default_strictness(),
    )
    if not (args.ean or args.ingredients or args.additives or args.labels):
        print(_t("no_input", args.lang))
        return 2

    engine = build_engine(args)
    inputs = {
        "ingredients_text": args.ingredients,
        "additives_tags": _split(args.additives),
        "labels_tags": _split(args.labels),
        "ingredients_analysis_tags": _split(args.analysis_tags),
    }
    headline = None
    product_name = ""
    if args.ean:
        assessment = engine.assess(args.ean, options)
        if assessment is None:
            print(_t("product_not_found", args.lang))
            append_history(args, None, options, command_label="main_cli")
            return 1
        product = assessment.product
        analysis = assessment.analysis
        inputs = {
            "ingredients_text": product.ingredients_text,
            "additives_tags": product.additives_tags,
            "labels_tags": product.labels_tags,
            "ingredients_analysis_tags": product.ingredients_analysis_tags,
        }
        product_name = product.name
        headline = f"{product.name} ({product.ean})"
        if product.brand:
            headline += f" · {product.brand}"
    else:
        analysis = engine.analyze(options=options, **inputs)

    by_madhab = (
        engine.analyze_all_madhabs(strictness=options.strictness, **inputs)
        if args.all_madhabs
        else None
    )

    if args.format == "json":
        output = {
            "ean": args.ean,
            "product_name": product_name or None,
            "madhab": options.madhab.value,
            "strictness": options.strictness.value,
            "analysis": analysis.to_dict(),
        }
        if by_madhab:
            output["by_madhab"] = {m.value: a.to_dict() for m, a in by_madhab.items()}
        print(json.dumps(output, indent=2, ensure_ascii=False))
    else:
        print(render_text_result(analysis, lang=args.lang, headline=headline, options=options))
        if by_madhab:
            print("\n" + render_madhab_table(by_madhab, lang=args.lang))

    append_history(args, analysis, options, product_name=product_name, command_label="main_cli")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
