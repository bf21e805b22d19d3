"""
Bundled rule corpus.

Literal tables for additives, per-school additive rulings, ingredient pattern
rulings and the legacy additive fallback table, plus builders that turn them
into immutable records. The values are a curated subset; a production
deployment reads the full corpus through PostgresRuleRepository.

Ingredient rule priorities:
- 100+  safe compounds that override a keyword (vinaigre de vin)
- 50-99 haram/doubtful compounds (gélatine porcine)
- 1-49  individual keywords (vin, porc)
"""

from __future__ import annotations

from typing import Dict, List

from .models import (
    AdditiveRecord,
    HalalStatus,
    IngredientRulingRecord,
    Madhab,
    MadhabRuling,
    MatchType,
)

# Canonical E-number -> additive metadata.
ADDITIVES: Dict[str, Dict[str, object]] = {
    "E100": {
        "name_fr": "Curcumine",
        "name_en": "Curcumin",
        "category": "colorant",
        "status": "halal",
        "fr": "Colorant naturel extrait du curcuma",
        "en": "Natural colouring extracted from turmeric",
        "origin": "plant",
    },
    "E102": {
        "name_fr": "Tartrazine",
        "name_en": "Tartrazine",
        "category": "colorant",
        "status": "halal",
        "fr": "Colorant synthétique azoïque",
        "en": "Synthetic azo dye",
        "origin": "synthetic",
        "risk_children": True,
        "risk_allergic": True,
    },
    "E120": {
        "name_fr": "Carmine / Cochenille",
        "name_en": "Carmine / Cochineal",
        "category": "colorant",
        "status": "haram",
        "fr": "Colorant extrait d'insectes (cochenille)",
        "en": "Colouring extracted from insects (cochineal)",
        "origin": "insect",
        "risk_allergic": True,
    },
    "E300": {
        "name_fr": "Acide ascorbique",
        "name_en": "Ascorbic Acid",
        "category": "antioxidant",
        "status": "halal",
        "fr": "Vitamine C",
        "en": "Vitamin C",
        "origin": "synthetic",
    },
    "E322": {
        "name_fr": "Lécithine",
        "name_en": "Lecithin",
        "category": "emulsifier",
        "status": "halal",
        "fr": "Généralement d'origine soja ou tournesol",
        "en": "Usually from soy or sunflower",
        "origin": "plant",
    },
    "E330": {
        "name_fr": "Acide citrique",
        "name_en": "Citric Acid",
        "category": "acid",
        "status": "halal",
        "fr": "Acide de fruit, fermentation",
        "en": "Fruit acid, fermentation",
        "origin": "plant",
    },
    "E422": {
        "name_fr": "Glycérol",
        "name_en": "Glycerol",
        "category": "humectant",
        "status": "doubtful",
        "fr": "Peut être d'origine animale (graisses) ou végétale, origine inconnue",
        "en": "May be of animal (fat) or plant origin, source unknown",
        "origin": "mixed",
    },
    "E441": {
        "name_fr": "Gélatine",
        "name_en": "Gelatin",
        "category": "thickener",
        "status": "haram",
        "fr": "Collagène animal, généralement d'origine porcine ou bovine non-zabiha",
        "en": "Animal collagen, usually porcine or non-zabiha bovine",
        "origin": "animal",
    },
    "E471": {
        "name_fr": "Mono- et diglycérides d'acides gras",
        "name_en": "Mono- and Diglycerides",
        "category": "emulsifier",
        "status": "doubtful",
        "fr": "Origine animale ou végétale non précisée",
        "en": "Animal or plant origin not specified",
        "origin": "mixed",
    },
    "E481": {
        "name_fr": "Stéaroyl-2-lactylate de sodium",
        "name_en": "Sodium Stearoyl Lactylate",
        "category": "emulsifier",
        "status": "doubtful",
        "fr": "Acide stéarique d'origine animale ou végétale variable",
        "en": "Stearic acid of variable animal or plant origin",
        "origin": "mixed",
    },
    "E542": {
        "name_fr": "Phosphate d'os",
        "name_en": "Bone Phosphate",
        "category": "anti_caking",
        "status": "haram",
        "fr": "Extrait d'os d'animaux",
        "en": "Extracted from animal bones",
        "origin": "animal",
    },
    "E631": {
        "name_fr": "Inosinate disodique",
        "name_en": "Disodium Inosinate",
        "category": "flavor_enhancer",
        "status": "doubtful",
        "fr": "Peut être d'origine animale (poisson, viande)",
        "en": "May be of animal origin (fish, meat)",
        "origin": "mixed",
    },
    "E901": {
        "name_fr": "Cire d'abeille",
        "name_en": "Beeswax",
        "category": "glazing_agent",
        "status": "halal",
        "fr": "Produit d'abeille, halal par consensus (comme le miel)",
        "en": "Bee product, halal by consensus (like honey)",
        "origin": "animal",
    },
    "E904": {
        "name_fr": "Shellac / Gomme-laque",
        "name_en": "Shellac",
        "category": "glazing_agent",
        "status": "doubtful",
        "fr": "Résine sécrétée par l'insecte lac, débat entre savants",
        "en": "Resin secreted by the lac insect, debated among scholars",
        "origin": "insect",
    },
    "E920": {
        "name_fr": "L-Cystéine",
        "name_en": "L-Cysteine",
        "category": "other",
        "status": "doubtful",
        "fr": "Peut être extraite de plumes de volaille ou de cheveux humains",
        "en": "May be extracted from poultry feathers or human hair",
        "origin": "mixed",
    },
}

# (code, madhab) -> ruling. Pairs absent here defer to the additive default.
ADDITIVE_MADHAB_RULINGS: List[Dict[str, object]] = [
    {"code": "E120", "madhab": "hanafi", "ruling": "haram",
     "explanation": "Extrait d'insectes. Les insectes ne sont pas licites dans le fiqh hanafite.",
     "reference": "SeekersGuidance"},
    {"code": "E120", "madhab": "shafii", "ruling": "haram",
     "explanation": "Insectes considérés impurs.",
     "reference": "IslamQA"},
    {"code": "E120", "madhab": "maliki", "ruling": "halal",
     "explanation": "L'école malikite admet la consommation de certains insectes ; "
                    "le carmin est toléré.",
     "reference": "Khalil, Mukhtasar"},
    {"code": "E120", "madhab": "hanbali", "ruling": "haram",
     "explanation": "Insectes non licites à la consommation.",
     "reference": "IslamQA.info"},
    {"code": "E441", "madhab": "hanafi", "ruling": "doubtful",
     "explanation": "Débat sur l'istihalah ; la majorité des muftis contemporains "
                    "jugent la transformation insuffisante.",
     "reference": "SeekersGuidance, Darul Ifta Azaadville"},
    {"code": "E441", "madhab": "shafii", "ruling": "haram",
     "explanation": "L'école shafi'ite n'accepte pas l'istihalah pour les substances najis.",
     "reference": "IslamQA, Utrujj Foundation"},
    {"code": "E441", "madhab": "maliki", "ruling": "doubtful",
     "explanation": "Certains savants malikites acceptent l'istihalah. Position non unanime.",
     "reference": "IIFA"},
    {"code": "E441", "madhab": "hanbali", "ruling": "haram",
     "explanation": "Produits d'animaux non abattus rituellement considérés impurs.",
     "reference": "IslamQA.info"},
    {"code": "E471", "madhab": "hanafi", "ruling": "doubtful",
     "explanation": "Halal si d'origine végétale, douteux sinon.",
     "reference": "SeekersGuidance"},
    {"code": "E471", "madhab": "shafii", "ruling": "doubtful",
     "explanation": "Douteux si origine inconnue.",
     "reference": "IslamQA"},
    {"code": "E542", "madhab": "hanafi", "ruling": "haram",
     "explanation": "Phosphate d'os d'animaux non-zabiha ou de porc.",
     "reference": "Darul Ifta"},
    {"code": "E542", "madhab": "shafii", "ruling": "haram",
     "explanation": "Os d'animal non-zabiha : najis.",
     "reference": "IslamQA"},
    {"code": "E904", "madhab": "hanafi", "ruling": "doubtful",
     "explanation": "Certains hanafis la comparent au miel. Non consensuel.",
     "reference": "SeekersGuidance"},
    {"code": "E920", "madhab": "hanafi", "ruling": "doubtful",
     "explanation": "Plumes de volaille ou cheveux humains : origine à vérifier.",
     "reference": "SeekersGuidance"},
]

# Ingredient pattern rulings. "schools" only lists schools that diverge from "default".
INGREDIENT_RULINGS: List[Dict[str, object]] = [
    # Safe compounds
    {"pattern": "vinaigre d'alcool", "match": "contains", "priority": 115, "default": "halal",
     "schools": {"shafii": "doubtful", "maliki": "doubtful"}, "confidence": 0.8,
     "overrides": "alcool", "category": "vinegar",
     "fr": "Vinaigre d'alcool : l'alcool est entièrement transformé (istihalah).",
     "en": "Spirit vinegar: the alcohol is fully transformed (istihalah)."},
    {"pattern": "spirit vinegar", "match": "contains", "priority": 115, "default": "halal",
     "schools": {"shafii": "doubtful", "maliki": "doubtful"}, "confidence": 0.8,
     "overrides": "alcohol", "category": "vinegar",
     "fr": "Vinaigre d'alcool : l'alcool est entièrement transformé (istihalah).",
     "en": "Spirit vinegar: the alcohol is fully transformed (istihalah)."},
    {"pattern": "vinaigre de vin", "match": "contains", "priority": 110, "default": "doubtful",
     "schools": {"hanafi": "halal", "hanbali": "halal"}, "confidence": 0.6,
     "overrides": "vin", "category": "vinegar",
     "fr": "Vinaigre de vin : licite par istihalah selon hanafites et hanbalites.",
     "en": "Wine vinegar: permissible through istihalah for Hanafi and Hanbali."},
    {"pattern": "wine vinegar", "match": "contains", "priority": 110, "default": "doubtful",
     "schools": {"hanafi": "halal", "hanbali": "halal"}, "confidence": 0.6,
     "overrides": "wine", "category": "vinegar",
     "fr": "Vinaigre de vin : licite par istihalah selon hanafites et hanbalites.",
     "en": "Wine vinegar: permissible through istihalah for Hanafi and Hanbali."},
    {"pattern": "vinaigre", "match": "word_boundary", "priority": 105, "default": "halal",
     "confidence": 0.95, "overrides": "vin", "category": "vinegar",
     "fr": "Le vinaigre est licite par consensus.",
     "en": "Vinegar is permissible by consensus."},
    {"pattern": "vinegar", "match": "word_boundary", "priority": 105, "default": "halal",
     "confidence": 0.95, "overrides": "wine", "category": "vinegar",
     "fr": "Le vinaigre est licite par consensus.",
     "en": "Vinegar is permissible by consensus."},
    {"pattern": "gélatine bovine halal", "match": "contains", "priority": 100, "default": "halal",
     "confidence": 0.98, "overrides": "gélatine", "category": "gelatin",
     "fr": "Gélatine bovine certifiée halal.",
     "en": "Halal-certified bovine gelatin."},
    {"pattern": "gélatine de poisson", "match": "contains", "priority": 100, "default": "halal",
     "confidence": 0.97, "overrides": "gélatine", "category": "gelatin",
     "fr": "Gélatine de poisson : licite.",
     "en": "Fish gelatin: permissible."},
    {"pattern": "fish gelatin", "match": "contains", "priority": 100, "default": "halal",
     "confidence": 0.97, "overrides": "gelatin", "category": "gelatin",
     "fr": "Gélatine de poisson : licite.",
     "en": "Fish gelatin: permissible."},
    {"pattern": "présure microbienne", "match": "contains", "priority": 100, "default": "halal",
     "confidence": 0.97, "overrides": "présure", "category": "rennet",
     "fr": "Présure microbienne : aucune origine animale.",
     "en": "Microbial rennet: no animal origin."},
    {"pattern": "microbial rennet", "match": "contains", "priority": 100, "default": "halal",
     "confidence": 0.97, "overrides": "rennet", "category": "rennet",
     "fr": "Présure microbienne : aucune origine animale.",
     "en": "Microbial rennet: no animal origin."},
    {"pattern": "graisse de canard", "match": "contains", "priority": 100, "default": "doubtful",
     "confidence": 0.65, "overrides": "lard", "category": "animal_fat",
     "fr": "Graisse de canard : dépend de l'abattage.",
     "en": "Duck fat: depends on slaughter method."},
    # Haram compounds
    {"pattern": "gélatine porcine", "match": "contains", "priority": 90, "default": "haram",
     "confidence": 0.95, "overrides": "gélatine", "category": "gelatin",
     "fr": "Gélatine de porc : haram.",
     "en": "Pork gelatin: haram."},
    {"pattern": "gélatine de porc", "match": "contains", "priority": 90, "default": "haram",
     "confidence": 0.95, "overrides": "gélatine", "category": "gelatin",
     "fr": "Gélatine de porc : haram.",
     "en": "Pork gelatin: haram."},
    {"pattern": "pork gelatin", "match": "contains", "priority": 90, "default": "haram",
     "confidence": 0.95, "overrides": "gelatin", "category": "gelatin",
     "fr": "Gélatine de porc : haram.",
     "en": "Pork gelatin: haram."},
    {"pattern": "graisse de porc", "match": "contains", "priority": 90, "default": "haram",
     "confidence": 0.99, "category": "pork",
     "fr": "Graisse de porc (saindoux) : haram par consensus (Coran 2:173).",
     "en": "Pork fat (lard): haram by consensus (Quran 2:173).",
     "reference": "Coran 2:173, 5:3, 6:145"},
    # Keywords
    {"pattern": "porc", "match": "word_boundary", "priority": 40, "default": "haram",
     "confidence": 0.99, "category": "pork",
     "fr": "Porc : haram par consensus.", "en": "Pork: haram by consensus.",
     "reference": "Coran 2:173"},
    {"pattern": "pork", "match": "word_boundary", "priority": 40, "default": "haram",
     "confidence": 0.99, "category": "pork",
     "fr": "Porc : haram par consensus.", "en": "Pork: haram by consensus.",
     "reference": "Quran 2:173"},
    {"pattern": "lard", "match": "word_boundary", "priority": 38, "default": "haram",
     "confidence": 0.99, "category": "pork",
     "fr": "Lard : graisse de porc.", "en": "Lard: pork fat."},
    {"pattern": "saindoux", "match": "word_boundary", "priority": 38, "default": "haram",
     "confidence": 0.99, "category": "pork",
     "fr": "Saindoux : graisse de porc.", "en": "Saindoux: pork fat."},
    {"pattern": "vin", "match": "word_boundary", "priority": 30, "default": "haram",
     "confidence": 0.99, "category": "alcohol",
     "fr": "Vin : boisson enivrante (khamr).", "en": "Wine: intoxicant (khamr)."},
    {"pattern": "wine", "match": "word_boundary", "priority": 30, "default": "haram",
     "confidence": 0.99, "category": "alcohol",
     "fr": "Vin : boisson enivrante (khamr).", "en": "Wine: intoxicant (khamr)."},
    {"pattern": "bière", "match": "word_boundary", "priority": 30, "default": "haram",
     "confidence": 0.99, "category": "alcohol",
     "fr": "Bière : boisson enivrante.", "en": "Beer: intoxicant."},
    {"pattern": "beer", "match": "word_boundary", "priority": 30, "default": "haram",
     "confidence": 0.99, "category": "alcohol",
     "fr": "Bière : boisson enivrante.", "en": "Beer: intoxicant."},
    {"pattern": r"\b(?:rhum|rum|whisky|vodka|brandy)\b", "match": "regex", "priority": 30,
     "default": "haram", "confidence": 0.99, "category": "alcohol",
     "fr": "Spiritueux : boisson enivrante.", "en": "Spirits: intoxicant."},
    {"pattern": "alcool", "match": "word_boundary", "priority": 28, "default": "haram",
     "confidence": 0.95, "category": "alcohol",
     "fr": "Alcool ajouté.", "en": "Added alcohol."},
    {"pattern": "alcohol", "match": "word_boundary", "priority": 28, "default": "haram",
     "confidence": 0.95, "category": "alcohol",
     "fr": "Alcool ajouté.", "en": "Added alcohol."},
    {"pattern": "éthanol", "match": "word_boundary", "priority": 26, "default": "haram",
     "confidence": 0.9, "category": "alcohol",
     "fr": "Éthanol ajouté.", "en": "Added ethanol."},
    {"pattern": "gélatine", "match": "word_boundary", "priority": 25, "default": "doubtful",
     "confidence": 0.6, "category": "gelatin",
     "fr": "Gélatine d'origine non précisée.", "en": "Gelatin of unspecified origin."},
    {"pattern": "gelatin", "match": "word_boundary", "priority": 25, "default": "doubtful",
     "confidence": 0.6, "category": "gelatin",
     "fr": "Gélatine d'origine non précisée.", "en": "Gelatin of unspecified origin."},
    {"pattern": "carmine", "match": "word_boundary", "priority": 25, "default": "haram",
     "schools": {"maliki": "halal"}, "confidence": 0.8, "category": "insect_derived",
     "fr": "Carmin : extrait de cochenille.", "en": "Carmine: extracted from cochineal."},
    {"pattern": "cochenille", "match": "word_boundary", "priority": 25, "default": "haram",
     "schools": {"maliki": "halal"}, "confidence": 0.8, "category": "insect_derived",
     "fr": "Cochenille : insecte.", "en": "Cochineal: insect."},
    {"pattern": "e120", "match": "word_boundary", "priority": 25, "default": "haram",
     "schools": {"maliki": "halal"}, "confidence": 0.8, "category": "insect_derived",
     "fr": "E120 : carmin de cochenille.", "en": "E120: cochineal carmine."},
    {"pattern": "présure", "match": "word_boundary", "priority": 20, "default": "doubtful",
     "schools": {"hanafi": "halal", "hanbali": "halal", "shafii": "haram", "maliki": "haram"},
     "confidence": 0.75, "category": "rennet",
     "fr": "Présure animale : divergence entre écoles.",
     "en": "Animal rennet: schools disagree."},
    {"pattern": "rennet", "match": "word_boundary", "priority": 20, "default": "doubtful",
     "schools": {"hanafi": "halal", "hanbali": "halal", "shafii": "haram", "maliki": "haram"},
     "confidence": 0.75, "category": "rennet",
     "fr": "Présure animale : divergence entre écoles.",
     "en": "Animal rennet: schools disagree."},
    {"pattern": "lactosérum", "match": "word_boundary", "priority": 18, "default": "doubtful",
     "schools": {"hanafi": "halal", "hanbali": "halal"}, "confidence": 0.6, "category": "rennet",
     "fr": "Lactosérum : peut provenir d'une présure animale.",
     "en": "Whey: may come from animal rennet."},
    {"pattern": "whey", "match": "word_boundary", "priority": 18, "default": "doubtful",
     "schools": {"hanafi": "halal", "hanbali": "halal"}, "confidence": 0.6, "category": "rennet",
     "fr": "Lactosérum : peut provenir d'une présure animale.",
     "en": "Whey: may come from animal rennet."},
    {"pattern": "e471", "match": "word_boundary", "priority": 18, "default": "doubtful",
     "confidence": 0.9, "overrides": "mono-", "category": "emulsifier",
     "fr": "E471 : mono- et diglycérides d'origine non précisée.",
     "en": "E471: mono- and diglycerides of unspecified origin."},
    {"pattern": "mono-", "match": "contains", "priority": 15, "default": "doubtful",
     "confidence": 0.9, "category": "emulsifier",
     "fr": "Mono- et diglycérides d'origine non précisée.",
     "en": "Mono- and diglycerides of unspecified origin."},
    {"pattern": "diglycerides", "match": "word_boundary", "priority": 15, "default": "doubtful",
     "confidence": 0.9, "category": "emulsifier",
     "fr": "Diglycérides d'origine non précisée.",
     "en": "Diglycerides of unspecified origin."},
    {"pattern": "monoglycérides", "match": "word_boundary", "priority": 15, "default": "doubtful",
     "confidence": 0.9, "category": "emulsifier",
     "fr": "Monoglycérides d'origine non précisée.",
     "en": "Monoglycerides of unspecified origin."},
    {"pattern": "l-cystéine", "match": "contains", "priority": 20, "default": "doubtful",
     "confidence": 0.55, "category": "amino_acid",
     "fr": "L-cystéine : plumes ou cheveux possibles.",
     "en": "L-cysteine: may come from feathers or hair."},
]

# Emulsifier patterns that denote the same compound as an additive code.
EMULSIFIER_PATTERN_CODES: Dict[str, str] = {
    "mono-": "E471",
    "diglycerides": "E471",
    "diglycérides": "E471",
    "monoglycérides": "E471",
    "monoglycerides": "E471",
}

# Lowest-priority static ruleset keyed by the original lowercase OFF tag. Only
# consulted for tags whose canonical code the repository does not know.
LEGACY_ADDITIVES: Dict[str, Dict[str, object]] = {
    "en:e120": {"code": "E120", "name_fr": "Carmine", "name_en": "Carmine",
                "category": "colorant", "status": "haram",
                "fr": "Colorant d'insecte (cochenille)", "origin": "insect"},
    "en:e441": {"code": "E441", "name_fr": "Gélatine", "name_en": "Gelatin",
                "category": "thickener", "status": "haram",
                "fr": "Gélatine animale", "origin": "animal"},
    "en:e471": {"code": "E471", "name_fr": "Mono- et diglycérides", "name_en": "Mono- and diglycerides",
                "category": "emulsifier", "status": "doubtful",
                "fr": "Origine animale ou végétale", "origin": "mixed"},
    "en:e472e": {"code": "E472", "name_fr": "Esters d'acides gras", "name_en": "Fatty acid esters",
                 "category": "emulsifier", "status": "doubtful",
                 "fr": "Origine animale ou végétale", "origin": "mixed"},
    "en:e542": {"code": "E542", "name_fr": "Phosphate d'os", "name_en": "Bone phosphate",
                "category": "anti_caking", "status": "haram",
                "fr": "Extrait d'os d'animaux", "origin": "animal"},
    "en:e904": {"code": "E904", "name_fr": "Gomme-laque", "name_en": "Shellac",
                "category": "glazing_agent", "status": "doubtful",
                "fr": "Sécrétion d'insecte", "origin": "insect"},
    "en:e920": {"code": "E920", "name_fr": "L-Cystéine", "name_en": "L-Cysteine",
                "category": "other", "status": "doubtful",
                "fr": "Plumes ou cheveux possibles", "origin": "mixed"},
    "en:e1105": {"code": "E1105", "name_fr": "Lysozyme", "name_en": "Lysozyme",
                 "category": "preservative", "status": "halal",
                 "fr": "Extrait de blanc d'oeuf", "origin": "animal"},
}


def _additive_from_meta(code: str, meta: Dict[str, object]) -> AdditiveRecord:
    return AdditiveRecord(
        code=code,
        name_fr=str(meta["name_fr"]),
        name_en=meta.get("name_en"),
        category=str(meta.get("category", "other")),
        halal_status_default=HalalStatus(meta["status"]),
        explanation_fr=meta.get("fr"),
        explanation_en=meta.get("en"),
        origin=str(meta.get("origin", "synthetic")),
        risk_pregnant=bool(meta.get("risk_pregnant", False)),
        risk_children=bool(meta.get("risk_children", False)),
        risk_allergic=bool(meta.get("risk_allergic", False)),
    )


def build_additives(table: Dict[str, Dict[str, object]] = ADDITIVES) -> Dict[str, AdditiveRecord]:
    return {code: _additive_from_meta(code, meta) for code, meta in table.items()}


def build_madhab_rulings(
    rows: List[Dict[str, object]] = ADDITIVE_MADHAB_RULINGS,
) -> List[MadhabRuling]:
    return [
        MadhabRuling(
            code=str(row["code"]),
            madhab=Madhab(row["madhab"]),
            ruling=HalalStatus(row["ruling"]) if row.get("ruling") else None,
            explanation=str(row.get("explanation") or ""),
            scholarly_reference=row.get("reference"),
        )
        for row in rows
    ]


def build_ingredient_rulings(
    rows: List[Dict[str, object]] = INGREDIENT_RULINGS,
) -> List[IngredientRulingRecord]:
    rulings: List[IngredientRulingRecord] = []
    for row in rows:
        schools = {
            key: HalalStatus(value) for key, value in dict(row.get("schools") or {}).items()
        }
        rulings.append(
            IngredientRulingRecord(
                compound_pattern=str(row["pattern"]),
                match_type=MatchType(row["match"]),
                priority=int(row.get("priority", 0)),
                ruling_default=HalalStatus(row["default"]),
                confidence=float(row["confidence"]),
                explanation_fr=str(row.get("fr") or ""),
                explanation_en=row.get("en"),
                ruling_hanafi=schools.get("hanafi"),
                ruling_shafii=schools.get("shafii"),
                ruling_maliki=schools.get("maliki"),
                ruling_hanbali=schools.get("hanbali"),
                overrides_keyword=row.get("overrides"),
                category=row.get("category"),
                scholarly_reference=row.get("reference"),
                is_active=bool(row.get("active", True)),
            )
        )
    return rulings


def build_legacy_additives(
    table: Dict[str, Dict[str, object]] = LEGACY_ADDITIVES,
) -> Dict[str, AdditiveRecord]:
    return {
        tag.lower(): _additive_from_meta(str(meta["code"]), meta)
        for tag, meta in table.items()
    }
