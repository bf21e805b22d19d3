"""
Certification short-circuit from OpenFoodFacts-style label tags.

A recognized certifier label ("fr:certification-avs", "en:achahada") or a
generic halal label ("en:halal") settles the verdict before any ingredient
analysis runs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from .models import HalalAnalysis, HalalReason, HalalStatus, HalalTier

CERTIFIED_CONFIDENCE = 0.95

# Certifier id -> display name.
CERTIFIERS: Dict[str, str] = {
    "avs": "A Votre Service (AVS)",
    "achahada": "Achahada",
    "argml": "Rassemblement des Grandes Mosquées de Lyon (ARGML)",
    "mosquee_de_paris": "Mosquée de Paris (SFCVH)",
    "halal_services": "Halal Services",
    "ifanca": "IFANCA",
    "hmc": "Halal Monitoring Committee (HMC)",
    "jakim": "JAKIM",
    "muis": "MUIS",
}

# Label slug (after noise stripping) -> certifier id.
CERTIFIER_TAGS: Dict[str, str] = {
    "avs": "avs",
    "a-votre-service": "avs",
    "halal-avs": "avs",
    "achahada": "achahada",
    "halal-achahada": "achahada",
    "argml": "argml",
    "halal-argml": "argml",
    "mosquee-de-lyon": "argml",
    "grande-mosquee-de-lyon": "argml",
    "mosquee-de-paris": "mosquee_de_paris",
    "grande-mosquee-de-paris": "mosquee_de_paris",
    "mci": "mosquee_de_paris",
    "sfcvh": "mosquee_de_paris",
    "halal-services": "halal_services",
    "ifanca": "ifanca",
    "ifanca-halal": "ifanca",
    "hmc": "hmc",
    "jakim": "jakim",
    "jakim-halal": "jakim",
    "muis": "muis",
    "muis-halal": "muis",
}

GENERIC_HALAL_TAGS = frozenset(
    {
        "halal",
        "certified-halal",
        "halal-certified",
        "certifie-halal",
        "certifié-halal",
        "produit-halal",
    }
)

NOISE_PREFIXES: Tuple[str, ...] = tuple(
    sorted(
        ("certification-halal-", "certification-", "certifie-", "certifié-"),
        key=len,
        reverse=True,
    )
)


@dataclass(frozen=True)
class CertificationMatch:
    tag: str
    certifier_id: Optional[str] = None
    certifier_name: Optional[str] = None


def label_slug(tag: str) -> str:
    """'fr:Certification-AVS' -> 'certification-avs' (locale segment dropped)."""
    return (tag or "").strip().lower().rsplit(":", 1)[-1]


def label_variants(tag: str) -> List[str]:
    """The slug itself, then the slug with the longest matching noise prefix removed."""
    slug = label_slug(tag)
    variants = [slug]
    for prefix in NOISE_PREFIXES:
        if slug.startswith(prefix) and len(slug) > len(prefix):
            variants.append(slug[len(prefix):])
            break
    return variants


class CertificationResolver:
    def __init__(
        self,
        certifiers: Optional[Dict[str, str]] = None,
        certifier_tags: Optional[Dict[str, str]] = None,
        generic_tags: Optional[Iterable[str]] = None,
    ):
        self.certifiers = dict(CERTIFIERS if certifiers is None else certifiers)
        self.certifier_tags = dict(CERTIFIER_TAGS if certifier_tags is None else certifier_tags)
        self.generic_tags = frozenset(GENERIC_HALAL_TAGS if generic_tags is None else generic_tags)
        self.log = logging.getLogger(self.__class__.__name__)

    def detect(self, labels_tags: Optional[Iterable[str]]) -> Optional[CertificationMatch]:
        """A named certifier anywhere in the labels wins over a generic halal label."""
        tags = [tag for tag in labels_tags or [] if tag]
        for tag in tags:
            for variant in label_variants(tag):
                certifier_id = self.certifier_tags.get(variant)
                if certifier_id:
                    return CertificationMatch(
                        tag=tag,
                        certifier_id=certifier_id,
                        certifier_name=self.certifiers.get(certifier_id, certifier_id),
                    )
        for tag in tags:
            if any(variant in self.generic_tags for variant in label_variants(tag)):
                return CertificationMatch(tag=tag)
        return None

    def resolve(
        self, labels_tags: Optional[Iterable[str]], lang: str = "fr"
    ) -> Optional[HalalAnalysis]:
        match = self.detect(labels_tags)
        if match is None:
            return None
        self.log.info(
            "Certification label %s recognized (certifier=%s)", match.tag, match.certifier_id
        )
        if match.certifier_name:
            source = "certified_label"
            explanation = (
                f"Certified halal by {match.certifier_name}"
                if lang == "en"
                else f"Certifié halal par {match.certifier_name}"
            )
        else:
            source = "halal_label"
            explanation = (
                "Product carries a halal label"
                if lang == "en"
                else "Le produit porte un label halal"
            )
        return HalalAnalysis(
            status=HalalStatus.HALAL,
            confidence=CERTIFIED_CONFIDENCE,
            tier=HalalTier.CERTIFIED,
            reasons=[
                HalalReason(
                    type="label",
                    name=match.certifier_name or match.tag,
                    status=HalalStatus.HALAL,
                    explanation=explanation,
                    code=match.certifier_id,
                    confidence=CERTIFIED_CONFIDENCE,
                )
            ],
            certifier_name=match.certifier_name,
            certifier_id=match.certifier_id,
            analysis_source=source,
        )
