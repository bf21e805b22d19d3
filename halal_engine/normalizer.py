"""
Text normalization applied to ingredient lists before rule matching.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Optional

_APOSTROPHES = re.compile(r"[’‘`´ʼ]")
_E_CODE = re.compile(r"\be[\s.\-]?(\d{3,4}[a-z]?)\b")
_WHITESPACE = re.compile(r"\s+")


class TextNormalizer:
    """
    Base interface for ingredient text normalizers.
    """

    def normalize(self, raw: Optional[str]) -> str:
        raise NotImplementedError


class DefaultTextNormalizer(TextNormalizer):
    """
    Lowercase, NFC-compose, unify apostrophes, write E-numbers as 'e471'
    and collapse whitespace.
    """

    def normalize(self, raw: Optional[str]) -> str:
        if not raw:
            return ""
        text = unicodedata.normalize("NFC", raw).lower()
        text = _APOSTROPHES.sub("'", text)
        text = _E_CODE.sub(lambda m: "e" + m.group(1), text)
        return _WHITESPACE.sub(" ", text).strip()
