# weemeal/services/utils.py
# Small text/number helpers shared by models and services
# - stored amounts may be legacy strings ("1.5", "2 EL", "") -> lenient float parsing
# - recipe names are normalized before dictionary lookup

from __future__ import annotations

import math
import re
import unicodedata
from typing import Any, Optional

# Leading number only: "2.5 kg" -> 2.5, ".5" -> 0.5, "1e2" -> 100
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

# Everything except latin letters, German umlauts/ß and whitespace
_NON_LETTER = re.compile(r"[^a-zäöüß\s]", re.I)
_SPACES = re.compile(r"\s+")


def parse_amount(value: Any) -> Optional[float]:
    """
    Stored amount -> float, or None when it cannot be read.
    Numbers pass through; strings are parsed from their leading number only.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        v = float(value)
        return v if math.isfinite(v) else None
    if isinstance(value, str):
        m = _LEADING_NUMBER.match(value)
        if not m:
            return None
        v = float(m.group(1))
        return v if math.isfinite(v) else None
    return None


def normalize_phrase(text: str) -> str:
    # NFC first so decomposed umlauts ("a" + U+0308) count as letters
    s = unicodedata.normalize("NFC", text or "").lower()
    s = _NON_LETTER.sub(" ", s)
    return _SPACES.sub(" ", s).strip()


def collapse_spaces(text: str) -> str:
    return _SPACES.sub(" ", text or "").strip()
