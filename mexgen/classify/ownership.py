"""Public/private ownership classification.

Two strategies exist because the two ingestion sources carry different
fields. Catalog entries only have an operator, so they are matched against
the user-editable pattern list and default to private. CSV rows carry an
explicit sector column and a parent company, and default to undetermined.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Protocol

from mexgen.common.constants import PATTERNS_STORE_KEY
from mexgen.common.errors import ConfigError
from mexgen.common.fs import read_json, write_json_atomic
from mexgen.common.models import Sector

logger = logging.getLogger(__name__)

UNKNOWN_OWNER_TOKENS = frozenset({"nd", "n/d", "unknown", "desconocido"})

_PUBLIC_REF_RE = re.compile(r"\b(cfe|pemex|sener|cenace|gobierno|estado|federal)\b")
_PRIVATE_REF_RE = re.compile(r"\b(s\.a\.|s\. de r\.l\.|iberdrola|engie|acciona|enel|mitsui)\b")


@dataclass(frozen=True)
class ClassificationPattern:
    substring: str
    sector: Sector

    def to_dict(self) -> dict[str, str]:
        return {"substring": self.substring, "sector": self.sector.value}

    @classmethod
    def from_dict(cls, payload: dict) -> "ClassificationPattern":
        if not isinstance(payload, dict):
            raise ConfigError(f"Classification pattern must be a mapping, got {type(payload).__name__}")
        substring = str(payload.get("substring") or "").strip()
        if not substring:
            raise ConfigError("Classification pattern without substring")
        try:
            sector = Sector(payload.get("sector"))
        except ValueError as exc:
            raise ConfigError(f"Invalid sector for pattern {substring!r}: {payload.get('sector')!r}") from exc
        if sector is Sector.UNDETERMINED:
            raise ConfigError(f"Pattern {substring!r} must map to public or private")
        return cls(substring=substring, sector=sector)


DEFAULT_PATTERNS: tuple[ClassificationPattern, ...] = (
    ClassificationPattern("cfe", Sector.PUBLIC),
    ClassificationPattern("comisión federal", Sector.PUBLIC),
    ClassificationPattern("comision federal", Sector.PUBLIC),
    ClassificationPattern("pemex", Sector.PUBLIC),
    ClassificationPattern("petróleos mexicanos", Sector.PUBLIC),
    ClassificationPattern("gobierno", Sector.PUBLIC),
    ClassificationPattern("federal de electricidad", Sector.PUBLIC),
)


@dataclass(frozen=True)
class PatternSet:
    """Immutable snapshot of the pattern list used for one ingestion pass."""

    patterns: tuple[ClassificationPattern, ...] = DEFAULT_PATTERNS
    customized: bool = False

    @classmethod
    def of(cls, patterns: Iterable[ClassificationPattern]) -> "PatternSet":
        return cls(patterns=tuple(patterns), customized=True)

    def __iter__(self):
        return iter(self.patterns)

    def __len__(self) -> int:
        return len(self.patterns)


class PatternStore:
    """JSON key-value file holding the user's classification patterns."""

    def __init__(self, path: Path, key: str = PATTERNS_STORE_KEY) -> None:
        self.path = path
        self.key = key

    def _read_store(self) -> dict:
        if not self.path.exists():
            return {}
        payload = read_json(self.path)
        if not isinstance(payload, dict):
            raise ConfigError(f"Pattern store {self.path} must contain a JSON object")
        return payload

    def load(self) -> PatternSet:
        stored = self._read_store().get(self.key)
        if stored is None:
            return PatternSet()
        if not isinstance(stored, list):
            raise ConfigError(f"{self.key} in {self.path} must be a list")
        patterns = PatternSet.of(ClassificationPattern.from_dict(item) for item in stored)
        logger.debug("loaded %d classification patterns from %s", len(patterns), self.path)
        return patterns

    def save(self, patterns: Iterable[ClassificationPattern]) -> PatternSet:
        snapshot = PatternSet.of(patterns)
        store = self._read_store()
        store[self.key] = [pattern.to_dict() for pattern in snapshot]
        write_json_atomic(self.path, store)
        return snapshot

    def reset(self) -> PatternSet:
        store = self._read_store()
        if self.key in store:
            del store[self.key]
            write_json_atomic(self.path, store)
        return PatternSet()


class ClassificationStrategy(Protocol):
    def classify(self, operator: str, owner: str, sector_field: str = "") -> Sector:
        ...


class PatternSectorStrategy:
    """Substring patterns over operator/owner text; unmatched means private."""

    def __init__(self, patterns: PatternSet | None = None) -> None:
        self.patterns = patterns if patterns is not None else PatternSet()

    def classify(self, operator: str, owner: str, sector_field: str = "") -> Sector:
        parts = [part.strip().lower() for part in (operator, owner) if part and part.strip()]
        if not parts or all(part in UNKNOWN_OWNER_TOKENS for part in parts):
            return Sector.UNDETERMINED

        text = " ".join(parts)
        for pattern in self.patterns:
            if pattern.substring.lower() in text:
                return pattern.sector
        return Sector.PRIVATE


class FieldSectorStrategy:
    """Explicit sector column first, then company keywords; unmatched means undetermined."""

    def classify(self, operator: str, owner: str, sector_field: str = "") -> Sector:
        declared = (sector_field or "").lower()
        if "priv" in declared:
            return Sector.PRIVATE
        if "pub" in declared or "púb" in declared:
            return Sector.PUBLIC

        reference = f"{operator or ''} {owner or ''} {sector_field or ''}".lower()
        if _PUBLIC_REF_RE.search(reference):
            return Sector.PUBLIC
        if _PRIVATE_REF_RE.search(reference):
            return Sector.PRIVATE
        return Sector.UNDETERMINED
