"""Pattern-based extraction of part, model, order and transaction identifiers."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable

PART_NUMBER_RE = re.compile(r"PS\d+", re.IGNORECASE)
STRICT_PART_NUMBER_RE = re.compile(r"PS\d{8,}", re.IGNORECASE)
BARE_PART_NUMBER_RE = re.compile(r"^PS\d+$", re.IGNORECASE)
MODEL_NUMBER_RE = re.compile(r"\b[A-Z]{2,}[0-9]{3,}[A-Z0-9]*\b", re.IGNORECASE)
ORDER_NUMBER_RE = re.compile(r"\b\d{6}\b")
TRANSACTION_ID_RE = re.compile(r"TXN\w+", re.IGNORECASE)

# Identifier families that share the model-number shape but are never models.
_NON_MODEL_PREFIXES = ("PS", "TXN")


@dataclass(slots=True)
class ExtractedEntities:
    """Identifiers referenced by a single message."""

    part_numbers: list[str] = field(default_factory=list)
    model_numbers: list[str] = field(default_factory=list)
    order_number: str | None = None
    transaction_id: str | None = None

    @property
    def first_part(self) -> str | None:
        return self.part_numbers[0] if self.part_numbers else None

    @property
    def first_model(self) -> str | None:
        return self.model_numbers[0] if self.model_numbers else None


def extract(text: str | None) -> ExtractedEntities:
    """Extract identifiers from ``text``; empty or missing input yields an empty result."""

    if not text or not isinstance(text, str):
        return ExtractedEntities()

    order_match = ORDER_NUMBER_RE.search(text)
    transaction_match = TRANSACTION_ID_RE.search(text)

    return ExtractedEntities(
        part_numbers=find_part_numbers(text),
        model_numbers=find_model_numbers(text),
        order_number=order_match.group(0) if order_match else None,
        transaction_id=transaction_match.group(0).upper() if transaction_match else None,
    )


def find_part_numbers(text: str) -> list[str]:
    return _unique(match.upper() for match in PART_NUMBER_RE.findall(text or ""))


def find_model_numbers(text: str) -> list[str]:
    candidates = (match.upper() for match in MODEL_NUMBER_RE.findall(text or ""))
    return _unique(
        candidate for candidate in candidates if not candidate.startswith(_NON_MODEL_PREFIXES)
    )


def is_bare_part_number(text: str | None) -> bool:
    return bool(text) and BARE_PART_NUMBER_RE.match(text.strip()) is not None


def extract_history_part_numbers(texts: Iterable[str]) -> list[str]:
    """Scan prior turns for full-length part numbers, oldest first."""

    joined = " ".join(texts)
    return _unique(match.upper() for match in STRICT_PART_NUMBER_RE.findall(joined))


def _unique(values: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    ordered: list[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered
