"""Parts catalog lookups."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

from parts_agent.memory.models import ProductReference

from .catalog_data import (
    PART_ALIASES,
    PART_RECORDS,
    POPULAR_PARTS,
    SEARCH_TERMS,
    TROUBLESHOOTING_ADVICE,
)

logger = logging.getLogger("parts_agent.catalog")

MODEL_PREFIX_LENGTH = 6

# Words too common in problem descriptions to identify a known problem on their own.
_GENERIC_PROBLEM_WORDS = frozenset({"not", "working", "dishes"})


@dataclass(frozen=True, slots=True)
class Part:
    """Catalog record for one part."""

    part_number: str
    name: str
    price: str
    category: str
    description: str = ""
    compatibility: tuple[str, ...] = ()
    image_url: str = ""
    buy_link: str | None = None
    in_stock: bool = True

    def to_reference(self) -> ProductReference:
        return ProductReference(
            part_number=self.part_number,
            name=self.name,
            price=self.price,
            image_url=self.image_url,
            buy_link=self.buy_link,
        )

    def fits(self, model_number: str) -> bool:
        model = model_number.upper()
        return any(model == candidate.upper() for candidate in self.compatibility)


@dataclass(slots=True)
class CompatibilityResult:
    """Outcome of checking one part against one model.

    ``confidence`` is ``high`` for an exact model match and for a definite
    miss. A model that only shares the series prefix of a listed model is
    reported as compatible with ``medium`` confidence; that prefix rule is an
    approximation, not a guarantee.
    """

    is_compatible: bool
    confidence: str
    reason: str
    part: Part | None = None

    @property
    def is_approximate(self) -> bool:
        return self.is_compatible and self.confidence == "medium"


@dataclass(slots=True)
class TroubleshootingAdvice:
    problem: str
    category: str
    solutions: tuple[str, ...] = ()
    common_parts: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


class Catalog(ABC):
    """Read-only access to part data.

    Lookups return ``None`` or an empty list on a miss and never raise for
    unknown identifiers.
    """

    @abstractmethod
    def get_part_data(self, part_number: str) -> Part | None:
        """Return the catalog record for ``part_number``."""

    @abstractmethod
    def find_compatible_parts(self, model_number: str) -> list[Part]:
        """Return the parts listed as fitting ``model_number``."""

    @abstractmethod
    def get_parts_by_category(self, category: str) -> list[Part]:
        """Return every part of an appliance category."""

    @abstractmethod
    def search_parts(self, query: str) -> list[Part]:
        """Return parts whose name, number, category or models mention a query term."""

    def get_product_reference(self, part_number: str) -> ProductReference | None:
        part = self.get_part_data(part_number)
        return part.to_reference() if part else None


class StaticCatalog(Catalog):
    """Catalog served from the bundled part records."""

    def __init__(
        self,
        records: Iterable[dict[str, Any]] = PART_RECORDS,
        *,
        aliases: dict[str, str] | None = None,
        search_terms: dict[str, Sequence[str]] | None = None,
        advice: Iterable[dict[str, Any]] = TROUBLESHOOTING_ADVICE,
    ) -> None:
        self._parts: dict[str, Part] = {}
        for record in records:
            part = Part(**record)
            self._parts[part.part_number.upper()] = part
        self._aliases = {
            key.upper(): value.upper()
            for key, value in (PART_ALIASES if aliases is None else aliases).items()
        }
        self._search_terms = search_terms if search_terms is not None else SEARCH_TERMS
        self._advice = [TroubleshootingAdvice(**item) for item in advice]

    def __len__(self) -> int:
        return len(self._parts)

    def get_part_data(self, part_number: str) -> Part | None:
        key = _canonical_part_number(part_number)
        if not key:
            return None
        key = self._aliases.get(key, key)
        return self._parts.get(key)

    def find_compatible_parts(self, model_number: str) -> list[Part]:
        needle = (model_number or "").strip().lower()
        if not needle:
            return []
        return [
            part
            for part in self._parts.values()
            if any(needle in model.lower() for model in part.compatibility)
        ]

    def get_parts_by_category(self, category: str) -> list[Part]:
        wanted = (category or "").strip().lower()
        return [part for part in self._parts.values() if part.category == wanted]

    def search_parts(self, query: str) -> list[Part]:
        terms = [term for term in (query or "").lower().split() if term]
        if not terms:
            return []

        results: list[Part] = []
        for part in self._parts.values():
            searchable = " ".join(
                [part.name, part.part_number, part.category, *part.compatibility]
            ).lower()
            if any(term in searchable for term in terms):
                results.append(part)
        return results

    def compatible_models(self, part_number: str) -> list[str]:
        part = self.get_part_data(part_number)
        return list(part.compatibility) if part else []

    def check_compatibility(self, part_number: str, model_number: str) -> CompatibilityResult:
        part = self.get_part_data(part_number)
        if part is None:
            return CompatibilityResult(False, "high", "unknown_part")

        if part.fits(model_number):
            return CompatibilityResult(True, "high", "listed_model", part)

        prefix = model_number[:MODEL_PREFIX_LENGTH].lower()
        if prefix and any(model.lower().startswith(prefix) for model in part.compatibility):
            logger.info(
                "Series-prefix compatibility match for %s with %s", part.part_number, model_number
            )
            return CompatibilityResult(True, "medium", "series_prefix", part)

        return CompatibilityResult(False, "high", "not_listed", part)

    def best_matches(self, query: str, limit: int = 3) -> list[Part]:
        """Rank parts for a free-text query using part numbers and the search phrase map."""

        lowered = (query or "").lower()
        candidates: list[str] = [match.upper() for match in re.findall(r"ps\d+", lowered)]

        for term, part_numbers in self._search_terms.items():
            if term in lowered:
                candidates.extend(part_numbers)

        if not candidates:
            if "dishwasher" in lowered:
                candidates.extend(POPULAR_PARTS["dishwasher"])
            elif "refrigerator" in lowered or "fridge" in lowered:
                candidates.extend(POPULAR_PARTS["refrigerator"])

        matches: list[Part] = []
        seen: set[str] = set()
        for candidate in candidates:
            part = self.get_part_data(candidate)
            if part is None or part.part_number in seen:
                continue
            seen.add(part.part_number)
            matches.append(part)
        return matches[:limit]

    def troubleshooting_advice(self, problem: str) -> TroubleshootingAdvice | None:
        """Return the known problem best described by ``problem``.

        A full problem phrase wins; otherwise the first problem sharing a
        distinctive keyword with the text is returned.
        """

        lowered = (problem or "").lower()
        if not lowered:
            return None

        for advice in self._advice:
            if advice.problem in lowered:
                return advice

        words = set(re.findall(r"[a-z]+", lowered))
        for advice in self._advice:
            keywords = set(advice.problem.split()) - _GENERIC_PROBLEM_WORDS
            if keywords & words:
                return advice
        return None

    def advice_parts(self, problem: str) -> list[Part]:
        advice = self.troubleshooting_advice(problem)
        if advice is None:
            return []
        parts = (self.get_part_data(number) for number in advice.common_parts)
        return [part for part in parts if part is not None]

    def prompt_summary(self) -> str:
        """Describe the catalog for the language model system prompt."""

        lines = ["Parts available on PartSelect:"]
        for category in ("refrigerator", "dishwasher"):
            lines.append(f"{category.title()} parts:")
            for part in self.get_parts_by_category(category):
                models = ", ".join(part.compatibility)
                lines.append(
                    f"- {part.part_number} {part.name} ({part.price}). Fits: {models}."
                )
        return "\n".join(lines)


def _canonical_part_number(value: str | None) -> str:
    cleaned = (value or "").strip().upper()
    if not cleaned:
        return ""
    if cleaned.isdigit():
        cleaned = f"PS{cleaned}"
    return cleaned
