"""Final reply assembly: installation detail, product cards and contact info."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from parts_agent.memory.models import ConversationSnapshot, ProductReference
from parts_agent.nlu.entities import extract_history_part_numbers, find_part_numbers, is_bare_part_number
from parts_agent.nlu.intents import AFFIRMATIVE, PRODUCT_REQUEST, wants_detailed_guide
from parts_agent.nlu.rules import normalize
from parts_agent.planner.types import Strategy
from parts_agent.services.catalog import Part, StaticCatalog
from parts_agent.services.contact import ContactService
from parts_agent.services.installation import InstallationGuideService, render_full
from parts_agent.tools.base import ToolResponse

logger = logging.getLogger("parts_agent.assembler")

WALKTHROUGH_MARKER = "walk you through"


@dataclass(slots=True)
class AssembledReply:
    text: str
    product_cards: list[ProductReference] = field(default_factory=list)


class ResponseAssembler:
    """Compose the reply returned to the user from a strategy's output.

    Product cards are attached for every strategy, and only for catalog hits.
    Installation detail, related part suggestions and the contact footer are
    added to in-scope general assistant replies only; the specialised
    strategies already produce their complete text.
    """

    def __init__(
        self,
        catalog: StaticCatalog,
        guides: InstallationGuideService,
        contact: ContactService,
    ) -> None:
        self._catalog = catalog
        self._guides = guides
        self._contact = contact

    def assemble(
        self,
        message: str,
        response: ToolResponse,
        conversation: ConversationSnapshot,
        *,
        purchase_intent: bool = False,
    ) -> AssembledReply:
        text = response.content
        augment = response.strategy is Strategy.AI_FALLBACK and response.in_scope

        if augment:
            text = self._with_installation(message, text, conversation)

        cards: list[Part] = []
        if self.should_show_product_cards(message, response.content, purchase_intent):
            cards = self._resolve(find_part_numbers(message) or find_part_numbers(response.content))
            if augment and cards and "replace" in text.lower():
                cards = _merge(cards, self._related_parts(message))

        if augment and self._contact.should_show_contact(message, text):
            text = self._contact.append_to(text)

        return AssembledReply(text=text, product_cards=[part.to_reference() for part in cards])

    @staticmethod
    def should_show_product_cards(message: str, ai_text: str, purchase_intent: bool) -> bool:
        if find_part_numbers(message) or is_bare_part_number(message):
            return True
        return bool(
            purchase_intent
            and find_part_numbers(ai_text)
            and PRODUCT_REQUEST(normalize(message))
        )

    def _with_installation(self, message: str, text: str, conversation: ConversationSnapshot) -> str:
        previous = conversation.last_assistant_turn()
        offer_text = f"{text}\n{previous.content if previous else ''}"

        if not wants_detailed_guide(normalize(message), offer_text):
            return text

        part_number = self._installation_part(message, offer_text, conversation)
        if part_number is None:
            return text

        guide = self._guides.get_installation_guide(part_number)
        if guide is None:
            return text

        logger.debug("Appending installation guide for %s", guide.part_number)
        return f"{text}\n\n{render_full(guide)}"

    @staticmethod
    def _installation_part(
        message: str, offer_text: str, conversation: ConversationSnapshot
    ) -> str | None:
        in_message = find_part_numbers(message)
        if in_message:
            return in_message[0]

        if AFFIRMATIVE(normalize(message)) and WALKTHROUGH_MARKER in offer_text.lower():
            history = extract_history_part_numbers(conversation.texts())
            if history:
                return history[-1]
        return None

    def _related_parts(self, message: str) -> list[Part]:
        related = self._catalog.advice_parts(message)
        if not related:
            related = self._catalog.best_matches(message, limit=2)
        return related

    def _resolve(self, part_numbers: Iterable[str]) -> list[Part]:
        parts: list[Part] = []
        for number in part_numbers:
            part = self._catalog.get_part_data(number)
            if part is None:
                logger.debug("No catalog match for %s, skipping card", number)
                continue
            parts.append(part)
        return _merge(parts, [])


def _merge(first: list[Part], second: list[Part]) -> list[Part]:
    merged: list[Part] = []
    seen: set[str] = set()
    for part in [*first, *second]:
        if part.part_number in seen:
            continue
        seen.add(part.part_number)
        merged.append(part)
    return merged
