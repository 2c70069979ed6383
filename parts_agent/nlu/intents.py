"""Intent classifiers expressed as rule tables over normalised message text.

The classifiers are independent predicates; they may overlap. Exclusivity is
decided by the planner's priority order, not here.
"""

from __future__ import annotations

import re
from enum import Enum

from .entities import ExtractedEntities
from .rules import Rule, all_of, any_of, contains, first_match, match_rules, pattern, phrase

PURCHASE_KEYWORDS = (
    "buy",
    "buying",
    "purchase",
    "order",
    "get",
    "need",
    "want",
    "wanna",
    "price",
    "cost",
    "how much",
    "shop",
    "looking for",
)

has_purchase_intent = phrase(*PURCHASE_KEYWORDS)

_NEGATION = phrase("not")

TROUBLESHOOTING_RULES: tuple[Rule, ...] = (
    Rule(
        "keyword",
        any_of(
            pattern(r"\b(?:troubleshoot|fix|repair|problem|issue)"),
            phrase("not working", "broken", "won't", "wont", "doesn't", "doesnt"),
        ),
    ),
    Rule("drain", all_of(contains("drain"), any_of(contains("dishwasher"), _NEGATION))),
    Rule("cooling", all_of(contains("cool"), any_of(contains("refrigerator"), _NEGATION))),
    Rule("ice", all_of(phrase("ice"), _NEGATION)),
    Rule("cleaning", all_of(contains("clean"), any_of(contains("dishwasher"), _NEGATION))),
)

# Answer vocabulary of the guided troubleshooting flows.
CONTINUATION_ANSWERS = (
    "debris",
    "clean",
    "blocked",
    "kinked",
    "bent",
    "normal",
    "yes",
    "no",
    "some",
    "lots",
    "fixed",
    "working",
    "better",
    "still not",
    "not sure",
    "overloaded",
    "clogged",
    "hot enough",
    "fine",
    "seems fine",
    "connected",
    "clear",
    "loose",
    "quiet",
    "dispenser",
    "cleaner",
    "draining",
    "don't know",
)

has_continuation_answer = phrase(*CONTINUATION_ANSWERS)

INSTALL_RE = re.compile(r"(?:how.*?install|install.*?how|installation)", re.IGNORECASE)
COMPATIBILITY_RE = re.compile(
    r"(?:is.*?compatible|compatible.*?with|fits.*?model|\b(?:does|will|would)\b.*?\bfit\b)",
    re.IGNORECASE,
)

ORDER_NUMBER_PRESENT = pattern(r"\b\d{6}\b")

TRANSACTION_RULES: tuple[Rule, ...] = (
    Rule(
        "order_inquiry",
        any_of(
            all_of(
                phrase("order"),
                any_of(phrase("status", "track", "tracking", "help", "find"), ORDER_NUMBER_PRESENT),
            ),
            contains("can't find my order", "find my order"),
        ),
    ),
    Rule("transaction_issue", phrase("payment", "declined", "card", "billing")),
    Rule("refund_request", phrase("refund", "return", "money back")),
)

HANDOFF_RULES: tuple[Rule, ...] = (
    Rule(
        "explicit_request",
        contains(
            "talk to human",
            "talk to a human",
            "speak to person",
            "speak to a person",
            "human representative",
            "customer service",
            "real person",
            "live agent",
            "transfer me",
            "i want to talk to someone",
            "connect me to",
            "human support",
            "talk to person",
            "i want to talk to an agent",
        ),
    ),
    Rule(
        "technician",
        contains(
            "prefer a technician",
            "get a technician",
            "need a technician",
            "send a technician",
            "technician to take a look",
        ),
    ),
    Rule(
        "warranty",
        contains("warranty claim", "return policy", "refund request", "defective part"),
    ),
)

DETAIL_REQUEST = contains(
    "show me the steps",
    "give me the steps",
    "step by step",
    "step-by-step",
    "detailed instructions",
    "full instructions",
)

AFFIRMATIVE = phrase("yes", "yeah", "yep", "sure", "please", "ok", "okay", "go ahead")

PRODUCT_REQUEST = phrase(
    "part",
    "parts",
    "ice maker",
    "icemaker",
    "pump",
    "filter",
    "assembly",
    "door bin",
    "shelf",
    "gasket",
    "seal",
)


class CompatibilityCase(str, Enum):
    """Which identifiers a compatibility question supplied."""

    BOTH = "both"
    PART_ONLY = "part_only"
    MODEL_ONLY = "model_only"
    NEITHER = "neither"


def is_troubleshooting_request(text: str) -> bool:
    """Troubleshooting request, suppressed whenever the message shows purchase intent."""

    if has_purchase_intent(text):
        return False
    return bool(match_rules(TROUBLESHOOTING_RULES, text))


def classify_transaction(text: str) -> str | None:
    """Return ``order_inquiry``, ``transaction_issue`` or ``refund_request`` (first wins)."""

    return first_match(TRANSACTION_RULES, text)


def is_handoff_request(text: str) -> bool:
    return first_match(HANDOFF_RULES, text) is not None


def installation_part(text: str, entities: ExtractedEntities) -> str | None:
    """Return the part to install when the message asks how to install a specific part."""

    if INSTALL_RE.search(text) and entities.part_numbers:
        return entities.first_part
    return None


def is_compatibility_request(text: str) -> bool:
    return COMPATIBILITY_RE.search(text) is not None


def compatibility_case(entities: ExtractedEntities) -> CompatibilityCase:
    if entities.part_numbers and entities.model_numbers:
        return CompatibilityCase.BOTH
    if entities.part_numbers:
        return CompatibilityCase.PART_ONLY
    if entities.model_numbers:
        return CompatibilityCase.MODEL_ONLY
    return CompatibilityCase.NEITHER


def wants_detailed_guide(text: str, offer_text: str = "") -> bool:
    """Whether the user asked for full installation steps.

    ``offer_text`` is assistant text that may carry a "walk you through" offer;
    an affirmative reply to such an offer counts as a request for detail.
    """

    if DETAIL_REQUEST(text):
        return True
    return bool(AFFIRMATIVE(text)) and "walk you through" in offer_text.lower()
