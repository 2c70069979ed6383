"""Out-of-scope gate applied before any general assistant reply."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from parts_agent.nlu.rules import Rule, any_of, first_match, normalize, pattern, phrase

OTHER_APPLIANCE_TEMPLATE = (
    "I can only help with refrigerator and dishwasher parts. For other appliance parts, please "
    "contact PartSelect general support."
)
EMOTIONAL_TEMPLATE = (
    "I can only help with refrigerator and dishwasher parts. For other support, please contact "
    "appropriate services."
)
STANDALONE_FREEZER_TEMPLATE = (
    "I can only help with refrigerator and dishwasher parts. For standalone freezer parts, please "
    "contact PartSelect general support."
)
FREEZER_CLARIFICATION = (
    "Is this the freezer compartment inside your refrigerator, or a standalone freezer unit?"
)

SUPPORTED_APPLIANCE = phrase("refrigerator", "refrigerators", "dishwasher", "dishwashers", "fridge")
FRIDGE_CONTEXT = phrase("refrigerator", "fridge")

EMOTIONAL = phrase(
    "i feel",
    "feeling",
    "sad",
    "depressed",
    "happy",
    "angry",
    "upset",
    "emotional",
    "mental health",
    "counseling",
    "therapy",
    "personal problem",
    "relationship",
    "family issue",
    "stressed",
)

ADVERSARIAL = phrase(
    "pretend to be",
    "act as",
    "roleplay as",
    "imagine you are",
    "forget previous instructions",
    "ignore previous instructions",
    "new instructions",
    "override",
    "urgent override",
    "my boss said",
    "company policy changed",
    "special case",
    "exception",
    "pretend i'm your manager",
    "imagine if",
    "hypothetically",
    "what if you were",
)

STANDALONE_FREEZER = phrase(
    "standalone freezer",
    "chest freezer",
    "upright freezer",
    "deep freezer",
    "garage freezer",
    "commercial freezer",
)

FORBIDDEN_APPLIANCE = phrase(
    "washing machine",
    "washer",
    "washers",
    "dryer",
    "dryers",
    "oven",
    "microwave",
    "stove",
    "range",
    "cooktop",
    "garbage disposal",
    "air conditioner",
    "water heater",
    "space heater",
    "tv",
    "phone",
    "computer",
    "car",
    "automotive",
    "standalone ice machine",
)

AMBIGUOUS_FREEZER = phrase("freezer")
FREEZER_QUALIFIERS = phrase("refrigerator", "fridge", "ice maker", "compartment")

MODEL_NUMBER = pattern(r"\b[A-Z]{2,4}\d{3,7}[A-Z]*\d*\b")

ALLOWED_CONTEXT = any_of(
    phrase("ice maker", "icemaker", "ice"),
    pattern(r"ps\d+"),
    pattern(r"\b(?:debris|drain\w*|filter\w*|clean\w*|visible|water|pump\w*|motor\w*|assembl\w*|clog\w*)\b"),
    phrase("yes", "no", "some"),
    phrase("hi", "hello", "hey", "thanks", "thank you", "help", "part", "parts", "install", "compatible"),
    MODEL_NUMBER,
)

TRANSACTION_VOCABULARY = phrase("order", "payment", "refund", "return", "buy", "purchase")

HISTORY_APPLIANCE = phrase("refrigerator", "dishwasher", "ice maker")


class ScopeKind(str, Enum):
    IN_SCOPE = "in_scope"
    OUT_OF_SCOPE = "out_of_scope"
    CLARIFY = "clarify"


@dataclass(frozen=True, slots=True)
class ScopeVerdict:
    kind: ScopeKind
    reason: str
    text: str | None = None


_IN_SCOPE = ScopeVerdict(ScopeKind.IN_SCOPE, "allowed")

# Checked in order after the supported-appliance short circuit.
_REJECTIONS: tuple[Rule, ...] = (
    Rule("emotional", EMOTIONAL),
    Rule("adversarial", ADVERSARIAL),
)

_TEMPLATES = {
    "emotional": EMOTIONAL_TEMPLATE,
    "adversarial": OTHER_APPLIANCE_TEMPLATE,
}


class ScopeGate:
    """Decide whether a message falls within refrigerator and dishwasher parts support."""

    def evaluate(self, message: str, history: Sequence[str] = ()) -> ScopeVerdict:
        text = normalize(message)

        if self._model_number_in_context(message, history):
            return _IN_SCOPE

        if SUPPORTED_APPLIANCE(text) and not EMOTIONAL(text):
            return _IN_SCOPE

        rejection = first_match(_REJECTIONS, text)
        if rejection is not None:
            return ScopeVerdict(ScopeKind.OUT_OF_SCOPE, rejection, _TEMPLATES[rejection])

        if not FRIDGE_CONTEXT(text):
            if STANDALONE_FREEZER(text):
                return ScopeVerdict(
                    ScopeKind.OUT_OF_SCOPE, "standalone_freezer", STANDALONE_FREEZER_TEMPLATE
                )
            if FORBIDDEN_APPLIANCE(text):
                return ScopeVerdict(ScopeKind.OUT_OF_SCOPE, "other_appliance", OTHER_APPLIANCE_TEMPLATE)

        if AMBIGUOUS_FREEZER(text) and not FREEZER_QUALIFIERS(text):
            return ScopeVerdict(ScopeKind.CLARIFY, "ambiguous_freezer", FREEZER_CLARIFICATION)

        if ALLOWED_CONTEXT(text) or TRANSACTION_VOCABULARY(text):
            return _IN_SCOPE

        return ScopeVerdict(ScopeKind.OUT_OF_SCOPE, "unrelated", OTHER_APPLIANCE_TEMPLATE)

    @staticmethod
    def _model_number_in_context(message: str, history: Sequence[str]) -> bool:
        if not history or not MODEL_NUMBER(message):
            return False
        return any(HISTORY_APPLIANCE(normalize(entry)) for entry in history)
