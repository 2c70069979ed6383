"""Rule-based strategy router."""

from __future__ import annotations

import logging

from parts_agent.dialogue.resolver import expects_answer, resolve_state
from parts_agent.nlu.entities import extract
from parts_agent.nlu.intents import (
    CompatibilityCase,
    classify_transaction,
    compatibility_case,
    has_continuation_answer,
    has_purchase_intent,
    installation_part,
    is_compatibility_request,
    is_handoff_request,
    is_troubleshooting_request,
)
from parts_agent.nlu.rules import normalize

from .base import Planner
from .types import Intent, PlannerContext, PlannerDecision, Strategy

logger = logging.getLogger("parts_agent.planner")

_TRANSACTION_INTENTS = {
    "order_inquiry": Intent.ORDER_INQUIRY,
    "transaction_issue": Intent.TRANSACTION_ISSUE,
    "refund_request": Intent.REFUND_REQUEST,
}


class RuleBasedPlanner(Planner):
    """Pick exactly one strategy per turn, first match wins.

    Order: transaction intents, human handoff, installation of a named part,
    compatibility with a part or model, guided troubleshooting (continuing an
    active flow before starting a new one), then the general assistant.
    """

    def describe(self) -> str:
        return "Priority-ordered rule planner"

    def decide(self, context: PlannerContext) -> PlannerDecision:
        content = context.turn.content
        text = normalize(content)
        entities = extract(content)
        purchase = has_purchase_intent(text)

        def decision(intent: Intent, strategy: Strategy, **kwargs) -> PlannerDecision:
            confidence = 0.65 if intent is Intent.GENERAL else 0.9
            result = PlannerDecision(
                intent=intent,
                strategy=strategy,
                confidence=confidence,
                entities=entities,
                purchase_intent=purchase,
                **kwargs,
            )
            logger.debug(
                "Routed %s to %s (%s)", context.turn.conversation_id, strategy.value, intent.value
            )
            return result

        transaction = classify_transaction(text)
        if transaction is not None:
            return decision(
                _TRANSACTION_INTENTS[transaction],
                Strategy.TRANSACTION,
                payload={"kind": transaction},
            )

        if is_handoff_request(text):
            return decision(Intent.HANDOFF, Strategy.HANDOFF)

        part_number = installation_part(text, entities)
        if part_number is not None:
            return decision(
                Intent.INSTALLATION,
                Strategy.INSTALLATION,
                payload={"part_number": part_number},
            )

        if is_compatibility_request(text):
            case = compatibility_case(entities)
            if case is not CompatibilityCase.NEITHER:
                return decision(
                    Intent.COMPATIBILITY,
                    Strategy.COMPATIBILITY,
                    payload={"case": case.value},
                )

        state = resolve_state(context.conversation.turns)
        if state is not None and not purchase:
            if has_continuation_answer(text) or expects_answer(state, content):
                return decision(
                    Intent.TROUBLESHOOTING_CONTINUATION,
                    Strategy.TROUBLESHOOTING,
                    dialogue_state=state,
                )

        if is_troubleshooting_request(text):
            return decision(Intent.TROUBLESHOOTING_REQUEST, Strategy.TROUBLESHOOTING)

        return decision(Intent.GENERAL, Strategy.AI_FALLBACK)
