"""Planner-related enums and data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, MutableMapping

from parts_agent.dialogue.resolver import DialogueState
from parts_agent.memory.models import ConversationSnapshot, MessageTurn
from parts_agent.nlu.entities import ExtractedEntities


class Intent(str, Enum):
    """Supported user intents."""

    ORDER_INQUIRY = "order_inquiry"
    TRANSACTION_ISSUE = "transaction_issue"
    REFUND_REQUEST = "refund_request"
    HANDOFF = "handoff"
    INSTALLATION = "installation"
    COMPATIBILITY = "compatibility"
    TROUBLESHOOTING_REQUEST = "troubleshooting_request"
    TROUBLESHOOTING_CONTINUATION = "troubleshooting_continuation"
    GENERAL = "general"


class Strategy(str, Enum):
    """Response strategies; exactly one produces the reply to a user turn."""

    TRANSACTION = "transaction"
    HANDOFF = "handoff"
    INSTALLATION = "installation"
    COMPATIBILITY = "compatibility"
    TROUBLESHOOTING = "troubleshooting"
    AI_FALLBACK = "ai_fallback"


@dataclass(slots=True)
class PlannerContext:
    """Inputs passed to the planner when deciding the strategy for a turn."""

    turn: MessageTurn
    conversation: ConversationSnapshot
    params: MutableMapping[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class PlannerDecision:
    """Planner output describing the chosen strategy and what it was based on."""

    intent: Intent
    strategy: Strategy
    confidence: float
    entities: ExtractedEntities
    dialogue_state: DialogueState | None = None
    purchase_intent: bool = False
    payload: dict[str, Any] = field(default_factory=dict)
