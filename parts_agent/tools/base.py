"""Base classes and types for response strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping

from parts_agent.dialogue.resolver import DialogueState
from parts_agent.memory.models import ConversationSnapshot, MessageTurn
from parts_agent.planner.types import PlannerDecision, Strategy


@dataclass(slots=True)
class ToolContext:
    """Context provided to a tool invocation."""

    turn: MessageTurn
    conversation: ConversationSnapshot
    decision: PlannerDecision | None = None
    extras: Mapping[str, Any] = field(default_factory=dict)

    @property
    def history_texts(self) -> list[str]:
        return self.conversation.texts()


@dataclass(slots=True)
class ToolResponse:
    """Standard tool response payload.

    ``handled`` is False when the tool declined the turn, in which case the
    router hands it to the general assistant instead.
    """

    content: str
    data: dict[str, Any] = field(default_factory=dict)
    success: bool = True
    handled: bool = True
    strategy: Strategy | None = None
    dialogue_state: DialogueState | None = None
    in_scope: bool = True
    fell_through: bool = False

    @classmethod
    def not_applicable(cls, reason: str) -> "ToolResponse":
        return cls(content="", data={"reason": reason}, success=False, handled=False)


class Tool(ABC):
    """Executable strategy implementation interface."""

    name: str
    strategy: Strategy

    @abstractmethod
    async def run(self, context: ToolContext) -> ToolResponse:
        """Execute the tool given the provided context."""

    def describe(self) -> str:
        """Return a human-readable description for observability dashboards."""

        return self.__doc__ or self.name
