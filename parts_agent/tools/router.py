"""Tool router mapping planner strategies to tool implementations."""

from __future__ import annotations

import logging
from typing import Mapping

from parts_agent.memory.models import ConversationSnapshot, MessageTurn
from parts_agent.planner.types import PlannerDecision, Strategy
from parts_agent.tools.base import Tool, ToolContext, ToolResponse

logger = logging.getLogger("parts_agent.tools")

TOOL_FAILURE_MESSAGE = (
    "Sorry, I ran into a problem looking that up. Could you try again in a moment? You can also "
    "reach PartSelect at 1-866-319-8402."
)


class ToolRouter:
    """Dispatch planner decisions to concrete tools.

    A tool that declines the turn hands it to ``fallback``. Exceptions raised
    by a tool are logged and turned into an apology so they never reach the
    caller.
    """

    def __init__(self, tools: Mapping[Strategy, Tool], fallback: Tool) -> None:
        self._tools = tools
        self._fallback = fallback

    async def dispatch(
        self,
        decision: PlannerDecision,
        turn: MessageTurn,
        conversation: ConversationSnapshot,
        extras: dict | None = None,
    ) -> ToolResponse:
        context = ToolContext(
            turn=turn,
            conversation=conversation,
            decision=decision,
            extras=extras or {},
        )

        tool = self._tools.get(decision.strategy, self._fallback)
        response = await self._run(tool, context)
        if response.handled:
            return response

        logger.info(
            "%s declined turn (%s), falling through to %s",
            tool.name,
            response.data.get("reason", "unspecified"),
            self._fallback.name,
        )
        response = await self._run(self._fallback, context)
        response.fell_through = True
        return response

    async def _run(self, tool: Tool, context: ToolContext) -> ToolResponse:
        try:
            response = await tool.run(context)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Tool %s failed", tool.name, extra={"error": str(exc)})
            return ToolResponse(
                content=TOOL_FAILURE_MESSAGE,
                data={"error": str(exc)},
                success=False,
                strategy=tool.strategy,
            )

        if response.strategy is None:
            response.strategy = tool.strategy
        return response
