"""General assistant strategy used when no specialised tool applies."""

from __future__ import annotations

from parts_agent.planner.types import Strategy
from parts_agent.services.assistant import AssistantClient
from parts_agent.tools.base import Tool, ToolContext, ToolResponse


class FallbackTool(Tool):
    """Answer with the language model, behind the scope gate."""

    name = "assistant"
    strategy = Strategy.AI_FALLBACK

    def __init__(self, assistant: AssistantClient) -> None:
        self._assistant = assistant

    async def run(self, context: ToolContext) -> ToolResponse:
        reply = await self._assistant.generate_response(context.turn.content, context.conversation.turns)
        return ToolResponse(
            content=reply.text,
            data={"simulated": reply.simulated},
            in_scope=reply.is_in_scope,
        )
