"""Human handoff strategy."""

from __future__ import annotations

from parts_agent.planner.types import Strategy
from parts_agent.services.handoff import HandoffRequest, HandoffService
from parts_agent.tools.base import Tool, ToolContext, ToolResponse

HANDOFF_REASON = "User requested human assistance"


class HandoffTool(Tool):
    """Open a support ticket for the conversation (at most one per conversation)."""

    name = "handoff"
    strategy = Strategy.HANDOFF

    def __init__(self, service: HandoffService) -> None:
        self._service = service

    async def run(self, context: ToolContext) -> ToolResponse:
        result = self._service.request_human_support(
            HandoffRequest(
                conversation_id=context.turn.conversation_id,
                user_message=context.turn.content,
                reason=HANDOFF_REASON,
            )
        )
        return ToolResponse(
            content=result.message,
            data={"ticket_id": result.ticket_id, "created": result.success},
            success=result.success,
        )
