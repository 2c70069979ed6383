"""Guided troubleshooting strategy."""

from __future__ import annotations

from parts_agent.dialogue.resolver import Handled, continue_flow, start_flow
from parts_agent.planner.types import Strategy
from parts_agent.services.scope import ScopeGate, ScopeKind
from parts_agent.tools.base import Tool, ToolContext, ToolResponse


class TroubleshootingTool(Tool):
    """Start or advance a guided diagnostic flow."""

    name = "troubleshooting"
    strategy = Strategy.TROUBLESHOOTING

    def __init__(self, gate: ScopeGate | None = None) -> None:
        self._gate = gate or ScopeGate()

    async def run(self, context: ToolContext) -> ToolResponse:
        message = context.turn.content
        decision = context.decision
        state = decision.dialogue_state if decision else None

        if state is not None:
            outcome = continue_flow(state, message)
        else:
            # Complaints about unsupported appliances belong to the scope templates.
            verdict = self._gate.evaluate(message, context.history_texts)
            if verdict.kind is ScopeKind.OUT_OF_SCOPE:
                return ToolResponse.not_applicable("out_of_scope")
            outcome = start_flow(message, context.history_texts)

        if not isinstance(outcome, Handled):
            return ToolResponse.not_applicable(outcome.reason)

        return ToolResponse(
            content=outcome.text,
            data={"flow": outcome.state.flow if outcome.state else None},
            dialogue_state=outcome.state,
        )
