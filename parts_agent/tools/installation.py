"""Installation help for a named part."""

from __future__ import annotations

from parts_agent.nlu.entities import find_part_numbers
from parts_agent.nlu.intents import wants_detailed_guide
from parts_agent.planner.types import Strategy
from parts_agent.services.installation import InstallationGuideService, render_full, render_summary
from parts_agent.tools.base import Tool, ToolContext, ToolResponse

WALKTHROUGH_OFFER = "Want me to walk you through the full steps?"


class InstallationTool(Tool):
    """Summarise the install for a part and offer the full step-by-step guide.

    The full guide is only returned when the message asks for the steps.
    """

    name = "installation"
    strategy = Strategy.INSTALLATION

    def __init__(self, guides: InstallationGuideService) -> None:
        self._guides = guides

    async def run(self, context: ToolContext) -> ToolResponse:
        decision = context.decision
        part_number = decision.payload.get("part_number") if decision else None
        if not part_number:
            found = find_part_numbers(context.turn.content)
            part_number = found[0] if found else None
        if not part_number:
            return ToolResponse.not_applicable("no_part_number")

        guide = self._guides.get_installation_guide(part_number)
        if guide is None:
            return ToolResponse(
                content=(
                    f"I couldn't find installation instructions for {part_number}. Please double-check "
                    "the part number, or contact PartSelect at 1-866-319-8402 and their technical team "
                    "can walk you through it."
                ),
                data={"part_number": part_number, "found": False},
                success=False,
            )

        if wants_detailed_guide(context.turn.content.lower()):
            return ToolResponse(
                content=render_full(guide),
                data={"part_number": guide.part_number, "found": True, "detail": "full"},
            )

        return ToolResponse(
            content=f"{render_summary(guide)} {WALKTHROUGH_OFFER}",
            data={"part_number": guide.part_number, "found": True, "detail": "summary"},
        )
