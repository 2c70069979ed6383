"""Part and model compatibility answers."""

from __future__ import annotations

from parts_agent.nlu.entities import extract
from parts_agent.nlu.intents import CompatibilityCase, compatibility_case
from parts_agent.planner.types import Strategy
from parts_agent.services.catalog import StaticCatalog
from parts_agent.tools.base import Tool, ToolContext, ToolResponse


class CompatibilityTool(Tool):
    """Answer whether a part fits a model, or list what fits.

    With only a model number and no listed parts the tool declines so the
    general assistant can answer instead.
    """

    name = "compatibility"
    strategy = Strategy.COMPATIBILITY

    def __init__(self, catalog: StaticCatalog) -> None:
        self._catalog = catalog

    async def run(self, context: ToolContext) -> ToolResponse:
        decision = context.decision
        entities = decision.entities if decision else extract(context.turn.content)
        case = compatibility_case(entities)

        if case is CompatibilityCase.BOTH:
            return self._check(entities.first_part, entities.first_model)
        if case is CompatibilityCase.PART_ONLY:
            return self._models_for(entities.first_part)
        if case is CompatibilityCase.MODEL_ONLY:
            return self._parts_for(entities.first_model)
        return ToolResponse.not_applicable("no_part_or_model")

    def _check(self, part_number: str, model_number: str) -> ToolResponse:
        result = self._catalog.check_compatibility(part_number, model_number)
        data = {
            "part_number": part_number,
            "model_number": model_number,
            "compatible": result.is_compatible,
            "confidence": result.confidence,
            "reason": result.reason,
        }

        if result.part is None:
            return ToolResponse(
                content=(
                    f"I couldn't find part {part_number} in our catalog, so I can't confirm whether it "
                    f"fits your {model_number}. Could you double-check the part number?"
                ),
                data=data,
                success=False,
            )

        if result.is_approximate:
            return ToolResponse(
                content=(
                    f"Probably yes. {part_number} is listed for models in the same series as your "
                    f"{model_number}, but your exact model isn't on the list. I'd double-check the "
                    "model number on your appliance's tag or call PartSelect at 1-866-319-8402 "
                    "before ordering."
                ),
                data=data,
            )

        if result.is_compatible:
            return ToolResponse(
                content=(
                    f"Yep, {part_number} works perfectly with your {model_number}. "
                    "That's the right part for your model."
                ),
                data=data,
            )

        models = ", ".join(result.part.compatibility)
        return ToolResponse(
            content=(
                f"No, {part_number} is not compatible with your {model_number}. "
                f"It's listed for these models: {models}."
            ),
            data=data,
        )

    def _models_for(self, part_number: str) -> ToolResponse:
        part = self._catalog.get_part_data(part_number)
        if part is None:
            return ToolResponse(
                content=(
                    f"I couldn't find part {part_number} in our catalog. Could you double-check the "
                    "part number? You can also share your model number and I'll find the right part."
                ),
                data={"part_number": part_number, "found": False},
                success=False,
            )

        compatible = self._catalog.compatible_models(part.part_number)
        models = "\n".join(f"• {model}" for model in compatible)
        return ToolResponse(
            content=(
                f"The {part.name} ({part.part_number}) fits these models:\n\n{models}\n\n"
                "What's your model number? I can confirm it for you."
            ),
            data={"part_number": part.part_number, "found": True, "models": compatible},
        )

    def _parts_for(self, model_number: str) -> ToolResponse:
        parts = self._catalog.find_compatible_parts(model_number)
        if not parts:
            return ToolResponse.not_applicable("no_compatible_parts")

        lines = "\n".join(f"• {part.part_number} - {part.name} ({part.price})" for part in parts)
        return ToolResponse(
            content=(
                f"I found {len(parts)} compatible parts for your {model_number}:\n\n{lines}\n\n"
                "Which specific part are you looking for?"
            ),
            data={"model_number": model_number, "part_numbers": [part.part_number for part in parts]},
        )
