import asyncio

from parts_agent.core.config import Settings
from parts_agent.memory.models import ConversationSnapshot, MessageTurn
from parts_agent.planner.simple import RuleBasedPlanner
from parts_agent.planner.types import PlannerContext, Strategy
from parts_agent.services.assistant import AssistantClient
from parts_agent.services.catalog import StaticCatalog
from parts_agent.services.handoff import HandoffService
from parts_agent.services.installation import InstallationGuideService
from parts_agent.services.orders import OrderService
from parts_agent.services.scope import OTHER_APPLIANCE_TEMPLATE
from parts_agent.tools import (
    CompatibilityTool,
    FallbackTool,
    HandoffTool,
    InstallationTool,
    Tool,
    ToolResponse,
    ToolRouter,
    TransactionTool,
    TroubleshootingTool,
)
from parts_agent.tools.router import TOOL_FAILURE_MESSAGE

catalog = StaticCatalog()
planner = RuleBasedPlanner()


def build_router(tmp_path, overrides=None):
    tools = {
        Strategy.TRANSACTION: TransactionTool(OrderService()),
        Strategy.HANDOFF: HandoffTool(HandoffService(tmp_path / "handoff.db")),
        Strategy.INSTALLATION: InstallationTool(InstallationGuideService(catalog)),
        Strategy.COMPATIBILITY: CompatibilityTool(catalog),
        Strategy.TROUBLESHOOTING: TroubleshootingTool(),
    }
    tools.update(overrides or {})
    assistant = AssistantClient(Settings(llm_api_key=""), catalog)
    return ToolRouter(tools, fallback=FallbackTool(assistant))


def run(router, content, conversation_id="conv-1"):
    snapshot = ConversationSnapshot(conversation_id=conversation_id, turns=[])
    turn = MessageTurn(conversation_id=conversation_id, role="user", content=content)
    decision = planner.decide(PlannerContext(turn=turn, conversation=snapshot))
    return asyncio.run(router.dispatch(decision, turn, snapshot))


def test_order_status_lookup(tmp_path):
    response = run(build_router(tmp_path), "Can you check the status of order 123456?")

    assert response.strategy is Strategy.TRANSACTION
    assert response.content.startswith("Order 123456 Status: SHIPPED")
    assert "Tracking Number:" in response.content
    assert "Payment Method: Visa ending in 4532" in response.content


def test_unknown_order_is_a_templated_miss(tmp_path):
    response = run(build_router(tmp_path), "Where is my order 999999?")

    assert response.handled
    assert response.content.startswith("I couldn't find an order with number 999999")


def test_payment_issue_lists_resolution_steps(tmp_path):
    response = run(build_router(tmp_path), "My payment for TXN789012 was declined")

    assert response.content.startswith("Payment Issue Detected")
    assert "Resolution Steps:\n1. " in response.content


def test_refund_without_order_asks_for_it(tmp_path):
    response = run(build_router(tmp_path), "I want a refund")

    assert "provide your order number" in response.content


def test_handoff_is_idempotent_per_conversation(tmp_path):
    router = build_router(tmp_path)

    first = run(router, "I want to talk to a human")
    second = run(router, "I want to talk to a human")

    assert first.success and "TKT-" in first.content
    assert second.success is False
    assert "already been created" in second.content
    assert second.data["ticket_id"] == first.data["ticket_id"]
    assert second.data["created"] is False


def test_installation_summary_offers_walkthrough(tmp_path):
    response = run(build_router(tmp_path), "How can I install PS11752778?")

    assert "PS11752778" in response.content
    assert response.content.endswith("Want me to walk you through the full steps?")


def test_installation_full_guide_on_request(tmp_path):
    response = run(build_router(tmp_path), "How do I install PS11752778? Give me the steps step by step")

    assert response.content.startswith("**Installation Guide for")


def test_installation_unknown_part(tmp_path):
    response = run(build_router(tmp_path), "How do I install PS99999999?")

    assert response.content.startswith("I couldn't find installation instructions for PS99999999")


def test_compatibility_yes_references_both_tokens(tmp_path):
    response = run(build_router(tmp_path), "Is PS11756692 compatible with WDT780SAEM1?")

    assert response.strategy is Strategy.COMPATIBILITY
    assert response.content.startswith("Yep, PS11756692 works perfectly with your WDT780SAEM1.")


def test_compatibility_no_lists_models(tmp_path):
    response = run(build_router(tmp_path), "Is PS11756692 compatible with FFBD2412SS0A?")

    assert response.content.startswith("No, PS11756692 is not compatible with your FFBD2412SS0A.")
    assert "WDT780SAEM1" in response.content


def test_compatibility_prefix_match_is_hedged(tmp_path):
    response = run(build_router(tmp_path), "Is PS11756692 compatible with WDT780SAEM2?")

    assert response.content.startswith("Probably yes.")


def test_part_only_lists_models(tmp_path):
    response = run(build_router(tmp_path), "What models is PS11756692 compatible with?")

    assert response.strategy is Strategy.COMPATIBILITY
    assert response.content.startswith("The Dishwasher Pump and Motor Assembly (PS11756692) fits these models:")
    assert "• WDT780SAEM1" in response.content
    assert response.data["models"][0] == "WDT780SAEM1"


def test_model_only_lists_parts(tmp_path):
    response = run(build_router(tmp_path), "What parts are compatible with WDT780SAEM1?")

    assert response.content.startswith("I found 3 compatible parts for your WDT780SAEM1:")
    assert response.fell_through is False


def test_model_only_without_parts_falls_through(tmp_path):
    response = run(build_router(tmp_path), "What is compatible with my ABC12345?")

    assert response.fell_through is True
    assert response.strategy is Strategy.AI_FALLBACK


def test_out_of_scope_troubleshooting_falls_through_to_template(tmp_path):
    response = run(build_router(tmp_path), "my washing machine is broken")

    assert response.fell_through is True
    assert response.in_scope is False
    assert response.content == OTHER_APPLIANCE_TEMPLATE


def test_tool_exception_becomes_apology(tmp_path):
    class ExplodingTool(Tool):
        name = "exploding"
        strategy = Strategy.TRANSACTION

        async def run(self, context):
            raise RuntimeError("order backend unavailable")

    router = build_router(tmp_path, {Strategy.TRANSACTION: ExplodingTool()})
    response = run(router, "Where is my order 123456?")

    assert response.success is False
    assert response.content == TOOL_FAILURE_MESSAGE
    assert response.strategy is Strategy.TRANSACTION


def test_not_applicable_response():
    response = ToolResponse.not_applicable("nothing to do")

    assert response.handled is False
    assert response.data == {"reason": "nothing to do"}
