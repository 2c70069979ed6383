from parts_agent.dialogue.resolver import DialogueState
from parts_agent.memory.models import MessageTurn
from parts_agent.planner.simple import RuleBasedPlanner
from parts_agent.planner.types import Intent, PlannerContext, Strategy

planner = RuleBasedPlanner()

DRAIN_PROMPT = {
    "role": "assistant",
    "content": "Is there visible food debris or buildup in the drain filter?",
    "metadata": {"strategy": "troubleshooting", "dialogue_state": {"flow": "drain", "step": "filter"}},
}


def decide(content, make_snapshot, *history):
    snapshot = make_snapshot(*history)
    turn = MessageTurn(conversation_id="conv-1", role="user", content=content)
    return planner.decide(PlannerContext(turn=turn, conversation=snapshot))


def test_transaction_intents_win_over_everything(make_snapshot):
    decision = decide("I need help with my order 123456, how do I install PS11752778?", make_snapshot)

    assert decision.intent is Intent.ORDER_INQUIRY
    assert decision.strategy is Strategy.TRANSACTION
    assert decision.payload == {"kind": "order_inquiry"}


def test_handoff_before_installation(make_snapshot):
    decision = decide("Can I talk to a human about installing PS11752778?", make_snapshot)

    assert decision.strategy is Strategy.HANDOFF


def test_installation_with_part_number(make_snapshot):
    decision = decide("How can I install part number PS11752778?", make_snapshot)

    assert decision.strategy is Strategy.INSTALLATION
    assert decision.payload == {"part_number": "PS11752778"}


def test_installation_without_part_falls_to_assistant(make_snapshot):
    decision = decide("How do I install a water filter?", make_snapshot)

    assert decision.strategy is Strategy.AI_FALLBACK
    assert decision.intent is Intent.GENERAL


def test_compatibility_needs_a_part_or_model(make_snapshot):
    assert decide("Is PS11756692 compatible with WDT780SAEM1?", make_snapshot).strategy is Strategy.COMPATIBILITY
    assert decide("Is this compatible with my fridge?", make_snapshot).strategy is Strategy.AI_FALLBACK


def test_troubleshooting_request(make_snapshot):
    decision = decide("My dishwasher won't drain", make_snapshot)

    assert decision.intent is Intent.TROUBLESHOOTING_REQUEST
    assert decision.strategy is Strategy.TROUBLESHOOTING
    assert decision.dialogue_state is None


def test_continuation_uses_persisted_state(make_snapshot):
    decision = decide("yes, lots of debris", make_snapshot, DRAIN_PROMPT)

    assert decision.intent is Intent.TROUBLESHOOTING_CONTINUATION
    assert decision.dialogue_state == DialogueState("drain", "filter")


def test_purchase_intent_never_continues_a_flow(make_snapshot):
    decision = decide("I want to buy a new drain filter, lots of debris in there", make_snapshot, DRAIN_PROMPT)

    assert decision.purchase_intent is True
    assert decision.intent is not Intent.TROUBLESHOOTING_CONTINUATION
    assert decision.strategy is Strategy.AI_FALLBACK


def test_unrelated_reply_in_flow_is_not_a_continuation(make_snapshot):
    decision = decide("What are your store hours?", make_snapshot, DRAIN_PROMPT)

    assert decision.strategy is Strategy.AI_FALLBACK


def test_general_fallback_confidence(make_snapshot):
    decision = decide("hello", make_snapshot)

    assert decision.strategy is Strategy.AI_FALLBACK
    assert decision.confidence < 0.9
