from parts_agent.dialogue.flows import DRAIN_FLOW, FLOWS
from parts_agent.dialogue.resolver import (
    GENERIC_TROUBLESHOOTING_PROMPT,
    DialogueState,
    Handled,
    NotApplicable,
    continue_flow,
    expects_answer,
    resolve_state,
    select_flow,
    start_flow,
)
from parts_agent.memory.models import MessageTurn
from parts_agent.nlu.entities import find_part_numbers


def assistant(content, **metadata):
    return MessageTurn(conversation_id="conv-1", role="assistant", content=content, metadata=metadata)


def user(content):
    return MessageTurn(conversation_id="conv-1", role="user", content=content)


def test_drain_opening_lists_the_three_canonical_answers():
    outcome = start_flow("My dishwasher won't drain")

    assert isinstance(outcome, Handled)
    assert outcome.state == DialogueState("drain", "filter")
    assert "Pick one of these:\n• Yes, lots of debris\n• Some debris\n• No debris visible" in outcome.text
    assert outcome.text.count("• ") == 3


def test_every_flow_is_well_formed():
    for flow in FLOWS.values():
        assert flow.initial in flow.steps
        for step in flow.steps.values():
            for transition in step.transitions:
                assert transition.target in flow.steps, (flow.id, step.id, transition.target)
            for part in step.parts:
                assert part in step.text


def test_terminal_steps_resolve_or_offer_part_or_technician():
    for flow in FLOWS.values():
        for step in flow.steps.values():
            if not step.terminal:
                continue
            if step.parts:
                assert "technician" in step.text
                assert find_part_numbers(step.text)
            else:
                assert "anything else" in step.text.lower()


def test_lots_of_debris_leads_to_filter_cleaning():
    outcome = continue_flow(DialogueState("drain", "filter"), "yes, lots of debris")

    assert isinstance(outcome, Handled)
    assert outcome.state == DialogueState("drain", "filter_cleaned")
    assert outcome.text.startswith("Clean that filter thoroughly with warm water")


def test_negative_answer_checked_before_positive():
    outcome = continue_flow(DialogueState("drain", "filter_cleaned"), "no, still not draining")

    assert outcome.state == DialogueState("drain", "pumps")
    assert "PS11753379" in outcome.text


def test_ice_flow_reaches_depth_three():
    state = DialogueState("ice", "power")

    outcome = continue_flow(state, "yes, both are correct")
    assert outcome.state == DialogueState("ice", "water_supply")

    outcome = continue_flow(outcome.state, "no water dispenser")
    assert outcome.state == DialogueState("ice", "water_line")

    outcome = continue_flow(outcome.state, "connected and open")
    assert outcome.state == DialogueState("ice", "ice_maker_part")
    assert "PS12584610" in outcome.text


def test_unmatched_answer_keeps_state_and_asks_for_detail():
    state = DialogueState("drain", "filter")
    outcome = continue_flow(state, "hmm, hard to say")

    assert isinstance(outcome, Handled)
    assert outcome.state == state
    assert outcome.text == DRAIN_FLOW.fallback


def test_purchase_intent_mid_flow_is_not_applicable():
    outcome = continue_flow(DialogueState("drain", "pumps"), "I want to buy the drain pump")

    assert isinstance(outcome, NotApplicable)
    assert outcome.reason == "purchase_intent"


def test_unknown_state_is_not_applicable():
    assert isinstance(continue_flow(DialogueState("laundry", "start"), "yes"), NotApplicable)


def test_no_symptom_gives_generic_prompt():
    outcome = start_flow("my dishwasher is acting up, can you troubleshoot it")

    assert outcome == Handled(GENERIC_TROUBLESHOOTING_PROMPT)


def test_select_flow_prefers_appliance_named_in_history():
    assert select_flow("it's not cleaning", ["My dishwasher is new"]).id == "cleaning"
    assert select_flow("the ice maker is not working").id == "ice"
    assert select_flow("fridge not cooling").id == "cooling"
    assert select_flow("my dishwasher leaves water behind").id == "drain"


def test_resolve_state_reads_persisted_token():
    turns = [
        user("My dishwasher won't drain"),
        assistant("Anything", strategy="troubleshooting", dialogue_state={"flow": "drain", "step": "hose"}),
    ]

    assert resolve_state(turns) == DialogueState("drain", "hose")


def test_resolve_state_ignores_text_when_token_is_absent_on_new_turns():
    turns = [assistant("Is there visible food debris in the drain filter?", strategy="ai_fallback", dialogue_state=None)]

    assert resolve_state(turns) is None


def test_resolve_state_terminal_token_is_inactive():
    turns = [assistant("Great!", strategy="troubleshooting", dialogue_state={"flow": "drain", "step": "resolved"})]

    assert resolve_state(turns) is None


def test_resolve_state_infers_step_from_legacy_transcript(drain_transcript):
    turns = [MessageTurn(conversation_id="conv-1", **turn) for turn in drain_transcript]

    assert resolve_state(turns) == DialogueState("drain", "filter")


def test_resolve_state_falls_back_to_marker_phrases():
    turns = [assistant("Take a look at the drain filter. Any debris in there?")]

    assert resolve_state(turns) == DialogueState("drain", "filter")


def test_expects_answer():
    state = DialogueState("cleaning", "loading")

    assert expects_answer(state, "dishes might be overloaded")
    assert not expects_answer(state, "what are your store hours")
