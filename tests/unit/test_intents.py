import pytest

from parts_agent.nlu.entities import extract
from parts_agent.nlu.intents import (
    HANDOFF_RULES,
    TRANSACTION_RULES,
    CompatibilityCase,
    classify_transaction,
    compatibility_case,
    has_continuation_answer,
    has_purchase_intent,
    installation_part,
    is_compatibility_request,
    is_handoff_request,
    is_troubleshooting_request,
    wants_detailed_guide,
)
from parts_agent.nlu.rules import Rule, contains, first_match, match_rules, normalize, phrase


def test_phrase_matches_whole_words_only():
    matcher = phrase("get")

    assert matcher("where can i get one")
    assert not matcher("let's work together")


def test_normalize_folds_curly_apostrophes():
    assert normalize("My Dishwasher Won’t Drain") == "my dishwasher won't drain"


def test_match_rules_returns_tags_in_table_order():
    rules = (Rule("a", contains("x")), Rule("b", contains("y")), Rule("c", contains("x")))

    assert match_rules(rules, "x and y") == ["a", "b", "c"]
    assert first_match(rules, "only y") == "b"
    assert first_match(rules, "nothing") is None


@pytest.mark.parametrize(
    "text",
    ["i want to buy a pump", "how much is the filter", "i'm looking for a gasket", "what's the price"],
)
def test_purchase_intent(text):
    assert has_purchase_intent(text)


def test_purchase_intent_suppresses_troubleshooting():
    assert is_troubleshooting_request("my dishwasher is broken")
    assert not is_troubleshooting_request("my dishwasher is broken, i need a new pump")


@pytest.mark.parametrize(
    "text",
    [
        "my dishwasher won't drain",
        "the ice maker is not making ice",
        "fridge not cooling",
        "dishwasher doesn't clean well",
        "can you help me fix this",
    ],
)
def test_troubleshooting_requests(text):
    assert is_troubleshooting_request(text)


def test_continuation_answers():
    assert has_continuation_answer("yes, lots of debris")
    assert has_continuation_answer("it seems fine")
    assert not has_continuation_answer("tell me about your store hours")


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("where is my order 123456", "order_inquiry"),
        ("can you track my order", "order_inquiry"),
        ("i can't find my order", "order_inquiry"),
        ("my card was declined", "transaction_issue"),
        ("i want a refund", "refund_request"),
        ("how do i get my money back", "refund_request"),
        ("how do i install ps11752778", None),
    ],
)
def test_transaction_classification(text, expected):
    assert classify_transaction(text) == expected


def test_order_inquiry_wins_over_refund():
    assert match_rules(TRANSACTION_RULES, "refund for order 123456") == ["order_inquiry", "refund_request"]
    assert classify_transaction("refund for order 123456") == "order_inquiry"


@pytest.mark.parametrize(
    "text",
    ["i want to talk to a human", "connect me to customer service", "i'd prefer a technician", "warranty claim"],
)
def test_handoff_requests(text):
    assert is_handoff_request(text)


def test_handoff_rule_tags():
    assert first_match(HANDOFF_RULES, "can i get a live agent") == "explicit_request"
    assert first_match(HANDOFF_RULES, "what's the return policy") == "warranty"


def test_installation_requires_a_part_number():
    text = "how do i install ps11752778?"
    assert installation_part(text, extract(text)) == "PS11752778"

    text = "how do i install a new ice maker?"
    assert installation_part(text, extract(text)) is None


@pytest.mark.parametrize(
    ("text", "case"),
    [
        ("is ps11756692 compatible with wdt780saem1?", CompatibilityCase.BOTH),
        ("what models is ps11756692 compatible with?", CompatibilityCase.PART_ONLY),
        ("what is compatible with my wdt780saem1?", CompatibilityCase.MODEL_ONLY),
        ("is this compatible with my dishwasher?", CompatibilityCase.NEITHER),
    ],
)
def test_compatibility_cases(text, case):
    assert is_compatibility_request(text)
    assert compatibility_case(extract(text)) is case


def test_detailed_guide_requests():
    assert wants_detailed_guide("show me the steps please")
    assert wants_detailed_guide("yes please", "Want me to walk you through the full steps?")
    assert not wants_detailed_guide("yes please")
    assert not wants_detailed_guide("how long does it take", "Want me to walk you through the full steps?")
