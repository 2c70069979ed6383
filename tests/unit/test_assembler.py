import pytest

from parts_agent.assembler import ResponseAssembler
from parts_agent.planner.types import Strategy
from parts_agent.services.contact import CONTACT_PHONE, ContactService
from parts_agent.services.installation import InstallationGuideService
from parts_agent.tools.base import ToolResponse


@pytest.fixture()
def assembler(catalog):
    return ResponseAssembler(catalog, InstallationGuideService(catalog), ContactService())


def reply(content, strategy=Strategy.AI_FALLBACK, in_scope=True):
    return ToolResponse(content=content, strategy=strategy, in_scope=in_scope)


def card_numbers(result):
    return [card.part_number for card in result.product_cards]


def test_card_for_part_in_message(assembler, make_snapshot):
    result = assembler.assemble("Tell me about PS11752778", reply("It's a door bin."), make_snapshot())

    assert card_numbers(result) == ["PS11752778"]


def test_catalog_miss_never_produces_a_card(assembler, make_snapshot):
    result = assembler.assemble("Tell me about PS99999999", reply("Not found."), make_snapshot())

    assert result.product_cards == []


def test_bare_part_number_gets_a_card(assembler, make_snapshot):
    result = assembler.assemble("PS12584610", reply("Ice maker assembly."), make_snapshot())

    assert card_numbers(result) == ["PS12584610"]


def test_cards_attach_for_specialised_strategies(assembler, make_snapshot):
    response = reply("Yep, PS11756692 works perfectly with your WDT780SAEM1.", Strategy.COMPATIBILITY)
    result = assembler.assemble("Is PS11756692 compatible with WDT780SAEM1?", response, make_snapshot())

    assert card_numbers(result) == ["PS11756692"]
    assert result.text == response.content


def test_purchase_cards_come_from_assistant_text(assembler, make_snapshot):
    response = reply("For that you'll want to replace it with PS11753379.")
    result = assembler.assemble(
        "I want to buy a drain pump",
        response,
        make_snapshot(),
        purchase_intent=True,
    )

    assert card_numbers(result)[0] == "PS11753379"


def test_no_cards_without_product_vocabulary(assembler, make_snapshot):
    result = assembler.assemble(
        "How much would that cost?",
        reply("The pump PS11753379 runs $89.95."),
        make_snapshot(),
        purchase_intent=True,
    )

    assert result.product_cards == []


def test_replace_adds_related_parts(assembler, make_snapshot):
    result = assembler.assemble(
        "PS11756692 for my dishwasher not draining",
        reply("You may need to replace the pump."),
        make_snapshot(),
    )

    assert card_numbers(result) == ["PS11756692", "PS11746240", "PS11753379"]


def test_walkthrough_affirmative_appends_full_guide(assembler, make_snapshot):
    snapshot = make_snapshot(
        {"content": "How can I install PS11752778?"},
        {"role": "assistant", "content": "It's quick. Want me to walk you through the full steps?"},
    )
    result = assembler.assemble("yes please", reply("Sure thing! Here's the full rundown."), snapshot)

    assert "**Installation Guide for" in result.text
    assert "(PS11752778)" in result.text


def test_installation_detail_withheld_without_request(assembler, make_snapshot):
    result = assembler.assemble("What is PS11752778?", reply("It's a door bin."), make_snapshot())

    assert "**Installation Guide" not in result.text


def test_contact_appended_for_trigger_words(assembler, make_snapshot):
    result = assembler.assemble("Can I cancel my purchase?", reply("Sure, let me help."), make_snapshot())

    assert result.text.startswith("Sure, let me help.\n\n---\n\n")
    assert CONTACT_PHONE in result.text


def test_out_of_scope_reply_is_not_augmented(assembler, make_snapshot):
    response = reply("I can only help with refrigerator and dishwasher parts.", in_scope=False)
    result = assembler.assemble("my washer broke, can I call someone?", response, make_snapshot())

    assert result.text == response.content


def test_specialised_strategy_text_is_not_augmented(assembler, make_snapshot):
    response = reply("Order 123456 Status: SHIPPED", Strategy.TRANSACTION)
    result = assembler.assemble("track order 123456", response, make_snapshot())

    assert result.text == response.content
