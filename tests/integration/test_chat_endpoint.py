import uuid

from fastapi.testclient import TestClient

from parts_agent.main import app
from parts_agent.services.scope import OTHER_APPLIANCE_TEMPLATE


client = TestClient(app)


def new_conversation(label):
    return f"conv-{label}-{uuid.uuid4().hex}"


def send(conversation_id, message):
    response = client.post("/chat", json={"message": message, "conversationId": conversation_id})
    assert response.status_code == 200
    return response.json()


def card_numbers(payload):
    return [card["partNumber"] for card in payload.get("productCards", [])]


def test_chat_response_shape_and_metrics(chat_messages):
    conversation_id = new_conversation("shape")
    payload = send(conversation_id, chat_messages["order"])

    assert payload["conversationId"] == conversation_id
    assert payload["text"].startswith("Order 123456 Status: SHIPPED")
    assert "productCards" not in payload

    metrics_payload = client.get("/metrics").json()
    assert metrics_payload["total_requests"] >= 1
    assert metrics_payload["strategies"].get("transaction", 0) >= 1


def test_known_part_gets_a_card_and_unknown_part_does_not(chat_messages):
    known = send(new_conversation("known"), "Tell me about PS11752778")
    unknown = send(new_conversation("unknown"), chat_messages["unknown_part"])

    assert card_numbers(known) == ["PS11752778"]
    card = known["productCards"][0]
    assert set(card) >= {"partNumber", "name", "price", "imageUrl"}
    assert "productCards" not in unknown


def test_bare_part_number_gets_a_card(chat_messages):
    payload = send(new_conversation("bare"), chat_messages["bare_part"])

    assert card_numbers(payload) == ["PS12584610"]


def test_compatibility_answer_is_direct(chat_messages):
    payload = send(new_conversation("compat"), chat_messages["compatibility"])

    assert "PS11756692" in payload["text"]
    assert "WDT780SAEM1" in payload["text"]
    assert payload["text"].startswith("Yep,")
    assert "Pick one of these" not in payload["text"]
    assert card_numbers(payload) == ["PS11756692"]


def test_drain_opening_question(chat_messages):
    payload = send(new_conversation("drain"), chat_messages["drain"])

    assert "Pick one of these:\n• Yes, lots of debris\n• Some debris\n• No debris visible" in payload["text"]
    assert payload["text"].count("• ") == 3


def test_lots_of_debris_follows_the_flow(chat_messages):
    conversation_id = new_conversation("debris")
    send(conversation_id, chat_messages["drain"])

    payload = send(conversation_id, "yes, lots of debris")

    assert payload["text"].startswith("Clean that filter thoroughly with warm water")


def test_lots_of_debris_after_legacy_transcript(drain_transcript):
    from parts_agent import main
    from parts_agent.memory.models import MessageTurn

    conversation_id = new_conversation("legacy")
    for turn in drain_transcript:
        main.memory_store.create_message(MessageTurn(conversation_id=conversation_id, **turn))

    payload = send(conversation_id, "yes, lots of debris")

    assert payload["text"].startswith("Clean that filter thoroughly with warm water")


def test_purchase_intent_interrupts_the_flow(chat_messages):
    conversation_id = new_conversation("purchase")
    send(conversation_id, chat_messages["drain"])

    payload = send(conversation_id, "I want to buy a new drain pump, lots of debris in there")

    assert not payload["text"].startswith("Clean that filter")
    assert "Tell me more about what you're seeing" not in payload["text"]
    assert "PS11753379" in payload["text"]
    assert "PS11753379" in card_numbers(payload)


def test_full_drain_flow_to_part_recommendation():
    conversation_id = new_conversation("walk")
    send(conversation_id, "My dishwasher won't drain")
    hose = send(conversation_id, "No debris visible")
    part = send(conversation_id, "It looks clogged")

    assert "drain hose" in hose["text"]
    assert "PS11746240" in part["text"]
    assert "technician" in part["text"]


def test_unmatched_answer_keeps_the_flow():
    conversation_id = new_conversation("unmatched")
    send(conversation_id, "My dishwasher won't drain")

    reprompt = send(conversation_id, "not sure, it's hard to see in there")
    answer = send(conversation_id, "some debris")

    assert reprompt["text"].startswith("Tell me more about what you're seeing with the drainage issue")
    assert answer["text"].startswith("Clean the filter and also check if your garbage disposal")


def test_forbidden_appliance_gets_redirect_template(chat_messages):
    payload = send(new_conversation("washer"), chat_messages["washing_machine"])

    assert payload["text"] == OTHER_APPLIANCE_TEMPLATE
    assert "productCards" not in payload


def test_handoff_twice_returns_one_ticket(chat_messages):
    from parts_agent import main

    conversation_id = new_conversation("handoff")
    first = send(conversation_id, chat_messages["handoff"])
    second = send(conversation_id, chat_messages["handoff"])

    ticket_id = main.handoff_service.ticket_for(conversation_id)
    assert ticket_id is not None
    assert ticket_id in first["text"]
    assert "already been created" in second["text"]
    assert ticket_id in second["text"]


def test_installation_walkthrough_on_affirmative():
    conversation_id = new_conversation("install")
    summary = send(conversation_id, "How can I install PS11752778?")
    detail = send(conversation_id, "yes please")

    assert summary["text"].endswith("Want me to walk you through the full steps?")
    assert "**Installation Guide for" in detail["text"]


def test_transcript_is_persisted_in_order():
    conversation_id = new_conversation("transcript")
    send(conversation_id, "hello")
    send(conversation_id, "PS12584610")

    response = client.get(f"/conversations/{conversation_id}/messages")

    assert response.status_code == 200
    turns = response.json()
    assert [turn["role"] for turn in turns] == ["user", "assistant", "user", "assistant"]
    assert turns[2]["content"] == "PS12584610"
    assert turns[3]["productCards"][0]["partNumber"] == "PS12584610"
    assert conversation_id in client.get("/conversations").json()


def test_unknown_conversation_transcript_is_404():
    response = client.get(f"/conversations/{new_conversation('missing')}/messages")

    assert response.status_code == 404


def test_request_id_is_echoed():
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})

    assert response.status_code == 200
    assert response.headers["X-Request-ID"] == "abc-123"
