import threading

from parts_agent.services.handoff import DUPLICATE_TICKET_MESSAGE, HandoffRequest, HandoffService


def request(conversation_id="conv-1"):
    return HandoffRequest(
        conversation_id=conversation_id,
        user_message="I want to talk to a human",
        reason="User requested human assistance",
    )


def test_second_request_for_same_conversation_is_rejected(tmp_path):
    service = HandoffService(tmp_path / "handoff.db")

    first = service.request_human_support(request())
    second = service.request_human_support(request())

    assert first.success is True
    assert first.ticket_id.startswith("TKT-")
    assert first.ticket_id in first.message
    assert second.success is False
    assert second.ticket_id == first.ticket_id
    assert second.message == DUPLICATE_TICKET_MESSAGE.format(ticket_id=first.ticket_id)
    assert service.ticket_for("conv-1") == first.ticket_id


def test_ticket_survives_restart(tmp_path):
    db_path = tmp_path / "handoff.db"
    first = HandoffService(db_path).request_human_support(request())

    again = HandoffService(db_path).request_human_support(request())

    assert again.success is False
    assert first.ticket_id in again.message
    assert HandoffService(db_path).ticket_for("conv-1") == first.ticket_id


def test_separate_conversations_get_separate_tickets(tmp_path):
    service = HandoffService(tmp_path / "handoff.db")

    first = service.request_human_support(request("conv-1"))
    second = service.request_human_support(request("conv-2"))

    assert first.success and second.success
    assert first.ticket_id != second.ticket_id


def test_concurrent_requests_create_one_ticket(tmp_path):
    service = HandoffService(tmp_path / "handoff.db")
    results = []

    def worker():
        results.append(service.request_human_support(request()))

    threads = [threading.Thread(target=worker) for _ in range(5)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sum(result.success for result in results) == 1
