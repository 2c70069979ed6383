from parts_agent.nlu.entities import (
    extract,
    extract_history_part_numbers,
    find_model_numbers,
    is_bare_part_number,
)


def test_extract_parts_models_order_and_transaction():
    entities = extract("Order 123456 paid with txn789012: does ps11756692 fit my wdt780saem1?")

    assert entities.part_numbers == ["PS11756692"]
    assert entities.model_numbers == ["WDT780SAEM1"]
    assert entities.order_number == "123456"
    assert entities.transaction_id == "TXN789012"


def test_part_numbers_are_deduplicated_in_order():
    entities = extract("PS2179605 or PS11752778, or ps2179605 again")

    assert entities.part_numbers == ["PS2179605", "PS11752778"]


def test_part_numbers_are_never_model_numbers():
    assert find_model_numbers("PS11752778 and TXN123456 and WRS325SDHZ01") == ["WRS325SDHZ01"]


def test_first_order_number_wins():
    assert extract("orders 111222 and 345678").order_number == "111222"


def test_order_number_requires_six_digits():
    assert extract("order 12345 or 1234567").order_number is None


def test_empty_and_malformed_input_yields_empty_result():
    for value in ("", None, "   ", "!!!"):
        entities = extract(value)
        assert entities.part_numbers == []
        assert entities.model_numbers == []
        assert entities.order_number is None
        assert entities.transaction_id is None


def test_bare_part_number_detection():
    assert is_bare_part_number("PS12584610")
    assert is_bare_part_number("  ps12584610 ")
    assert not is_bare_part_number("I need PS12584610")
    assert not is_bare_part_number("")


def test_history_scan_uses_strict_part_numbers():
    texts = ["Try the water filter PS2179605", "The ice maker PS12584610 should do it"]

    assert extract_history_part_numbers(texts) == ["PS12584610"]
