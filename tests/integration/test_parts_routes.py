from fastapi.testclient import TestClient

from parts_agent.main import app


client = TestClient(app)


def test_get_part_by_number():
    response = client.get("/parts/ps11756692")

    assert response.status_code == 200
    payload = response.json()
    assert payload["partNumber"] == "PS11756692"
    assert "WDT780SAEM1" in payload["compatibility"]
    assert payload["inStock"] is True


def test_unknown_part_is_404():
    response = client.get("/parts/PS99999999")

    assert response.status_code == 404


def test_search_parts():
    response = client.get("/parts/search", params={"query": "ice maker"})

    assert response.status_code == 200
    numbers = {item["partNumber"] for item in response.json()}
    assert "PS12584610" in numbers


def test_search_requires_query():
    assert client.get("/parts/search").status_code == 400
    assert client.get("/parts/search", params={"query": "  "}).status_code == 400
