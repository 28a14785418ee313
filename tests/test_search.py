import pytest
from fastapi.testclient import TestClient

def _search(client, headers, **params):
    response = client.get("/api/sweets/search", params=params, headers=headers)
    assert response.status_code == 200, response.json()
    return response.json()["data"]

def _names(data):
    return [s["name"] for s in data["sweets"]]

def test_search_requires_auth(client: TestClient):
    assert client.get("/api/sweets/search").status_code == 401

def test_search_without_filters_matches_list(client: TestClient, user_token_headers, catalogue):
    listed = client.get("/api/sweets", headers=user_token_headers).json()["data"]["sweets"]
    data = _search(client, user_token_headers, limit=100)
    assert {s["id"] for s in data["sweets"]} == {s["id"] for s in listed}
    assert data["pagination"]["total"] == len(listed)

def test_text_search_over_name(client: TestClient, user_token_headers, catalogue):
    data = _search(client, user_token_headers, q="chocolate")
    assert set(_names(data)) == {"Dark Chocolate Bar", "Milk Chocolate Truffles"}

def test_text_search_over_description_case_insensitive(client: TestClient, user_token_headers, catalogue):
    data = _search(client, user_token_headers, q="FROSTING")
    assert _names(data) == ["Red Velvet Slice"]

def test_text_search_any_term_matches(client: TestClient, user_token_headers, catalogue):
    data = _search(client, user_token_headers, q="lollipop worms")
    assert set(_names(data)) == {"Rainbow Lollipop", "Sour Gummy Worms"}

def test_text_search_wildcards_are_literal(client: TestClient, user_token_headers, catalogue):
    data = _search(client, user_token_headers, q="%")
    assert data["sweets"] == []

def test_category_filter(client: TestClient, user_token_headers, catalogue):
    data = _search(client, user_token_headers, category="chocolate")
    assert _names(data) == ["Milk Chocolate Truffles", "Dark Chocolate Bar"]

def test_unknown_category_rejected(client: TestClient, user_token_headers, catalogue):
    response = client.get(
        "/api/sweets/search", params={"category": "vegetable"}, headers=user_token_headers
    )
    assert response.status_code == 400

def test_price_range_is_inclusive(client: TestClient, user_token_headers, catalogue):
    data = _search(client, user_token_headers, minPrice=2.25, maxPrice=4.75)
    assert set(_names(data)) == {"Sour Gummy Worms", "Dark Chocolate Bar", "Red Velvet Slice"}

def test_inverted_price_range_is_empty(client: TestClient, user_token_headers, catalogue):
    data = _search(client, user_token_headers, minPrice=5, maxPrice=1)
    assert data["sweets"] == []
    assert data["pagination"]["total"] == 0
    assert data["pagination"]["pages"] == 0

def test_filters_combine(client: TestClient, user_token_headers, catalogue):
    data = _search(client, user_token_headers, q="chocolate", maxPrice=5)
    assert _names(data) == ["Dark Chocolate Bar"]

def test_pagination(client: TestClient, user_token_headers, catalogue):
    first = _search(client, user_token_headers, page=1, limit=2)
    assert first["pagination"] == {"page": 1, "limit": 2, "total": 5, "pages": 3}
    assert _names(first) == ["Red Velvet Slice", "Rainbow Lollipop"]

    last = _search(client, user_token_headers, page=3, limit=2)
    assert _names(last) == ["Dark Chocolate Bar"]

    beyond = _search(client, user_token_headers, page=4, limit=2)
    assert beyond["sweets"] == []

@pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"limit": 1000}, {"minPrice": -1}])
def test_invalid_paging_or_price_rejected(client: TestClient, user_token_headers, params):
    response = client.get("/api/sweets/search", params=params, headers=user_token_headers)
    assert response.status_code == 400

def test_category_filter_is_case_insensitive(client: TestClient, user_token_headers, catalogue):
    data = _search(client, user_token_headers, category="Chocolate")
    assert set(_names(data)) == {"Dark Chocolate Bar", "Milk Chocolate Truffles"}
