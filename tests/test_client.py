import pytest
from fastapi.testclient import TestClient
from typer.testing import CliRunner

from sweetshop.client import ApiClientError, SessionStore, SweetShopClient
from sweetshop.client import cli as cli_module

@pytest.fixture(scope="function")
def session_store(tmp_path):
    return SessionStore(tmp_path / "session.json")

@pytest.fixture(scope="function")
def api_client(client: TestClient, session_store):
    return SweetShopClient(base_url="http://testserver/api", session=session_store, http=client)

def test_register_stores_session(api_client, session_store):
    user = api_client.register("Candy Fan", "fan@example.com", "secret123")
    assert user["email"] == "fan@example.com"
    assert session_store.token
    assert api_client.current_user()["name"] == "Candy Fan"
    assert api_client.me()["email"] == "fan@example.com"

def test_logout_clears_session(api_client, session_store, test_user):
    api_client.login("test_tester@example.com", "testpassword")
    assert session_store.path.exists()
    api_client.logout()
    assert api_client.current_user() is None
    with pytest.raises(ApiClientError) as excinfo:
        api_client.get_sweets()
    assert excinfo.value.status_code == 401

def test_login_failure_raises(api_client, test_user):
    with pytest.raises(ApiClientError) as excinfo:
        api_client.login("test_tester@example.com", "nope")
    assert excinfo.value.status_code == 401
    assert excinfo.value.message == "Invalid credentials"

def test_admin_workflow(api_client, admin_user):
    api_client.login("admin@example.com", "adminpassword")
    sweet = api_client.create_sweet(
        {"name": "Peppermint Candy", "category": "candy", "price": 0.75, "quantity": 5}
    )
    assert api_client.purchase_sweet(sweet["id"], 2)["quantity"] == 3
    assert api_client.restock_sweet(sweet["id"], 7)["quantity"] == 10
    assert api_client.update_sweet(sweet["id"], {"price": 1.0})["price"] == 1.0

    found = api_client.search_sweets(q="peppermint", category=None)
    assert [s["id"] for s in found["sweets"]] == [sweet["id"]]

    api_client.delete_sweet(sweet["id"])
    assert api_client.get_sweets() == []

def test_user_cannot_restock(api_client, test_user, sample_sweet):
    api_client.login("test_tester@example.com", "testpassword")
    with pytest.raises(ApiClientError) as excinfo:
        api_client.restock_sweet(sample_sweet.id, 5)
    assert excinfo.value.status_code == 403

def test_health(api_client):
    assert api_client.health()["status"] == "OK"

def test_session_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json")
    assert SessionStore(path).token is None


runner = CliRunner()

@pytest.fixture(scope="function")
def cli_client(api_client, monkeypatch):
    monkeypatch.setattr(cli_module, "get_client", lambda: api_client)
    return api_client

def test_cli_login_and_list(cli_client, test_user, sample_sweet):
    result = runner.invoke(cli_module.cli, ["login", "test_tester@example.com"], input="testpassword\n")
    assert result.exit_code == 0, result.output
    assert "Welcome back, Test Tester" in result.output

    result = runner.invoke(cli_module.cli, ["list"])
    assert result.exit_code == 0
    assert "Dark Chocolate Bar" in result.output

    result = runner.invoke(cli_module.cli, ["whoami"])
    assert "test_tester@example.com" in result.output

def test_cli_purchase_insufficient_stock(cli_client, test_user, sample_sweet):
    cli_client.login("test_tester@example.com", "testpassword")
    result = runner.invoke(cli_module.cli, ["purchase", sample_sweet.id, "--quantity", "99"])
    assert result.exit_code == 1
    assert "Insufficient stock" in result.output

def test_cli_search(cli_client, test_user, catalogue):
    cli_client.login("test_tester@example.com", "testpassword")
    result = runner.invoke(cli_module.cli, ["search", "gummy"])
    assert result.exit_code == 0
    assert "Sour Gummy Worms" in result.output
    assert "page 1/1 (1 total)" in result.output

def test_cli_marks_out_of_stock():
    output = cli_module.render_sweets([
        {"id": "1", "name": "Rainbow Lollipop", "category": "lollipop", "price": 1.5, "quantity": 0},
    ])
    assert "out of stock" in output
