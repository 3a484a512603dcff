import pytest


@pytest.mark.parametrize("method, path", [
    ("get", "/history"),
    ("get", "/logout"),
    ("get", "/result"),
    ("post", "/result"),
])
def test_guarded_routes_redirect_to_login(client, method, path):
    response = getattr(client, method)(path)

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/login")
    with client.session_transaction() as sess:
        assert sess["redirect_url"] == path
        assert ("error", "You are not authenticated to perform this operation.") in sess["_flashes"]


def test_query_string_is_kept_for_redirect(client):
    client.get("/history?sort=newest")

    with client.session_transaction() as sess:
        assert sess["redirect_url"] == "/history?sort=newest"


def test_guard_blocks_before_any_external_call(client, chat_model, overpass_session):
    client.post("/result", data={"prompt[business]": "coffee shop"})

    assert chat_model.prompts == []
    assert overpass_session.calls == []


def test_authenticated_request_passes_through(logged_in_client):
    response = logged_in_client.get("/history")

    assert response.status_code == 200
    assert b"Report history" in response.data


def test_public_pages_do_not_require_login(client):
    assert client.get("/").status_code == 200
    assert client.get("/login").status_code == 200
