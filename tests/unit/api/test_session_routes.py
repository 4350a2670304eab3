"""
Tests for the session router - cookie issuance and session values over HTTP.
"""

from fastapi.testclient import TestClient

from sessiongate.sessions.identifier import SESSION_ID_LENGTH


def _set_cookie(response) -> str:
    return response.headers.get("set-cookie", "")


class TestCurrentSession:
    """GET /v1/session"""

    def test_first_request_issues_cookie(self, client: TestClient):
        response = client.get("/v1/session")

        assert response.status_code == 200
        session_id = response.json()["session_id"]
        assert len(session_id) == SESSION_ID_LENGTH
        assert _set_cookie(response) == (
            f"sid={session_id}; HttpOnly; Max-Age=3600; Path=/; SameSite=lax"
        )

    def test_cookie_resumes_session(self, client: TestClient):
        first = client.get("/v1/session").json()["session_id"]

        response = client.get("/v1/session")

        assert response.json()["session_id"] == first
        assert "set-cookie" not in response.headers

    def test_unknown_cookie_replaced(self, client: TestClient):
        client.cookies.set("sid", "not-a-real-session")

        response = client.get("/v1/session")

        session_id = response.json()["session_id"]
        assert session_id != "not-a-real-session"
        assert _set_cookie(response).startswith(f"sid={session_id};")

    def test_cookieless_clients_get_separate_sessions(self, client: TestClient):
        first = client.get("/v1/session").json()["session_id"]
        client.cookies.clear()

        second = client.get("/v1/session").json()["session_id"]

        assert first != second


class TestSessionValues:
    """GET/PUT/DELETE /v1/session/values/{key}"""

    def test_put_then_get(self, client: TestClient):
        put = client.put("/v1/session/values/cart", json={"value": ["sku-1"]})

        assert put.status_code == 200
        assert put.json() == {"key": "cart", "value": ["sku-1"]}

        got = client.get("/v1/session/values/cart")
        assert got.status_code == 200
        assert got.json()["value"] == ["sku-1"]

    def test_missing_key_is_404(self, client: TestClient):
        client.get("/v1/session")

        response = client.get("/v1/session/values/nothing")

        assert response.status_code == 404
        assert response.json() == {
            "error": {
                "code": "KEY_NOT_FOUND",
                "message": "Session key not set: nothing",
            }
        }

    def test_missing_key_for_new_client_still_issues_cookie(
        self, client: TestClient, memory_provider
    ):
        response = client.get("/v1/session/values/missing")

        assert response.status_code == 404
        cookie = _set_cookie(response)
        assert cookie.startswith("sid=")
        session_id = cookie.split(";", 1)[0].split("=", 1)[1]
        assert session_id in memory_provider
        assert len(memory_provider) == 1

    def test_retries_after_404_reuse_one_session(
        self, client: TestClient, memory_provider
    ):
        for _ in range(3):
            assert client.get("/v1/session/values/missing").status_code == 404

        assert len(memory_provider) == 1

    def test_null_value_is_stored(self, client: TestClient):
        client.put("/v1/session/values/flag", json={"value": None})

        response = client.get("/v1/session/values/flag")

        assert response.status_code == 200
        assert response.json()["value"] is None

    def test_delete_key(self, client: TestClient):
        client.put("/v1/session/values/theme", json={"value": "dark"})

        response = client.delete("/v1/session/values/theme")

        assert response.status_code == 204
        assert client.get("/v1/session/values/theme").status_code == 404

    def test_values_are_isolated_per_session(self, client: TestClient):
        client.put("/v1/session/values/user", json={"value": "alice"})
        client.cookies.clear()

        response = client.get("/v1/session/values/user")

        assert response.status_code == 404

    def test_missing_body_is_422(self, client: TestClient):
        response = client.put("/v1/session/values/x", json={})

        assert response.status_code == 422


class TestDestroySession:
    """POST /v1/session/destroy"""

    def test_destroy_expires_cookie(self, client: TestClient, memory_provider):
        session_id = client.get("/v1/session").json()["session_id"]

        response = client.post("/v1/session/destroy")

        assert response.status_code == 204
        assert _set_cookie(response) == (
            'sid=""; HttpOnly; Max-Age=-1; Path=/; SameSite=lax'
        )
        assert session_id not in memory_provider
        assert "sid" not in client.cookies

    def test_destroy_without_cookie(self, client: TestClient):
        response = client.post("/v1/session/destroy")

        assert response.status_code == 204
        assert "set-cookie" not in response.headers

    def test_new_session_after_destroy(self, client: TestClient):
        before = client.get("/v1/session").json()["session_id"]
        client.post("/v1/session/destroy")

        after = client.get("/v1/session").json()["session_id"]

        assert after != before
