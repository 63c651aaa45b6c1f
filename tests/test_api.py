"""
End-to-end HTTP tests against the app, with in-memory stores.
"""

from datetime import timedelta

import pytest

from auth.jwt import TokenIssuer

CREDENTIALS = {"email": "test@gmail.com", "password": "test"}


def _bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def token(client):
    assert client.post("/auth/signup", json=CREDENTIALS).status_code == 201
    response = client.post("/auth/signin", json=CREDENTIALS)
    assert response.status_code == 200
    return response.json()["access_token"]


class TestAuthRoutes:
    @pytest.mark.parametrize(
        "body",
        [{"password": "test"}, {"email": "test@gmail.com"}, None, {"email": "not-an-email", "password": "x"}],
    )
    def test_signup_rejects_bad_body(self, client, body):
        assert client.post("/auth/signup", json=body).status_code == 400

    @pytest.mark.parametrize("body", [{"password": "test"}, {"email": "test@gmail.com"}, None])
    def test_signin_rejects_bad_body(self, client, body):
        assert client.post("/auth/signin", json=body).status_code == 400

    def test_signup_returns_token(self, client, issuer):
        response = client.post("/auth/signup", json=CREDENTIALS)
        assert response.status_code == 201
        body = response.json()
        assert set(body) == {"access_token"}
        assert issuer.validate(body["access_token"]).email == "test@gmail.com"

    def test_duplicate_signup_forbidden(self, client, user_store):
        client.post("/auth/signup", json=CREDENTIALS)
        response = client.post("/auth/signup", json={**CREDENTIALS, "password": "other"})
        assert response.status_code == 403
        assert response.json() == {"detail": "Credentials taken"}
        assert len(user_store.users) == 1

    def test_signin_failures_share_message(self, client):
        client.post("/auth/signup", json=CREDENTIALS)
        unknown = client.post("/auth/signin", json={"email": "nobody@gmail.com", "password": "test"})
        wrong = client.post("/auth/signin", json={**CREDENTIALS, "password": "wrong"})
        assert unknown.status_code == wrong.status_code == 403
        assert unknown.json() == wrong.json() == {"detail": "Credentials incorrect"}


class TestAuthorizationGate:
    def test_protected_call_with_token(self, client, token):
        response = client.get("/users/me", headers=_bearer(token))
        assert response.status_code == 200
        body = response.json()
        assert body["email"] == "test@gmail.com"
        assert "hash" not in body

    def test_missing_header(self, client, token):
        response = client.get("/users/me")
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_malformed_header(self, client, token):
        assert client.get("/users/me", headers={"Authorization": token}).status_code == 401

    def test_expired_token(self, client, token, user_store):
        user = user_store.users["test@gmail.com"]
        expired = TokenIssuer("test-secret", expires_in=timedelta(seconds=-1)).issue(user.id, user.email)
        response = client.get("/bookmarks", headers=_bearer(expired["access_token"]))
        assert response.status_code == 401
        assert response.json() == {"detail": "Token expired"}

    def test_foreign_secret_token(self, client, token):
        forged = TokenIssuer("someone-else").issue(1, "test@gmail.com")["access_token"]
        assert client.get("/bookmarks", headers=_bearer(forged)).status_code == 401

    def test_rejected_before_handler(self, client, bookmark_store):
        response = client.post("/bookmarks", json={"title": "t", "link": "https://x.y"})
        assert response.status_code == 401
        assert bookmark_store.bookmarks == {}


class TestUsers:
    def test_edit_user(self, client, token):
        response = client.patch(
            "/users",
            headers=_bearer(token),
            json={"first_name": "Joe", "email": "joe@gmail.com"},
        )
        assert response.status_code == 200
        assert response.json()["first_name"] == "Joe"
        assert response.json()["email"] == "joe@gmail.com"

    def test_null_email_rejected(self, client, token):
        assert client.patch("/users", headers=_bearer(token), json={"email": None}).status_code == 400

    def test_edit_user_to_taken_email(self, client, token):
        client.post("/auth/signup", json={"email": "other@gmail.com", "password": "pw"})
        response = client.patch("/users", headers=_bearer(token), json={"email": "other@gmail.com"})
        assert response.status_code == 403


class TestBookmarks:
    def test_crud_flow(self, client, token):
        headers = _bearer(token)

        response = client.get("/bookmarks", headers=headers)
        assert response.status_code == 200
        assert response.json() == []

        response = client.post(
            "/bookmarks",
            headers=headers,
            json={"title": "First Bookmark", "link": "https://www.youtube.com/watch?v=d6WC5n9G_sM"},
        )
        assert response.status_code == 201
        bookmark_id = response.json()["id"]

        assert len(client.get("/bookmarks", headers=headers).json()) == 1

        response = client.get(f"/bookmarks/{bookmark_id}", headers=headers)
        assert response.status_code == 200
        assert response.json()["id"] == bookmark_id

        edit = {"title": "Kubernetes Course", "description": "Learn how to use Kubernetes."}
        response = client.patch(f"/bookmarks/{bookmark_id}", headers=headers, json=edit)
        assert response.status_code == 200
        assert response.json()["title"] == edit["title"]
        assert response.json()["description"] == edit["description"]
        assert response.json()["link"] == "https://www.youtube.com/watch?v=d6WC5n9G_sM"

        response = client.delete(f"/bookmarks/{bookmark_id}", headers=headers)
        assert response.status_code == 204

        assert client.get("/bookmarks", headers=headers).json() == []

    def test_other_users_bookmarks_are_hidden(self, client, token):
        client.post("/bookmarks", headers=_bearer(token), json={"title": "mine", "link": "https://a.b"})
        client.post("/auth/signup", json={"email": "eve@gmail.com", "password": "pw"})
        eve = client.post("/auth/signin", json={"email": "eve@gmail.com", "password": "pw"}).json()["access_token"]

        assert client.get("/bookmarks", headers=_bearer(eve)).json() == []
        assert client.get("/bookmarks/1", headers=_bearer(eve)).status_code == 404
        assert client.patch("/bookmarks/1", headers=_bearer(eve), json={"title": "x"}).status_code == 403
        assert client.delete("/bookmarks/1", headers=_bearer(eve)).status_code == 403

    def test_null_description_clears_it(self, client, token):
        headers = _bearer(token)
        created = client.post(
            "/bookmarks", headers=headers, json={"title": "t", "link": "https://a.b", "description": "d"},
        ).json()
        response = client.patch(f"/bookmarks/{created['id']}", headers=headers, json={"description": None})
        assert response.status_code == 200
        assert response.json()["description"] is None
        assert response.json()["title"] == "t"

    @pytest.mark.parametrize("field", ["title", "link"])
    def test_null_required_field_rejected(self, client, token, field):
        headers = _bearer(token)
        created = client.post("/bookmarks", headers=headers, json={"title": "t", "link": "https://a.b"}).json()
        response = client.patch(f"/bookmarks/{created['id']}", headers=headers, json={field: None})
        assert response.status_code == 400

    def test_non_integer_id(self, client, token):
        assert client.get("/bookmarks/abc", headers=_bearer(token)).status_code == 400


class TestMiddleware:
    def test_request_id_generated(self, client):
        response = client.get("/bookmarks")
        assert response.headers["X-Request-ID"]
        assert "X-Process-Time" in response.headers

    def test_request_id_echoed(self, client):
        response = client.get("/bookmarks", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"
