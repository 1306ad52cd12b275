# Tests for categories, activity and settings routes

import pytest

API = "/api/v1"


class TestCategories:
    def test_defaults_sorted_with_counts(self, client, auth_headers):
        cats = client.get(f"{API}/categories", headers=auth_headers).json()
        assert [c["name"] for c in cats] == ["Banking", "Personal", "Social Media", "Work"]
        assert all(c["vault_item_count"] == 0 for c in cats)

    def test_counts_items(self, client, auth_headers):
        cats = {c["name"]: c["id"] for c in client.get(f"{API}/categories", headers=auth_headers).json()}
        for title in ("a", "b"):
            client.post(
                f"{API}/vault",
                json={"title": title, "encrypted_password": "kf1$x", "category_id": cats["Work"]},
                headers=auth_headers,
            )
        client.post(f"{API}/vault", json={"title": "c", "encrypted_password": "kf1$x"}, headers=auth_headers)

        counts = {c["name"]: c["vault_item_count"] for c in client.get(f"{API}/categories", headers=auth_headers).json()}
        assert counts["Work"] == 2
        assert counts["Banking"] == 0

    def test_create(self, client, auth_headers):
        resp = client.post(f"{API}/categories", json={"name": "Gaming", "color": "#AbCdEf"}, headers=auth_headers)
        assert resp.status_code == 201
        assert resp.json()["name"] == "Gaming"
        names = [c["name"] for c in client.get(f"{API}/categories", headers=auth_headers).json()]
        assert "Gaming" in names

    @pytest.mark.parametrize("payload", [
        {"name": "", "color": "#123456"},
        {"name": "Games", "color": "red"},
        {"name": "Games", "color": "#12345"},
        {"name": "Games", "color": "#1234567"},
    ])
    def test_create_validation(self, client, auth_headers, payload):
        assert client.post(f"{API}/categories", json=payload, headers=auth_headers).status_code == 400

    def test_isolated_per_user(self, client, register_user):
        alice = register_user()
        bob = register_user(email="bob@example.com", name="Bob")
        client.post(f"{API}/categories", json={"name": "Alice only", "color": "#000000"}, headers=alice)
        names = [c["name"] for c in client.get(f"{API}/categories", headers=bob).json()]
        assert "Alice only" not in names
        assert len(names) == 4


class TestActivity:
    def test_newest_first(self, client, auth_headers):
        logs = client.get(f"{API}/activity", headers=auth_headers).json()
        assert [log["action"] for log in logs] == ["LOGIN", "REGISTER"]
        assert logs[0]["user_agent"] == "testclient"

    def test_limit(self, client, auth_headers):
        for _ in range(3):
            client.post("/auth/token", data={"username": "alice@example.com", "password": "correct horse battery"})
        assert len(client.get(f"{API}/activity", params={"limit": 2}, headers=auth_headers).json()) == 2

    @pytest.mark.parametrize("limit", [0, 201, "many"])
    def test_bad_limit(self, client, auth_headers, limit):
        assert client.get(f"{API}/activity", params={"limit": limit}, headers=auth_headers).status_code == 400


class TestSettings:
    def test_defaults(self, client, auth_headers):
        body = client.get(f"{API}/settings", headers=auth_headers).json()
        assert body["theme"] == "system"
        assert body["auto_lock_minutes"] == 15
        assert body["default_view"] == "grid"
        assert body["two_factor_enabled"] is False

    def test_partial_update(self, client, auth_headers):
        resp = client.put(f"{API}/settings", json={"theme": "dark"}, headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json()["theme"] == "dark"
        resp = client.put(f"{API}/settings", json={"auto_lock_minutes": 5}, headers=auth_headers)
        body = resp.json()
        assert body["theme"] == "dark"
        assert body["auto_lock_minutes"] == 5

    @pytest.mark.parametrize("payload", [
        {"theme": "purple"},
        {"default_view": "table"},
        {"auto_lock_minutes": 0},
    ])
    def test_update_validation(self, client, auth_headers, payload):
        assert client.put(f"{API}/settings", json=payload, headers=auth_headers).status_code == 400

    def test_recreated_when_missing(self, client, session, auth_headers):
        from sqlmodel import select
        from keyfort.server.models import UserSettings

        session.delete(session.exec(select(UserSettings)).one())
        session.commit()
        body = client.get(f"{API}/settings", headers=auth_headers).json()
        assert body["theme"] == "system"


class TestAvatar:
    def test_update(self, client, auth_headers):
        resp = client.put(f"{API}/settings/avatar", json={"avatar": "/avatars/avatar-3.svg"}, headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json()["avatar"] == "/avatars/avatar-3.svg"
        assert client.get("/auth/me", headers=auth_headers).json()["image"] == "/avatars/avatar-3.svg"
        actions = [log["action"] for log in client.get(f"{API}/activity", headers=auth_headers).json()]
        assert actions[0] == "UPDATE_AVATAR"

    @pytest.mark.parametrize("avatar", ["/avatars/avatar-10.svg", "https://evil.example.com/x.svg"])
    def test_rejects_unknown(self, client, auth_headers, avatar):
        resp = client.put(f"{API}/settings/avatar", json={"avatar": avatar}, headers=auth_headers)
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Invalid avatar selection"
