"""
Zyx Dashboard - API Tests
=========================

End-to-end tests through FastAPI's TestClient.
"""

import dataclasses
import sqlite3
import threading
import time

from fastapi.testclient import TestClient

from conftest import ALICE, BOB, GUILD
from zyx.api.app import create_app


class TestAuthFlow:
    """Tests for registration, login and the session cookie."""

    def test_alice_end_to_end(self, client):
        """Test register, login and profile lookup with and without the cookie."""
        registered = client.post("/api/auth/register", json=ALICE)
        assert registered.status_code == 201
        assert registered.json() == {
            "id": registered.json()["id"],
            "email": "alice@example.com",
            "firstName": "Alice",
            "lastName": "Liddell",
        }

        client.cookies.clear()
        login = client.post("/api/auth/login", json={"email": ALICE["email"], "password": ALICE["password"]})
        assert login.status_code == 200
        assert "zyx_auth_token" in login.cookies

        profile = client.get("/api/auth/user")
        assert profile.status_code == 200
        assert profile.json()["email"] == "alice@example.com"
        assert profile.json()["profileImageUrl"] is None

        client.cookies.clear()
        anonymous = client.get("/api/auth/user")
        assert anonymous.status_code == 401
        assert anonymous.json()["message"] == "Unauthorized"

    def test_cookie_attributes(self, client):
        """Test the session cookie is HTTP-only, SameSite=Lax and lasts 7 days."""
        response = client.post("/api/auth/register", json=ALICE)
        header = response.headers["set-cookie"].lower()

        assert header.startswith("zyx_auth_token=")
        assert "httponly" in header
        assert "samesite=lax" in header
        assert "max-age=604800" in header
        assert "path=/" in header
        assert "secure" not in header

    def test_duplicate_registration(self, client):
        """Test registering the same email twice answers 400."""
        client.post("/api/auth/register", json=ALICE)
        response = client.post("/api/auth/register", json=ALICE)

        assert response.status_code == 400
        assert response.json()["message"] == "User already exists"

    def test_email_case_insensitive(self, client):
        """Test emails are normalized before lookup."""
        client.post("/api/auth/register", json=ALICE)
        response = client.post("/api/auth/register", json={**ALICE, "email": "ALICE@Example.com"})
        assert response.status_code == 400

    def test_missing_fields(self, client):
        """Test an empty email or password answers 400."""
        response = client.post("/api/auth/register", json={"email": "", "password": "x"})
        assert response.status_code == 400
        assert response.json()["message"] == "Email and password are required"

        response = client.post("/api/auth/login", json={"email": "a@example.com"})
        assert response.status_code == 400

    def test_unknown_register_field(self, client):
        """Test unexpected fields answer 400."""
        response = client.post("/api/auth/register", json={**ALICE, "isAdmin": True})
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_bad_credentials(self, client):
        """Test a wrong password answers 401."""
        client.post("/api/auth/register", json=ALICE)
        response = client.post("/api/auth/login", json={"email": ALICE["email"], "password": "wrong"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"

    def test_logout_clears_cookie(self, auth_client):
        """Test logout expires the cookie."""
        response = auth_client.post("/api/auth/logout")

        assert response.status_code == 200
        assert response.json() == {"message": "Logged out successfully"}
        assert "max-age=0" in response.headers["set-cookie"].lower()
        assert auth_client.get("/api/auth/user").status_code == 401

    def test_logout_without_session(self, client):
        """Test logout succeeds even when not logged in."""
        assert client.post("/api/auth/logout").status_code == 200

    def test_forged_cookie(self, client):
        """Test a garbage cookie answers 401."""
        client.cookies.set("zyx_auth_token", "forged.token.value")
        response = client.get("/api/auth/user")
        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTH_INVALID_TOKEN"

    def test_bearer_header_not_accepted(self, client):
        """Test the token only works as a cookie."""
        client.post("/api/auth/register", json=ALICE)
        token = client.cookies.get("zyx_auth_token")
        client.cookies.clear()

        response = client.get("/api/auth/user", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401


class TestPasswordHashingOffLoop:
    """Tests that bcrypt work does not stall other requests."""

    @staticmethod
    def _hold(auth_service, monkeypatch, method_name):
        """Block an AuthService hashing method until released."""
        entered = threading.Event()
        release = threading.Event()
        outcome = {}
        original = getattr(auth_service, method_name)

        def held(*args, **kwargs):
            entered.set()
            outcome["released"] = release.wait(timeout=5)
            return original(*args, **kwargs)

        monkeypatch.setattr(auth_service, method_name, held)
        return entered, release, outcome

    @staticmethod
    def _health_while_held(client, entered, release, send):
        """Send a request in a worker, then hit health while it hashes."""
        result = {}
        worker = threading.Thread(target=lambda: result.update(response=send()))
        worker.start()
        assert entered.wait(timeout=5)

        health = client.get("/api/health")
        release.set()
        worker.join(timeout=10)

        assert health.status_code == 200
        return result["response"]

    def test_health_served_during_login(self, app, auth_client, monkeypatch):
        """Test a request sent mid-login completes before the hash does."""
        entered, release, outcome = self._hold(app.state.auth_service, monkeypatch, "verify_password")

        response = self._health_while_held(auth_client, entered, release, lambda: auth_client.post(
            "/api/auth/login",
            json={"email": ALICE["email"], "password": ALICE["password"]},
        ))

        assert outcome["released"] is True
        assert response.status_code == 200

    def test_health_served_during_register(self, app, client, monkeypatch):
        """Test a request sent mid-registration completes before the hash does."""
        entered, release, outcome = self._hold(app.state.auth_service, monkeypatch, "hash_password")

        response = self._health_while_held(
            client, entered, release, lambda: client.post("/api/auth/register", json=BOB),
        )

        assert outcome["released"] is True
        assert response.status_code == 201


class TestErrors:
    """Tests for routing errors and the error body."""

    def test_wrong_method(self, client):
        """Test a wrong HTTP method answers 405."""
        response = client.get("/api/auth/login")
        assert response.status_code == 405
        assert response.json()["error_code"] == "METHOD_NOT_ALLOWED"

    def test_unknown_path(self, client):
        """Test unknown paths answer 404 in the standard shape."""
        response = client.get("/api/nope")
        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_protected_routes_require_auth(self, client):
        """Test every protected area answers 401 without a cookie."""
        for path in (
            "/api/dashboard/stats",
            "/api/dashboard/activity",
            "/api/servers",
            f"/api/servers/{GUILD['id']}/mod-settings",
        ):
            assert client.get(path).status_code == 401, path

    def test_request_id_header(self, client):
        """Test responses echo a request ID."""
        response = client.get("/api/health", headers={"X-Request-ID": "abc123"})
        assert response.headers["x-request-id"] == "abc123"

    def test_database_error(self, app, auth_client, monkeypatch):
        """Test storage failures answer 500 without the SQL error text."""
        def broken(owner_id):
            raise sqlite3.OperationalError("disk I/O error")

        monkeypatch.setattr(app.state.db, "get_servers_by_owner", broken)
        response = auth_client.get("/api/servers")

        assert response.status_code == 500
        body = response.json()
        assert body["error_code"] == "SERVER_DATABASE_ERROR"
        assert "disk" not in body["message"]

    def test_error_model_documented(self, api_config, test_db):
        """Test the OpenAPI schema documents the error body."""
        app = create_app(dataclasses.replace(api_config, debug=True), test_db)
        schema = TestClient(app).get("/api/openapi.json").json()

        assert "ErrorResponse" in schema["components"]["schemas"]
        responses = schema["paths"]["/api/servers"]["get"]["responses"]
        assert responses["401"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")


class TestHealth:
    """Tests for health endpoints."""

    def test_root_health(self, client):
        """Test the load balancer health check."""
        assert client.get("/health").json() == {"status": "healthy"}

    def test_api_health(self, client):
        """Test the wrapped health check."""
        body = client.get("/api/health").json()
        assert body["success"] is True
        assert body["data"]["status"] == "healthy"

    def test_detailed_health(self, client):
        """Test detailed health reports the database."""
        body = client.get("/api/health/detailed").json()
        assert body["data"]["db_connected"] is True
        assert body["data"]["status"] == "healthy"


class TestServers:
    """Tests for server registration and ownership."""

    def test_register_and_list(self, auth_client, server):
        """Test a registered server appears in the owner's list."""
        assert server["name"] == GUILD["name"]
        assert server["memberCount"] == 42

        servers = auth_client.get("/api/servers").json()
        assert [s["id"] for s in servers] == [GUILD["id"]]
        assert auth_client.get(f"/api/servers/{GUILD['id']}").status_code == 200

    def test_other_owner_forbidden(self, server, other_client):
        """Test another user's server answers 403."""
        assert other_client.get(f"/api/servers/{server['id']}").status_code == 403
        assert other_client.get(f"/api/servers/{server['id']}/mod-settings").status_code == 403
        assert other_client.get("/api/servers").json() == []

    def test_cannot_take_over(self, server, other_client):
        """Test re-registering someone else's server answers 403."""
        response = other_client.post("/api/servers", json={**GUILD, "name": "Mine now"})
        assert response.status_code == 403

    def test_unknown_server(self, auth_client):
        """Test an unregistered server answers 404."""
        response = auth_client.get("/api/servers/1/mod-settings")
        assert response.status_code == 404
        assert response.json()["error_code"] == "SERVER_NOT_FOUND"

    def test_invalid_server_id(self, auth_client):
        """Test non-numeric guild IDs are rejected."""
        response = auth_client.post("/api/servers", json={**GUILD, "id": "abc"})
        assert response.status_code == 400

    def test_delete(self, auth_client, server):
        """Test deleting a server."""
        assert auth_client.delete(f"/api/servers/{server['id']}").status_code == 200
        assert auth_client.get(f"/api/servers/{server['id']}").status_code == 404


class TestSettingsEndpoints:
    """Tests for settings GET/PATCH."""

    def test_get_defaults(self, auth_client, server):
        """Test unwritten settings read as defaults with null metadata."""
        body = auth_client.get(f"/api/servers/{server['id']}/mod-settings").json()

        assert body["banEnabled"] is True
        assert body["modRoles"] == []
        assert body["id"] is None
        assert body["createdAt"] is None
        assert body["serverId"] == server["id"]

    def test_patch_merges(self, auth_client, server):
        """Test two PATCHes of different fields both stick."""
        url = f"/api/servers/{server['id']}/ticket-settings"
        auth_client.patch(url, json={"categoryId": "111"})
        response = auth_client.patch(url, json={"supportRoles": ["222"]})

        assert response.status_code == 200
        body = response.json()
        assert body["categoryId"] == "111"
        assert body["supportRoles"] == ["222"]
        assert body["enabled"] is True
        assert auth_client.get(url).json() == body

    def test_unknown_field(self, auth_client, server):
        """Test unknown settings fields answer 400."""
        response = auth_client.patch(
            f"/api/servers/{server['id']}/mod-settings",
            json={"banEnabled": False, "nukeEnabled": True},
        )
        assert response.status_code == 400
        assert auth_client.get(f"/api/servers/{server['id']}/mod-settings").json()["id"] is None

    def test_all_kinds_served(self, auth_client, server):
        """Test each settings route answers GET and PATCH."""
        patches = {
            "mod-settings": {"warnEnabled": False},
            "ticket-settings": {"enabled": False},
            "automod-settings": {"spamAction": "ban", "filteredWords": ["badword"]},
            "log-settings": {"logVoiceActivity": True},
            "welcome-settings": {"welcomeEnabled": True, "welcomeEmbedColor": "#FF0000"},
            "autorole-settings": {"joinRoles": ["333"]},
        }
        for slug, body in patches.items():
            url = f"/api/servers/{server['id']}/{slug}"
            assert auth_client.get(url).status_code == 200, slug
            response = auth_client.patch(url, json=body)
            assert response.status_code == 200, slug
            for key, value in body.items():
                assert response.json()[key] == value, (slug, key)

    def test_put_not_allowed(self, auth_client, server):
        """Test PUT on a settings route answers 405."""
        response = auth_client.put(f"/api/servers/{server['id']}/mod-settings", json={})
        assert response.status_code == 405


class TestRecords:
    """Tests for mod actions, log events, reaction roles and analytics."""

    def test_mod_actions_newest_first(self, auth_client, server):
        """Test mod actions list newest first."""
        url = f"/api/servers/{server['id']}/mod-actions"
        for target in ("1", "2"):
            response = auth_client.post(url, json={
                "actionType": "warn",
                "targetId": target,
                "targetName": f"user{target}",
                "moderatorId": "9",
                "moderatorName": "mod",
            })
            assert response.status_code == 201

        assert [a["targetId"] for a in auth_client.get(url).json()] == ["2", "1"]

    def test_invalid_action_type(self, auth_client, server):
        """Test unknown action types answer 400."""
        response = auth_client.post(f"/api/servers/{server['id']}/mod-actions", json={
            "actionType": "smite", "targetId": "1", "targetName": "u",
            "moderatorId": "9", "moderatorName": "m",
        })
        assert response.status_code == 400

    def test_log_events_limit(self, auth_client, server):
        """Test the log events limit parameter."""
        url = f"/api/servers/{server['id']}/log-events"
        for _ in range(3):
            auth_client.post(url, json={"eventType": "member_join"})

        assert len(auth_client.get(url, params={"limit": 2}).json()) == 2
        assert auth_client.get(url, params={"limit": 0}).status_code == 400

    def test_reaction_roles(self, auth_client, server, other_client):
        """Test reaction role create, forbidden delete and delete."""
        created = auth_client.post(f"/api/servers/{server['id']}/reaction-roles", json={
            "messageId": "100", "channelId": "200", "emoji": "🎉", "roleId": "300",
        })
        assert created.status_code == 201
        binding_id = created.json()["id"]

        assert other_client.delete(f"/api/reaction-roles/{binding_id}").status_code == 403
        assert auth_client.delete(f"/api/reaction-roles/{binding_id}").status_code == 200
        assert auth_client.delete(f"/api/reaction-roles/{binding_id}").status_code == 404

    def test_analytics(self, auth_client, server):
        """Test daily analytics upsert and range read."""
        url = f"/api/servers/{server['id']}/analytics"
        auth_client.post(url, json={"date": "2024-05-01", "messageCount": 10, "memberCount": 5})
        response = auth_client.post(url, json={"date": "2024-05-01", "messageCount": 12})

        assert response.status_code == 200
        assert response.json()["messageCount"] == 12
        assert response.json()["memberCount"] == 5

        rows = auth_client.get(url, params={"start": "2024-04-30", "end": "2024-05-02"}).json()
        assert [r["date"] for r in rows] == ["2024-05-01"]

    def test_analytics_bad_range(self, auth_client, server):
        """Test start after end answers 400."""
        response = auth_client.get(
            f"/api/servers/{server['id']}/analytics",
            params={"start": "2024-05-02", "end": "2024-05-01"},
        )
        assert response.status_code == 400


class TestDashboard:
    """Tests for dashboard stats and activity."""

    def test_empty_stats(self, auth_client):
        """Test a user with no servers sees zeroes."""
        assert auth_client.get("/api/dashboard/stats").json() == {
            "totalServers": 0,
            "totalMembers": 0,
            "openTickets": 0,
            "modActionsToday": 0,
        }

    def test_stats_aggregate(self, auth_client, server, test_db):
        """Test stats sum across servers and count today's actions only."""
        auth_client.post("/api/servers", json={"id": "222", "name": "Second", "memberCount": 8})
        sid = server["id"]
        test_db.create_ticket(sid, "1", "2", "a")
        closed = test_db.create_ticket(sid, "1", "2", "b")
        test_db.close_ticket(closed["id"])
        test_db.create_ticket("222", "1", "2", "c")
        test_db.create_mod_action(sid, "ban", "1", "t", "9", "m")
        old = test_db.create_mod_action("222", "kick", "1", "t", "9", "m")
        test_db.execute(
            "UPDATE mod_actions SET created_at = ? WHERE id = ?",
            (time.time() - 3 * 86400, old["id"]),
        )

        stats = auth_client.get("/api/dashboard/stats").json()
        assert stats == {
            "totalServers": 2,
            "totalMembers": 50,
            "openTickets": 2,
            "modActionsToday": 1,
        }

    def test_stats_exclude_other_users(self, auth_client, server, other_client):
        """Test stats only count the caller's servers."""
        assert other_client.get("/api/dashboard/stats").json()["totalServers"] == 0

    def test_activity_capped_and_sorted(self, auth_client, server, test_db):
        """Test activity merges servers, newest first, at most ten each."""
        auth_client.post("/api/servers", json={"id": "222", "name": "Second"})
        for i in range(8):
            test_db.create_mod_action(server["id"], "warn", str(i), "t", "9", "m")
            test_db.create_mod_action("222", "warn", str(100 + i), "t", "9", "m")
        test_db.create_ticket("222", "1", "2", "latest")

        body = auth_client.get("/api/dashboard/activity").json()
        created = [a["createdAt"] for a in body["modActions"]]

        assert len(body["modActions"]) == 10
        assert created == sorted(created, reverse=True)
        assert body["tickets"][0]["creatorName"] == "latest"
