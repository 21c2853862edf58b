"""
Zyx Dashboard - Custom Command Tests
====================================

Tests for custom command storage and endpoints.
"""

import sqlite3

import pytest


COMMAND = {
    "name": "rules",
    "response": "Read #rules before posting.",
    "allowedRoles": ["111"],
    "cooldown": 30,
}


class TestCommandStorage:
    """Tests for custom command database operations."""

    def test_create_defaults(self, test_db, stored_server):
        """Test optional fields take their defaults."""
        command = test_db.create_custom_command(stored_server["id"], "ping", "pong")

        assert command["enabled"] is True
        assert command["embed_enabled"] is False
        assert command["embed_color"] == "#5865F2"
        assert command["allowed_roles"] == []
        assert command["usage_count"] == 0

    def test_name_unique_per_server(self, test_db, stored_server, owner):
        """Test duplicate names collide only within one server."""
        test_db.create_custom_command(stored_server["id"], "ping", "pong")
        with pytest.raises(sqlite3.IntegrityError):
            test_db.create_custom_command(stored_server["id"], "ping", "again")

        other = test_db.upsert_server("555", "Other", owner["id"])
        test_db.create_custom_command(other["id"], "ping", "pong")

    def test_partial_update(self, test_db, stored_server):
        """Test updates touch only the given fields."""
        command = test_db.create_custom_command(stored_server["id"], "ping", "pong", allowed_roles=["1"])
        updated = test_db.update_custom_command(command["id"], {"response": "PONG", "enabled": False})

        assert updated["response"] == "PONG"
        assert updated["enabled"] is False
        assert updated["allowed_roles"] == ["1"]
        assert updated["updated_at"] >= command["updated_at"]

    def test_update_unknown_field(self, test_db, stored_server):
        """Test non-updatable fields are rejected."""
        command = test_db.create_custom_command(stored_server["id"], "ping", "pong")
        with pytest.raises(ValueError):
            test_db.update_custom_command(command["id"], {"usage_count": 99})

    def test_update_missing(self, test_db):
        """Test updating an unknown command returns None."""
        assert test_db.update_custom_command("missing", {"response": "x"}) is None

    def test_usage_counter(self, test_db, stored_server):
        """Test the usage counter increments by one each call."""
        command = test_db.create_custom_command(stored_server["id"], "ping", "pong")
        test_db.increment_command_usage(command["id"])
        updated = test_db.increment_command_usage(command["id"])

        assert updated["usage_count"] == 2
        assert test_db.increment_command_usage("missing") is None

    def test_delete(self, test_db, stored_server):
        """Test deleting a command."""
        command = test_db.create_custom_command(stored_server["id"], "ping", "pong")
        assert test_db.delete_custom_command(command["id"]) is True
        assert test_db.get_custom_command(command["id"]) is None


class TestCommandEndpoints:
    """Tests for the custom command API."""

    def test_create_and_list(self, auth_client, server):
        """Test creating a command returns it in camelCase."""
        url = f"/api/servers/{server['id']}/commands"
        response = auth_client.post(url, json=COMMAND)

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "rules"
        assert body["allowedRoles"] == ["111"]
        assert body["usageCount"] == 0
        assert [c["id"] for c in auth_client.get(url).json()] == [body["id"]]

    def test_name_normalized(self, auth_client, server):
        """Test command names are stored lowercase."""
        response = auth_client.post(
            f"/api/servers/{server['id']}/commands",
            json={**COMMAND, "name": "  Rules "},
        )
        assert response.json()["name"] == "rules"

    def test_duplicate_name_conflict(self, auth_client, server):
        """Test a duplicate name answers 409."""
        url = f"/api/servers/{server['id']}/commands"
        auth_client.post(url, json=COMMAND)
        response = auth_client.post(url, json=COMMAND)

        assert response.status_code == 409
        assert response.json()["error_code"] == "COMMAND_NAME_TAKEN"

    def test_invalid_name(self, auth_client, server):
        """Test names with spaces are rejected."""
        response = auth_client.post(
            f"/api/servers/{server['id']}/commands",
            json={**COMMAND, "name": "two words"},
        )
        assert response.status_code == 400

    def test_patch_use_delete(self, auth_client, server):
        """Test the single-command routes."""
        created = auth_client.post(f"/api/servers/{server['id']}/commands", json=COMMAND).json()
        url = f"/api/commands/{created['id']}"

        patched = auth_client.patch(url, json={"enabled": False})
        assert patched.status_code == 200
        assert patched.json()["enabled"] is False
        assert patched.json()["response"] == COMMAND["response"]

        used = auth_client.post(f"{url}/use")
        assert used.json()["usageCount"] == 1

        assert auth_client.delete(url).status_code == 200
        assert auth_client.get(url).status_code == 404

    def test_patch_rejects_null(self, auth_client, server):
        """Test required fields cannot be nulled out."""
        created = auth_client.post(f"/api/servers/{server['id']}/commands", json=COMMAND).json()
        response = auth_client.patch(f"/api/commands/{created['id']}", json={"response": None})
        assert response.status_code == 400

    def test_other_owner_forbidden(self, auth_client, server, other_client):
        """Test another user cannot read the command."""
        created = auth_client.post(f"/api/servers/{server['id']}/commands", json=COMMAND).json()
        assert other_client.get(f"/api/commands/{created['id']}").status_code == 403
