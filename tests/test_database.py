"""
Zyx Dashboard - Database Tests
==============================

Tests for the database layer to ensure data integrity.
"""

import sqlite3
import time
from datetime import date

import pytest


class TestUsers:
    """Tests for user operations."""

    def test_create_and_get_user(self, test_db):
        """Test creating a user and reading it back by id and email."""
        user = test_db.create_user("alice@example.com", "hash", "Alice", "Liddell")

        assert test_db.get_user(user["id"])["email"] == "alice@example.com"
        assert test_db.get_user_by_email("alice@example.com")["id"] == user["id"]
        assert user["first_name"] == "Alice"
        assert user["profile_image_url"] is None

    def test_duplicate_email_raises(self, test_db):
        """Test the email column is unique."""
        test_db.create_user("alice@example.com", "hash")
        with pytest.raises(sqlite3.IntegrityError):
            test_db.create_user("alice@example.com", "hash2")
        assert test_db.count_users_by_email("alice@example.com") == 1

    def test_missing_user_is_none(self, test_db):
        """Test absent users read as None."""
        assert test_db.get_user("nope") is None
        assert test_db.get_user_by_email("nobody@example.com") is None

    def test_ids_are_unique(self, test_db):
        """Test generated ids differ."""
        a = test_db.create_user("a@example.com", "h")
        b = test_db.create_user("b@example.com", "h")
        assert a["id"] != b["id"]


class TestSessions:
    """Tests for session bookkeeping."""

    def test_create_get_delete(self, test_db):
        """Test session rows round through JSON and can be removed."""
        test_db.create_session("sid-1", {"user_id": "u1", "ip": "1.2.3.4"}, time.time() + 60)

        session = test_db.get_session("sid-1")
        assert session["sess"] == {"user_id": "u1", "ip": "1.2.3.4"}

        assert test_db.delete_session("sid-1") is True
        assert test_db.get_session("sid-1") is None
        assert test_db.delete_session("sid-1") is False

    def test_purge_expired(self, test_db):
        """Test only expired sessions are purged."""
        now = time.time()
        test_db.create_session("old", {}, now - 1)
        test_db.create_session("new", {}, now + 3600)

        assert test_db.purge_expired_sessions(now) == 1
        assert test_db.get_session("old") is None
        assert test_db.get_session("new") is not None


class TestServers:
    """Tests for server operations."""

    def test_upsert_creates_then_updates(self, test_db, owner):
        """Test re-registering refreshes name and member count."""
        test_db.upsert_server("1", "Old Name", owner["id"], member_count=5)
        server = test_db.upsert_server("1", "New Name", owner["id"], icon_url="https://cdn/icon.png", member_count=7)

        assert server["name"] == "New Name"
        assert server["member_count"] == 7
        assert server["icon_url"] == "https://cdn/icon.png"
        assert len(test_db.get_servers_by_owner(owner["id"])) == 1

    def test_upsert_does_not_transfer_ownership(self, test_db, owner):
        """Test another user cannot take over a registered server."""
        intruder = test_db.create_user("intruder@example.com", "h")
        test_db.upsert_server("1", "Mine", owner["id"])

        server = test_db.upsert_server("1", "Stolen", intruder["id"])

        assert server["owner_id"] == owner["id"]
        assert server["name"] == "Mine"
        assert test_db.get_servers_by_owner(intruder["id"]) == []

    def test_get_all_servers(self, test_db, owner):
        """Test listing every server."""
        test_db.upsert_server("1", "One", owner["id"])
        test_db.upsert_server("2", "Two", owner["id"])
        assert [s["id"] for s in test_db.get_all_servers()] == ["1", "2"]

    def test_delete_cascades(self, test_db, stored_server):
        """Test deleting a server removes its scoped records."""
        server_id = stored_server["id"]
        test_db.create_ticket(server_id, "1", "2", "User")
        test_db.upsert_settings("mod", server_id, {"ban_enabled": False})

        assert test_db.delete_server(server_id) is True
        assert test_db.get_server(server_id) is None
        assert test_db.get_tickets_by_server(server_id) == []
        assert test_db.get_settings("mod", server_id) is None


class TestModActions:
    """Tests for moderation action records."""

    def test_list_newest_first(self, test_db, stored_server):
        """Test mod actions list newest first, ties by insertion order."""
        sid = stored_server["id"]
        first = test_db.create_mod_action(sid, "warn", "1", "A", "9", "Mod", "spam")
        second = test_db.create_mod_action(sid, "ban", "2", "B", "9", "Mod")

        actions = test_db.get_mod_actions_by_server(sid)
        assert [a["id"] for a in actions] == [second["id"], first["id"]]
        assert actions[1]["reason"] == "spam"

    def test_limit(self, test_db, stored_server):
        """Test the optional limit."""
        for i in range(5):
            test_db.create_mod_action(stored_server["id"], "kick", str(i), "T", "9", "Mod")
        assert len(test_db.get_mod_actions_by_server(stored_server["id"], limit=3)) == 3

    def test_since(self, test_db, stored_server):
        """Test filtering by timestamp."""
        sid = stored_server["id"]
        test_db.create_mod_action(sid, "mute", "1", "A", "9", "Mod")
        assert len(test_db.get_mod_actions_since(sid, time.time() - 60)) == 1
        assert test_db.get_mod_actions_since(sid, time.time() + 60) == []


class TestLogEvents:
    """Tests for server log events."""

    def test_default_and_explicit_limit(self, test_db, stored_server):
        """Test log events honor the limit and list newest first."""
        sid = stored_server["id"]
        for i in range(60):
            test_db.create_log_event(sid, "member_join", target_id=str(i))

        events = test_db.get_log_events(sid)
        assert len(events) == 50
        assert events[0]["target_id"] == "59"
        assert len(test_db.get_log_events(sid, limit=5)) == 5


class TestReactionRoles:
    """Tests for reaction role bindings."""

    def test_create_list_delete(self, test_db, stored_server):
        """Test the binding lifecycle."""
        sid = stored_server["id"]
        binding = test_db.create_reaction_role(sid, "100", "200", "🎉", "300")

        assert [b["id"] for b in test_db.get_reaction_roles(sid)] == [binding["id"]]
        assert test_db.delete_reaction_role(binding["id"]) is True
        assert test_db.get_reaction_role(binding["id"]) is None
        assert test_db.delete_reaction_role(binding["id"]) is False


class TestAnalytics:
    """Tests for daily analytics counters."""

    def test_upsert_merges_counters(self, test_db, stored_server):
        """Test a second report for the same day keeps counters it omits."""
        sid = stored_server["id"]
        test_db.upsert_daily_analytics(sid, "2024-05-01", {"message_count": 10, "member_count": 3})
        row = test_db.upsert_daily_analytics(sid, date(2024, 5, 1), {"message_count": 25})

        assert row["message_count"] == 25
        assert row["member_count"] == 3
        assert len(test_db.get_server_analytics(sid, "2024-05-01", "2024-05-01")) == 1

    def test_range_inclusive_ascending(self, test_db, stored_server):
        """Test range reads include both ends, oldest first."""
        sid = stored_server["id"]
        for day in ("2024-05-03", "2024-05-01", "2024-05-02", "2024-05-04"):
            test_db.upsert_daily_analytics(sid, day, {"commands_used": 1})

        rows = test_db.get_server_analytics(sid, "2024-05-01", "2024-05-03")
        assert [r["date"] for r in rows] == ["2024-05-01", "2024-05-02", "2024-05-03"]

    def test_unknown_counter_rejected(self, test_db, stored_server):
        """Test unknown counter names raise before writing."""
        with pytest.raises(ValueError):
            test_db.upsert_daily_analytics(stored_server["id"], "2024-05-01", {"bogus": 1})
        assert test_db.get_server_analytics(stored_server["id"], "2024-01-01", "2024-12-31") == []


class TestConnection:
    """Tests for connection helpers."""

    def test_ping(self, test_db):
        """Test ping on an open connection."""
        assert test_db.ping() is True

    def test_reconnects_after_close(self, test_db):
        """Test queries reopen a closed connection."""
        test_db.close()
        assert test_db.ping() is True
