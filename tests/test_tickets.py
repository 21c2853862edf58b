"""
Zyx Dashboard - Ticket Tests
============================

Tests for ticket storage and the ticket endpoints.
"""

import time


class TestTicketStorage:
    """Tests for ticket database operations."""

    def test_create_ticket_is_open(self, test_db, stored_server):
        """Test new tickets start open with no closed time."""
        ticket = test_db.create_ticket(stored_server["id"], "111", "222", "Creator", "Help")

        assert ticket["status"] == "open"
        assert ticket["closed_at"] is None
        assert ticket["subject"] == "Help"

    def test_close_ticket(self, test_db, stored_server):
        """Test closing sets status and stamps closed_at."""
        ticket = test_db.create_ticket(stored_server["id"], "111", "222", "Creator")
        closed = test_db.close_ticket(ticket["id"])

        assert closed["status"] == "closed"
        assert closed["closed_at"] >= ticket["created_at"]

    def test_close_twice_restamps(self, test_db, stored_server):
        """Test closing a closed ticket keeps it closed and refreshes closed_at."""
        ticket = test_db.create_ticket(stored_server["id"], "111", "222", "Creator")
        first = test_db.close_ticket(ticket["id"])
        time.sleep(0.01)
        second = test_db.close_ticket(ticket["id"])

        assert second["status"] == "closed"
        assert second["closed_at"] > first["closed_at"]

    def test_close_missing_ticket(self, test_db):
        """Test closing an unknown ticket returns None."""
        assert test_db.close_ticket("missing") is None

    def test_list_newest_first(self, test_db, stored_server):
        """Test tickets list newest first."""
        sid = stored_server["id"]
        ids = [test_db.create_ticket(sid, str(i), "222", "Creator")["id"] for i in range(3)]

        assert [t["id"] for t in test_db.get_tickets_by_server(sid)] == list(reversed(ids))

    def test_count_open(self, test_db, stored_server):
        """Test only open tickets are counted."""
        sid = stored_server["id"]
        a = test_db.create_ticket(sid, "1", "222", "Creator")
        test_db.create_ticket(sid, "2", "222", "Creator")
        test_db.close_ticket(a["id"])

        assert test_db.count_open_tickets(sid) == 1


class TestTicketEndpoints:
    """Tests for the ticket API."""

    def test_create_and_list(self, auth_client, server):
        """Test creating tickets over HTTP and listing them."""
        url = f"/api/servers/{server['id']}/tickets"
        created = auth_client.post(url, json={
            "channelId": "111",
            "creatorId": "222",
            "creatorName": "Member",
            "subject": "Billing",
        })

        assert created.status_code == 201
        body = created.json()
        assert body["status"] == "open"
        assert body["serverId"] == server["id"]
        assert body["closedAt"] is None

        listed = auth_client.get(url).json()
        assert [t["id"] for t in listed] == [body["id"]]

    def test_close_endpoint(self, auth_client, server):
        """Test PATCH /tickets/{id}/close closes the ticket."""
        ticket = auth_client.post(f"/api/servers/{server['id']}/tickets", json={
            "channelId": "111", "creatorId": "222", "creatorName": "Member",
        }).json()

        response = auth_client.patch(f"/api/tickets/{ticket['id']}/close")

        assert response.status_code == 200
        assert response.json()["status"] == "closed"
        assert response.json()["closedAt"] is not None

    def test_close_unknown_ticket(self, auth_client):
        """Test closing an unknown ticket answers 404."""
        response = auth_client.patch("/api/tickets/does-not-exist/close")
        assert response.status_code == 404
        assert response.json()["error_code"] == "TICKET_NOT_FOUND"

    def test_close_other_owners_ticket(self, auth_client, server, other_client):
        """Test another user cannot close the ticket."""
        ticket = auth_client.post(f"/api/servers/{server['id']}/tickets", json={
            "channelId": "111", "creatorId": "222", "creatorName": "Member",
        }).json()

        response = other_client.patch(f"/api/tickets/{ticket['id']}/close")
        assert response.status_code == 403

    def test_close_requires_patch(self, auth_client):
        """Test other methods on the close route answer 405."""
        response = auth_client.post("/api/tickets/anything/close")
        assert response.status_code == 405

    def test_missing_required_field(self, auth_client, server):
        """Test missing fields answer 400."""
        response = auth_client.post(f"/api/servers/{server['id']}/tickets", json={"channelId": "111"})
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_unknown_server(self, auth_client):
        """Test tickets for an unregistered server answer 404."""
        response = auth_client.get("/api/servers/999999999999999999/tickets")
        assert response.status_code == 404
