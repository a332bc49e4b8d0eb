"""
Tests for the HTTP surface
"""

from seatplan.config import get_settings


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["version"] == get_settings().app_version


class TestSessionFlow:
    """Test a planning session end to end"""

    def test_create_session(self, client):
        response = client.post("/api/v1/sessions", json={"table_limit": 3})
        body = response.json()
        assert response.status_code == 201
        assert body["table_limit"] == 3
        assert len(body["state"]["rooms"]) == 1
        assert body["state"]["current_room_id"] == body["state"]["rooms"][0]["id"]

    def test_seat_a_guest_and_export(self, client, session_url):
        table = client.post(f"{session_url}/tables", json={"name": "Head Table", "capacity": 1}).json()
        assert table["seat_count"] == 1

        seats = client.get(f"{session_url}/tables/{table['id']}/seats").json()
        response = client.put(f"{session_url}/seats/{seats[0]['id']}/guest", json={"guest_id": "g1"})
        assert response.json()["guest_id"] == "g1"

        assert client.get(f"{session_url}/guests/g1/seat").json()["id"] == seats[0]["id"]

        export = client.get(f"{session_url}/export", params={"format": "csv"})
        assert export.status_code == 200
        assert export.headers["content-type"].startswith("text/csv")
        assert export.text.split("\n")[1] == "Head Table,1,g1,,"

    def test_shrink_reports_overflow(self, client, session_url):
        table = client.post(f"{session_url}/tables", json={"name": "A", "capacity": 8}).json()
        seats = client.get(f"{session_url}/tables/{table['id']}/seats").json()
        client.put(f"{session_url}/seats/{seats[5]['id']}/guest", json={"guest_id": "g1"})

        response = client.patch(f"{session_url}/tables/{table['id']}", json={"capacity": 4})

        assert response.status_code == 200
        assert response.json()["seat_count"] == 5
        assert response.json()["seats_over_capacity"] == 1

    def test_statistics_and_limit(self, client, session_url):
        assert client.get(f"{session_url}/statistics").json()["occupancy_rate"] == 0

        response = client.put(f"{session_url}/table-limit", json={"limit": 0})
        assert response.json() == {"limit": 0, "table_count": 0, "reached": True}

    def test_close_session(self, client, session_url):
        assert client.delete(session_url).status_code == 204
        assert client.get(f"{session_url}/tables").status_code == 404


class TestErrors:
    """Test error mapping"""

    def test_unknown_session(self, client):
        response = client.get("/api/v1/sessions/session_missing/tables")
        assert response.status_code == 404
        assert response.json()["error_code"] == "not_found"

    def test_missing_table_name(self, client, session_url):
        response = client.post(f"{session_url}/tables", json={"capacity": 4})
        assert response.status_code == 422
        assert response.json()["error_code"] == "validation_failed"

    def test_table_limit_reached(self, client, session_url):
        client.put(f"{session_url}/table-limit", json={"limit": 1})
        client.post(f"{session_url}/tables", json={"name": "A"})

        response = client.post(f"{session_url}/tables", json={"name": "B"})

        assert response.status_code == 409
        assert response.json()["error_code"] == "capacity_exceeded"
        assert response.json()["context"] == {"limit": 1}

    def test_remove_current_room(self, client, session_url):
        room = client.get(f"{session_url}/current-room").json()
        response = client.delete(f"{session_url}/rooms/{room['id']}")
        assert response.status_code == 409
        assert response.json()["error_code"] == "referential_conflict"

    def test_unknown_menu_option_on_seat(self, client, session_url):
        table = client.post(f"{session_url}/tables", json={"name": "A", "capacity": 1}).json()
        seat = client.get(f"{session_url}/tables/{table['id']}/seats").json()[0]

        response = client.put(f"{session_url}/seats/{seat['id']}/menu", json={"menu_option_id": "menu_missing"})

        assert response.status_code == 404
        assert response.json()["context"]["kind"] == "menu option"

    def test_schema_failure_uses_error_response(self, client, session_url):
        response = client.post(f"{session_url}/tables", json={"name": "A", "capacity": -1})

        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "validation_failed"
        assert body["context"]["errors"][0]["loc"] == ["body", "capacity"]

    def test_unknown_export_format_uses_error_response(self, client, session_url):
        response = client.get(f"{session_url}/export", params={"format": "xml"})
        assert response.status_code == 422
        assert response.json()["error_code"] == "validation_failed"

    def test_negative_table_limit_uses_error_response(self, client, session_url):
        response = client.put(f"{session_url}/table-limit", json={"limit": -1})
        assert response.status_code == 422
        assert response.json()["context"]["errors"][0]["loc"] == ["body", "limit"]
