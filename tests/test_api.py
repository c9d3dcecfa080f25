"""
Tests for the HTTP API.
"""

from fastapi.testclient import TestClient

from apollo_devtools.ui.http_server import app

client = TestClient(app)


class TestHealth:
    """Basic endpoints."""

    def test_health(self):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_root(self):
        assert "recent" in client.get("/").json()["endpoints"]


class TestRecentActivityApi:
    """Recording through the API."""

    def setup_method(self):
        client.post("/reset")

    def test_record_session(self):
        assert client.post("/recent/cache/start").json()["recording"] is True

        first = client.post("/recent/cache/snapshot", json=["A", "B"])
        assert first.status_code == 200
        assert first.json()["activities"] is None

        second = client.post("/recent/cache/snapshot", json=["B", "A", "X"]).json()
        assert [(a["change"], a["data"]) for a in second["activities"]] == [
            ("removed", "A"),
            ("added", "A"),
            ("added", "X"),
        ]

        state = client.get("/recent/cache").json()
        assert len(state["events"]) == 3
        assert client.get("/recent").json() == ["cache"]

    def test_start_with_baseline(self):
        client.post("/recent/queries/start", json=["GetUser", "GetPosts"])
        result = client.post("/recent/queries/snapshot", json=["GetPosts"]).json()
        assert [(a["change"], a["data"]) for a in result["activities"]] == [
            ("removed", "GetUser"),
        ]

    def test_snapshot_requires_recording(self):
        client.post("/recent/cache/start")
        client.post("/recent/cache/stop")
        response = client.post("/recent/cache/snapshot", json=["A"])
        assert response.status_code == 409

    def test_unknown_target(self):
        assert client.get("/recent/missing").status_code == 404
        assert client.post("/recent/missing/stop").status_code == 404
        assert client.post("/recent/missing/snapshot", json=["A"]).status_code == 404

    def test_stop_and_clear(self):
        client.post("/recent/cache/start", json=["A"])
        client.post("/recent/cache/snapshot", json=["B"])

        stopped = client.post("/recent/cache/stop").json()
        assert stopped["recording"] is False
        assert len(stopped["events"]) == 2

        cleared = client.post("/recent/cache/clear").json()
        assert cleared["events"] == []

    def test_clear_while_recording_keeps_changes(self):
        client.post("/recent/cache/start", json=["A"])

        cleared = client.post("/recent/cache/clear").json()
        assert cleared["recording"] is True
        assert cleared["reference_size"] == 1

        result = client.post("/recent/cache/snapshot", json=["B"]).json()
        assert [(a["change"], a["data"]) for a in result["activities"]] == [
            ("added", "B"),
            ("removed", "A"),
        ]

    def test_snapshot_must_be_a_list(self):
        client.post("/recent/cache/start")
        response = client.post("/recent/cache/snapshot", json={"A": 1})
        assert response.status_code == 422


class TestCacheApi:
    """Cache view endpoint."""

    def test_filtered_objects_with_overall_size(self):
        extract = {"User:1": {"name": "Ada"}, "Post:7": {"title": "Hello"}}
        response = client.post("/cache/objects", params={"search": "user"}, json=extract)
        assert response.status_code == 200

        body = response.json()
        assert [obj["key"] for obj in body["objects"]] == ["User:1"]
        assert body["count"] == 1
        assert body["cache_size"] == len('{"name":"Ada"}') + len('{"title":"Hello"}')
