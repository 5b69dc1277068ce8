"""Tests for the example FastAPI application."""

import pytest
from starlette.testclient import TestClient

from example.server import create_app


@pytest.fixture
def client():
    return TestClient(create_app())


class TestExampleServer:
    """example/server.py routes"""

    def test_index(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json() == {"locale": "en", "hello": "Hello", "bye": "Goodbye"}

    def test_italian_falls_back_for_missing_phrase(self, client):
        response = client.get("/it")
        assert response.json() == {"locale": "it", "hello": "Ciao", "bye": "Goodbye"}
        assert response.headers["content-language"] == "it"

    def test_accept_language(self, client):
        response = client.get("/hello/Mario", headers={"Accept-Language": "it-IT"})
        assert response.json() == {"message": "Ciao Mario"}

    @pytest.mark.parametrize(
        ("count", "message"),
        [(0, "No new messages"), (1, "One new message"), (4, "4 new messages")],
    )
    def test_messages(self, client, count, message):
        assert client.get(f"/messages/{count}").json() == {"message": message}
