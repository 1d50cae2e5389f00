"""Unit tests for the health endpoint."""

from fundteam.adapter.redis import InMemoryReminderQueue
from tests.harness import create_api_fixture

api_env = create_api_fixture()


class TestHealth:
    """Tests for GET /health."""

    def test_reports_healthy(self, api_env):
        response = api_env.client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["reminders_enabled"] is True
        assert "git_sha" in body

    def test_reports_reminders_disabled(self, api_env):
        api_env.get(InMemoryReminderQueue).available = False

        response = api_env.client.get("/health")

        assert response.json()["reminders_enabled"] is False
