"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from daemon_manager.app import create_app
from daemon_manager.core.config_manager import DashboardConfig
from daemon_manager.core.errors import QueryTimeout


@pytest.fixture
def client(provider, configs):
    for config in configs:
        provider.add_service(config.service_name)
        provider.status_texts[config.service_name] = f"{config.service_name} is running"
    provider.log_texts["nginx.service"] = "GET / 200"

    app = create_app(DashboardConfig(services=tuple(configs)), provider)
    with TestClient(app) as test_client:
        yield test_client


def test_list_services(client):
    response = client.get("/services")

    assert response.status_code == 200
    data = response.json()
    assert [s["config"]["service_name"] for s in data] == ["nginx.service", "postgresql.service", "backup.timer"]
    assert data[0]["running"] is True
    assert data[0]["pid"] == 1234


def test_list_services_skips_broken_unit(client, provider):
    del provider.units["postgresql.service"]

    response = client.get("/services")

    assert response.status_code == 200
    assert len(response.json()) == 2


def test_service_detail_with_logs(client):
    response = client.get("/service/nginx.service")

    assert response.status_code == 200
    data = response.json()
    assert data["status_text"] == "nginx.service is running"
    assert data["log_text"] == "GET / 200"
    assert data["enabled"] is True


def test_service_detail_by_base_name_without_logs(client):
    response = client.get("/service/postgresql")

    assert response.status_code == 200
    assert response.json()["log_text"] == ""


def test_unknown_service_is_404(client):
    assert client.get("/service/sshd.service").status_code == 404


def test_query_failure_is_502(client, provider):
    provider.status_texts["nginx.service"] = QueryTimeout("Timeout after 10s", unit="nginx.service")

    response = client.get("/service/nginx.service")

    assert response.status_code == 502
    assert "Timeout" in response.json()["detail"]


def test_health(client):
    assert client.get("/health").json() == {"status": "ok", "services": 3}
