from fastapi import status
from fastapi.testclient import TestClient

from main import app
from dependencies import get_comment_controller


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "healthy"


def test_metrics_exposed(client):
    response = client.get("/metrics")
    assert response.status_code == status.HTTP_200_OK


def test_unhandled_error_returns_error_id():
    def broken_controller():
        raise RuntimeError("controller exploded")

    app.dependency_overrides[get_comment_controller] = broken_controller
    try:
        with TestClient(app, raise_server_exceptions=False) as test_client:
            response = test_client.get("/posts/1")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["detail"] == "An unexpected error occurred"
    assert response.json()["error_id"]
