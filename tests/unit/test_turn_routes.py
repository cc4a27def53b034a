# pylint: disable=missing-module-docstring,missing-function-docstring
import pytest
from fastapi.testclient import TestClient

from config import AppConfig
from server.app import create_app


@pytest.fixture
def client() -> TestClient:
    config = AppConfig(
        env="test",
        log_level="INFO",
        enable_json_logs=False,
        palette_file=None,
        random_seed=3,
        host="127.0.0.1",
        port=8000,
    )
    return TestClient(create_app(config))


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_launch_turn(client: TestClient) -> None:
    response = client.post("/turn", json={
        "session_id": "sess_1",
        "request_id": "req_1",
        "request": {"type": "LaunchRequest"},
    })

    assert response.status_code == 200
    body = response.json()
    assert body["speech"].startswith("Welcome to Quick Colors!")
    assert "  " not in body["speech"]
    assert body["reprompt"] is None
    assert body["open_microphone"] is False
    assert body["session_attributes"]["state"] == "ROLL_CALL_MODE"
    assert body["session_attributes"]["CurrentInputHandlerID"] == "req_1"

    arm = body["directives"][0]
    assert arm["type"] == "ARM_TIMED_WINDOW"
    assert arm["windowMs"] == 50_000
    assert arm["proxies"] == ["first_button", "second_button"]


def test_malformed_turn_is_a_400(client: TestClient) -> None:
    response = client.post("/turn", content=b"{not json")

    assert response.status_code == 400
