import json
from datetime import datetime

from fastapi.testclient import TestClient

from summary_service.main import app


client = TestClient(app, raise_server_exceptions=False)


def test_summarize_returns_camel_case_result() -> None:
    response = client.post("/api/summarize", json={"text": "A. B. C. D. E.", "options": {"length": "medium"}})
    assert response.status_code == 200
    body = response.json()
    assert set(body) == {"summary", "wordCount", "processingTime"}
    assert body["summary"] == "A. E."
    assert body["wordCount"] == 2


def test_summarize_defaults_to_medium_without_options() -> None:
    response = client.post("/api/summarize", json={"text": "A. B. C. D. E."})
    assert response.status_code == 200
    assert response.json()["summary"] == "A. E."


def test_summarize_null_length_uses_default() -> None:
    response = client.post("/api/summarize", json={"text": "A. B. C. D. E.", "options": {"length": None}})
    assert response.status_code == 200
    assert response.json()["summary"] == "A. E."


def test_missing_text_is_bad_request() -> None:
    response = client.post("/api/summarize", json={})
    assert response.status_code == 400
    assert response.json() == {"code": 400, "message": "Invalid input - text is required"}


def test_empty_text_is_bad_request() -> None:
    response = client.post("/api/summarize", json={"text": ""})
    assert response.status_code == 400


def test_non_string_text_is_bad_request() -> None:
    response = client.post("/api/summarize", json={"text": 123})
    assert response.status_code == 400
    assert response.json()["code"] == 400


def test_whitespace_text_is_bad_request() -> None:
    response = client.post("/api/summarize", json={"text": "   \n  "})
    assert response.status_code == 400
    assert "no meaningful content" in response.json()["message"]


def test_malformed_json_is_bad_request() -> None:
    response = client.post(
        "/api/summarize",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400


def test_too_long_text_is_unprocessable() -> None:
    response = client.post("/api/summarize", json={"text": "a" * 10001})
    assert response.status_code == 422
    assert response.json()["code"] == 422


def test_exact_max_text_is_accepted() -> None:
    response = client.post("/api/summarize", json={"text": "a" * 10000})
    assert response.status_code == 200


def test_invalid_length_is_unprocessable() -> None:
    response = client.post("/api/summarize", json={"text": "A. B.", "options": {"length": "extreme"}})
    assert response.status_code == 422
    assert response.json() == {
        "code": 422,
        "message": "Invalid length option - must be short, medium, or long",
    }


def test_unexpected_fault_is_server_error(monkeypatch) -> None:
    def _boom(*_args, **_kwargs):
        raise RuntimeError("kaboom")

    monkeypatch.setattr("summary_service.routes.summarize.summarize", _boom)

    response = client.post("/api/summarize", json={"text": "A. B."})
    assert response.status_code == 500
    assert response.json() == {"code": 500, "message": "Internal server error"}


def test_health_reports_healthy_with_iso_timestamp() -> None:
    response = client.get("/api/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    parsed = datetime.fromisoformat(body["timestamp"].replace("Z", "+00:00"))
    assert parsed.tzinfo is not None


def test_summarize_logs_lengths_not_text(capsys) -> None:
    secret_text = "Confidential launch plan. Ship it Friday."
    response = client.post("/api/summarize", json={"text": secret_text})
    assert response.status_code == 200

    lines = [json.loads(line) for line in capsys.readouterr().out.splitlines() if line.startswith("{")]
    completed = [rec for rec in lines if rec["event"] == "summarize.completed"]
    assert completed
    assert completed[-1]["text_chars"] == len(secret_text)
    assert completed[-1]["length"] == "medium"
    assert all("Confidential" not in json.dumps(rec) for rec in lines)
