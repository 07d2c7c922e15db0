"""
HTTP-level tests for the generation, job and credential routes.
"""

import pytest
from fastapi.testclient import TestClient

from conftest import FakeGateway
from app.core import get_credential_state
from app.core.exceptions import CredentialError
from app.main import app
from app.services.infrastructure.orchestration import get_job_state
from app.services.pipeline import GenerationOrchestrator
from app.services.use_cases import generation_use_case

client = TestClient(app)


@pytest.fixture
def gateway(monkeypatch):
    gateway = FakeGateway()
    orchestrator = GenerationOrchestrator(gateway, state=get_job_state(), credentials=get_credential_state())
    monkeypatch.setattr(generation_use_case, "_orchestrator_instance", orchestrator)
    return gateway


def test_root():
    response = client.get("/")
    assert response.status_code == 200
    assert "version" in response.json()


def test_health_reports_credential_flag():
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["checks"]["gemini_api_key"]["configured"] is True
    assert data["checks"]["job"]["phase"] == "idle"
    assert "X-Request-ID" in response.headers


def test_themes():
    response = client.get("/themes")
    assert response.status_code == 200
    assert len(response.json()["themes"]) == 7


def test_initial_job_is_idle():
    data = client.get("/job").json()
    assert data["phase"] == "idle"
    assert data["progress"] == 0


def test_generate_runs_to_completion(gateway):
    response = client.post("/generate", json={"topic": "Coffee", "upload_time": "08:00"})
    assert response.status_code == 202
    assert response.json()["phase"] == "scripting"

    job = client.get("/job").json()
    assert job["phase"] == "completed"
    assert job["progress"] == 100
    assert job["result"]["report"]["upload_time"] == "08:00"
    assert job["result"]["report"]["job_id"].startswith("SH-AI-")
    assert len(job["result"]["media"]["thumbnails"]) == 2


def test_blank_topic_uses_a_theme(gateway):
    client.post("/generate", json={})
    topic = client.get("/job").json()["topic"]
    assert topic in client.get("/themes").json()["themes"]


def test_generate_conflict_returns_409(gateway):
    get_job_state().begin("in flight")

    response = client.post("/generate", json={"topic": "Coffee"})

    assert response.status_code == 409
    assert client.get("/job").json()["topic"] == "in flight"


def test_reset_after_completion(gateway):
    client.post("/generate", json={"topic": "Coffee"})

    response = client.post("/job/reset")

    assert response.status_code == 200
    assert response.json()["phase"] == "idle"
    assert response.json()["result"] is None


def test_reset_in_flight_returns_409():
    get_job_state().begin("in flight")
    assert client.post("/job/reset").status_code == 409


def test_credential_failure_flow(gateway):
    gateway.errors["video"] = CredentialError()

    client.post("/generate", json={"topic": "Coffee"})
    job = client.get("/job").json()

    assert job["phase"] == "failed"
    assert job["error_kind"] == "credential"
    assert client.get("/credentials").json()["configured"] is False

    client.post("/job/reset")
    assert client.post("/generate", json={"topic": "Coffee"}).status_code == 403

    assert client.post("/credentials", json={"api_key": "fresh-key"}).json()["configured"] is True
    gateway.errors.clear()
    assert client.post("/generate", json={"topic": "Coffee"}).status_code == 202


def test_empty_credential_rejected():
    assert client.post("/credentials", json={"api_key": "  "}).status_code == 400
