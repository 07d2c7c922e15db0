"""
Tests for app.services.use_cases.generation_use_case
"""

import pytest
from fastapi import BackgroundTasks, HTTPException

from conftest import FakeGateway
from app.core.credentials import CredentialState
from app.core.exceptions import ProviderError
from app.models import GenerationRequest
from app.services.infrastructure.orchestration import JobStateMachine, get_job_state
from app.services.pipeline import GenerationOrchestrator
from app.services.use_cases import GenerationUseCase, get_orchestrator


@pytest.fixture
def orchestrator():
    return GenerationOrchestrator(FakeGateway(), state=JobStateMachine(), credentials=CredentialState("k"))


@pytest.fixture
def use_case(orchestrator):
    return GenerationUseCase(orchestrator)


def test_start_schedules_execution(use_case):
    background_tasks = BackgroundTasks()
    response = use_case.start_generation(GenerationRequest(topic="Coffee", upload_time="07:15"), background_tasks)

    assert response.phase == "scripting"
    assert response.stage == "scripting"
    assert response.topic == "Coffee"
    assert len(background_tasks.tasks) == 1
    assert background_tasks.tasks[0].args == ("07:15",)


def test_conflict_maps_to_409(use_case):
    use_case.start_generation(GenerationRequest(topic="first"), BackgroundTasks())

    with pytest.raises(HTTPException) as exc_info:
        use_case.start_generation(GenerationRequest(topic="second"), BackgroundTasks())

    assert exc_info.value.status_code == 409
    assert use_case.get_job().topic == "first"


def test_missing_credential_maps_to_403():
    orchestrator = GenerationOrchestrator(FakeGateway(), state=JobStateMachine(), credentials=CredentialState())
    with pytest.raises(HTTPException) as exc_info:
        GenerationUseCase(orchestrator).start_generation(GenerationRequest(), BackgroundTasks())

    assert exc_info.value.status_code == 403
    assert orchestrator.state.phase.value == "idle"


def test_reset_while_in_flight_maps_to_409(use_case):
    use_case.start_generation(GenerationRequest(topic="Coffee"), BackgroundTasks())
    with pytest.raises(HTTPException) as exc_info:
        use_case.reset_job()
    assert exc_info.value.status_code == 409


@pytest.mark.asyncio
async def test_failed_job_response(orchestrator):
    orchestrator.gateway.errors["video"] = ProviderError("quota exceeded")
    await orchestrator.run("Coffee", "09:00")

    response = GenerationUseCase(orchestrator).get_job()

    assert response.phase == "failed"
    assert response.stage == "error"
    assert response.error == "quota exceeded"
    assert response.error_kind == "provider"
    assert response.result is None


@pytest.mark.asyncio
async def test_needs_review_response_has_result(orchestrator):
    orchestrator.gateway.confidence = 0.5
    await orchestrator.run("Coffee", "09:00")

    response = GenerationUseCase(orchestrator).get_job()

    assert response.stage == "review"
    assert response.progress == 100
    assert response.result["report"]["confidence"] == 0.5


def test_default_orchestrator_uses_shared_state():
    orchestrator = get_orchestrator()
    assert orchestrator is get_orchestrator()
    assert orchestrator.state is get_job_state()
