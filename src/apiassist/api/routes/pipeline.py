"""Generate and publish pipeline routes."""

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from apiassist.dependencies import Orchestrator, UserSettingsService
from apiassist.errors.exceptions import AgentCallError, NotFoundError, ValidationError
from apiassist.models.enums import OutcomeKind
from apiassist.services.normalizer import rank_findings
from apiassist.services.pipeline import PipelineOutcome, PublishRequest

router = APIRouter(prefix="/pipeline", tags=["Pipeline"])


class GenerateBody(BaseModel):
    specification: str = ""
    languages: list[str] = Field(default_factory=list)


def _outcome_to_dict(outcome: PipelineOutcome) -> dict:
    """Raise for rejected/failed outcomes; otherwise render the settled result."""
    status = outcome.status.model_dump(mode="json")
    if outcome.kind == OutcomeKind.REJECTED:
        raise ValidationError(outcome.status.message, details={"status": status})
    if outcome.kind == OutcomeKind.FAILED:
        raise AgentCallError(outcome.status.message, details={"status": status})
    return {
        "outcome": outcome.kind.value,
        "structured": outcome.structured,
        "status": status,
        "result": outcome.result.model_dump(mode="json") if outcome.result else None,
        "activities": [a.model_dump(mode="json") for a in outcome.activities],
    }


@router.get("")
async def pipeline_state(orchestrator: Orchestrator) -> dict:
    """Current state, phase and active agent of both operation classes."""
    return orchestrator.snapshot()


@router.post("/generate")
async def generate(body: GenerateBody, orchestrator: Orchestrator) -> dict:
    outcome = await orchestrator.generate(body.specification, body.languages)
    return _outcome_to_dict(outcome)


@router.post("/regenerate")
async def regenerate(orchestrator: Orchestrator) -> dict:
    """Re-run the last generate request as a fresh, full generation."""
    outcome = await orchestrator.regenerate()
    return _outcome_to_dict(outcome)


@router.post("/publish")
async def publish(body: PublishRequest, orchestrator: Orchestrator) -> dict:
    outcome = await orchestrator.publish(body)
    return _outcome_to_dict(outcome)


@router.get("/result")
async def integration_result(orchestrator: Orchestrator) -> dict:
    if orchestrator.integration_result is None:
        raise NotFoundError("IntegrationResult", "current")
    return orchestrator.integration_result.model_dump(mode="json")


@router.get("/result/findings")
async def ranked_findings(
    orchestrator: Orchestrator,
    settings_service: UserSettingsService,
    min_severity: str | None = Query(None),
) -> dict:
    """Findings at or above a severity threshold, most severe first.

    The threshold defaults to the user's alert severity setting.
    """
    if orchestrator.integration_result is None:
        raise NotFoundError("IntegrationResult", "current")
    threshold = min_severity or settings_service.current.alert_severity_threshold
    findings = rank_findings(orchestrator.integration_result.findings, threshold)
    return {
        "min_severity": threshold,
        "risk_score": orchestrator.integration_result.security_output.risk_score,
        "findings": [
            {**f.model_dump(mode="json"), "severity_level": f.severity_level.value, "severity_label": f.severity_label}
            for f in findings
        ],
    }


@router.get("/publish-result")
async def publish_result(orchestrator: Orchestrator) -> dict:
    if orchestrator.publish_result is None:
        raise NotFoundError("PublishResult", "current")
    return orchestrator.publish_result.model_dump(mode="json")
