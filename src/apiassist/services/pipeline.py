"""Generate/publish orchestration over two independent state machines.

Each operation class (generate, publish) owns a ``PipelineStateMachine``:

    Idle -> Busy -> Settled | Failed -> Idle

``begin()`` is the only way into Busy and refuses while Busy, which keeps at
most one call in flight per class. The machine is entered before the first
``await`` of an invocation, so concurrent callers on one event loop cannot
both pass the gate. Settled and Failed fall straight back to Idle; the last
outcome stays readable for observers. Any exit after ``begin()``, including an
unexpected exception or task cancellation, ends in Failed and then Idle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from pydantic import BaseModel

from apiassist.errors.exceptions import PipelineBusyError
from apiassist.integrations.agent_client import AgentClient
from apiassist.integrations.messages import build_generate_message, build_publish_message
from apiassist.models.activity import ActivityEntry
from apiassist.models.enums import ActivityKind, OperationClass, OutcomeKind, PipelineState
from apiassist.models.integration import IntegrationResult
from apiassist.models.publish import PublishResult
from apiassist.models.status import StatusMessage
from apiassist.services.event_log import EventLog
from apiassist.services.normalizer import normalize_integration_result, normalize_publish_result
from apiassist.services.settings_service import SettingsService
from apiassist.services.status_notifier import StatusNotifier
from apiassist.services.unwrap import deep_unwrap

logger = logging.getLogger(__name__)

PHASE_ANALYZING = "Analyzing API specification..."
PHASE_GENERATING = "Generating code... Analyzing security... Writing docs..."
PHASE_PUBLISHING = "Publishing to repository..."

_TRANSITIONS: dict[PipelineState, set[PipelineState]] = {
    PipelineState.IDLE: {PipelineState.BUSY},
    PipelineState.BUSY: {PipelineState.SETTLED, PipelineState.FAILED},
    PipelineState.SETTLED: {PipelineState.IDLE},
    PipelineState.FAILED: {PipelineState.IDLE},
}


class PipelineStateMachine:
    """Lifecycle of one operation class."""

    def __init__(self, operation: OperationClass):
        self.operation = operation
        self.state = PipelineState.IDLE
        self.phase = ""
        self.active_agent_id: str | None = None
        self.last_outcome: PipelineState | None = None
        self.last_error: str | None = None
        self.started_at: datetime | None = None
        self.finished_at: datetime | None = None

    @property
    def busy(self) -> bool:
        return self.state == PipelineState.BUSY

    def begin(self, phase: str, agent_id: str) -> None:
        if self.busy:
            raise PipelineBusyError(self.operation)
        self._transition(PipelineState.BUSY)
        self.phase = phase
        self.active_agent_id = agent_id
        self.last_error = None
        self.started_at = datetime.now(timezone.utc)
        self.finished_at = None

    def advance(self, phase: str) -> None:
        """Update the progress label while Busy."""
        if not self.busy:
            raise RuntimeError(f"{self.operation} pipeline is not running")
        self.phase = phase

    def settle(self) -> None:
        self._finish(PipelineState.SETTLED)

    def fail(self, reason: str) -> None:
        self.last_error = reason
        self._finish(PipelineState.FAILED)

    def snapshot(self) -> dict:
        return {
            "operation": self.operation.value,
            "state": self.state.value,
            "busy": self.busy,
            "phase": self.phase,
            "active_agent_id": self.active_agent_id,
            "last_outcome": self.last_outcome.value if self.last_outcome else None,
            "last_error": self.last_error,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
        }

    def _finish(self, terminal: PipelineState) -> None:
        self._transition(terminal)
        self.last_outcome = terminal
        self.finished_at = datetime.now(timezone.utc)
        self.phase = ""
        self.active_agent_id = None
        self._transition(PipelineState.IDLE)

    def _transition(self, target: PipelineState) -> None:
        if target not in _TRANSITIONS[self.state]:
            raise RuntimeError(f"{self.operation}: illegal transition {self.state} -> {target}")
        logger.debug("%s pipeline %s -> %s", self.operation, self.state, target)
        self.state = target


@dataclass
class PipelineOutcome:
    """What one invocation produced."""

    kind: OutcomeKind
    status: StatusMessage
    result: IntegrationResult | PublishResult | None = None
    structured: bool = False
    activities: list[ActivityEntry] = field(default_factory=list)

    @property
    def accepted(self) -> bool:
        return self.kind != OutcomeKind.REJECTED


class GenerateRequest(BaseModel):
    specification: str = ""
    languages: list[str] = []


class PublishRequest(BaseModel):
    """Publish inputs; blank fields fall back to settings and configuration."""

    repository: str | None = None
    branch: str | None = None
    commit_message: str | None = None
    file_path: str | None = None
    include_findings: bool = True


class PipelineOrchestrator:
    """Runs generate and publish against their agents and records the outcomes."""

    def __init__(
        self,
        client: AgentClient,
        event_log: EventLog,
        notifier: StatusNotifier,
        settings_service: SettingsService,
        *,
        generation_agent_id: str,
        publishing_agent_id: str,
        default_commit_message: str = "feat: Add API integration",
        default_file_path: str = "integrations/",
    ):
        self.client = client
        self.event_log = event_log
        self.notifier = notifier
        self.settings_service = settings_service
        self.generation_agent_id = generation_agent_id
        self.publishing_agent_id = publishing_agent_id
        self.default_commit_message = default_commit_message
        self.default_file_path = default_file_path

        self.generate_machine = PipelineStateMachine(OperationClass.GENERATE)
        self.publish_machine = PipelineStateMachine(OperationClass.PUBLISH)
        self.integration_result: IntegrationResult | None = None
        self.publish_result: PublishResult | None = None
        self.last_generate_request: GenerateRequest | None = None

    @property
    def active_agent_ids(self) -> list[str]:
        machines = (self.generate_machine, self.publish_machine)
        return [m.active_agent_id for m in machines if m.active_agent_id]

    def snapshot(self) -> dict:
        return {
            "generate": self.generate_machine.snapshot(),
            "publish": self.publish_machine.snapshot(),
            "active_agent_ids": self.active_agent_ids,
            "has_integration_result": self.integration_result is not None,
            "has_publish_result": self.publish_result is not None,
        }

    # ------------------------------------------------------------------
    # Generate
    # ------------------------------------------------------------------

    async def generate(self, specification: str, languages: list[str]) -> PipelineOutcome:
        """Run one generate cycle.

        Raises:
            PipelineBusyError: if a generate call is already in flight.
        """
        if not specification.strip():
            return self._reject("Missing Input", "Please enter an API specification or describe your integration.")
        if not languages:
            return self._reject("No Languages", "Please select at least one target language.")

        machine = self.generate_machine
        machine.begin(PHASE_ANALYZING, self.generation_agent_id)
        request = GenerateRequest(specification=specification, languages=list(languages))
        self.last_generate_request = request
        self.integration_result = None
        self.publish_result = None

        try:
            return await self._run_generate(machine, request)
        except Exception as exc:
            if not machine.busy:
                raise
            logger.exception("Generate cycle raised")
            return self._failed(machine, "Error", str(exc) or "An unexpected error occurred.")
        finally:
            if machine.busy:
                logger.warning("Generate cycle interrupted")
                machine.fail("cancelled")

    async def _run_generate(self, machine: PipelineStateMachine, request: GenerateRequest) -> PipelineOutcome:
        message = build_generate_message(request.specification, request.languages)
        machine.advance(PHASE_GENERATING)
        response = await self.client.invoke(message, self.generation_agent_id)

        if not response.success:
            return self._failed(machine, "Generation Failed", response.error or "Unknown error occurred.")

        result, structured = normalize_integration_result(deep_unwrap(response.result))
        self.integration_result = result
        machine.settle()

        if structured:
            status = self.notifier.success(
                "Integration Generated",
                result.integration_summary or "Code, security analysis, and documentation generated successfully.",
            )
        else:
            status = self.notifier.info("Response Received", "The agent returned a response. Check the output tabs.")

        activities = [
            await self.event_log.append(
                ActivityKind.GENERATION,
                f"Generated integration for {', '.join(request.languages)}",
                result.integration_summary,
            )
        ]
        findings = result.security_output.findings
        if findings:
            activities.append(
                await self.event_log.append(
                    ActivityKind.SECURITY_ANALYSIS,
                    f"Security analysis: {len(findings)} finding(s)",
                    result.security_output.summary,
                )
            )

        logger.info(
            "Generate settled (structured=%s, snippets=%d, findings=%d)",
            structured,
            len(result.code_output.code_snippets),
            len(findings),
        )
        return PipelineOutcome(OutcomeKind.SETTLED, status, result, structured, activities)

    async def regenerate(self) -> PipelineOutcome:
        """Repeat the last accepted generate request from scratch."""
        request = self.last_generate_request or GenerateRequest()
        return await self.generate(request.specification, request.languages)

    # ------------------------------------------------------------------
    # Publish
    # ------------------------------------------------------------------

    async def publish(self, request: PublishRequest) -> PipelineOutcome:
        """Push the current integration result through the publishing agent.

        Raises:
            PipelineBusyError: if a publish call is already in flight.
        """
        user_settings = self.settings_service.current
        repository = (request.repository or user_settings.default_repo).strip()
        branch = request.branch or user_settings.default_branch or "main"
        commit_message = request.commit_message or self.default_commit_message
        file_path = request.file_path or self.default_file_path

        if not repository:
            return self._reject("Missing Repository", "Please enter a repository name (owner/repo).")
        integration = self.integration_result
        if integration is None:
            return self._reject("No Integration", "Generate an integration first before pushing to GitHub.")

        machine = self.publish_machine
        machine.begin(PHASE_PUBLISHING, self.publishing_agent_id)
        self.publish_result = None

        try:
            return await self._run_publish(
                machine,
                integration,
                repository=repository,
                branch=branch,
                commit_message=commit_message,
                file_path=file_path,
                include_findings=request.include_findings,
            )
        except Exception as exc:
            if not machine.busy:
                raise
            logger.exception("Publish cycle raised")
            return self._failed(machine, "Error", str(exc) or "An unexpected error occurred.")
        finally:
            if machine.busy:
                logger.warning("Publish cycle interrupted")
                machine.fail("cancelled")

    async def _run_publish(
        self,
        machine: PipelineStateMachine,
        integration: IntegrationResult,
        *,
        repository: str,
        branch: str,
        commit_message: str,
        file_path: str,
        include_findings: bool,
    ) -> PipelineOutcome:
        message = build_publish_message(
            integration,
            repository=repository,
            branch=branch,
            commit_message=commit_message,
            file_path=file_path,
            include_findings=include_findings,
        )
        response = await self.client.invoke(message, self.publishing_agent_id)

        if not response.success:
            return self._failed(machine, "Publish Failed", response.error or "Failed to push to GitHub.")

        result, structured = normalize_publish_result(deep_unwrap(response.result))
        self.publish_result = result
        machine.settle()

        if structured:
            status = self.notifier.success("Published", result.summary or "Code successfully pushed to GitHub.")
        else:
            status = self.notifier.info("Publish Response Received", "The publishing agent returned a response.")

        activity = await self.event_log.append(ActivityKind.PUBLISH, f"Pushed to {repository}", result.summary)
        logger.info(
            "Publish settled (structured=%s, actions=%d, issues=%d)",
            structured,
            len(result.actions_taken),
            len(result.issues_created),
        )
        return PipelineOutcome(OutcomeKind.SETTLED, status, result, structured, [activity])

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _reject(self, title: str, message: str) -> PipelineOutcome:
        return PipelineOutcome(OutcomeKind.REJECTED, self.notifier.error(title, message))

    def _failed(self, machine: PipelineStateMachine, title: str, reason: str) -> PipelineOutcome:
        machine.fail(reason)
        return PipelineOutcome(OutcomeKind.FAILED, self.notifier.error(title, reason))
