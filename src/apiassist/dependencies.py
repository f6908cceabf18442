"""FastAPI dependency injection providers."""

from typing import Annotated

from fastapi import Depends, Request

from apiassist.services.event_log import EventLog
from apiassist.services.pipeline import PipelineOrchestrator
from apiassist.services.settings_service import SettingsService
from apiassist.services.status_notifier import StatusNotifier


def get_orchestrator(request: Request) -> PipelineOrchestrator:
    """Return the orchestrator built during app startup."""
    return request.app.state.orchestrator


def get_event_log(request: Request) -> EventLog:
    return request.app.state.event_log


def get_notifier(request: Request) -> StatusNotifier:
    return request.app.state.notifier


def get_settings_service(request: Request) -> SettingsService:
    return request.app.state.settings_service


# Type aliases for dependency injection
Orchestrator = Annotated[PipelineOrchestrator, Depends(get_orchestrator)]
ActivityLog = Annotated[EventLog, Depends(get_event_log)]
Notifier = Annotated[StatusNotifier, Depends(get_notifier)]
UserSettingsService = Annotated[SettingsService, Depends(get_settings_service)]
