"""Shared test fixtures."""

import asyncio

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from apiassist.db.base import Base
# Import all models to register with Base.metadata
import apiassist.db.models  # noqa: F401
from apiassist.integrations.agent_client import AgentClient, AgentResponse
from apiassist.services.event_log import EventLog
from apiassist.services.pipeline import PipelineOrchestrator
from apiassist.services.settings_service import SettingsService
from apiassist.services.state_store import StateStore
from apiassist.services.status_notifier import StatusNotifier

GENERATION_AGENT = "agent_generate"
PUBLISHING_AGENT = "agent_publish"


class FakeAgentClient(AgentClient):
    """Scripted agent: returns queued replies in order and records every call.

    A queued ``Exception`` is raised instead of returned. When ``gate`` is set
    to an ``asyncio.Event`` each call waits on it, which lets tests observe the
    Busy state.
    """

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls: list[tuple[str, str]] = []
        self.gate: asyncio.Event | None = None

    def queue(self, *replies) -> None:
        self.replies.extend(replies)

    async def invoke(self, message: str, agent_id: str) -> AgentResponse:
        self.calls.append((message, agent_id))
        if self.gate is not None:
            await self.gate.wait()
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def ok(result) -> AgentResponse:
    return AgentResponse(success=True, result=result)


def failed(error: str | None) -> AgentResponse:
    return AgentResponse(success=False, error=error)


@pytest.fixture
async def db_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def store(session_factory) -> StateStore:
    return StateStore(session_factory)


@pytest.fixture
def notifier() -> StatusNotifier:
    return StatusNotifier(ttl_seconds=5.0)


@pytest.fixture
async def event_log(store) -> EventLog:
    return await EventLog.load(store)


@pytest.fixture
async def settings_service(store, notifier) -> SettingsService:
    return await SettingsService.load(store, notifier)


@pytest.fixture
def agent() -> FakeAgentClient:
    return FakeAgentClient()


@pytest.fixture
def orchestrator(agent, event_log, notifier, settings_service) -> PipelineOrchestrator:
    return PipelineOrchestrator(
        agent,
        event_log,
        notifier,
        settings_service,
        generation_agent_id=GENERATION_AGENT,
        publishing_agent_id=PUBLISHING_AGENT,
    )


@pytest.fixture
async def app(session_factory, agent):
    """Create a test application instance with in-memory DB and scripted agent."""
    from apiassist.main import create_app, init_services

    _app = create_app()
    await init_services(_app, session_factory, agent)
    return _app


@pytest.fixture
async def client(app):
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def integration_payload() -> dict:
    """A complete generate payload as the agent would return it."""
    return {
        "code_output": {
            "code_snippets": [
                {
                    "language": "Python",
                    "code": "import requests\n",
                    "filename": "payment_client.py",
                    "description": "Python client for the Payment Gateway API.",
                }
            ],
            "dependencies": [{"language": "Python", "packages": ["requests>=2.31.0"]}],
            "usage_notes": "Initialize the client with your API key.",
            "authentication_type": "Bearer",
        },
        "security_output": {
            "findings": [
                {
                    "id": "SEC-1",
                    "severity": "Critical",
                    "category": "Authentication",
                    "title": "API Key Exposure Risk",
                    "description": "The API key is passed directly in code.",
                    "remediation": "Use environment variables.",
                    "evidence": "api_key parameter",
                },
                {
                    "id": "SEC-2",
                    "severity": "Info",
                    "category": "Transport Security",
                    "title": "HTTPS Enforcement",
                    "description": "HTTPS is the default.",
                    "remediation": "Add certificate pinning.",
                    "evidence": "base_url defaults to https://",
                },
            ],
            "risk_score": "6.5/10",
            "alert_rules": [
                {"name": "High-Value Transaction", "condition": "amount > 10000", "severity": "Warning", "action": "Log and notify"}
            ],
            "summary": "Moderate security concerns.",
        },
        "documentation_output": {
            "documentation": "# Payment Gateway API Integration",
            "endpoints": [
                {
                    "method": "POST",
                    "path": "/payments",
                    "description": "Create a payment",
                    "parameters": "amount, currency, customer_id",
                    "response_schema": "{ id, status }",
                }
            ],
            "getting_started": "## Getting Started",
            "changelog_entry": "## v1.0.0",
            "troubleshooting": "## Troubleshooting",
        },
        "integration_summary": "Generated a Python client for the Payment Gateway API.",
        "readiness_assessment": "Production Readiness: 7/10.",
    }


@pytest.fixture
def publish_payload() -> dict:
    return {
        "actions_taken": [
            {"type": "file_push", "description": "Pushed payment_client.py", "url": "https://github.com/acme/api/blob/main/a.py", "status": "success"}
        ],
        "issues_created": [
            {"title": "SEC-1: API Key Exposure Risk", "number": 42, "url": "https://github.com/acme/api/issues/42", "severity": "Critical"}
        ],
        "pull_request": {"title": "feat: Add integration", "url": "https://github.com/acme/api/pull/15", "branch": "feat/payments", "files_changed": 3},
        "summary": "Pushed code and opened a pull request.",
        "errors": [],
    }
