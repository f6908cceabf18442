"""FastAPI application factory and lifespan management."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from apiassist.config import settings
from apiassist.db.engine import create_db_engine, create_session_factory, create_tables
from apiassist.integrations.agent_client import AgentClient, HttpAgentClient
from apiassist.integrations.config import AgentEndpoint
from apiassist.logging_config import configure_logging
from apiassist.services.event_log import EventLog
from apiassist.services.pipeline import PipelineOrchestrator
from apiassist.services.settings_service import SettingsService
from apiassist.services.state_store import StateStore
from apiassist.services.status_notifier import StatusNotifier

# Configure logging at import time
configure_logging(log_level=settings.log_level, json_output=settings.json_logs)

logger = logging.getLogger(__name__)


async def init_services(
    app: FastAPI,
    session_factory: async_sessionmaker[AsyncSession],
    client: AgentClient,
) -> None:
    """Load persisted state once and attach the service graph to ``app.state``."""
    store = StateStore(session_factory)
    notifier = StatusNotifier(ttl_seconds=settings.status_ttl_seconds)
    event_log = await EventLog.load(store)
    settings_service = await SettingsService.load(store, notifier)

    app.state.db_session_factory = session_factory
    app.state.notifier = notifier
    app.state.event_log = event_log
    app.state.settings_service = settings_service
    app.state.orchestrator = PipelineOrchestrator(
        client,
        event_log,
        notifier,
        settings_service,
        generation_agent_id=settings.generation_agent_id,
        publishing_agent_id=settings.publishing_agent_id,
        default_commit_message=settings.default_commit_message,
        default_file_path=settings.default_file_path,
    )
    logger.info("Loaded %d activity entries from storage", len(event_log))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown resources."""
    engine = create_db_engine()
    await create_tables(engine)
    app.state.db_engine = engine

    client = HttpAgentClient(AgentEndpoint.from_settings(settings))
    await init_services(app, create_session_factory(engine), client)

    logger.info("apiassist API started (db=%s)", "sqlite" if settings.is_sqlite else "postgresql")
    yield

    await engine.dispose()
    logger.info("apiassist API shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="apiassist API",
        version="0.1.0",
        description="Generates API integration code, security analysis and docs through remote agents, and publishes them.",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from apiassist.api.middleware.trace_id import TraceIdMiddleware
    app.add_middleware(TraceIdMiddleware)

    from apiassist.errors.handlers import register_exception_handlers
    register_exception_handlers(app)

    from apiassist.api.router import api_router
    app.include_router(api_router)

    return app


app = create_app()
