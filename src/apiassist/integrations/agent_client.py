"""Clients for the remote generation and publishing agents."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict

from apiassist.errors.exceptions import AgentCallError
from apiassist.integrations.config import AgentEndpoint

logger = logging.getLogger(__name__)


class AgentResponse(BaseModel):
    """Outcome of one agent invocation.

    ``result`` is the agent's payload exactly as received; it may be a JSON
    value, a JSON document serialized into a string, or plain text.
    """

    model_config = ConfigDict(extra="ignore")

    success: bool
    result: Any = None
    error: str | None = None

    @classmethod
    def from_body(cls, body: Any) -> AgentResponse:
        """Accept both ``{"result": ...}`` and ``{"response": {"result": ...}}`` envelopes."""
        if not isinstance(body, dict):
            raise AgentCallError("Agent returned an unexpected response body")
        result = body.get("result")
        nested = body.get("response")
        if result is None and isinstance(nested, dict):
            result = nested.get("result")
        error = body.get("error")
        return cls(
            success=body.get("success") is True,
            result=result,
            error=error if isinstance(error, str) else None,
        )


class AgentClient(ABC):
    """Sends a free-text message to an agent identity and returns its reply."""

    @abstractmethod
    async def invoke(self, message: str, agent_id: str) -> AgentResponse:
        """Invoke the agent once; no retries.

        Raises:
            AgentCallError: on transport or decoding failure.
        """
        ...


class HttpAgentClient(AgentClient):
    """Invokes agents over HTTP with a JSON request body."""

    def __init__(self, endpoint: AgentEndpoint, transport: httpx.AsyncBaseTransport | None = None):
        self.endpoint = endpoint
        self._transport = transport

    async def invoke(self, message: str, agent_id: str) -> AgentResponse:
        headers = {
            **self.endpoint.auth.get_headers(),
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        payload = {"message": message, "agent_id": agent_id}

        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self.endpoint.timeout_seconds,
            ) as client:
                response = await client.post(self.endpoint.invoke_url, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            logger.error("Agent %s unreachable: %s", agent_id, exc)
            raise AgentCallError(f"Agent request failed: {exc}") from exc

        if response.status_code >= 300:
            logger.warning(
                "Agent %s returned %s: %s",
                agent_id,
                response.status_code,
                response.text[:500],
            )
            raise AgentCallError(
                f"Agent returned HTTP {response.status_code}",
                details={"status_code": response.status_code},
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise AgentCallError("Agent returned a non-JSON response") from exc

        logger.info("Agent %s responded (success=%s)", agent_id, body.get("success") if isinstance(body, dict) else None)
        return AgentResponse.from_body(body)
