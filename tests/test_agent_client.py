"""Tests for the HTTP agent client and request message builders."""

import json

import httpx
import pytest

from apiassist.config import Settings
from apiassist.errors.exceptions import AgentCallError
from apiassist.integrations.agent_client import AgentResponse, HttpAgentClient
from apiassist.integrations.config import AgentEndpoint, AuthConfig
from apiassist.integrations.messages import build_generate_message, build_publish_message
from apiassist.services.normalizer import normalize_integration_result


def _client(handler, **endpoint_kwargs) -> HttpAgentClient:
    endpoint = AgentEndpoint(base_url="https://agents.example.com/", **endpoint_kwargs)
    return HttpAgentClient(endpoint, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_posts_message_and_agent_id():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        seen["auth"] = request.headers.get("authorization")
        return httpx.Response(200, json={"success": True, "response": {"result": {"summary": "ok"}}})

    client = _client(handler)
    response = await client.invoke("hello", "agent_1")

    assert seen["url"] == "https://agents.example.com/agent/invoke"
    assert seen["body"] == {"message": "hello", "agent_id": "agent_1"}
    assert seen["auth"] is None
    assert response == AgentResponse(success=True, result={"summary": "ok"})


@pytest.mark.asyncio
async def test_bearer_token_from_env(monkeypatch):
    monkeypatch.setenv("TEST_AGENT_TOKEN", "s3cret")
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("authorization")
        return httpx.Response(200, json={"success": True, "result": "text"})

    client = _client(handler, auth=AuthConfig(auth_type="bearer", token_env="TEST_AGENT_TOKEN"))
    response = await client.invoke("hi", "agent_1")

    assert seen["auth"] == "Bearer s3cret"
    assert response.result == "text"


@pytest.mark.asyncio
async def test_failure_body_is_returned_not_raised():
    def handler(request):
        return httpx.Response(200, json={"success": False, "error": "quota exceeded"})

    response = await _client(handler).invoke("hi", "agent_1")
    assert response.success is False
    assert response.error == "quota exceeded"


@pytest.mark.asyncio
async def test_http_error_status_raises():
    def handler(request):
        return httpx.Response(503, text="unavailable")

    with pytest.raises(AgentCallError) as exc_info:
        await _client(handler).invoke("hi", "agent_1")
    assert exc_info.value.details == {"status_code": 503}


@pytest.mark.asyncio
async def test_non_json_body_raises():
    def handler(request):
        return httpx.Response(200, text="<html>oops</html>")

    with pytest.raises(AgentCallError):
        await _client(handler).invoke("hi", "agent_1")


@pytest.mark.asyncio
async def test_transport_error_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(AgentCallError):
        await _client(handler).invoke("hi", "agent_1")


def test_from_body_rejects_non_mapping():
    with pytest.raises(AgentCallError):
        AgentResponse.from_body(["not", "an", "object"])


def test_endpoint_from_settings():
    endpoint = AgentEndpoint.from_settings(
        Settings(agent_base_url="https://a.example.com", agent_invoke_path="run", agent_api_key_env="X_TOKEN")
    )
    assert endpoint.invoke_url == "https://a.example.com/run"
    assert endpoint.auth.auth_type == "bearer"
    assert endpoint.auth.token_env == "X_TOKEN"


def test_generate_message():
    message = build_generate_message("POST /payments", ["Python", "Go"])
    assert "Target Languages: Python, Go" in message
    assert message.endswith("API Specification:\nPOST /payments")


def test_publish_message_serializes_outputs(integration_payload):
    result, _ = normalize_integration_result(integration_payload)
    message = build_publish_message(
        result,
        repository="acme/api",
        branch="main",
        commit_message="feat: x",
        file_path="src/",
        include_findings=False,
    )
    code_json = message.split("Code to push:\n", 1)[1].split("\n\n", 1)[0]
    assert json.loads(code_json)["authentication_type"] == "Bearer"
    assert "Security findings to create issues for:\n[]" in message
    assert '"endpoints"' in message


def test_only_literal_true_counts_as_success():
    assert AgentResponse.from_body({"success": True, "result": "x"}).success is True
    assert AgentResponse.from_body({"success": "false", "result": "x"}).success is False
    assert AgentResponse.from_body({"success": "true"}).success is False
    assert AgentResponse.from_body({"success": 1}).success is False
    assert AgentResponse.from_body({}).success is False
