"""Configuration models for the remote agent endpoint."""

import os

from pydantic import BaseModel, ConfigDict, Field

from apiassist.config import Settings


class AuthConfig(BaseModel):
    """Authentication config. Stores env var NAMES, never actual secrets."""

    model_config = ConfigDict(extra="forbid")

    auth_type: str = "none"  # "bearer", "api_key", "none"
    token_env: str | None = None
    header_name: str | None = None  # Custom header for API key (default: Authorization)

    def resolve_token(self) -> str | None:
        """Resolve the credential from its environment variable."""
        if self.token_env:
            return os.environ.get(self.token_env)
        return None

    def get_headers(self) -> dict[str, str]:
        """Build HTTP headers for authentication."""
        headers: dict[str, str] = {}
        token = self.resolve_token()
        if not token:
            return headers
        if self.auth_type == "bearer":
            headers["Authorization"] = f"Bearer {token}"
        elif self.auth_type == "api_key":
            headers[self.header_name or "Authorization"] = token
        return headers


class AgentEndpoint(BaseModel):
    """Where and how to reach the agent service."""

    model_config = ConfigDict(extra="forbid")

    base_url: str
    invoke_path: str = "/agent/invoke"
    auth: AuthConfig = Field(default_factory=AuthConfig)
    timeout_seconds: float = 300.0

    @property
    def invoke_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.invoke_path.lstrip('/')}"

    @classmethod
    def from_settings(cls, settings: Settings) -> "AgentEndpoint":
        auth = (
            AuthConfig(auth_type="bearer", token_env=settings.agent_api_key_env)
            if settings.agent_api_key_env
            else AuthConfig()
        )
        return cls(
            base_url=settings.agent_base_url,
            invoke_path=settings.agent_invoke_path,
            auth=auth,
            timeout_seconds=settings.agent_timeout_seconds,
        )
