"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite+aiosqlite:///apiassist_local.db"

    # Remote agents
    agent_base_url: str = "http://localhost:8787"
    agent_invoke_path: str = "/agent/invoke"
    agent_api_key_env: str | None = "APIASSIST_AGENT_TOKEN"
    agent_timeout_seconds: float = 300.0
    generation_agent_id: str = "6998dda44657541456743cb6"
    publishing_agent_id: str = "6998ddbc8d370e1a6cc0ba7a"

    # Status messages
    status_ttl_seconds: float = 5.0

    # Publish defaults
    default_file_path: str = "integrations/"
    default_commit_message: str = "feat: Add API integration"

    # CORS
    cors_allowed_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "info"
    json_logs: bool = True

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "APIASSIST_",
    }

    @property
    def is_sqlite(self) -> bool:
        return "sqlite" in self.database_url


settings = Settings()
