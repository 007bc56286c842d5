"""
Agent Console - Configuration Settings
Override store backend, database, LLM proxy, API tokens, and platform defaults.
"""

import logging
from typing import Optional, Dict, List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Agent Console platform settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # ── Platform ──────────────────────────────────────────────────────
    environment: str = Field(default="dev", alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    cors_allowed_origins: str = Field(default="*", alias="CORS_ALLOWED_ORIGINS")

    # ── Override Store ────────────────────────────────────────────────
    override_store: str = Field(default="memory", alias="OVERRIDE_STORE")  # memory, database
    override_tenant_id: str = Field(default="platform", alias="OVERRIDE_TENANT_ID")

    # ── Database (agent_overrides table) ──────────────────────────────
    database_url: str = Field(
        default="sqlite+aiosqlite:///./agent_console.db",
        alias="DATABASE_URL",
    )

    # ── LLM Proxy (backend /api/claude route) ─────────────────────────
    llm_proxy_url: str = Field(default="http://localhost:3001", alias="LLM_PROXY_URL")
    llm_proxy_token: Optional[str] = Field(default=None, alias="LLM_PROXY_TOKEN")
    llm_timeout_seconds: float = Field(default=60.0, alias="LLM_TIMEOUT_SECONDS")
    default_max_tokens: int = Field(default=4096, alias="DEFAULT_MAX_TOKENS")

    # ── Auth ──────────────────────────────────────────────────────────
    # token -> "user_id:role", e.g. {"s3cr3t": "owner@example.com:platform_admin"}
    api_tokens: Dict[str, str] = Field(default_factory=dict, alias="API_TOKENS")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        allowed = ["dev", "development", "qa", "uit", "prod"]
        if v.lower() not in allowed:
            logger.warning(f"[SETTINGS] environment '{v}' not in {allowed}")
        return v.lower()

    @field_validator("override_store")
    @classmethod
    def validate_override_store(cls, v: str) -> str:
        if v.lower() not in ("memory", "database"):
            raise ValueError(f"OVERRIDE_STORE must be 'memory' or 'database', got '{v}'")
        return v.lower()

    @property
    def is_dev(self) -> bool:
        return self.environment in ("dev", "development")

    @property
    def cors_origins(self) -> List[str]:
        raw = self.cors_allowed_origins.strip()
        if raw == "*":
            return ["*"]
        return [o.strip() for o in raw.split(",") if o.strip()]


settings = Settings()
