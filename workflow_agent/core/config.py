"""
Core configuration module for the workflow agent tools.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the WORKFLOW_AGENT_ prefix.

Pattern: Pydantic BaseSettings with a cached accessor
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All fields use the WORKFLOW_AGENT_ prefix for environment variables.
    Example: WORKFLOW_AGENT_WORKFLOW_SERVICE_URL=http://workflows:3000
    """

    # =========================================================================
    # Service Configuration
    # =========================================================================
    service_name: str = Field(
        default="workflow-agent",
        description="Name of the service for logging and identification",
    )
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level for structured logging",
    )

    # =========================================================================
    # Workflow Service Configuration
    # =========================================================================
    workflow_service_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the workflow builder service",
    )
    workflow_service_timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="Timeout in seconds for workflow service calls",
    )
    workflow_service_retries: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Connection-level retries for workflow service calls",
    )

    # =========================================================================
    # Tool Dispatch Configuration
    # =========================================================================
    tool_timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0.0,
        description="Per-call dispatch timeout; unset means no timeout",
    )

    model_config = {
        "env_prefix": "WORKFLOW_AGENT_",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @field_validator("workflow_service_url")
    @classmethod
    def validate_workflow_service_url(cls, v: str) -> str:
        """Validate workflow service URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Workflow service URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Uses functools.lru_cache to ensure only one Settings instance is created.

    Returns:
        Settings: The application settings instance.
    """
    return Settings()
