"""Configuration models for Jersey Swap."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from jerseyswap.core.prompts.models import (
    DEFAULT_NEGATIVE_CONSTRAINTS,
    NEGATIVE_CONSTRAINT_OPTIONS,
    JerseyType,
)


class ProviderType(str, Enum):
    """Supported generation providers."""

    GEMINI = "gemini"
    OPENAI = "openai"


# Default model per provider when GenerationConfig.model is unset
DEFAULT_MODELS: dict[ProviderType, str] = {
    ProviderType.GEMINI: "gemini-2.5-flash-image-preview",
    ProviderType.OPENAI: "gpt-image-1",
}


class GenerationConfig(BaseModel):
    """Generation service configuration."""

    provider: ProviderType = Field(default=ProviderType.GEMINI, description="Generation provider")

    model: str | None = Field(
        default=None, description="Model identifier (provider default when unset)"
    )

    api_key: str | None = Field(
        default=None, repr=False, description="Service credential (loaded from env when unset)"
    )

    base_url: str | None = Field(default=None, description="Override API base URL (OpenAI only)")

    timeout_seconds: float | None = Field(
        default=None, gt=0, description="SDK-level request timeout (None = SDK default)"
    )

    output_format: str = Field(
        default="png", pattern="^(png|jpeg|webp)$", description="Output format (OpenAI only)"
    )

    @property
    def resolved_model(self) -> str:
        """Configured model, or the provider default."""
        return self.model or DEFAULT_MODELS[self.provider]


class WorkflowConfig(BaseModel):
    """Workflow defaults and processing feedback settings."""

    status_interval_seconds: float = Field(
        default=2.5, gt=0, description="Interval between processing status messages"
    )

    default_jersey_type: JerseyType = Field(default=JerseyType.CUSTOM_DESIGN)

    default_negative_constraints: frozenset[str] = Field(default=DEFAULT_NEGATIVE_CONSTRAINTS)

    @field_validator("default_negative_constraints")
    @classmethod
    def _check_known_constraints(cls, value: frozenset[str]) -> frozenset[str]:
        unknown = value.difference(NEGATIVE_CONSTRAINT_OPTIONS)
        if unknown:
            raise ValueError(f"Unknown negative constraints: {sorted(unknown)}")
        return value


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False
    filename: str | None = None


class AppConfig(BaseModel):
    """Application-level configuration."""

    model_config = ConfigDict(extra="ignore")
    output_dir: str = "."
    generation: GenerationConfig = GenerationConfig()
    workflow: WorkflowConfig = WorkflowConfig()
    logging: LoggingConfig = LoggingConfig()
