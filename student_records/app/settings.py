from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BASE_URL = "http://localhost:8080/api"


class Endpoints(BaseModel):
    """Path templates, relative to the base URL."""

    model_config = ConfigDict(frozen=True)

    students: str = Field(default="/students")
    student_detail: str = Field(default="/students/{id}")
    student_search: str = Field(default="/students/search")


class Settings(BaseSettings):
    # Backend
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        validation_alias=AliasChoices("STUDENT_API_BASE_URL", "VITE_API_BASE_URL"),
        description="Base URL of the student records REST API",
    )
    timeout_ms: int = Field(
        default=10_000,
        validation_alias="STUDENT_API_TIMEOUT_MS",
        description="Per-request timeout in milliseconds",
    )

    # Routes
    endpoints: Endpoints = Field(
        default_factory=Endpoints,
        validation_alias="STUDENT_API_ENDPOINTS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Resolve settings once per process; pass the result to client constructors."""
    return Settings()
