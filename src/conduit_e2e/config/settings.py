"""Test-run settings using pydantic-settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from conduit_e2e.api.models import ArticleDraft


class Credentials(BaseModel):
    """A fixed user account known to the backend."""

    email: str
    password: SecretStr
    username: str


class Settings(BaseSettings):
    """Conduit E2E configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CONDUIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # Targets
    base_url: str = Field(
        default="http://localhost:4100", description="Application under test"
    )
    api_url: str = Field(
        default="https://conduit.productionready.io/api",
        description="Backend REST API base path",
    )

    # DOM and storage conventions
    test_id_attribute: str = Field(
        default="data-cy", description="Attribute carrying stable test ids"
    )
    token_storage_key: str = Field(
        default="jwt", description="Local storage key holding the auth token"
    )

    # Viewport
    viewport_width: int = Field(default=1280, ge=200, description="Viewport width")
    viewport_height: int = Field(default=720, ge=200, description="Viewport height")

    # Timeouts (milliseconds)
    default_command_timeout_ms: int = Field(
        default=10_000, ge=1, description="Timeout for element lookups and assertions"
    )
    request_timeout_ms: int = Field(
        default=10_000, ge=1, description="Timeout for outgoing requests"
    )
    response_timeout_ms: int = Field(
        default=10_000, ge=1, description="Timeout for aliased network waits"
    )
    page_load_timeout_ms: int = Field(
        default=60_000, ge=1, description="Timeout for page navigation"
    )
    poll_interval_ms: int = Field(
        default=100, ge=1, description="Interval between assertion retries"
    )

    # Flaky-run retries
    retries_run_mode: int = Field(default=2, ge=0, description="Retries in CI runs")
    retries_open_mode: int = Field(
        default=0, ge=0, description="Retries in interactive runs"
    )
    interactive: bool = Field(
        default=False, description="Interactive (open mode) run"
    )

    # Fixed test data
    test_user: Credentials = Field(
        default=Credentials(
            email="test@example.com",
            password=SecretStr("testpassword123"),
            username="testuser",
        )
    )
    test_user2: Credentials = Field(
        default=Credentials(
            email="test2@example.com",
            password=SecretStr("testpassword123"),
            username="testuser2",
        )
    )
    demo_user: Credentials = Field(
        default=Credentials(
            email="demo@demo.com",
            password=SecretStr("demopassword"),
            username="demo",
        )
    )
    test_article: ArticleDraft = Field(
        default=ArticleDraft(
            title="Test Article for Cypress",
            description="This is a test article created by Cypress",
            body=(
                "# Test Article\n\nThis is the **body** of the test article with "
                "*markdown* formatting.\n\n- List item 1\n- List item 2\n- List item 3"
            ),
            tag_list=["cypress", "testing", "automation"],
        )
    )

    # Uncaught page errors matching these fragments do not fail a test
    benign_error_patterns: list[str] = Field(
        default=[
            "Request failed with status code 422",
            "Request failed with status code 401",
        ]
    )

    # Network stubs
    stub_read_endpoints: bool = Field(
        default=False,
        description="Serve articles, tags and current user from fixtures",
    )
    fixtures_dir: Path = Field(
        default=Path(__file__).resolve().parent.parent / "fixtures",
        description="Directory holding JSON response fixtures",
    )

    # Artifacts
    artifacts_dir: Path = Field(
        default=Path("test-results"), description="Screenshots, videos and traces"
    )

    # Logging
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Log level"
    )

    @field_validator("base_url", "api_url")
    @classmethod
    def validate_http_url(cls, v: str) -> str:
        """Validate URL scheme and drop the trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")

    @property
    def viewport(self) -> dict[str, int]:
        return {"width": self.viewport_width, "height": self.viewport_height}

    @property
    def retries(self) -> int:
        """Retry count for the current run mode."""
        return self.retries_open_mode if self.interactive else self.retries_run_mode

    @property
    def command_timeout(self) -> float:
        return self.default_command_timeout_ms / 1000

    @property
    def response_timeout(self) -> float:
        return self.response_timeout_ms / 1000

    @property
    def poll_interval(self) -> float:
        return self.poll_interval_ms / 1000


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
