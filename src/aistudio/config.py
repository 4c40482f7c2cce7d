"""AI Studio configuration management."""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEMO_KEY_PREFIX = "demo_"


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class StartPolicy(str, Enum):
    """What a facade does when started while a task is still running."""

    SUPERSEDE = "supersede"
    REJECT = "reject"


class Settings(BaseSettings):
    """AI Studio configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="AISTUDIO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
    )

    # General
    env: Environment = Environment.DEVELOPMENT
    log_level: str = "INFO"
    debug: bool = False

    # Feature API keys (demo fallbacks run the simulated backends)
    face_aging_api_key: str = Field(
        default="demo_face_aging_key",
        validation_alias=AliasChoices("AISTUDIO_FACE_AGING_API_KEY", "FACE_AGING_API_KEY"),
    )
    youtube_api_key: str = Field(
        default="demo_youtube_key",
        validation_alias=AliasChoices("AISTUDIO_YOUTUBE_API_KEY", "YOUTUBE_API_KEY"),
    )
    web_search_api_key: str = Field(
        default="demo_search_key",
        validation_alias=AliasChoices(
            "AISTUDIO_WEB_SEARCH_API_KEY",
            "WEB_SEARCH_API_KEY",
            "SEARCH_API_KEY",
        ),
    )
    script_to_movie_api_key: str = Field(
        default="demo_script_movie_key",
        validation_alias=AliasChoices(
            "AISTUDIO_SCRIPT_TO_MOVIE_API_KEY", "SCRIPT_TO_MOVIE_API_KEY"
        ),
    )
    hair_removal_api_key: str = Field(
        default="demo_hair_removal_key",
        validation_alias=AliasChoices("AISTUDIO_HAIR_REMOVAL_API_KEY", "HAIR_REMOVAL_API_KEY"),
    )

    # Task execution
    start_policy: StartPolicy = Field(
        default=StartPolicy.SUPERSEDE,
        description="Behaviour when a facade is started while its task is running",
    )
    worker_pool_size: int = Field(default=4, description="Threads for synchronous work")
    task_timeout_seconds: Optional[float] = Field(
        default=None, description="Fail running tasks after this many seconds"
    )
    output_dir: Path = Field(
        default=Path("./output"), description="Where generated video files are written"
    )

    # Simulated backends
    simulation_speed: float = Field(
        default=1.0, description="Divides every simulated delay (2.0 runs twice as fast)"
    )
    simulated_image_delay_seconds: float = Field(default=2.0, description="Face aging / hair removal")
    simulated_search_delay_seconds: float = Field(default=1.5, description="Web search latency")
    simulated_video_info_delay_seconds: float = Field(default=1.5, description="YouTube metadata")
    simulated_download_seconds: float = Field(default=4.0, description="YouTube download")
    simulated_download_tick_seconds: float = Field(default=0.2, description="Download progress tick")
    simulated_movie_seconds: float = Field(default=8.0, description="Script to movie generation")
    simulated_movie_tick_seconds: float = Field(default=0.5, description="Movie progress tick")

    # CORS configuration (explicit allowlist)
    cors_allowed_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = True
    cors_allowed_methods: list[str] = Field(default=["GET", "POST", "OPTIONS"])
    cors_allowed_headers: list[str] = Field(default=["Content-Type", "X-Request-ID"])

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    # Validators
    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port number range."""
        if not 1 <= v <= 65535:
            raise ValueError(f"Port must be between 1 and 65535, got {v}")
        return v

    @field_validator("simulation_speed")
    @classmethod
    def validate_simulation_speed(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"simulation_speed must be positive, got {v}")
        return v

    @field_validator("worker_pool_size")
    @classmethod
    def validate_worker_pool_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"worker_pool_size must be at least 1, got {v}")
        return v

    @field_validator("task_timeout_seconds")
    @classmethod
    def validate_task_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError(f"task_timeout_seconds must be positive, got {v}")
        return v

    def api_key_for(self, feature: str) -> str:
        """Return the configured API key for a feature value (e.g. ``"web_search"``)."""
        return getattr(self, f"{feature}_api_key")

    def is_simulated(self, feature: str) -> bool:
        """A feature runs simulated while its key is still a demo fallback."""
        return self.api_key_for(feature).startswith(DEMO_KEY_PREFIX)

    def simulated_delay(self, seconds: float) -> float:
        """Scale a simulated delay by ``simulation_speed``."""
        return seconds / self.simulation_speed


settings = Settings()
