"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (prefix ``BUGSWEEP_``)
and a ``.env`` file.
"""

from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="BUGSWEEP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="bugsweep", description="Application name")
    app_env: str = Field(default="development", description="Environment (development/production)")
    log_level: str = Field(default="INFO", description="Logging level")

    # Logging / Privacy
    log_redaction_enabled: bool = Field(default=True, description="Redact home directories in logs")

    # Reports
    reports_dir: str = Field(
        default="build/reports/spotbugs",
        description="Directory receiving <taskName>Report.xml files, relative to the project root",
    )
    html_report_enabled: bool = Field(default=True, description="Render HTML reports from the XML output")

    # Tooling
    java_executable: str = Field(default="java", description="Java launcher used for SpotBugs")
    spotbugs_classpath: List[str] = Field(
        default=[],
        description="SpotBugs runtime classpath (jars), also used by the HTML renderer",
    )
    command_timeout: float = Field(default=600.0, description="Per-process timeout in seconds")

    # Scheduling
    parallel_limit: int = Field(default=4, description="Max tasks executed concurrently")

    @field_validator("parallel_limit")
    @classmethod
    def _validate_parallel_limit(cls, value: int) -> int:
        if value < 1:
            raise ValueError("parallel_limit must be at least 1")
        return value

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env.lower() == "production"

    @property
    def spotbugs_classpath_paths(self) -> List[Path]:
        return [Path(entry) for entry in self.spotbugs_classpath]


# Global settings instance
settings = Settings()
