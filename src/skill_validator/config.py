"""Configuration management for the skill package validator."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file if exists and not in test mode
if not os.getenv("TESTING") and Path(".env").exists():
    load_dotenv(".env")


class Config(BaseSettings):
    """Validator configuration loaded from SKILL_VALIDATOR_* environment variables.

    Command line options take precedence over these values.
    """

    model_config = SettingsConfigDict(
        env_prefix="SKILL_VALIDATOR_",
        case_sensitive=False,
        extra="ignore",
    )

    # Scanning
    skill_file_name: str = Field(
        default="SKILL.md",
        min_length=1,
        description="File name that marks a directory as a skill package",
    )
    exclude_dirs: str = Field(
        default="node_modules,__pycache__,venv",
        description="Directory names never descended into (comma-separated)",
    )

    # Rule thresholds
    min_description_length: int = Field(
        default=20,
        ge=0,
        description="Minimum description length before DESCRIPTION_NONTRIVIAL warns",
    )
    max_body_lines: int = Field(
        default=500,
        ge=1,
        description="Maximum SKILL.md body length before BODY_LENGTH warns",
    )

    # Execution
    jobs: int = Field(
        default=1,
        ge=1,
        le=64,
        description="Number of skills validated in parallel",
    )

    # Logging configuration
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    def get_exclude_dirs(self) -> set[str]:
        """Parse comma-separated excluded directory names into a set.

        Returns:
            Set of directory names. Empty when exclude_dirs is empty.
        """
        return {name.strip() for name in self.exclude_dirs.split(",") if name.strip()}


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance (singleton pattern)."""
    global _config
    if _config is None:
        _config = Config()
    return _config
