"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts without any configuration.  Tests and embedding
applications may build their own ``Settings`` instance and pass it to
``create_app``.
"""

import os
from dataclasses import dataclass
from typing import Optional


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Skills Hub API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_bool("DEBUG", "false")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Optional path of a log file.  When empty only the console handler
    # is installed.
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # When enabled, skill tags are case-folded after stripping so that
    # "Go" and "go" name the same skill.  Disable to compare tags by
    # exact value.
    normalize_skills: bool = _env_bool("NORMALIZE_SKILLS", "true")

    # Upper bound on the size of a user's skills or wants set.
    max_skills_per_user: int = int(os.getenv("MAX_SKILLS_PER_USER", "50"))

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
