"""Application configuration loaded from environment variables."""

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

DEFAULT_CATALOG_PATH = "data/catalog.json"
DEFAULT_PREFERENCES_DIR = "data/preferences"
DEFAULT_RECOMMENDATION_LIMIT = 8


def _load_env_file(path: str = ".env") -> None:
    """Populate os.environ from the provided .env file if it exists."""
    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Service settings based on OS environment variables.

    Attributes:
        catalog_path: JSON document file holding the product catalog.
        preferences_dir: Directory holding the persisted quiz answers.
        recommendation_limit: Size of the "Recommended for You" rail.
        log_level: Root logging level.
        json_logs: Emit one JSON object per log line when True.
    """

    catalog_path: str = DEFAULT_CATALOG_PATH
    preferences_dir: str = DEFAULT_PREFERENCES_DIR
    recommendation_limit: int = DEFAULT_RECOMMENDATION_LIMIT
    log_level: str = "INFO"
    json_logs: bool = True


def _build_settings() -> Settings:
    _load_env_file()

    return Settings(
        catalog_path=os.getenv("ATELIER_CATALOG_PATH", DEFAULT_CATALOG_PATH),
        preferences_dir=os.getenv("ATELIER_PREFERENCES_DIR", DEFAULT_PREFERENCES_DIR),
        recommendation_limit=int(
            os.getenv("ATELIER_RECOMMENDATION_LIMIT", str(DEFAULT_RECOMMENDATION_LIMIT))
        ),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        json_logs=_env_flag("ATELIER_JSON_LOGS", True),
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance to avoid re-reading configuration."""
    return _build_settings()
