import logging
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Warehouse List Service"
    app_version: str = "0.1.0"
    app_env: str = "development"
    database_url: str = "sqlite:///./data/wms.db"
    cors_origins: list[str] = ["http://localhost:5173"]

    # List core defaults
    page_size: int = 10
    max_page_size: int = 100
    search_debounce_ms: int = 300
    seed_demo_data: bool = True
    demo_data_file: str = str(_BACKEND_DIR / "data" / "demo-records.yaml")

    # Record store backend: "database" (local SQLAlchemy store) or "http" (remote API)
    record_backend: str = "database"

    # REST-like remote data service (used by HttpRecordService)
    remote_api_base_url: str = "http://localhost:8030/api/v1"
    remote_api_timeout: float = 30.0

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine — SQL queries
    log_level_http: str = "WARNING"          # httpx / httpcore — outbound HTTP
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_lists: str = "INFO"            # list core loader / dispatcher

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        """Keep the page size inside the configured bounds."""
        if self.page_size < 1 or self.page_size > self.max_page_size:
            _config_logger.warning(
                "PAGE_SIZE=%s outside 1..%s — falling back to 10",
                self.page_size,
                self.max_page_size,
            )
            object.__setattr__(self, "page_size", 10)

    @property
    def search_debounce_seconds(self) -> float:
        return max(self.search_debounce_ms, 0) / 1000


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
