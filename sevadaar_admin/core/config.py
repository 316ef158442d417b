from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_SERVICE_ACCOUNT_PATH = PROJECT_ROOT / "scripts" / "serviceAccountKey.json"


class Settings(BaseSettings):
    """Tool configuration loaded from environment variables."""

    service_account_path: Path = DEFAULT_SERVICE_ACCOUNT_PATH
    firebase_project_id: str | None = None
    firebase_app_name: str = "sevadaar-admin"

    users_collection: str = "users"

    log_level: str = "WARNING"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SEVADAAR_",
        extra="ignore",
    )

    @property
    def firebase_options(self) -> dict[str, str]:
        """Return the options passed to ``firebase_admin.initialize_app``."""

        if self.firebase_project_id:
            return {"projectId": self.firebase_project_id}
        return {}


@lru_cache
def get_settings() -> Settings:
    """Cache settings to avoid re-parsing environment files."""
    return Settings()
