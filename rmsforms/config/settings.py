import re

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    strict_parsing: bool = False
    filter_ids: str = ""

    max_workers: int = 1

    pdf_engine: str = "pdfplumber"

    @property
    def filter_id_set(self) -> frozenset[str]:
        """Message ids and sender calls flagged for diagnostic logging."""
        return frozenset(
            item.strip() for item in re.split(r"[,;\s]+", self.filter_ids) if item.strip()
        )
