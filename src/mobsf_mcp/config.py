"""Application configuration via environment variables."""

import tempfile
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # MobSF backend
    url: str = "http://localhost:8000"
    api_key: str | None = None

    # None disables the client-side timeout; scans can run for minutes
    request_timeout: float | None = None

    # Diagnostic log
    log_file: Path = Path(tempfile.gettempdir()) / "mcp-mobsf.log"
    log_level: str = "info"
    log_json: bool = False

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "MOBSF_",
        "extra": "ignore",
    }

    @property
    def base_url(self) -> str:
        """Backend URL without a trailing slash."""
        return self.url.rstrip("/")
