from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

from pydantic_settings import BaseSettings, SettingsConfigDict

from projectreview.common.config import flatten_config, load_config


class Settings(BaseSettings):
    # Files service
    api_base_url: str = "http://localhost:3000/api"
    request_timeout: float = 30.0

    # Login
    users_file: str = "users.yaml"

    # Uploads
    max_upload_files: int = 10
    max_upload_size: int = 50 * 1024 * 1024  # 50MB

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"
    file_logging: bool = False
    console_logging: bool = True

    model_config = SettingsConfigDict(
        env_prefix="PROJECTREVIEW_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()


def load_settings(config_path: Optional[Union[str, Path]] = None) -> Settings:
    """Build settings, seeding them from a YAML file when one is given.

    Nested YAML sections are flattened, so ``api: {base_url: ...}``
    sets ``api_base_url``.
    """
    if config_path is None:
        return get_settings()
    return Settings(**flatten_config(load_config(config_path)))
