"""Application configuration via Pydantic Settings.

Process-level settings only (upstream connection, file paths, flags). Scoring
and decision tuning lives in the hot-reloadable engine config file at
ENGINE_CONFIG_PATH.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Upstream ticketing system
    ticketing_base_url: str = Field(
        default="https://example.freshservice.com/api/v2",
        validation_alias="TICKETING_BASE_URL",
    )
    ticketing_api_key: str = Field(default="", validation_alias="TICKETING_API_KEY")
    ticketing_timeout: float = Field(default=30.0, validation_alias="TICKETING_TIMEOUT")
    push_assignments: bool = Field(default=False, validation_alias="PUSH_ASSIGNMENTS")

    # Engine
    engine_config_path: str = Field(default="engine_config.json", validation_alias="ENGINE_CONFIG_PATH")
    sync_on_startup: bool = Field(default=True, validation_alias="SYNC_ON_STARTUP")

    # App
    debug: bool = Field(default=False, validation_alias="DEBUG")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
