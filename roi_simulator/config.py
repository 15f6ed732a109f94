from __future__ import annotations

from pydantic import ConfigDict, Field
from pydantic_settings import BaseSettings

DEFAULT_REPORT_TITLE = "Invoicing ROI Simulator - Report"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str = Field("sqlite:////tmp/roi_simulator.db", alias="DATABASE_URL")
    db_create_all: bool = Field(False, alias="DB_CREATE_ALL")
    db_pool_size: int = Field(10, alias="DB_POOL_SIZE")

    scenario_list_limit: int = Field(50, alias="SCENARIO_LIST_LIMIT")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        alias="CORS_ORIGINS",
        description="Origins allowed to call the API from a browser",
    )
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    report_title: str = Field(DEFAULT_REPORT_TITLE, alias="REPORT_TITLE")

    model_config = ConfigDict(
        extra="ignore",
        env_file=".env",
        case_sensitive=False,
        populate_by_name=True,
    )
