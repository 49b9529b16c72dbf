"""Configuration objects and helpers for the itinerary scheduler."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ITEM_STATUSES = ("idea", "pending", "booked", "dropped")


class Settings(BaseSettings):
    """Runtime configuration sourced from environment variables."""

    trip_store_base_url: HttpUrl = Field("http://localhost:3000", alias="TRIP_STORE_BASE_URL")
    trip_store_token: Optional[SecretStr] = Field(None, alias="TRIP_STORE_TOKEN")
    timeout_seconds: float = Field(15.0, alias="TRIP_STORE_TIMEOUT_SECONDS")
    retry_attempts: int = Field(3, alias="TRIP_STORE_RETRY_ATTEMPTS", ge=1)
    max_concurrent_imports: int = Field(5, alias="MAX_CONCURRENT_IMPORTS", ge=1)
    default_pace: int = Field(50, alias="DEFAULT_PACE", ge=0, le=100)
    import_status: str = Field("idea", alias="IMPORT_STATUS")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_prefix="TRIP_SCHEDULER_",
        env_file=(".env",),
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("import_status")
    @classmethod
    def check_import_status(cls, value: str) -> str:
        """Only statuses the trip item store accepts are allowed."""
        normalised = value.strip().lower()
        if normalised not in ITEM_STATUSES:
            raise ValueError(f"import_status must be one of {', '.join(ITEM_STATUSES)}")
        return normalised

    def trip_items_url(self, trip_id: str) -> str:
        """Construct the item collection URL for a trip."""
        return f"{str(self.trip_store_base_url).rstrip('/')}/api/trips/{trip_id}/items"


class ServiceInfo(BaseModel):
    """Metadata returned alongside a generated schedule."""

    generated_at: str = Field(alias="generatedAt")
    days: int
    pace: int
    pace_label: str = Field(alias="paceLabel")
    suggested_item_count: int = Field(alias="suggestedItemCount")

    model_config = ConfigDict(populate_by_name=True)
