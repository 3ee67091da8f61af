"""Mini README: Runtime configuration for the banking transaction tracker.

Structure:
    * TrackerSettings - Pydantic settings model read from ``BANK_TRACKER_*``
      environment variables or a local ``.env`` file.
    * get_settings - cached accessor so validation happens once per process.

Usage:
    The web factory and the launcher read storage location, the customer
    lookup endpoint, and the per-transaction ceiling from here. Tests build
    ``TrackerSettings`` directly with explicit values instead.
"""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class TrackerSettings(BaseSettings):
    """Runtime configuration for the tracker service."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    log_level: str = Field("INFO", description="Root logging level name.")
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding the persisted ledger snapshot.",
    )
    storage_key: str = Field(
        "bankingTransactionData",
        description="Key (file stem) the ledger snapshot is stored under.",
        min_length=1,
    )
    customer_api_url: str = Field(
        "https://randomuser.me/api/",
        description="Endpoint returning a random customer profile document.",
    )
    customer_api_timeout: float = Field(
        10.0,
        description="Seconds to wait for the customer lookup before giving up.",
        gt=0,
    )
    max_transaction_amount: Optional[Decimal] = Field(
        Decimal("1000000"),
        description="Largest amount accepted for a single transaction. Unset to disable.",
    )
    interface_host: str = Field(
        "127.0.0.1",
        description="Network interface for the web service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the web service exposes.",
        ge=1,
        le=65535,
    )

    class Config:
        env_prefix = "BANK_TRACKER_"
        env_file = ".env"
        case_sensitive = False

    @validator("data_directory", pre=True)
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Expand user directories and create the data directory."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @validator("max_transaction_amount")
    def _positive_ceiling(cls, value: Optional[Decimal]) -> Optional[Decimal]:
        if value is not None and value <= 0:
            raise ValueError("max_transaction_amount must be positive when set")
        return value


@lru_cache()
def get_settings() -> TrackerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return TrackerSettings()
