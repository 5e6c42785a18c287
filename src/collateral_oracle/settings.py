"""Settings module with unified configuration precedence: CLI > ENV > CONFIG FILE."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from .constants import DEFAULT_QUERY_TIMEOUT

load_dotenv()

CONFIG_ENV_VAR = "COLLATERAL_ORACLE_CONFIG"
LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class TomlConfigSource(PydanticBaseSettingsSource):
    """Lowest-precedence source reading a TOML file (top-level or ``[collateral_oracle]``)."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None):
        super().__init__(settings_cls)
        self._path = path

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return None, "", False

    def __call__(self) -> dict[str, Any]:
        if not self._path:
            local_config = Path("collateral-oracle.toml")
            user_config = Path.home() / ".config" / "collateral-oracle" / "config.toml"
            if local_config.exists():
                self._path = local_config
            elif user_config.exists():
                self._path = user_config
            else:
                return {}

        if not self._path.exists():
            return {}

        with self._path.open("rb") as f:
            data = tomllib.load(f)
        body = data.get("collateral_oracle", data)
        if not isinstance(body, dict):
            return {}
        return body


class OracleSettings(BaseSettings):
    """Runtime settings. Values may come from:
    - CLI (init kwargs)
    - ENV / .env (prefixed with COLLATERAL_ORACLE_)
    - Config file (TOML), lowest precedence

    Do not read os.environ or files elsewhere in the codebase.
    """

    # --- persistence ---
    state_path: Path | None = None  # None keeps state in memory

    # --- upstream queries ---
    lcd_endpoint: str | None = None
    query_timeout: float = Field(
        default=DEFAULT_QUERY_TIMEOUT,
        gt=0,
        description="Per-request timeout (seconds) for upstream smart queries.",
    )

    # --- logging ---
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="COLLATERAL_ORACLE_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        level = str(v).upper()
        if level not in LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(sorted(LOG_LEVELS))}, got {v!r}"
            )
        return level

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Custom config-file source with explicit precedence: CLI > ENV > FILE."""
        env_cfg = os.environ.get(CONFIG_ENV_VAR)
        cfg_path = Path(env_cfg) if env_cfg else None

        return (
            init_settings,  # CLI (highest)
            env_settings,  # ENV
            dotenv_settings,  # .env
            TomlConfigSource(settings_cls, cfg_path),  # CONFIG (lowest)
        )

    def as_safe_dict(self) -> dict[str, Any]:
        """Return the settings as a JSON-serializable dict."""
        return self.model_dump(mode="json")

    @property
    def lcd_endpoint_required(self) -> str:
        """Get lcd_endpoint, raising ValueError if not set."""
        if self.lcd_endpoint is None:
            raise ValueError("lcd_endpoint must be configured")
        return self.lcd_endpoint
