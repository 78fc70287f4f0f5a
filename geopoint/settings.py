"""Settings loading for location providers and logging."""
from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Dict, Tuple

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

DEFAULT_SETTINGS_PATH = Path("config/settings.toml")


class LocationSettings(BaseSettings):
    """Which provider answers current-location lookups and how it is reached.

    Every field can be overridden with a ``GEOPOINT_LOCATION_<FIELD>``
    environment variable, which wins over values from the settings file.
    """

    model_config = SettingsConfigDict(env_prefix="GEOPOINT_LOCATION_", env_ignore_empty=True)

    provider: str = Field(default="ip", pattern=r"^(ip|static)$")
    endpoint: str = "https://ipapi.co/json/"
    timeout_seconds: float = Field(default=10.0, gt=0)
    user_agent: str = "geopoint/0.1"
    latitude: float = Field(default=0.0, ge=-90.0, le=90.0)
    longitude: float = Field(default=0.0, ge=-180.0, le=180.0)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        # File values arrive as init kwargs; the environment takes precedence.
        return env_settings, dotenv_settings, init_settings, file_secret_settings


class Settings(BaseModel):
    location: LocationSettings = Field(default_factory=LocationSettings)
    logging_config: Path = Path("config/logging.yaml")


def load_settings(path: Path = DEFAULT_SETTINGS_PATH) -> Settings:
    """Read the TOML configuration file, applying ``GEOPOINT_LOCATION_*`` environment overrides.

    A missing file yields the defaults. Invalid values raise ``pydantic.ValidationError``.
    """
    raw: Dict[str, Any] = {}
    if path.exists():
        with path.open("rb") as handle:
            raw = tomllib.load(handle)
    location = LocationSettings(**raw.pop("location", {}))
    return Settings.model_validate({**raw, "location": location})
