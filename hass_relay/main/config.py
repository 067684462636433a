"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hass_relay.shared import EnumEnvironment, EnumLogLevel
from hass_relay.shared.consts import (
    DISCOVERY_PREFIX,
    RELAY_READY_SENTINEL,
    RELAY_SLOT_ENTITY_PREFIX,
    RELAY_SLOT_SIZE,
)
from hass_relay.shared.env import load_secret_file_variables


class HassSettings(BaseSettings):
    """Home Assistant connection settings."""

    url: str = Field(
        default="http://homeassistant.local:8123",
        description="Hub base URL",
        validation_alias=AliasChoices("HASS_URL", "HASS_SERVER_URL"),
    )
    token: str = Field(default="", description="Long-lived access token")
    request_timeout: float = Field(
        default=10.0, gt=0, description="Per-request timeout in seconds"
    )
    verify_ssl: bool = Field(default=True, description="Verify the hub certificate")

    model_config = SettingsConfigDict(
        env_prefix="HASS_", case_sensitive=False, extra="ignore"
    )


class RelaySettings(BaseSettings):
    """Relay slot settings. These must match the hub-side decoder."""

    slot_size: int = Field(
        default=RELAY_SLOT_SIZE,
        gt=0,
        description="Maximum characters per relay slot",
    )
    slot_entity_prefix: str = Field(
        default=RELAY_SLOT_ENTITY_PREFIX,
        description="Entity id prefix of the relay slot helpers",
    )
    ready_sentinel: str = Field(
        default=RELAY_READY_SENTINEL,
        description="Value written to the last slot once data is in place",
    )
    discovery_prefix: str = Field(
        default=DISCOVERY_PREFIX, description="MQTT discovery topic prefix"
    )

    model_config = SettingsConfigDict(
        env_prefix="RELAY_", case_sensitive=False, extra="ignore"
    )


class CreationSettings(BaseSettings):
    """Control creation settings."""

    settle_delay: float = Field(
        default=3.0, ge=0, description="Wait before the first existence check"
    )
    poll_interval: float = Field(
        default=0.5, gt=0, description="Interval between existence checks"
    )
    timeout: float = Field(
        default=10.0, gt=0, description="Time allowed for the entity to appear"
    )
    max_controls: int = Field(
        default=50, gt=0, description="Maximum controls held by the registry"
    )

    model_config = SettingsConfigDict(
        env_prefix="CREATION_", case_sensitive=False, extra="ignore"
    )


class DeviceSettings(BaseSettings):
    """Default device every control is grouped under."""

    unique_id: str = Field(default="", description="Device identifier")
    name: str = Field(default="", description="Device name")
    manufacturer: str = Field(default="", description="Manufacturer")
    model: str = Field(default="", description="Model")
    sw_version: str = Field(default="", description="Firmware version")

    model_config = SettingsConfigDict(
        env_prefix="DEVICE_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format",
    )
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    hass: HassSettings = Field(default_factory=HassSettings)
    relay: RelaySettings = Field(default_factory=RelaySettings)
    creation: CreationSettings = Field(default_factory=CreationSettings)
    device: DeviceSettings = Field(default_factory=DeviceSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Build the application settings.

    ``*_FILE`` secrets (e.g. ``HASS_TOKEN_FILE``) are resolved first so they
    are visible to the settings sources.
    """
    load_secret_file_variables()
    return AppSettings()
