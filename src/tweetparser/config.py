# src/tweetparser/config.py
"""
Configuration for tweetparser, read from a TOML file and validated with Pydantic.

Only `[server].bind_address` is mandatory, and only for the HTTP service.
"""
from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

from tweetparser.errors import ConfigurationFailure
from tweetparser.extractors.tweet import TWEET_TEXT_SELECTOR, MediaFingerprint

log = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TWEETPARSER_CONFIG"
DEFAULT_CONFIG_PATH = Path("config.toml")


def split_bind_address(address: str) -> Tuple[str, int]:
    host, sep, port = address.strip().rpartition(":")
    if not sep or not host or not port.isdigit():
        raise ValueError(f"bind_address must look like host:port, got {address!r}")
    port_number = int(port)
    if not 0 < port_number < 65536:
        raise ValueError(f"port out of range in bind_address {address!r}")
    return host.strip("[]"), port_number


class ServerConfig(BaseModel):
    bind_address: str = Field(description="host:port the HTTP service listens on.")

    @field_validator("bind_address")
    @classmethod
    def check_bind_address(cls, v: str) -> str:
        split_bind_address(v)
        return v.strip()

    @property
    def host(self) -> str:
        return split_bind_address(self.bind_address)[0]

    @property
    def port(self) -> int:
        return split_bind_address(self.bind_address)[1]


class BrowserConfig(BaseModel):
    headless: bool = Field(default=True, description="Run Chromium without a window.")
    timeout_seconds: float = Field(default=30.0, gt=0, description="Navigation timeout in seconds.")
    wait_timeout_seconds: float = Field(
        default=30.0, gt=0, description="How long to wait for the post-text container."
    )


class ExtractionConfig(BaseModel):
    text_selector: str = Field(default=TWEET_TEXT_SELECTOR, min_length=1)
    media_selector: str = Field(default=MediaFingerprint.selector, min_length=1)
    profile_image_prefix: str = Field(default=MediaFingerprint.excluded_prefix, min_length=1)

    def fingerprint(self) -> MediaFingerprint:
        return MediaFingerprint(selector=self.media_selector, excluded_prefix=self.profile_image_prefix)


class Settings(BaseModel):
    server: Optional[ServerConfig] = None
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)

    def require_server(self) -> ServerConfig:
        if self.server is None:
            raise ConfigurationFailure("Missing [server] section with bind_address")
        return self.server


def resolve_config_path(path: str | Path | None = None) -> Path:
    if path:
        return Path(path)
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def load_settings(path: str | Path | None = None, *, required: bool = True) -> Settings:
    """
    Load settings from TOML. When `required` is False a missing file falls
    back to defaults; a present but broken file is always an error.
    """
    config_path = resolve_config_path(path)

    if not config_path.is_file():
        if required:
            raise ConfigurationFailure(f"Configuration file not found: {config_path}")
        log.debug("No configuration file at %s, using defaults", config_path)
        return Settings()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationFailure(f"Failed to read configuration file {config_path}: {e}") from e

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigurationFailure(f"Invalid configuration in {config_path}: {e}") from e

    log.info("Loaded configuration from %s", config_path)
    return settings
