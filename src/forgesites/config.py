"""Configuration management for forgesites.

Reads and writes TOML config at ~/.config/forgesites/config.toml.
``FORGE_API_KEY`` in the environment takes precedence over the stored key.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

import tomli_w

from forgesites.api.client import BASE_URL, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "forgesites"
CONFIG_PATH = CONFIG_DIR / "config.toml"
API_KEY_ENV = "FORGE_API_KEY"


@dataclass
class ForgeConfig:
    api_key: str = ""
    base_url: str = BASE_URL
    timeout: float = DEFAULT_TIMEOUT


@dataclass
class ForgeSitesConfig:
    forge: ForgeConfig = field(default_factory=ForgeConfig)


def load_config() -> ForgeSitesConfig:
    """Load config from TOML file, returning defaults if missing or corrupt."""
    data: dict = {}
    if CONFIG_PATH.exists():
        try:
            with open(CONFIG_PATH, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            logger.warning("Ignoring unreadable config %s: %s", CONFIG_PATH, exc)
            data = {}

    forge_data = data.get("forge", {})
    if not isinstance(forge_data, dict):
        logger.warning("Ignoring non-table [forge] section in %s", CONFIG_PATH)
        forge_data = {}
    try:
        timeout = float(forge_data.get("timeout", DEFAULT_TIMEOUT))
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid timeout %r in %s", forge_data.get("timeout"), CONFIG_PATH)
        timeout = DEFAULT_TIMEOUT
    config = ForgeSitesConfig(
        forge=ForgeConfig(
            api_key=forge_data.get("api_key", ""),
            base_url=forge_data.get("base_url", BASE_URL),
            timeout=timeout,
        ),
    )
    env_key = os.environ.get(API_KEY_ENV)
    if env_key:
        config.forge.api_key = env_key
    return config


def save_config(config: ForgeSitesConfig) -> None:
    """Write config to TOML file."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    os.chmod(CONFIG_DIR, 0o700)

    data = {
        "forge": {
            "api_key": config.forge.api_key,
            "base_url": config.forge.base_url,
            "timeout": config.forge.timeout,
        },
    }

    with open(CONFIG_PATH, "wb") as f:
        tomli_w.dump(data, f)
    os.chmod(CONFIG_PATH, 0o600)


def has_api_key() -> bool:
    """Quick check if an API key is configured."""
    config = load_config()
    return bool(config.forge.api_key)
