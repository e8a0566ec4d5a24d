"""
CLI Utilities

Environment loading and configuration assembly for the service manager.
"""

import os
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import dotenv_values

from fks_manager.constants import (
    DEFAULT_DNS_UPDATER,
    DEFAULT_LOG_DIR,
    DNS_TOKEN_ENV,
    DNS_UPDATER_ENV,
    DNS_ZONE_ENV,
    LOG_DIR_ENV,
)
from fks_manager.models.config import DNSSettings


def find_env_file() -> Optional[Path]:
    """Smart .env file detection"""
    search_paths = [
        Path.cwd() / ".env",
        Path.home() / ".fks" / ".env",
    ]

    for path in search_paths:
        if path.is_file():
            return path

    return None


def load_env(env_file: Optional[Path] = None) -> Dict[str, str]:
    """
    Merge an optional .env file under the process environment.

    Process environment wins over the file.
    """
    env_file = env_file or find_env_file()

    values: Dict[str, str] = {}
    if env_file:
        values.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
    values.update(os.environ)
    return values


def build_dns_settings(
    env: Mapping[str, str], updater_path: Optional[str] = None
) -> DNSSettings:
    """DNS settings from env, with an optional explicit updater path."""
    updater = updater_path or env.get(DNS_UPDATER_ENV)
    return DNSSettings(
        api_token=env.get(DNS_TOKEN_ENV) or None,
        zone_id=env.get(DNS_ZONE_ENV) or None,
        updater_path=Path(updater).expanduser() if updater else Path.cwd() / DEFAULT_DNS_UPDATER,
    )


def resolve_log_dir(env: Mapping[str, str]) -> Path:
    """Log directory from env or the default."""
    configured = env.get(LOG_DIR_ENV)
    if configured:
        return Path(configured).expanduser()
    return DEFAULT_LOG_DIR
