from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
import yaml


logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://astrasync.ai/api"
DEFAULT_DEVELOPER_EMAIL = "developer@example.com"
DEFAULT_CONFIG_PATH = "config.yaml"


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    developer_email: str = DEFAULT_DEVELOPER_EMAIL
    demo_mode: bool = False


def _load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    path = Path(
        config_path or os.getenv("ACP_BRIDGE_CONFIG") or DEFAULT_CONFIG_PATH
    )
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise RuntimeError(f"{path} must be a flat dictionary")
    return data


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


def load_settings(config_path: str | Path | None = None) -> Settings:
    load_dotenv()
    config = _load_config(config_path)
    demo_mode = os.getenv("DEMO_MODE")
    if demo_mode is None:
        demo_mode = config.get("demo_mode", False)
    return Settings(
        api_url=(
            os.getenv("ASTRASYNC_API_URL")
            or config.get("api_url")
            or DEFAULT_API_URL
        ),
        developer_email=(
            os.getenv("DEVELOPER_EMAIL")
            or config.get("developer_email")
            or DEFAULT_DEVELOPER_EMAIL
        ),
        demo_mode=_as_bool(demo_mode),
    )


class ConfigResolver:
    """Read-only view over resolved settings.

    Settings are loaded lazily on first access when none are supplied.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = load_settings()
        return self._settings

    def get_api_url(self) -> str:
        return self.settings.api_url

    def get_developer_email(self) -> str:
        return self.settings.developer_email

    def is_demo_mode(self) -> bool:
        return self.settings.demo_mode


def validate_config(resolver: ConfigResolver | None = None) -> Settings:
    resolver = resolver or ConfigResolver()
    email = resolver.get_developer_email()
    if not email or email == DEFAULT_DEVELOPER_EMAIL:
        logger.warning(
            "Using default email. Set DEVELOPER_EMAIL environment variable."
        )
    return Settings(
        api_url=resolver.get_api_url(),
        developer_email=email,
        demo_mode=resolver.is_demo_mode(),
    )
