from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

CONFIG_PATH_ENV = "MOVIE_BROWSER_CONFIG"

DEFAULT_BASE_URL = "https://api.themoviedb.org/3"
DEFAULT_IMAGE_BASE_URL = "https://image.tmdb.org/t/p"


class Settings(BaseModel):
    """Application configuration resolved from env vars and optional TOML files."""

    tmdb_api_key: str | None = Field(default=None, alias="TMDB_API_KEY")
    tmdb_base_url: str = Field(default=DEFAULT_BASE_URL, alias="TMDB_BASE_URL")
    image_base_url: str = Field(default=DEFAULT_IMAGE_BASE_URL, alias="TMDB_IMAGE_BASE_URL")
    watch_region: str = Field(default="US", alias="TMDB_WATCH_REGION")
    request_timeout: float | None = Field(default=None, alias="TMDB_REQUEST_TIMEOUT")

    poster_size: str = Field(default="w500")
    logo_size: str = Field(default="w200")

    model_config = {
        "populate_by_name": True,
        "str_strip_whitespace": True,
        "extra": "ignore",
    }

    @property
    def api_key(self) -> str:
        # An unset key is sent as-is; the catalog rejects it with a 401.
        return self.tmdb_api_key or ""


class SettingsError(RuntimeError):
    """Raised when configuration cannot be resolved."""


@dataclass(frozen=True)
class SettingsLoadResult:
    settings: Settings
    source_path: Path | None


def load_settings(config_path: Path | None = None, *, load_env: bool = True) -> SettingsLoadResult:
    """Load settings from .env files, environment variables, and optional TOML configuration."""

    if load_env:
        load_dotenv()

    resolved_path = _determine_config_path(config_path)
    config_data: dict[str, Any] = {}

    if resolved_path and resolved_path.exists():
        try:
            with resolved_path.open("rb") as handle:
                toml_payload = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise SettingsError(f"Invalid TOML in {resolved_path}: {exc}") from exc
        config_data = _flatten_toml(toml_payload)

    try:
        env_data = _collect_env_overrides()
    except ValueError as exc:
        raise SettingsError(f"Invalid environment value: {exc}") from exc
    merged = {**config_data, **env_data}

    try:
        settings = Settings.model_validate(merged)
    except ValidationError as exc:
        raise SettingsError(str(exc)) from exc

    return SettingsLoadResult(settings=settings, source_path=resolved_path)


def _determine_config_path(config_path: Path | None) -> Path | None:
    if config_path:
        return config_path

    env_override = os.getenv(CONFIG_PATH_ENV)
    if env_override:
        return Path(env_override).expanduser().resolve()

    default_path = Path.home() / ".config" / "movie-browser" / "config.toml"
    return default_path if default_path.exists() else None


def _flatten_toml(payload: dict[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = {}

    tmdb_cfg = payload.get("tmdb", {})
    if "api_key" in tmdb_cfg:
        result["tmdb_api_key"] = tmdb_cfg.get("api_key")
    if "base_url" in tmdb_cfg:
        result["tmdb_base_url"] = tmdb_cfg.get("base_url")
    if "image_base_url" in tmdb_cfg:
        result["image_base_url"] = tmdb_cfg.get("image_base_url")
    if "region" in tmdb_cfg:
        result["watch_region"] = tmdb_cfg.get("region")
    if "timeout" in tmdb_cfg:
        result["request_timeout"] = tmdb_cfg.get("timeout")

    display_cfg = payload.get("display", {})
    if "poster_size" in display_cfg:
        result["poster_size"] = display_cfg.get("poster_size")
    if "logo_size" in display_cfg:
        result["logo_size"] = display_cfg.get("logo_size")

    return result


def _collect_env_overrides() -> dict[str, Any]:
    mapping: dict[str, str] = {
        "TMDB_API_KEY": "tmdb_api_key",
        "TMDB_BASE_URL": "tmdb_base_url",
        "TMDB_IMAGE_BASE_URL": "image_base_url",
        "TMDB_WATCH_REGION": "watch_region",
        "TMDB_REQUEST_TIMEOUT": "request_timeout",
    }

    result: dict[str, Any] = {}
    for env_name, field in mapping.items():
        if env_name not in os.environ:
            continue
        value = os.environ[env_name]
        if field == "request_timeout":
            result[field] = float(value) if value.strip() else None
        else:
            result[field] = value
    return result


__all__ = ["Settings", "SettingsError", "SettingsLoadResult", "load_settings"]
