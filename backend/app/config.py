"""Senyas backend configuration.

Settings are resolved from three sources, lowest precedence first:
  * model defaults
  * senyas.settings.yaml  (optional, path overridable via SENYAS_SETTINGS_FILE)
  * environment variables (a local .env file is loaded first)

Environment variables:
  PORT, HOST, APP_ENV / NODE_ENV, FRONTEND_URL,
  GEMINI_API_KEY, GEMINI_MODEL, PUBLIC_DIR, LOG_LEVEL
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

SETTINGS_FILE = Path("senyas.settings.yaml")

DEV_ORIGIN = "http://localhost:5173"


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        logger.debug("Settings file not found: %s", path)
        return {}
    with path.open(encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


# ---------------------------------------------------------------------------
# Settings models
# ---------------------------------------------------------------------------


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 5000
    environment: str = "development"

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"


class CorsSettings(BaseModel):
    frontend_url: Optional[str] = None
    dev_origin: str = DEV_ORIGIN


class GenerationSettings(BaseModel):
    """External generation API settings."""
    api_key: Optional[str] = None
    model: str = "gemini-2.0-flash"


class StorageSettings(BaseModel):
    """Public directory layout. Uploads land in ``<public_dir>/<uploads_subdir>``."""
    public_dir: str = "public"
    uploads_subdir: str = "uploads"

    @property
    def upload_dir(self) -> Path:
        return Path(self.public_dir) / self.uploads_subdir

    @property
    def url_prefix(self) -> str:
        return "/" + self.uploads_subdir.strip("/")


class LoggingSettings(BaseModel):
    level: str = "info"

    @field_validator("level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        return value.strip().lower()


class AppConfig(BaseModel):
    server:     ServerSettings     = Field(default_factory=ServerSettings)
    cors:       CorsSettings       = Field(default_factory=CorsSettings)
    generation: GenerationSettings = Field(default_factory=GenerationSettings)
    storage:    StorageSettings    = Field(default_factory=StorageSettings)
    logging:    LoggingSettings    = Field(default_factory=LoggingSettings)

    @property
    def allowed_origin(self) -> Optional[str]:
        """The single origin allowed by CORS for the current environment."""
        if self.server.is_production:
            return self.cors.frontend_url
        return self.cors.dev_origin


# ---------------------------------------------------------------------------
# Environment overrides
# ---------------------------------------------------------------------------

# env var -> (section, field)
_ENV_OVERRIDES = {
    "HOST":           ("server", "host"),
    "PORT":           ("server", "port"),
    "NODE_ENV":       ("server", "environment"),
    "APP_ENV":        ("server", "environment"),
    "FRONTEND_URL":   ("cors", "frontend_url"),
    "GEMINI_API_KEY": ("generation", "api_key"),
    "GEMINI_MODEL":   ("generation", "model"),
    "PUBLIC_DIR":     ("storage", "public_dir"),
    "LOG_LEVEL":      ("logging", "level"),
}


def _apply_env_overrides(data: Dict[str, Any], environ: Mapping[str, str]) -> Dict[str, Any]:
    # APP_ENV comes after NODE_ENV above, so it wins when both are set.
    for var, (section, field) in _ENV_OVERRIDES.items():
        value = environ.get(var)
        if value is None or value == "":
            continue
        section_data = data.get(section) or {}
        section_data[field] = value
        data[section] = section_data
    return data


# ---------------------------------------------------------------------------
# Public loader
# ---------------------------------------------------------------------------


def load_config(
    settings_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> AppConfig:
    """Build an *AppConfig* from the settings file and environment.

    Args:
        settings_path: YAML settings file. Defaults to ``SENYAS_SETTINGS_FILE``
            or ``senyas.settings.yaml`` in the working directory.
        environ: Environment mapping. Defaults to ``os.environ`` after loading
            a ``.env`` file if one exists.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    if settings_path is None:
        settings_path = Path(environ.get("SENYAS_SETTINGS_FILE", SETTINGS_FILE))

    data = _apply_env_overrides(_load_yaml(Path(settings_path)), environ)
    config = AppConfig(**data)
    logger.info(
        "Config loaded (server=%s:%s, env=%s, model=%s, public_dir=%s)",
        config.server.host,
        config.server.port,
        config.server.environment,
        config.generation.model,
        config.storage.public_dir,
    )
    return config


_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Return the process-wide config, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached config (for testing)."""
    global _config
    _config = None
