"""
Configuration for the translation tools.

Supports:
- Environment variables
- .env file (auto-loaded from the working directory)
- YAML config file (optional, mdtranslate.yaml)

Usage:
    from mdtranslate.utils.config import Config

    config = Config.load()                 # defaults + mdtranslate.yaml if present
    config = Config.load("custom.yaml")
    key = config.api_key_for("claude")
"""
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional, Dict, Any

import yaml
from dotenv import load_dotenv

from .exceptions import ConfigurationError

# =============================================================================
# PATH CONSTANTS
# =============================================================================

DEFAULT_CONFIG_FILE: str = "mdtranslate.yaml"
DEFAULT_ROOT: str = "docs"

# Site generator folders that never hold source lessons
IGNORED_DIRS = ("node_modules", ".vitepress/cache", ".vitepress/dist")


# =============================================================================
# API KEYS
# =============================================================================

load_dotenv(Path.cwd() / ".env")

# Engine name -> environment variables checked in order
API_KEY_ENV: Dict[str, tuple] = {
    "claude": ("ANTHROPIC_API_KEY", "CLAUDE_API_KEY"),
    "openai": ("OPENAI_API_KEY",),
    "gemini": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    "deepl": ("DEEPL_API_KEY",),
}


def read_api_key(engine: str) -> str:
    """Return the first non-empty credential for an engine, or ''."""
    for name in API_KEY_ENV.get(engine, ()):
        value = os.environ.get(name, "").strip()
        if value:
            return value
    return ""


# =============================================================================
# CONFIG CLASSES
# =============================================================================

@dataclass
class TranslationConfig:
    """Translation settings."""
    engine: str = "google"
    root: str = DEFAULT_ROOT
    source_language: str = "en"
    request_delay: float = 1.0   # seconds after each translated file
    batch_size: int = 5          # doubled pause every N files
    max_retries: int = 2
    retry_delay: float = 2.0
    timeout: float = 120.0
    max_tokens: int = 16000
    claude_model: str = "claude-sonnet-4-20250514"
    openai_model: str = "gpt-4o-mini"
    gemini_model: str = "gemini-2.0-flash"


def _coerce(key: str, value: Any, kind: type) -> Any:
    """Convert a YAML value to the type of the setting's default."""
    invalid = (
        value is None
        or isinstance(value, (bool, dict, list))
        or (kind is int and isinstance(value, float) and not value.is_integer())
    )
    if not invalid:
        try:
            return kind(value)
        except (TypeError, ValueError):
            pass
    raise ConfigurationError(
        f"translation.{key} must be {kind.__name__}, got {value!r}",
        config_key=key,
    )


@dataclass
class Config:
    """Main configuration class."""

    translation: TranslationConfig = field(default_factory=TranslationConfig)
    api_keys: Dict[str, str] = field(default_factory=dict)

    def api_key_for(self, engine: str) -> str:
        return self.api_keys.get(engine, "")

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "Config":
        """
        Load configuration.

        Args:
            config_path: YAML file. If None, mdtranslate.yaml in the working
                directory is used when it exists.

        Raises:
            ConfigurationError: explicit file missing, or YAML malformed
        """
        config = cls()
        config.api_keys = {engine: read_api_key(engine) for engine in API_KEY_ENV}

        if config_path is None:
            path = Path.cwd() / DEFAULT_CONFIG_FILE
            if not path.exists():
                return config
        else:
            path = Path(config_path)
            if not path.exists():
                raise ConfigurationError(f"Config file not found: {path}", config_key="config")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}", config_key="config", cause=e)

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file must be a mapping: {path}", config_key="config")

        section = data.get('translation') or {}
        if not isinstance(section, dict):
            raise ConfigurationError(f"'translation' must be a mapping in {path}", config_key="translation")

        defaults = {f.name: getattr(config.translation, f.name) for f in fields(TranslationConfig)}
        for key, value in section.items():
            if key not in defaults:
                raise ConfigurationError(f"Unknown setting: translation.{key}", config_key=key)
            setattr(config.translation, key, _coerce(key, value, type(defaults[key])))

        return config

