"""Utility modules for the translation tools."""
from .config import Config, TranslationConfig, read_api_key
from .logger import get_logger, setup_logging, set_level
from .exceptions import (
    TranslatorToolError,
    ConfigurationError,
    TranslationError,
    WriteError,
)

__all__ = [
    # Config
    'Config',
    'TranslationConfig',
    'read_api_key',
    # Logger
    'get_logger',
    'setup_logging',
    'set_level',
    # Exceptions
    'TranslatorToolError',
    'ConfigurationError',
    'TranslationError',
    'WriteError',
]
