"""
Translation engines.

Usage:
    from mdtranslate.translators import get_translator

    engine = get_translator("google", config)
    translated = engine.translate_markdown(content, "km", source_file="docs/css/intro.md")

Engines:
    google   Free Google Translate endpoint (default, no key)
    claude   Best quality (Claude Sonnet 4)
    openai   Good balance (GPT-4o-mini)
    gemini   Cheapest LLM (Gemini Flash)
    deepl    500K free chars/month, no Khmer
"""
import importlib
from typing import Dict, Tuple

from ..utils.config import Config
from ..utils.exceptions import ConfigurationError
from .base import BaseTranslator, PING_TEXT

# engine -> (module, class, distribution that provides the SDK)
ENGINES: Dict[str, Tuple[str, str, str]] = {
    "google": (".google_translate", "GoogleTranslateEngine", "deep-translator"),
    "claude": (".claude", "ClaudeEngine", "anthropic"),
    "openai": (".openai_translator", "OpenAIEngine", "openai"),
    "gemini": (".gemini", "GeminiEngine", "google-genai"),
    "deepl": (".deepl", "DeepLEngine", "deepl"),
}

# Import names checked by the debug command
ENGINE_MODULES: Dict[str, str] = {
    "google": "deep_translator",
    "claude": "anthropic",
    "openai": "openai",
    "gemini": "google.genai",
    "deepl": "deepl",
}

DEFAULT_ENGINE = "google"


def get_translator(engine: str, config: Config) -> BaseTranslator:
    """
    Build the engine named ``engine``.

    Raises:
        ConfigurationError: unknown engine, SDK not installed, or no API key
    """
    if engine not in ENGINES:
        raise ConfigurationError(
            f"Unknown engine '{engine}'. Available: {', '.join(ENGINES)}",
            config_key="engine",
        )

    module_name, class_name, distribution = ENGINES[engine]
    try:
        module = importlib.import_module(module_name, __name__)
    except ImportError as e:
        raise ConfigurationError(
            f"Engine '{engine}' needs the {distribution} package. Run: pip install {distribution}",
            config_key="engine",
            cause=e,
        )
    return getattr(module, class_name)(config)


__all__ = [
    'BaseTranslator',
    'PING_TEXT',
    'ENGINES',
    'ENGINE_MODULES',
    'DEFAULT_ENGINE',
    'get_translator',
]
