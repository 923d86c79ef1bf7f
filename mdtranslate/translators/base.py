"""
Shared behaviour for all translation engines.

An engine only implements ``translate_text``: plain text in, plain text out.
``translate_markdown`` wraps it with placeholder protection, retries and
error conversion, so every engine honours the same contract:

- one provider request per document
- code blocks, front matter and comments come back byte-identical
- any failure is a TranslationError naming the file and language
"""
from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Optional

from ..languages import Language, get_language
from ..markdown import PlaceholderError, protect, restore, split_outer_whitespace
from ..utils.config import Config, API_KEY_ENV
from ..utils.exceptions import ConfigurationError, TranslationError
from ..utils.logger import get_logger

logger = get_logger(__name__)

PING_TEXT = "Hello World. This is a CSS tutorial about colors and styles."


class BaseTranslator(ABC):
    """Base class for translation engines."""

    name: str = "base"
    requires_key: bool = True

    def __init__(self, config: Config):
        self.config = config
        self.settings = config.translation
        self.api_key = config.api_key_for(self.name)
        if self.requires_key and not self.api_key:
            env_names = " or ".join(API_KEY_ENV.get(self.name, ()))
            raise ConfigurationError(
                f"No API key for engine '{self.name}'. Set {env_names} in the environment or .env file.",
                config_key=env_names,
            )
        self._client = None

    # -------------------------------------------------------------------------
    # Engine hooks
    # -------------------------------------------------------------------------

    @abstractmethod
    def translate_text(self, text: str, language: Language) -> str:
        """Send one request to the provider and return the translation."""

    def supports(self, language: Language) -> bool:
        return True

    def is_transient(self, error: Exception) -> bool:
        """Whether a failed request is worth repeating."""
        return True

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def translate_markdown(
        self,
        content: str,
        language_code: str,
        source_file: Optional[str] = None
    ) -> str:
        """
        Translate a Markdown document, keeping protected fragments intact.

        Raises:
            TranslationError: provider failure or placeholders lost
        """
        language = get_language(language_code)
        doc = protect(content)

        if not doc.has_prose:
            logger.debug(f"No prose to translate in {source_file or '<text>'}")
            return content

        leading, core, trailing = split_outer_whitespace(doc.masked)
        translated = self._request(core, language, source_file)

        try:
            return restore(leading + translated + trailing, doc.fragments)
        except PlaceholderError as e:
            raise TranslationError(
                "Provider did not preserve protected Markdown",
                source_file=source_file,
                language=language.code,
                api=self.name,
                cause=e,
            )

    def ping(self, language_code: str) -> str:
        """Translate a short probe sentence."""
        return self._request(PING_TEXT, get_language(language_code), None)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _request(self, text: str, language: Language, source_file: Optional[str]) -> str:
        attempts = max(0, int(self.settings.max_retries)) + 1
        attempt = 0

        while True:
            attempt += 1
            try:
                result = self.translate_text(text, language)
            except TranslationError:
                raise
            except Exception as e:
                if attempt < attempts and self.is_transient(e):
                    logger.warning(
                        f"{self.name}: request failed ({e}), retrying in "
                        f"{self.settings.retry_delay}s ({attempts - attempt} left)"
                    )
                    time.sleep(self.settings.retry_delay)
                    continue
                raise TranslationError(
                    f"{self.name} request failed: {e}",
                    source_file=source_file,
                    language=language.code,
                    api=self.name,
                    cause=e,
                )

            if not result or not result.strip():
                raise TranslationError(
                    f"{self.name} returned an empty translation",
                    source_file=source_file,
                    language=language.code,
                    api=self.name,
                )
            return result
