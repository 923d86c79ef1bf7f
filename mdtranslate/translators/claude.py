"""
Claude translation engine.

Usage:
    from mdtranslate.translators.claude import ClaudeEngine
    engine = ClaudeEngine(Config.load())
    engine.translate_markdown(content, "ja")
"""
import anthropic

from ..languages import Language
from .base import BaseTranslator
from .prompts import build_system_prompt


class ClaudeEngine(BaseTranslator):
    name = "claude"

    @property
    def client(self) -> anthropic.Anthropic:
        if self._client is None:
            self._client = anthropic.Anthropic(api_key=self.api_key, timeout=self.settings.timeout)
        return self._client

    def is_transient(self, error: Exception) -> bool:
        return isinstance(error, (
            anthropic.APIConnectionError,
            anthropic.RateLimitError,
            anthropic.InternalServerError,
        ))

    def translate_text(self, text: str, language: Language) -> str:
        response = self.client.messages.create(
            model=self.settings.claude_model,
            max_tokens=self.settings.max_tokens,
            temperature=0.1,
            system=build_system_prompt(language, self.settings.source_language),
            messages=[{"role": "user", "content": text}]
        )
        return "".join(block.text for block in response.content if block.type == "text")
