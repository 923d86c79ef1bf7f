"""
OpenAI GPT translation engine (default model gpt-4o-mini).
"""
import openai
from openai import OpenAI

from ..languages import Language
from .base import BaseTranslator
from .prompts import build_system_prompt


class OpenAIEngine(BaseTranslator):
    name = "openai"

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI(api_key=self.api_key, timeout=self.settings.timeout)
        return self._client

    def is_transient(self, error: Exception) -> bool:
        return isinstance(error, (
            openai.APIConnectionError,
            openai.RateLimitError,
            openai.InternalServerError,
        ))

    def translate_text(self, text: str, language: Language) -> str:
        response = self.client.chat.completions.create(
            model=self.settings.openai_model,
            messages=[
                {"role": "system", "content": build_system_prompt(language, self.settings.source_language)},
                {"role": "user", "content": text}
            ],
            max_tokens=self.settings.max_tokens,
            temperature=0.2
        )
        return response.choices[0].message.content
