"""
Google Gemini translation engine (default model gemini-2.0-flash, cheapest).
"""
from google import genai
from google.genai import types

from ..languages import Language
from .base import BaseTranslator
from .prompts import build_system_prompt


class GeminiEngine(BaseTranslator):
    name = "gemini"

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def translate_text(self, text: str, language: Language) -> str:
        response = self.client.models.generate_content(
            model=self.settings.gemini_model,
            contents=text,
            config=types.GenerateContentConfig(
                system_instruction=build_system_prompt(language, self.settings.source_language),
                max_output_tokens=self.settings.max_tokens,
                temperature=0.2
            )
        )
        return response.text
