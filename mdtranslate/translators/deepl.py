"""
DeepL translation engine (API Free: 500K chars/month).

DeepL has no Khmer; requesting it is rejected before any file is touched.
"""
import deepl

from ..languages import Language
from .base import BaseTranslator


class DeepLEngine(BaseTranslator):
    name = "deepl"

    @property
    def client(self) -> deepl.Translator:
        if self._client is None:
            self._client = deepl.Translator(self.api_key)
        return self._client

    def supports(self, language: Language) -> bool:
        return bool(language.deepl_code)

    def is_transient(self, error: Exception) -> bool:
        return isinstance(error, (deepl.ConnectionException, deepl.TooManyRequestsException))

    def translate_text(self, text: str, language: Language) -> str:
        result = self.client.translate_text(
            text,
            source_lang=self.settings.source_language.upper(),
            target_lang=language.deepl_code,
            preserve_formatting=True
        )
        return result.text
