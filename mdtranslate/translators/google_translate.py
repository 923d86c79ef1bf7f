"""
Google Translate engine (free web endpoint, no API key).

The endpoint rejects payloads over 5000 characters, so long documents are
cut at paragraph boundaries. This is the only engine that may send more
than one request per document.
"""
from deep_translator import GoogleTranslator

from ..languages import Language
from ..markdown import chunk_text, has_translatable_text, split_outer_whitespace
from ..utils.logger import get_logger
from .base import BaseTranslator

logger = get_logger(__name__)

MAX_CHARS = 4800


class GoogleTranslateEngine(BaseTranslator):
    name = "google"
    requires_key = False

    def translate_text(self, text: str, language: Language) -> str:
        client = GoogleTranslator(source=self.settings.source_language, target=language.google_code)

        chunks = chunk_text(text, MAX_CHARS)
        if len(chunks) > 1:
            logger.debug(f"  Google: {len(text)} chars in {len(chunks)} chunks")

        translated = []
        for chunk in chunks:
            leading, core, trailing = split_outer_whitespace(chunk)
            if has_translatable_text(core):
                core = client.translate(core) or ""
            translated.append(leading + core + trailing)
        return "".join(translated)
