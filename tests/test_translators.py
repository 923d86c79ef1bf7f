"""
Tests for translation engines (no network; providers are faked).

Run with: pytest tests/test_translators.py -v
"""
from types import SimpleNamespace

import pytest

from conftest import LESSON, FakeTranslator

from mdtranslate.markdown import code_blocks
from mdtranslate.translators import get_translator
from mdtranslate.translators.base import PING_TEXT
from mdtranslate.utils.exceptions import ConfigurationError, TranslationError


class FlakyTranslator(FakeTranslator):
    """Fails a fixed number of times before succeeding."""

    def __init__(self, config, failures):
        super().__init__(config)
        self.failures = failures

    def translate_text(self, text, language):
        self.calls.append((text, language.code))
        if self.failures:
            self.failures -= 1
            raise ConnectionError("temporary")
        return text.upper()

    def is_transient(self, error):
        return isinstance(error, ConnectionError)


class TestBaseTranslator:
    """Tests for translate_markdown behaviour shared by all engines."""

    def test_one_request_per_document(self, fake_translator):
        """The whole masked document goes out in a single call."""
        fake_translator.translate_markdown(LESSON, "km")
        assert len(fake_translator.calls) == 1
        sent, lang = fake_translator.calls[0]
        assert lang == "km"
        assert "color: red" not in sent

    def test_code_blocks_preserved(self, fake_translator):
        """Code comes back byte-identical while prose is translated."""
        result = fake_translator.translate_markdown(LESSON, "zh")
        assert code_blocks(result) == code_blocks(LESSON)
        assert "DONE." in result
        assert result.endswith("\n")

    def test_no_prose_no_request(self, fake_translator):
        content = "```bash\nnpm install\n```\n"
        assert fake_translator.translate_markdown(content, "ja") == content
        assert fake_translator.calls == []

    def test_provider_error_becomes_translation_error(self, config):
        """Failures carry file and language."""
        engine = FakeTranslator(config, fail_marker="CSS")
        with pytest.raises(TranslationError) as exc:
            engine.translate_markdown(LESSON, "km", source_file="docs/css/colors.md")
        assert exc.value.source_file == "docs/css/colors.md"
        assert exc.value.language == "km"
        assert exc.value.api == "fake"

    def test_lost_placeholder(self, config):
        """A provider that drops a placeholder fails the document."""
        class Lossy(FakeTranslator):
            def translate_text(self, text, language):
                return "nothing left"

        with pytest.raises(TranslationError) as exc:
            Lossy(config).translate_markdown(LESSON, "km")
        assert "preserve" in exc.value.message

    def test_empty_response(self, config):
        class Silent(FakeTranslator):
            def translate_text(self, text, language):
                return ""

        with pytest.raises(TranslationError):
            Silent(config).translate_markdown(LESSON, "km")

    def test_retries_transient_errors(self, config):
        """Transient failures are retried up to max_retries."""
        config.translation.max_retries = 2
        engine = FlakyTranslator(config, failures=2)
        engine.translate_markdown("# Hi\n", "km")
        assert len(engine.calls) == 3

    def test_gives_up_after_retries(self, config):
        config.translation.max_retries = 1
        engine = FlakyTranslator(config, failures=5)
        with pytest.raises(TranslationError):
            engine.translate_markdown("# Hi\n", "km")
        assert len(engine.calls) == 2

    def test_unknown_language(self, fake_translator):
        with pytest.raises(ConfigurationError):
            fake_translator.translate_markdown("# Hi\n", "fr")

    def test_ping(self, fake_translator):
        assert fake_translator.ping("ja") == PING_TEXT.upper()


class TestRegistry:
    """Tests for get_translator."""

    def test_unknown_engine(self, config):
        with pytest.raises(ConfigurationError) as exc:
            get_translator("babelfish", config)
        assert exc.value.config_key == "engine"

    @pytest.mark.parametrize("engine", ["claude", "openai", "gemini", "deepl"])
    def test_missing_key(self, config, engine):
        """Key-based engines refuse to start without a credential."""
        with pytest.raises(ConfigurationError) as exc:
            get_translator(engine, config)
        assert "API key" in exc.value.message

    def test_google_needs_no_key(self, config):
        assert get_translator("google", config).name == "google"


class TestGoogleEngine:
    """Tests for the Google engine with a fake deep-translator client."""

    @pytest.fixture
    def fake_google(self, monkeypatch):
        calls = []

        class FakeGoogle:
            def __init__(self, source, target):
                self.target = target

            def translate(self, text):
                calls.append((self.target, text))
                return text.upper()

        monkeypatch.setattr("mdtranslate.translators.google_translate.GoogleTranslator", FakeGoogle)
        return calls

    def test_language_code_mapping(self, config, fake_google):
        """Chinese is requested as zh-CN."""
        get_translator("google", config).translate_markdown("# Hello\n", "zh")
        assert fake_google == [("zh-CN", "# Hello")]

    def test_long_document_chunked(self, config, fake_google, monkeypatch):
        """Documents above the endpoint limit are cut at paragraphs."""
        monkeypatch.setattr("mdtranslate.translators.google_translate.MAX_CHARS", 40)
        content = "\n\n".join(f"Paragraph number {i} here." for i in range(6)) + "\n"
        result = get_translator("google", config).translate_markdown(content, "km")
        assert len(fake_google) > 1
        assert result == content.upper()


class TestClaudeEngine:
    """Tests for the Claude engine with a fake client."""

    def test_request_shape(self, config):
        from mdtranslate.translators.claude import ClaudeEngine

        config.api_keys["claude"] = "test-key"
        engine = ClaudeEngine(config)
        captured = {}

        def create(**kwargs):
            captured.update(kwargs)
            text = kwargs["messages"][0]["content"].upper()
            return SimpleNamespace(content=[SimpleNamespace(type="text", text=text)])

        engine._client = SimpleNamespace(messages=SimpleNamespace(create=create))
        result = engine.translate_markdown(LESSON, "ja")

        assert captured["model"] == config.translation.claude_model
        assert "Japanese" in captured["system"]
        assert "__MDKEEP_" in captured["system"]
        assert code_blocks(result) == code_blocks(LESSON)


class TestDeepLEngine:
    """Tests for DeepL language support."""

    def test_no_khmer(self, config):
        from mdtranslate.languages import get_language
        from mdtranslate.translators.deepl import DeepLEngine

        config.api_keys["deepl"] = "test-key:fx"
        engine = DeepLEngine(config)
        assert not engine.supports(get_language("km"))
        assert engine.supports(get_language("ja"))
