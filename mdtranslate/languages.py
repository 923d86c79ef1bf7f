"""
Supported target languages.

Each language carries the code every engine expects, since providers
disagree (Google wants ``zh-CN``, DeepL wants ``ZH-HANS``).
"""
from dataclasses import dataclass
from typing import Dict, List

from .utils.exceptions import ConfigurationError


@dataclass(frozen=True)
class Language:
    code: str
    name: str
    native_name: str
    google_code: str
    deepl_code: str


LANGUAGES: Dict[str, Language] = {
    "km": Language("km", "Khmer", "ភាសាខ្មែរ", "km", ""),
    "zh": Language("zh", "Chinese", "中文", "zh-CN", "ZH-HANS"),
    "ja": Language("ja", "Japanese", "日本語", "ja", "JA"),
}

DEFAULT_LANGUAGE = "km"


def get_language(code: str) -> Language:
    """Look up a language by its directory code."""
    try:
        return LANGUAGES[code]
    except KeyError:
        raise ConfigurationError(
            f'Unsupported language "{code}". Supported: {", ".join(LANGUAGES)}',
            config_key="lang",
        )


def parse_language_list(value: str) -> List[str]:
    """
    Parse a ``--lang`` value such as ``km,zh``.

    Order is kept, duplicates dropped, every code validated.
    """
    codes: List[str] = []
    for part in value.split(','):
        code = part.strip()
        if not code:
            continue
        get_language(code)
        if code not in codes:
            codes.append(code)
    if not codes:
        raise ConfigurationError("No target language given", config_key="lang")
    return codes
