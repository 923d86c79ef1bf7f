"""
Shared fixtures: a fake engine and a small docs tree.
"""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from mdtranslate.translators.base import BaseTranslator
from mdtranslate.utils.config import Config, API_KEY_ENV
from mdtranslate.utils.logger import setup_logging


class FakeTranslator(BaseTranslator):
    """Upper-cases text; fails on documents containing ``fail_marker``."""

    name = "fake"
    requires_key = False

    def __init__(self, config, fail_marker=None, unsupported=()):
        super().__init__(config)
        self.fail_marker = fail_marker
        self.unsupported = set(unsupported)
        self.calls = []

    def translate_text(self, text, language):
        self.calls.append((text, language.code))
        if self.fail_marker and self.fail_marker in text:
            raise RuntimeError("provider exploded")
        return text.upper()

    def supports(self, language):
        return language.code not in self.unsupported

    def is_transient(self, error):
        return False


LESSON = """---
title: Colors
---

# CSS Colors

Use the `color` property. See [MDN](https://developer.mozilla.org).

```css
.box {
  color: red;
}
```

Done.
"""


@pytest.fixture(autouse=True)
def quiet_logging():
    setup_logging(quiet=True)
    yield


@pytest.fixture(autouse=True)
def no_api_keys(monkeypatch):
    for names in API_KEY_ENV.values():
        for name in names:
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config():
    cfg = Config()
    cfg.translation.max_retries = 0
    cfg.translation.retry_delay = 0
    cfg.translation.request_delay = 0
    return cfg


@pytest.fixture
def fake_translator(config):
    return FakeTranslator(config)


@pytest.fixture
def docs_tree(tmp_path):
    """
    docs/
    ├── index.md
    ├── css/colors.md, css/notes.txt, css/basics/01-intro.md
    ├── js/intro.md
    ├── km/css/colors.md            (old translation)
    ├── .vitepress/dist/page.md     (build output)
    └── node_modules/pkg/readme.md
    """
    root = tmp_path / "docs"
    files = {
        "index.md": "# Welcome\n\nStart here.\n",
        "css/colors.md": LESSON,
        "css/notes.txt": "not markdown",
        "css/basics/01-intro.md": "# Intro\n\nCSS styles HTML.\n",
        "js/intro.md": "# JavaScript\n\n```js\nconsole.log('hi')\n```\n",
        "km/css/colors.md": "old translation\n",
        ".vitepress/dist/page.md": "# built\n",
        "node_modules/pkg/readme.md": "# dependency\n",
    }
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


def snapshot(root: Path) -> dict:
    """Map of relative path -> bytes for every file under root."""
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.rglob("*")) if p.is_file()
    }
