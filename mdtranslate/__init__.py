"""
Markdown documentation translation tools.

Structure:
    mdtranslate/
    ├── translators/    - Engines (Google, Claude, OpenAI, Gemini, DeepL)
    ├── utils/          - Config, logging, exceptions
    ├── markdown.py     - Code/front matter protection
    ├── scanner.py      - Finds source lessons
    ├── writer.py       - Mirrored output paths
    ├── pipeline.py     - Scan -> translate -> write -> report
    ├── debug.py        - Environment checklist
    ├── maintenance.py  - Clean and QA commands
    └── cli.py          - Command line entry point

Quick Usage:
    from mdtranslate.translators import get_translator
    from mdtranslate.utils import Config

    engine = get_translator("google", Config.load())
    km = engine.translate_markdown(open("docs/css/intro.md").read(), "km")

CLI:
    python -m mdtranslate translate --lang km,zh,ja
    python -m mdtranslate translate-css --lang km --file docs/css/basics/01-introduction.md
    python -m mdtranslate debug --verbose
"""

__version__ = "1.0.0"
