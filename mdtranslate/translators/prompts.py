"""
Prompt builders for the LLM engines (Claude, OpenAI, Gemini).
"""

from __future__ import annotations

from ..languages import Language


def build_system_prompt(language: Language, source_language: str = "en") -> str:
    """System prompt for translating one masked Markdown document."""
    return f"""You translate technical tutorials written in Markdown.
Translate from {source_language} into {language.name} ({language.native_name}).

Rules:
- Keep every token of the form __MDKEEP_<number>__ exactly as written, once each, in place.
- Keep Markdown syntax: headings (#), lists, tables, emphasis, link brackets.
- Keep programming terms, CSS properties, HTML element names and API names in English.
- Output only the translated document. No preface, no notes, no code fences around it."""
