"""
Markdown segmentation and placeholder protection.

Translation providers only ever see prose. Everything that must survive
byte-for-byte is swapped for a numbered placeholder before the request and
put back afterwards:

- front matter (YAML block at the top of the file)
- fenced code blocks (``` and ~~~, any info string)
- HTML comments, <style> and <script> blocks
- inline code, raw HTML tags, link/image targets, bare URLs

Usage:
    from mdtranslate.markdown import protect, restore

    doc = protect(content)
    translated = restore(provider(doc.masked), doc.fragments)
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

PLACEHOLDER = "__MDKEEP_{}__"

# Providers sometimes add spaces or change case inside tokens
PLACEHOLDER_RE = re.compile(r'([ \t]*)__\s*MDKEEP[_\s]*(\d+)\s*__', re.IGNORECASE)

FRONTMATTER_RE = re.compile(r'\A---[ \t]*\r?\n(?:.*?\r?\n)?---[ \t]*(?:\r?\n|\Z)', re.DOTALL)
# Fences may sit inside blockquotes ("> ```") and list items ("- ```", "    ```")
FENCE_OPEN_RE = re.compile(
    r'^(?P<prefix>(?:[ \t]*(?:>[ \t]?|(?:[-*+]|\d{1,9}[.)])[ \t]+))*[ \t]*)'
    r'(?P<fence>`{3,}|~{3,})(?P<info>[^\r\n]*)'
)
FENCE_CLOSE_RE = re.compile(r'^(?P<prefix>(?:[ \t]*>[ \t]?)*[ \t]*)(?P<fence>`{3,}|~{3,})[ \t]*\r?\n?\Z')
BLOCK_OPENERS = (
    (re.compile(r'^\s*<!--'), '-->'),
    (re.compile(r'^\s*<style\b', re.IGNORECASE), '</style>'),
    (re.compile(r'^\s*<script\b', re.IGNORECASE), '</script>'),
)

INLINE_RE = re.compile(
    r'(?P<code>``[^\n]+?``|`[^`\n]+`)'
    r'|(?P<comment><!--.*?-->)'
    r'|(?P<target>(?<=\])\([^)\n]*\))'
    r'|(?P<tag></?[A-Za-z][^<>\n]*>)'
    r'|(?P<url>https?://[^\s)<>\]]+)',
    re.DOTALL,
)

LETTER_RE = re.compile(r'[^\W\d_]')


class PlaceholderError(ValueError):
    """Placeholders came back missing, duplicated or unknown."""

    def __init__(self, message: str, missing: Optional[List[int]] = None):
        super().__init__(message)
        self.missing = missing or []


@dataclass
class Segment:
    kind: str    # frontmatter, code, comment, html, text
    text: str

    @property
    def translatable(self) -> bool:
        return self.kind == "text"


@dataclass
class ProtectedDocument:
    masked: str
    fragments: List[str] = field(default_factory=list)

    @property
    def has_prose(self) -> bool:
        return has_translatable_text(self.masked)


# =============================================================================
# SEGMENTATION
# =============================================================================

def _open_fence(line: str) -> Optional[Tuple[str, str]]:
    """(container prefix, fence run) when the line opens a fenced block."""
    match = FENCE_OPEN_RE.match(line)
    if not match:
        return None
    fence = match.group("fence")
    # Backtick fences cannot carry backticks in their info string
    if fence[0] == "`" and "`" in match.group("info"):
        return None
    return match.group("prefix"), fence


def _indent(prefix: str) -> Tuple[int, int]:
    """Blockquote depth and column width of a container prefix."""
    return prefix.count(">"), len(prefix.expandtabs(4))


def _closes_fence(line: str, prefix: str, fence: str) -> bool:
    match = FENCE_CLOSE_RE.match(line)
    if not match:
        return False
    run = match.group("fence")
    if run[0] != fence[0] or len(run) < len(fence):
        return False
    if match.group("prefix") == prefix:
        return True
    depth, width = _indent(match.group("prefix"))
    open_depth, open_width = _indent(prefix)
    return depth == open_depth and width >= open_width


def split_segments(content: str) -> List[Segment]:
    """
    Split a document into protected blocks and prose.

    Joining the ``text`` of every segment gives back ``content`` exactly.
    An unclosed fence or block runs to the end of the document.
    """
    segments: List[Segment] = []
    rest = content

    match = FRONTMATTER_RE.match(content)
    if match:
        segments.append(Segment("frontmatter", match.group(0)))
        rest = content[match.end():]

    prose: List[str] = []
    block: List[str] = []
    kind = None
    fence_prefix, fence, closer = "", "", ""

    def flush_prose() -> None:
        if prose:
            segments.append(Segment("text", "".join(prose)))
            prose.clear()

    for line in rest.splitlines(keepends=True):
        if kind == "code":
            block.append(line)
            if _closes_fence(line, fence_prefix, fence):
                segments.append(Segment("code", "".join(block)))
                block, kind = [], None
            continue

        if kind is not None:
            block.append(line)
            if closer in line.lower():
                segments.append(Segment(kind, "".join(block)))
                block, kind = [], None
            continue

        opened = _open_fence(line)
        if opened:
            flush_prose()
            fence_prefix, fence = opened
            block, kind = [line], "code"
            continue

        for opener, end in BLOCK_OPENERS:
            start = opener.match(line)
            if start:
                flush_prose()
                kind = "comment" if end == '-->' else "html"
                closer = end
                block = [line]
                if end in line[start.end():].lower():
                    segments.append(Segment(kind, line))
                    block, kind = [], None
                break
        else:
            prose.append(line)

    if block:
        segments.append(Segment(kind or "text", "".join(block)))
    flush_prose()
    return segments


def code_blocks(content: str) -> List[str]:
    """Fenced code blocks of a document, fences included."""
    return [s.text for s in split_segments(content) if s.kind == "code"]


def has_translatable_text(text: str) -> bool:
    """True when something besides placeholders and punctuation is left."""
    return bool(LETTER_RE.search(PLACEHOLDER_RE.sub('', text)))


# =============================================================================
# PROTECT / RESTORE
# =============================================================================

def protect(content: str) -> ProtectedDocument:
    """Replace every protected fragment with a placeholder."""
    fragments: List[str] = []
    parts: List[str] = []

    def keep(fragment: str) -> str:
        fragments.append(fragment)
        return PLACEHOLDER.format(len(fragments) - 1)

    for segment in split_segments(content):
        if segment.translatable:
            parts.append(INLINE_RE.sub(lambda m: keep(m.group(0)), segment.text))
            continue
        # Line breaks stay outside the token so the provider sees the layout
        body = segment.text.rstrip('\r\n')
        parts.append(keep(body) + segment.text[len(body):])

    return ProtectedDocument("".join(parts), fragments)


def restore(translated: str, fragments: List[str]) -> str:
    """
    Put protected fragments back into translated text.

    Raises:
        PlaceholderError: a placeholder is missing, repeated or out of range
    """
    seen: Dict[int, int] = {}
    unknown: List[int] = []

    def put_back(match: re.Match) -> str:
        index = int(match.group(2))
        if index >= len(fragments):
            unknown.append(index)
            return match.group(0)
        seen[index] = seen.get(index, 0) + 1
        fragment = fragments[index]
        # "[text] (url)" would break the link
        if fragment.startswith('('):
            return fragment
        return match.group(1) + fragment

    result = PLACEHOLDER_RE.sub(put_back, translated)

    missing = [i for i in range(len(fragments)) if i not in seen]
    repeated = [i for i, count in seen.items() if count > 1]
    if missing or repeated or unknown:
        raise PlaceholderError(
            f"Placeholders not preserved (missing={missing}, repeated={repeated}, unknown={unknown})",
            missing=missing,
        )
    return result


# =============================================================================
# CHUNKING
# =============================================================================

def chunk_text(text: str, limit: int) -> List[str]:
    """
    Cut text into consecutive pieces of at most ``limit`` characters.

    Cuts prefer blank lines, then line breaks, then spaces. Placeholders
    contain no whitespace so they are never split.
    """
    chunks: List[str] = []
    while len(text) > limit:
        window = text[:limit]
        cut = limit
        for sep in ('\n\n', '\n', ' '):
            idx = window.rfind(sep)
            if idx > 0:
                cut = idx + len(sep)
                break
        chunks.append(text[:cut])
        text = text[cut:]
    if text:
        chunks.append(text)
    return chunks


def split_outer_whitespace(text: str):
    """Return (leading, core, trailing) whitespace split of text."""
    core = text.strip()
    if not core:
        return text, "", ""
    start = text.index(core)
    return text[:start], core, text[start + len(core):]
