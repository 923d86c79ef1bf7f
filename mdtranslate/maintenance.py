"""
Housekeeping for generated translations.

- clean: delete docs/<lang>/**.md and prune empty folders
- check: QA pass over translated files (missing, empty, unreadable, damaged code, leftover placeholders)
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from .languages import get_language
from .markdown import PLACEHOLDER_RE, code_blocks
from .scanner import resolve_root, scan_markdown_files
from .utils.logger import get_logger
from .writer import output_path_for

logger = get_logger(__name__)

PathLike = Union[str, Path]
RULE = "=" * 60


# =============================================================================
# CLEAN
# =============================================================================

def clean_translations(root: PathLike, languages: Sequence[str]) -> int:
    """
    Remove translated Markdown files for the given languages.

    Returns:
        Number of files removed
    """
    root_path = resolve_root(root)
    removed = 0

    for code in languages:
        get_language(code)
        lang_dir = root_path / code
        if not lang_dir.is_dir():
            logger.info(f"No {code} translations found in {lang_dir}")
            continue

        for path in sorted(lang_dir.rglob("*.md")):
            try:
                path.unlink()
            except OSError as e:
                logger.warning(f"  Failed to remove: {path} - {e}")
                continue
            logger.debug(f"  Removed: {path}")
            removed += 1

        # Deepest folders first
        for dirpath, _dirnames, _filenames in sorted(os.walk(lang_dir), key=lambda w: -len(w[0])):
            if not os.listdir(dirpath):
                os.rmdir(dirpath)
                logger.debug(f"  Removed empty dir: {dirpath}")

    return removed


# =============================================================================
# CHECK
# =============================================================================

@dataclass
class Issue:
    kind: str      # missing, empty, unreadable, code_blocks, placeholder
    path: Path
    detail: str = ""


@dataclass
class QAReport:
    checked: Dict[str, int] = field(default_factory=dict)
    issues: Dict[str, List[Issue]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not any(self.issues.values())


def _read(path: Path) -> str:
    with open(path, 'r', encoding='utf-8', newline='') as f:
        return f.read()


def _check_file(source: Path, output: Path) -> Optional[Issue]:
    try:
        original = _read(source)
    except (OSError, UnicodeDecodeError) as e:
        return Issue("unreadable", source, str(e))
    # Empty sources are skipped by the pipeline and have no translation
    if not original.strip():
        return None

    if not output.is_file():
        return Issue("missing", output)

    try:
        translated = _read(output)
    except (OSError, UnicodeDecodeError) as e:
        return Issue("unreadable", output, str(e))
    if not translated.strip():
        return Issue("empty", output)

    if PLACEHOLDER_RE.search(translated):
        return Issue("placeholder", output, "untranslated placeholder left in file")

    expected, actual = code_blocks(original), code_blocks(translated)
    if expected != actual:
        return Issue("code_blocks", output, f"code blocks changed ({len(expected)} in source, {len(actual)} in translation)")

    return None


def check_translations(
    root: PathLike,
    languages: Sequence[str],
    section: Optional[str] = None
) -> QAReport:
    """Compare every source file with its translations."""
    root_path = resolve_root(root)
    sources = list(scan_markdown_files(root_path, section=section))
    report = QAReport()

    for code in languages:
        get_language(code)
        issues: List[Issue] = []
        for source in sources:
            output = output_path_for(source.relative_to(root_path), code, root_path)
            issue = _check_file(source, output)
            if issue:
                issues.append(issue)
        report.checked[code] = len(sources)
        report.issues[code] = issues

    return report


def format_report(report: QAReport) -> str:
    lines = ["", RULE, "📋 Translation QA Report", RULE]
    for code, checked in report.checked.items():
        issues = report.issues.get(code, [])
        marker = "✅" if not issues else "❌"
        lines.append(f"{marker} {get_language(code).name} ({code}): {checked} file(s), {len(issues)} issue(s)")
        for issue in issues:
            entry = f"     [{issue.kind}] {issue.path}"
            if issue.detail:
                entry += f" - {issue.detail}"
            lines.append(entry)
    lines.append(RULE)
    return "\n".join(lines)
