"""
Environment debug checker.

Read-only checklist that tells whether a translation run can work here:
runtime, dependencies, credentials, API reachability, folders, sources,
outputs, Markdown protection and the installed console script.

Usage:
    python -m mdtranslate debug --lang km,zh,ja --verbose
"""
from __future__ import annotations

import importlib.metadata
import importlib.util
import os
import platform
import sys
import traceback
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from .languages import get_language
from .markdown import code_blocks, protect, restore
from .scanner import scan_markdown_files
from .translators import ENGINE_MODULES, ENGINES, get_translator
from .utils.config import Config
from .utils.exceptions import TranslatorToolError
from .utils.logger import get_logger

logger = get_logger(__name__)

MIN_PYTHON = (3, 9)
CORE_MODULES = ("yaml", "dotenv")
CONSOLE_SCRIPT = "mdtranslate"
DISTRIBUTION = "mdtranslate"

SAMPLE_MARKDOWN = """---
title: Test
---

# Heading

This is a test paragraph with `inline code` and [links](https://example.com).

```css
.container {
  color: red;
  padding: 10px;
}
```

<!-- keep me -->

Another paragraph here.
"""


class CheckStatus(str, Enum):
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


MARKERS = {
    CheckStatus.PASS: "✅",
    CheckStatus.WARN: "⚠️ ",
    CheckStatus.FAIL: "❌",
}


@dataclass
class CheckResult:
    name: str
    status: CheckStatus
    details: List[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.status is not CheckStatus.FAIL


@dataclass
class DebugOptions:
    root: Path
    languages: Sequence[str]
    engine: str = "google"
    section: Optional[str] = "css"
    offline: bool = False
    verbose: bool = False


def _module_available(name: str) -> bool:
    try:
        return importlib.util.find_spec(name) is not None
    except ModuleNotFoundError:
        return False


# =============================================================================
# CHECKS
# =============================================================================

def check_runtime(options: DebugOptions, config: Config) -> CheckResult:
    version = platform.python_version()
    details = [
        f"Python {version}",
        f"Platform: {sys.platform}",
        f"Working directory: {os.getcwd()}",
    ]
    if sys.version_info[:2] < MIN_PYTHON:
        details.append(f"Python {MIN_PYTHON[0]}.{MIN_PYTHON[1]}+ required")
        return CheckResult("Runtime", CheckStatus.FAIL, details)
    return CheckResult("Runtime", CheckStatus.PASS, details)


def check_dependencies(options: DebugOptions, config: Config) -> CheckResult:
    status = CheckStatus.PASS
    details = []

    for module in CORE_MODULES:
        if _module_available(module):
            details.append(f"{module}")
        else:
            details.append(f"{module} missing")
            status = CheckStatus.FAIL

    for engine, module in ENGINE_MODULES.items():
        distribution = ENGINES[engine][2]
        if _module_available(module):
            details.append(f"{distribution} ({engine})")
        elif engine == options.engine:
            details.append(f"{distribution} missing - required by engine '{engine}'")
            status = CheckStatus.FAIL
        else:
            details.append(f"{distribution} not installed (engine '{engine}' unavailable)")
            if status is CheckStatus.PASS:
                status = CheckStatus.WARN

    return CheckResult("Dependencies", status, details)


def check_credentials(options: DebugOptions, config: Config) -> CheckResult:
    if options.engine not in ENGINES:
        return CheckResult("Credentials", CheckStatus.FAIL, [f"Unknown engine '{options.engine}'"])
    if options.engine == "google":
        return CheckResult("Credentials", CheckStatus.PASS, ["google: no API key required"])
    if config.api_key_for(options.engine):
        return CheckResult("Credentials", CheckStatus.PASS, [f"{options.engine}: API key found"])
    return CheckResult("Credentials", CheckStatus.FAIL, [f"{options.engine}: API key not set"])


def check_translation_api(options: DebugOptions, config: Config) -> CheckResult:
    if options.offline:
        return CheckResult("Translation API", CheckStatus.WARN, ["Skipped (--offline)"])

    translator = get_translator(options.engine, config)
    status = CheckStatus.PASS
    details = []

    for code in options.languages:
        language = get_language(code)
        if not translator.supports(language):
            details.append(f"{language.name} ({code}): not supported by {options.engine}")
            status = CheckStatus.FAIL
            continue
        try:
            translated = translator.ping(code)
        except TranslatorToolError as e:
            details.append(f"{language.name} ({code}): {e.message}")
            status = CheckStatus.FAIL
            continue
        details.append(f"{language.name} ({code}): \"{translated.strip()}\"")

    return CheckResult("Translation API", status, details)


def check_directories(options: DebugOptions, config: Config) -> CheckResult:
    root = Path(options.root)
    if not root.is_dir():
        return CheckResult("File Structure", CheckStatus.FAIL, [f"{root} not found"])

    details = [f"{root}"]
    status = CheckStatus.PASS
    if options.section:
        section_dir = root / options.section
        if section_dir.is_dir():
            details.append(f"{section_dir}")
        else:
            details.append(f"{section_dir} not found")
            status = CheckStatus.WARN
    return CheckResult("File Structure", status, details)


def check_source_files(options: DebugOptions, config: Config) -> CheckResult:
    root = Path(options.root)
    section = options.section
    if section and not (root / section).is_dir():
        section = None
    if not root.is_dir():
        return CheckResult("Source Files", CheckStatus.WARN, ["Skipped: content directory missing"])

    files = list(scan_markdown_files(root, section=section))
    where = root / section if section else root
    if not files:
        return CheckResult("Source Files", CheckStatus.WARN, [f"No markdown files in {where}"])

    details = [f"{len(files)} markdown file(s) in {where}"]
    for path in files[:10]:
        details.append(f"{path} ({path.stat().st_size} bytes)")
    if len(files) > 10:
        details.append(f"... and {len(files) - 10} more")
    return CheckResult("Source Files", CheckStatus.PASS, details)


def check_output_dirs(options: DebugOptions, config: Config) -> CheckResult:
    details = []
    for code in options.languages:
        out_dir = Path(options.root) / code
        if out_dir.is_dir():
            count = sum(1 for _ in out_dir.rglob("*.md"))
            details.append(f"{out_dir} ({count} translated files)")
        else:
            details.append(f"{out_dir} not created yet (created on first translation)")
    return CheckResult("Output Directories", CheckStatus.PASS, details)


def check_markdown_protection(options: DebugOptions, config: Config) -> CheckResult:
    doc = protect(SAMPLE_MARKDOWN)
    round_trip = restore(doc.masked.upper(), doc.fragments)

    leaked = "color: red" in doc.masked or "title: Test" in doc.masked
    same_code = code_blocks(round_trip) == code_blocks(SAMPLE_MARKDOWN)
    details = [
        f"{len(doc.fragments)} protected fragment(s)",
        f"{len(code_blocks(SAMPLE_MARKDOWN))} code block(s)",
    ]
    if leaked or not same_code:
        details.append("Code or front matter would reach the provider")
        return CheckResult("Markdown Protection", CheckStatus.FAIL, details)
    return CheckResult("Markdown Protection", CheckStatus.PASS, details)


def check_console_script(options: DebugOptions, config: Config) -> CheckResult:
    try:
        dist = importlib.metadata.distribution(DISTRIBUTION)
    except importlib.metadata.PackageNotFoundError:
        return CheckResult(
            "Console Scripts", CheckStatus.WARN,
            [f"{DISTRIBUTION} not installed; use python -m mdtranslate or pip install -e ."]
        )

    scripts = [ep.name for ep in dist.entry_points if ep.group == "console_scripts"]
    if CONSOLE_SCRIPT in scripts:
        return CheckResult("Console Scripts", CheckStatus.PASS, [f"{CONSOLE_SCRIPT} -> {DISTRIBUTION}"])
    return CheckResult("Console Scripts", CheckStatus.FAIL, [f"{CONSOLE_SCRIPT} not registered"])


CHECKS: List[Tuple[str, Callable[[DebugOptions, Config], CheckResult]]] = [
    ("Runtime", check_runtime),
    ("Dependencies", check_dependencies),
    ("Credentials", check_credentials),
    ("Translation API", check_translation_api),
    ("File Structure", check_directories),
    ("Source Files", check_source_files),
    ("Output Directories", check_output_dirs),
    ("Markdown Protection", check_markdown_protection),
    ("Console Scripts", check_console_script),
]


# =============================================================================
# RUNNER
# =============================================================================

def run_checks(options: DebugOptions, config: Config) -> List[CheckResult]:
    """Run every check; a check that raises is reported as failed."""
    results = []
    for name, check in CHECKS:
        try:
            result = check(options, config)
        except Exception as e:
            logger.debug(f"{name} check raised", exc_info=True)
            details = [str(e)]
            if options.verbose:
                details.append(traceback.format_exc().rstrip())
            result = CheckResult(name, CheckStatus.FAIL, details)
        results.append(result)
    return results


def format_checklist(results: List[CheckResult], verbose: bool = False) -> str:
    lines = ["", "=" * 60, "🧪 TRANSLATION DEBUG CHECKLIST", "=" * 60]
    for result in results:
        lines.append(f"{MARKERS[result.status]} {result.name}")
        shown = result.details if verbose or not result.passed else result.details[:1]
        for detail in shown:
            lines.append(f"     {detail}")

    failed = sum(1 for r in results if not r.passed)
    warned = sum(1 for r in results if r.status is CheckStatus.WARN)
    lines.append("=" * 60)
    lines.append(f"Results: {len(results) - failed} passed ({warned} with warnings), {failed} failed")
    lines.append("=" * 60)
    if failed:
        lines.append("⚠️  Some checks failed. Fix the issues above before translating.")
    else:
        lines.append("🎉 Translation setup is ready.")
    return "\n".join(lines)


def run_debug(options: DebugOptions, config: Config) -> int:
    """Print the checklist; 0 when nothing failed, 1 otherwise."""
    results = run_checks(options, config)
    print(format_checklist(results, verbose=options.verbose))
    return 0 if all(r.passed for r in results) else 1
