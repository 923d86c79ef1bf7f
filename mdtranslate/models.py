"""
Run-scoped data types: jobs, results, run configuration and summary.

Nothing here is persisted; a run builds them, reports them and drops them.
"""
from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple


class JobStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class TranslationJob:
    """One (source file, target language) unit of work."""
    source_path: Path
    relative_path: Path
    target_language: str
    output_path: Path


@dataclass(frozen=True)
class TranslationResult:
    job: TranslationJob
    status: JobStatus
    error_message: Optional[str] = None


@dataclass(frozen=True)
class RunConfiguration:
    """Parsed once from the command line; fixed for the whole run."""
    target_languages: Tuple[str, ...]
    root: Path
    specific_file: Optional[Path] = None
    section: Optional[str] = None
    verbose: bool = False
    engine: str = "google"
    skip_existing: bool = False
    request_delay: float = 0.0
    batch_size: int = 5


@dataclass
class LanguageCounts:
    success: int = 0
    failed: int = 0
    skipped: int = 0


@dataclass
class RunSummary:
    results: List[TranslationResult] = field(default_factory=list)

    def record(self, result: TranslationResult) -> None:
        self.results.append(result)

    @property
    def by_language(self) -> Dict[str, LanguageCounts]:
        counts: Dict[str, LanguageCounts] = OrderedDict()
        for result in self.results:
            entry = counts.setdefault(result.job.target_language, LanguageCounts())
            if result.status is JobStatus.SUCCESS:
                entry.success += 1
            elif result.status is JobStatus.FAILED:
                entry.failed += 1
            else:
                entry.skipped += 1
        return counts

    @property
    def succeeded(self) -> List[TranslationResult]:
        return [r for r in self.results if r.status is JobStatus.SUCCESS]

    @property
    def failed(self) -> List[TranslationResult]:
        return [r for r in self.results if r.status is JobStatus.FAILED]

    @property
    def skipped(self) -> List[TranslationResult]:
        return [r for r in self.results if r.status is JobStatus.SKIPPED]

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0
