"""
Pipeline orchestrator: scan -> translate -> write -> report.

Jobs run one at a time, language by language, in scan order. A failing
file is recorded and the run moves on; only configuration problems stop
a run, and they always surface before the first job.

Usage:
    from mdtranslate.pipeline import TranslationPipeline

    pipeline = TranslationPipeline(run_config, translator)
    summary = pipeline.run()
    sys.exit(summary.exit_code)
"""
from __future__ import annotations

import time
from enum import Enum
from pathlib import Path
from typing import Callable, List

from .languages import get_language
from .models import (
    JobStatus,
    RunConfiguration,
    RunSummary,
    TranslationJob,
    TranslationResult,
)
from .scanner import scan_markdown_files
from .translators.base import BaseTranslator
from .utils.exceptions import ConfigurationError, TranslationError, WriteError
from .utils.logger import get_logger
from .writer import output_path_for, write_translation

logger = get_logger(__name__)

RULE = "=" * 60


class PipelineState(str, Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    TRANSLATING = "translating"
    REPORTING = "reporting"
    DONE = "done"


class TranslationPipeline:
    """Runs every (file, language) job of one invocation."""

    def __init__(
        self,
        run_config: RunConfiguration,
        translator: BaseTranslator,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.run_config = run_config
        self.translator = translator
        self.sleep = sleep
        self.state = PipelineState.IDLE

    # -------------------------------------------------------------------------
    # Stages
    # -------------------------------------------------------------------------

    def scan(self) -> List[Path]:
        cfg = self.run_config
        for code in cfg.target_languages:
            language = get_language(code)
            if not self.translator.supports(language):
                raise ConfigurationError(
                    f"Engine '{self.translator.name}' cannot translate to {language.name} ({code})",
                    config_key="lang",
                )
        return list(scan_markdown_files(cfg.root, section=cfg.section, specific_file=cfg.specific_file))

    def build_jobs(self, sources: List[Path]) -> List[TranslationJob]:
        root = Path(self.run_config.root)
        jobs = []
        for language in self.run_config.target_languages:
            for source in sources:
                relative = source.relative_to(root)
                jobs.append(TranslationJob(
                    source_path=source,
                    relative_path=relative,
                    target_language=language,
                    output_path=output_path_for(relative, language, root),
                ))
        return jobs

    def process(self, job: TranslationJob) -> TranslationResult:
        """Translate and write one job. Never raises for per-file problems."""
        if self.run_config.skip_existing and job.output_path.exists():
            logger.info(f"  Skipping (exists): {job.output_path}")
            return TranslationResult(job, JobStatus.SKIPPED, "already translated")

        try:
            with open(job.source_path, 'r', encoding='utf-8', newline='') as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"  Read failed: {job.source_path}: {e}")
            return TranslationResult(job, JobStatus.FAILED, f"Read error: {e}")

        if not content.strip():
            logger.info(f"  Skipping (empty): {job.source_path}")
            return TranslationResult(job, JobStatus.SKIPPED, "empty source")

        try:
            translated = self.translator.translate_markdown(
                content, job.target_language, source_file=str(job.source_path)
            )
            write_translation(job.output_path, translated)
        except (TranslationError, WriteError) as e:
            logger.error(f"  Failed: {job.relative_path} [{job.target_language}] - {e.message}")
            logger.debug(f"  {e}")
            return TranslationResult(job, JobStatus.FAILED, str(e))

        logger.info(f"  Saved: {job.output_path}")
        return TranslationResult(job, JobStatus.SUCCESS)

    def run(self) -> RunSummary:
        """
        Execute the whole run and print the summary.

        Raises:
            ConfigurationError: before any job runs
        """
        summary = RunSummary()
        try:
            self.state = PipelineState.SCANNING
            sources = self.scan()
            jobs = self.build_jobs(sources)
            logger.info(
                f"Found {len(sources)} markdown file(s), "
                f"target: {', '.join(self.run_config.target_languages)}, engine: {self.translator.name}"
            )

            self.state = PipelineState.TRANSLATING
            self._translate_all(jobs, summary)

            self.state = PipelineState.REPORTING
            print(format_summary(summary, verbose=self.run_config.verbose))
        finally:
            self.state = PipelineState.DONE
        return summary

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _translate_all(self, jobs: List[TranslationJob], summary: RunSummary) -> None:
        delay = self.run_config.request_delay
        batch_size = max(1, self.run_config.batch_size)
        current_language = None
        batch_count = 0

        for i, job in enumerate(jobs, 1):
            if job.target_language != current_language:
                current_language = job.target_language
                batch_count = 0
                logger.info(f"Translating to {get_language(current_language).name} ({current_language})")

            logger.info(f"[{i}/{len(jobs)}] {job.relative_path}")
            result = self.process(job)
            summary.record(result)

            if result.status is not JobStatus.SUCCESS or delay <= 0 or i == len(jobs):
                continue
            batch_count += 1
            if batch_count >= batch_size:
                logger.debug(f"  Batch pause ({delay * 2}s)")
                self.sleep(delay * 2)
                batch_count = 0
            else:
                self.sleep(delay)


def format_summary(summary: RunSummary, verbose: bool = False) -> str:
    """Human-readable run report."""
    lines = ["", RULE, "📊 Summary", RULE]

    for language, counts in summary.by_language.items():
        lines.append(
            f"  {get_language(language).name} ({language}): "
            f"✅ {counts.success} succeeded, ❌ {counts.failed} failed, ⏭️  {counts.skipped} skipped"
        )
    if not summary.results:
        lines.append("  No files to translate")

    lines.append(
        f"  Total: {len(summary.results)} job(s), "
        f"{len(summary.succeeded)} succeeded, {len(summary.failed)} failed, {len(summary.skipped)} skipped"
    )

    if summary.failed:
        lines.append("")
        lines.append("Failed:")
        for result in summary.failed:
            job = result.job
            entry = f"  ❌ [{job.target_language}] {job.relative_path.as_posix()}"
            if verbose and result.error_message:
                entry += f"\n       {result.error_message}"
            lines.append(entry)

    lines.append(RULE)
    return "\n".join(lines)
