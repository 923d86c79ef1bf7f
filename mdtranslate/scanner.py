"""
Content scanner: finds the Markdown lessons that need translating.

Translations live inside the source tree (docs/km/, docs/zh/, ...), so
those folders are always skipped, along with the site generator's build
and dependency folders.

Usage:
    from mdtranslate.scanner import scan_markdown_files

    for path in scan_markdown_files("docs", section="css"):
        ...
"""
import os
from pathlib import Path
from typing import Collection, Iterator, Optional, Union

from .languages import LANGUAGES
from .utils.config import IGNORED_DIRS
from .utils.exceptions import ConfigurationError
from .utils.logger import get_logger

logger = get_logger(__name__)

MARKDOWN_SUFFIX = ".md"

PathLike = Union[str, Path]


def is_excluded(relative_path: Path, languages: Collection[str] = LANGUAGES) -> bool:
    """True for paths inside a language output folder or an ignored folder."""
    parts = relative_path.parts
    if not parts:
        return False
    if parts[0] in languages:
        return True
    posix = f"/{relative_path.as_posix()}/"
    return any(f"/{d}/" in posix for d in IGNORED_DIRS)


def resolve_root(root: PathLike) -> Path:
    root_path = Path(root)
    if not root_path.is_dir():
        raise ConfigurationError(f"Content directory not found: {root_path}", config_key="root")
    return root_path


def resolve_specific_file(
    root: Path,
    specific_file: PathLike,
    languages: Collection[str] = LANGUAGES
) -> Path:
    """
    Locate ``--file`` relative to the working directory or to the root.

    Returns the file as ``root / relative`` so callers can map it.
    """
    given = Path(specific_file)
    candidates = [given] if given.is_absolute() else [given, root / given]
    found = next((c for c in candidates if c.is_file()), None)
    if found is None:
        raise ConfigurationError(f"File not found: {specific_file}", config_key="file")

    if found.suffix.lower() != MARKDOWN_SUFFIX:
        raise ConfigurationError(f"Not a Markdown file: {specific_file}", config_key="file")

    try:
        relative = found.resolve().relative_to(root.resolve())
    except ValueError:
        raise ConfigurationError(f"File is outside {root}: {specific_file}", config_key="file")

    if is_excluded(relative, languages):
        raise ConfigurationError(f"File is a translation or build artifact: {specific_file}", config_key="file")

    return root / relative


def _walk(root: Path, start: Path, languages: Collection[str]) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(start):
        current = Path(dirpath)
        dirnames[:] = sorted(
            d for d in dirnames
            if not is_excluded((current / d).relative_to(root), languages)
        )
        for filename in sorted(filenames):
            if filename.lower().endswith(MARKDOWN_SUFFIX):
                yield current / filename


def scan_markdown_files(
    root: PathLike,
    section: Optional[str] = None,
    specific_file: Optional[PathLike] = None,
    exclude_languages: Collection[str] = LANGUAGES
) -> Iterator[Path]:
    """
    Find source Markdown files.

    Validation happens immediately; the returned iterator walks lazily in
    sorted directory order.

    Args:
        root: Content directory (e.g. docs)
        section: Only scan this sub-directory of root (e.g. css)
        specific_file: Yield only this file
        exclude_languages: Output folder names to skip (default: every known language)

    Raises:
        ConfigurationError: root, section or file invalid
    """
    root_path = resolve_root(root)

    if specific_file is not None:
        return iter([resolve_specific_file(root_path, specific_file, exclude_languages)])

    start = root_path
    if section:
        start = root_path / section
        if not start.is_dir():
            raise ConfigurationError(f"Section directory not found: {start}", config_key="section")
        if is_excluded(Path(section), exclude_languages):
            raise ConfigurationError(f"Section is a translation folder: {section}", config_key="section")

    logger.debug(f"Scanning {start} for *{MARKDOWN_SUFFIX}")
    return _walk(root_path, start, exclude_languages)
