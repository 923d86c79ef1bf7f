"""
File writer: maps sources to their mirrored per-language path and saves.

    docs/css/basics/intro.md  --km-->  docs/km/css/basics/intro.md
"""
from pathlib import Path
from typing import Union

from .utils.exceptions import WriteError

PathLike = Union[str, Path]


def output_path_for(relative_path: PathLike, language: str, root: PathLike) -> Path:
    """Translated location of a source file given relative to root."""
    relative = Path(relative_path)
    if relative.is_absolute() or ".." in relative.parts:
        raise ValueError(f"Expected a path inside the content root: {relative_path}")
    return Path(root) / language / relative


def write_translation(path: PathLike, text: str) -> Path:
    """
    Write a translation, creating folders and replacing any previous file.

    Raises:
        WriteError: permission, disk or path problems
    """
    output = Path(path)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, 'w', encoding='utf-8', newline='') as f:
            f.write(text)
    except OSError as e:
        raise WriteError(f"Could not write {output}", file_path=str(output), cause=e)
    return output
