"""File utilities for writing generated client packages."""

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def write_files_to_disk(files: dict[Path, str]) -> None:
    """Write generated files to disk.

    Args:
        files: Dictionary mapping file paths to their content.
    """
    for path, content in files.items():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        logger.debug("Wrote %s (%d bytes)", path, len(content))


def clean_output_directory(output_dir: Path) -> None:
    """Remove everything below ``output_dir`` and recreate it empty."""
    shutil.rmtree(output_dir, ignore_errors=True)
    output_dir.mkdir(parents=True, exist_ok=True)


def get_relative_path(file_path: Path, base_path: Path) -> Path:
    """Path of ``file_path`` relative to ``base_path``, or unchanged if it is not below it."""
    try:
        return file_path.relative_to(base_path)
    except ValueError:
        return file_path


def list_python_files(directory: Path) -> list[Path]:
    """List all .py files below a directory, sorted.

    Args:
        directory: Directory to search.

    Returns:
        Sorted list of paths, empty if the directory does not exist.
    """
    if not directory.is_dir():
        return []
    return sorted(directory.rglob("*.py"))
