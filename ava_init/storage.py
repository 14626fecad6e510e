import json
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Dict, NamedTuple

from ava_init.errors import (
    ManifestNotFoundError,
    ManifestParseError,
    ManifestWriteError,
)

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "package.json"

# Sections package managers keep sorted by name
DEPENDENCY_KEYS = (
    "dependencies",
    "devDependencies",
    "optionalDependencies",
    "peerDependencies",
)

DEFAULT_INDENT = "  "


class ManifestResult(NamedTuple):
    data: Dict[str, Any]
    path: Path


def find_manifest_path(
    cwd: str | Path | None = None, filename: str = MANIFEST_FILENAME
) -> Path:
    """Walk upward from cwd and return the first manifest file found.

    Args:
        cwd: Directory to start from. If None, uses the process working directory.
        filename: Name of the manifest file

    Returns:
        Absolute path of the nearest manifest

    Raises:
        ManifestNotFoundError: If no directory up to the root contains one
    """
    start = Path(cwd if cwd is not None else os.getcwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / filename
        logger.debug(f"Looking for manifest at {candidate}")
        if candidate.is_file():
            return candidate
    raise ManifestNotFoundError(f"No {filename} found in {start} or any parent")


def load_manifest(path: Path) -> Dict[str, Any]:
    """Parse a manifest file without normalizing any of its fields."""
    try:
        text = path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise ManifestParseError(f"Invalid UTF-8 in {path}: {e}") from e
    except OSError as e:
        raise ManifestParseError(f"Could not read {path}: {e}") from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ManifestParseError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ManifestParseError(
            f"Expected a JSON object in {path}, got {type(data).__name__}"
        )
    return data


def find_manifest(
    cwd: str | Path | None = None, filename: str = MANIFEST_FILENAME
) -> ManifestResult:
    """Locate and parse the nearest manifest.

    Args:
        cwd: Directory to start the lookup from
        filename: Name of the manifest file

    Returns:
        The parsed manifest and its absolute path
    """
    path = find_manifest_path(cwd, filename)
    logger.info(f"Using manifest {path}")
    return ManifestResult(load_manifest(path), path)


def detect_indent(text: str) -> str:
    """Return the indentation used by the first indented line of text."""
    match = re.search(r"^([ \t]+)\S", text, re.MULTILINE)
    if match is None:
        return DEFAULT_INDENT
    indent = match.group(1)
    return "\t" if indent.startswith("\t") else indent


def _sort_dependencies(data: Dict[str, Any]) -> Dict[str, Any]:
    result = dict(data)
    for key in DEPENDENCY_KEYS:
        section = result.get(key)
        if isinstance(section, dict):
            result[key] = dict(sorted(section.items()))
    return result


def write_manifest(path: Path, data: Dict[str, Any]) -> Path:
    """Atomically replace the manifest at path with data.

    The indentation of the existing file is kept and dependency sections
    are written sorted by name. Content is staged in a temporary file next
    to the manifest so readers never observe a partial write.

    Args:
        path: Manifest path to overwrite
        data: Manifest contents

    Returns:
        Path where the manifest was stored

    Raises:
        ManifestWriteError: If the file cannot be written
    """
    # Write through symlinks to the file they point at
    path = Path(path).resolve()
    indent = DEFAULT_INDENT
    if path.exists():
        try:
            indent = detect_indent(path.read_text(encoding="utf-8-sig"))
        except (OSError, UnicodeDecodeError):
            logger.debug(f"Could not read {path} to detect indentation")

    manifest_json = (
        json.dumps(_sort_dependencies(data), indent=indent, ensure_ascii=False) + "\n"
    )

    tmp_name = None
    try:
        logger.debug(f"Storing manifest at {path}")
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_name = f.name
            f.write(manifest_json)
        if path.exists():
            os.chmod(tmp_name, path.stat().st_mode & 0o777)
        os.replace(tmp_name, path)
    except OSError as e:
        logger.exception(f"Failed to store manifest at {path}")
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ManifestWriteError(f"Could not write {path}: {e}") from e

    logger.debug(f"Successfully stored manifest at {path}")
    return path
