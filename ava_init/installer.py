import logging
import subprocess
from pathlib import Path
from typing import Any, Dict, List

from ava_init.errors import InstallError
from ava_init.storage import load_manifest, write_manifest

logger = logging.getLogger(__name__)

NEXT_TAG = "next"
WILDCARD_VERSION = "*"


def _managers(config: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    managers = config.get("package_managers") or {}
    if not managers:
        raise ValueError("No package managers configured")
    return managers


def detect_package_manager(directory: Path, config: Dict[str, Any]) -> str:
    """Pick the package manager that governs directory.

    The first configured manager whose lockfile exists in directory wins;
    otherwise the configured default manager is used.

    Args:
        directory: Directory holding the manifest
        config: Configuration with package_managers and install sections

    Returns:
        Name of the package manager
    """
    managers = _managers(config)
    for name, manager in managers.items():
        lockfile = manager.get("lockfile")
        if not lockfile:
            continue
        logger.debug(f"Checking for {lockfile} in {directory}")
        if (Path(directory) / lockfile).exists():
            logger.info(f"Found {lockfile}, installing with {name}")
            return name

    default = config.get("install", {}).get("default_manager", "npm")
    if default not in managers:
        raise ValueError(f"Default package manager {default!r} is not configured")
    return default  # type: ignore[no-any-return]


def install_command(
    manager: str, package: str, next_release: bool, config: Dict[str, Any]
) -> List[str]:
    """Build the argument vector that adds package as a dev dependency.

    The latest release is recorded by the manager as a caret range; the next
    release is requested by tag and saved as an exact version.
    """
    settings = _managers(config)[manager]
    command = list(settings["install"])
    if next_release:
        if settings.get("exact"):
            command.append(settings["exact"])
        command.append(f"{package}@{NEXT_TAG}")
    else:
        command.append(package)
    return command


def install_framework(
    directory: Path, package: str, next_release: bool, config: Dict[str, Any]
) -> List[str]:
    """Install package in directory and wait for the manager to finish.

    Args:
        directory: Directory holding the manifest
        package: Package to add as a dev dependency
        next_release: Whether to install the next distribution tag
        config: Configuration dictionary

    Returns:
        The command that was run

    Raises:
        InstallError: If the manager cannot be started or exits non-zero
    """
    manager = detect_package_manager(directory, config)
    command = install_command(manager, package, next_release, config)
    logger.info(f"Running {' '.join(command)} in {directory}")

    try:
        result = subprocess.run(
            command,
            cwd=directory,
            capture_output=True,
            text=True,
            check=True,
        )
    except FileNotFoundError as e:
        logger.error(f"Package manager {command[0]!r} not found")
        raise InstallError(f"Could not run {command[0]}: {e}", command) from e
    except subprocess.CalledProcessError as e:
        logger.error(f"{command[0]} exited with status {e.returncode}")
        if e.stderr:
            logger.error(e.stderr.strip())
        raise InstallError(
            f"{' '.join(command)} failed with exit status {e.returncode}",
            command,
            e.returncode,
        ) from e
    except OSError as e:
        logger.exception(f"Failed to start {command[0]}")
        raise InstallError(f"Could not run {command[0]}: {e}", command) from e

    if result.stdout:
        logger.debug(result.stdout.strip())
    logger.info(f"Installed {package} with {manager}")
    return command


def pin_wildcard(path: Path, package: str) -> Dict[str, Any]:
    """Re-read the manifest and record package with the ``*`` specifier."""
    manifest = load_manifest(path)
    dev_dependencies = manifest.get("devDependencies")
    if not isinstance(dev_dependencies, dict):
        dev_dependencies = manifest["devDependencies"] = {}
    dev_dependencies[package] = WILDCARD_VERSION
    write_manifest(path, manifest)
    logger.info(f"Pinned {package} to {WILDCARD_VERSION!r}")
    return manifest
