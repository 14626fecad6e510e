"""Tasks for the ava_init package.

This module contains the setup operation shared by the command line and
the programmatic interface.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from ava_init.config import get_config, get_framework_params
from ava_init.installer import install_framework, pin_wildcard
from ava_init.script import apply_test_script, forwarded_args
from ava_init.storage import MANIFEST_FILENAME, find_manifest, write_manifest

logger = logging.getLogger(__name__)

UNICORN_FLAG = "--unicorn"


def init(
    cwd: Optional[str | Path] = None,
    args: Optional[Sequence[str]] = None,
    next: bool = False,
    skip_install: Optional[bool] = None,
    **kwargs: Any,
) -> Path:
    """Add the test framework to the nearest package.json.

    The test script is rewritten and saved before the package manager is
    started, so the edit survives a failed install.

    Args:
        cwd: Directory to start the manifest lookup from. Defaults to the
            process working directory.
        args: Tokens to forward into the test script. Defaults to sys.argv[1:].
        next: Install the next distribution tag with an exact version.
        skip_install: Do not run the package manager. Defaults to the
            install.skip setting.

    Settings are read once per call. The .env lookup starts from the
    process working directory, not from cwd, so a caller running init for
    another project applies its own .env overrides.

    Returns:
        Path of the updated manifest
    """
    if kwargs:
        logger.warning(f"Ignoring unknown options: {', '.join(sorted(kwargs))}")

    config = get_config()
    framework = get_framework_params(config)
    filename = config.get("manifest", {}).get("filename", MANIFEST_FILENAME)

    manifest, manifest_path = find_manifest(cwd, filename)

    tokens = list(args) if args is not None else sys.argv[1:]
    cmd_args = forwarded_args(tokens, framework["control_flags"])

    apply_test_script(
        manifest,
        cmd_args,
        command=framework["command"],
        default_test_script=framework["default_test_script"],
    )
    write_manifest(manifest_path, manifest)

    if skip_install is None:
        skip_install = bool(config.get("install", {}).get("skip", False))
    if skip_install:
        logger.info("Skipping dependency installation")
        return manifest_path

    install_framework(manifest_path.parent, framework["package"], next, config)

    if UNICORN_FLAG in tokens:
        pin_wildcard(manifest_path, framework["package"])

    return manifest_path
