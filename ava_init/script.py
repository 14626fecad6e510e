"""Rewriting of the manifest's test script.

The rules are applied to the existing ``scripts.test`` value in order:

1. An empty or missing script becomes the framework invocation.
2. The placeholder written by ``npm init`` is replaced outright.
3. Any other script has a manual ``node test.js`` runner swapped for the
   invocation, and the invocation is appended with ``&&`` unless the
   framework already runs.
"""

import logging
import re
from typing import Any, Dict, Iterable, List, Sequence

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = "ava"
DEFAULT_TEST_SCRIPT = 'echo "Error: no test specified" && exit 1'
CONTROL_FLAGS = ("--init", "--unicorn")

MANUAL_RUNNER_PATTERN = re.compile(r"\bnode (test/)?test\.js\b")


def forwarded_args(
    tokens: Iterable[str], control_flags: Sequence[str] = CONTROL_FLAGS
) -> List[str]:
    """Drop the tool's own flags, keeping every other token in order."""
    return [token for token in tokens if token not in control_flags]


def build_command(command: str = DEFAULT_COMMAND, args: Sequence[str] = ()) -> str:
    """Build the framework invocation, e.g. ``ava --verbose``."""
    if args:
        return f"{command} {' '.join(args)}"
    return command


def replace_manual_runner(script: str, cmd: str) -> str:
    """Replace the first ``node test.js`` or ``node test/test.js`` with cmd."""
    return MANUAL_RUNNER_PATTERN.sub(lambda _: cmd, script, count=1)


def has_command(script: str, command: str = DEFAULT_COMMAND) -> bool:
    """Check whether command appears in script as a whole word."""
    return re.search(rf"\b{re.escape(command)}\b", script) is not None


def rewrite_test_script(
    existing: str | None,
    args: Sequence[str] = (),
    command: str = DEFAULT_COMMAND,
    default_test_script: str = DEFAULT_TEST_SCRIPT,
) -> str:
    """Compute the new test script.

    Args:
        existing: Current value of scripts.test, if any
        args: Tokens appended to the framework invocation
        command: Framework invocation word
        default_test_script: Placeholder that is replaced rather than extended

    Returns:
        The new test script
    """
    cmd = build_command(command, args)

    if not existing or existing == default_test_script:
        return cmd

    script = replace_manual_runner(existing, cmd)
    if not has_command(script, command):
        script = f"{script} && {cmd}"
    return script


def apply_test_script(
    manifest: Dict[str, Any],
    args: Sequence[str] = (),
    command: str = DEFAULT_COMMAND,
    default_test_script: str = DEFAULT_TEST_SCRIPT,
) -> str:
    """Set scripts.test on manifest in place, creating scripts if needed.

    Returns:
        The value written to scripts.test
    """
    scripts = manifest.get("scripts")
    if not isinstance(scripts, dict):
        scripts = manifest["scripts"] = {}

    existing = scripts.get("test")
    if not isinstance(existing, str):
        existing = None

    scripts["test"] = rewrite_test_script(
        existing, args, command=command, default_test_script=default_test_script
    )
    if existing != scripts["test"]:
        logger.info(f"Test script set to {scripts['test']!r}")
    else:
        logger.info("Test script already runs the framework, left unchanged")
    return scripts["test"]
