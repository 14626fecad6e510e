import os
import yaml
from pathlib import Path
from typing import Any, Dict
from dotenv import dotenv_values, find_dotenv
import logging

from ava_init.script import CONTROL_FLAGS, DEFAULT_COMMAND, DEFAULT_TEST_SCRIPT

logger = logging.getLogger(__name__)

ENV_PREFIX = "AVA_INIT_"

# .env keys and the install settings they override
ENV_OVERRIDES = {
    "AVA_INIT_SKIP_INSTALL": "skip",
    "AVA_INIT_DEFAULT_MANAGER": "default_manager",
}


def get_package_root() -> Path:
    """Get the directory holding the packaged config.yaml.

    Returns:
        Path to the ava_init package directory
    """
    return Path(__file__).parent


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_config() -> Dict[str, Any]:
    """Get configuration by merging config.yaml and .env overrides.
    Values from .env prefixed with AVA_INIT_ take precedence over the
    install section of config.yaml.

    Returns:
        Dictionary containing merged configuration
    """
    config_path = Path(
        os.getenv("AVA_INIT_CONFIG_PATH", str(get_package_root() / "config.yaml"))
    )
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        config = yaml.safe_load(f) or {}

    dotenv_path = find_dotenv(usecwd=True)
    if not dotenv_path:
        logger.debug("No .env file found")
    else:
        env_vars = dotenv_values(dotenv_path)
        install = config.setdefault("install", {})
        for key, value in env_vars.items():
            if not key.startswith(ENV_PREFIX) or value is None:
                continue
            if key not in ENV_OVERRIDES:
                logger.warning(f"Ignoring unknown setting {key} in {dotenv_path}")
                continue
            setting = ENV_OVERRIDES[key]
            install[setting] = _parse_bool(value) if setting == "skip" else value

    return config  # type: ignore[no-any-return]


def get_framework_params(config: dict) -> dict:
    """Get test framework parameters from config with defaults.

    Args:
        config: Config dictionary containing a framework section

    Returns:
        Dictionary of framework parameters with the following keys:
        - command: Invocation word written into scripts.test (default: "ava")
        - package: Package installed as a dev dependency (default: command)
        - default_test_script: Placeholder test script replaced outright
        - control_flags: Tokens never forwarded into the test script
    """
    framework = config.get("framework", {})
    command = framework.get("command", DEFAULT_COMMAND)
    return {
        "command": command,
        "package": framework.get("package", command),
        "default_test_script": framework.get("default_test_script", DEFAULT_TEST_SCRIPT),
        "control_flags": list(framework.get("control_flags", CONTROL_FLAGS)),
    }
