import pytest
from unittest.mock import patch
import os
from pathlib import Path

from ..config import get_config, get_framework_params, get_package_root


def test_missing_config_file(tmp_path: Path) -> None:
    """Test behavior when config.yaml is missing."""
    with patch.dict(
        os.environ, {"AVA_INIT_CONFIG_PATH": str(tmp_path / "nonexistent.yaml")}
    ):
        with pytest.raises(FileNotFoundError):
            get_config()


def test_package_root() -> None:
    """Test that the packaged config is found."""
    root = get_package_root()
    assert root.name == "ava_init"
    assert (root / "config.yaml").exists()


def test_default_config() -> None:
    """Test the packaged defaults."""
    config = get_config()
    params = get_framework_params(config)
    assert params["command"] == "ava"
    assert params["package"] == "ava"
    assert params["default_test_script"] == 'echo "Error: no test specified" && exit 1'
    assert params["control_flags"] == ["--init", "--unicorn"]
    assert config["manifest"]["filename"] == "package.json"
    assert config["install"] == {"default_manager": "npm", "skip": False}
    assert list(config["package_managers"]) == ["yarn", "pnpm", "npm"]


def test_custom_config_path(tmp_path: Path) -> None:
    """Test loading configuration from AVA_INIT_CONFIG_PATH."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
framework:
    command: jest
"""
    )
    with patch.dict(os.environ, {"AVA_INIT_CONFIG_PATH": str(config_path)}):
        params = get_framework_params(get_config())
    assert params["command"] == "jest"
    assert params["package"] == "jest"
    assert params["control_flags"] == ["--init", "--unicorn"]


def test_dotenv_overrides(tmp_path: Path) -> None:
    """Test that .env settings take precedence over config.yaml."""
    (tmp_path / ".env").write_text(
        "AVA_INIT_SKIP_INSTALL=true\nAVA_INIT_DEFAULT_MANAGER=yarn\nOTHER=1\n"
    )
    config = get_config()
    assert config["install"]["skip"] is True
    assert config["install"]["default_manager"] == "yarn"
    assert "OTHER" not in config


def test_dotenv_false_value(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("AVA_INIT_SKIP_INSTALL=0\n")
    assert get_config()["install"]["skip"] is False
