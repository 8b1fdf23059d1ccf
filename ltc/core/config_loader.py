"""Target configuration for ltc"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ltc.constants import (
    CONFIG_FILENAME,
    CONFIG_HOME_ENV,
    DEFAULT_CONFIG_DIR,
    LOGS_DIRNAME,
)
from ltc.exceptions import ConfigurationError


def get_config_dir() -> Path:
    """
    Get the ltc configuration directory.

    Returns:
        $LATTICE_CLI_HOME if set, otherwise ~/.lattice
    """
    return Path(os.environ.get(CONFIG_HOME_ENV, DEFAULT_CONFIG_DIR)).expanduser()


@dataclass
class TargetConfig:
    """Which lattice cluster ltc talks to"""

    target: str = ""
    username: str = ""
    password: str = ""
    logs_dir: Optional[str] = None

    @property
    def is_targeted(self) -> bool:
        return self.target != ""

    @property
    def api_url(self) -> str:
        """Receptor API base URL for the target"""
        return f"http://receptor.{self.target}"

    @property
    def auth(self) -> Optional[tuple[str, str]]:
        if self.username:
            return self.username, self.password
        return None

    @property
    def logs_path(self) -> Path:
        if self.logs_dir:
            return Path(self.logs_dir).expanduser()
        return get_config_dir() / LOGS_DIRNAME

    def require_target(self) -> None:
        """
        Ensure a target is configured.

        Raises:
            ConfigurationError: If no target is set
        """
        if not self.is_targeted:
            raise ConfigurationError.not_targeted()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for config.yml"""
        data: Dict[str, Any] = {
            "target": self.target,
            "username": self.username,
            "password": self.password,
        }
        if self.logs_dir:
            data["logs_dir"] = self.logs_dir
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TargetConfig":
        """Create from dictionary."""
        return cls(
            target=str(data.get("target") or ""),
            username=str(data.get("username") or ""),
            password=str(data.get("password") or ""),
            logs_dir=data.get("logs_dir"),
        )


def load_target_config(config_dir: Optional[Path] = None) -> TargetConfig:
    """
    Load config.yml from the config directory.

    A missing file yields an untargeted config.

    Args:
        config_dir: Directory holding config.yml (defaults to get_config_dir())

    Returns:
        TargetConfig

    Raises:
        ConfigurationError: If config.yml is not valid YAML or not a mapping
    """
    config_path = (config_dir or get_config_dir()) / CONFIG_FILENAME

    if not config_path.exists():
        return TargetConfig()

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid config file: {config_path}", context=str(e))

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid config file: {config_path}",
            context="Expected a mapping of target, username and password",
        )

    return TargetConfig.from_dict(data)


def save_target_config(config: TargetConfig, config_dir: Optional[Path] = None) -> Path:
    """
    Write config.yml to the config directory.

    Returns:
        Path of the written file
    """
    config_dir = config_dir or get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = config_dir / CONFIG_FILENAME

    with open(config_path, "w") as f:
        yaml.safe_dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)

    return config_path
