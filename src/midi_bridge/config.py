"""
Runtime configuration for the MIDI Bridge.

Settings come from a YAML file or from ``MIDI_BRIDGE_*`` environment
variables; anything left unset falls back to the defaults below.
"""
import os
import shlex
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .utils.exceptions import ConfigurationError

DEFAULT_BRIDGE_COMMAND = ["wsl", "-e", "/bin/bash", "-c"]
DEFAULT_COMMAND_TEMPLATE = (
    "source ~/p2p_env/bin/activate && "
    "python /home/zzdw/pop2piano.py --input {input} --output {output}"
)

ENV_PREFIX = "MIDI_BRIDGE_"


@dataclass
class BridgeConfig:
    """Configuration for the conversion workflow."""
    web_root: str = "wwwroot"
    uploads_dirname: str = "uploads"
    outputs_dirname: str = "outputs"
    # Host executable plus arguments; the shell command is appended last
    bridge_command: List[str] = field(default_factory=lambda: list(DEFAULT_BRIDGE_COMMAND))
    command_template: str = DEFAULT_COMMAND_TEMPLATE
    mount_root: str = "/mnt"
    timeout_seconds: float = 300.0
    max_file_size: int = 100 * 1024 * 1024  # 100MB

    def __post_init__(self):
        for name in ("web_root", "uploads_dirname", "outputs_dirname", "command_template", "mount_root"):
            if not isinstance(getattr(self, name), str):
                raise ConfigurationError(
                    f"{name} must be a string",
                    details={name: getattr(self, name)}
                )

        if isinstance(self.bridge_command, str):
            self.bridge_command = shlex.split(self.bridge_command)
        if not isinstance(self.bridge_command, (list, tuple)) or not all(
            isinstance(part, str) for part in self.bridge_command
        ):
            raise ConfigurationError(
                "bridge_command must be a string or a list of strings",
                details={"bridge_command": self.bridge_command}
            )
        self.bridge_command = list(self.bridge_command)
        if not self.bridge_command:
            raise ConfigurationError("bridge_command must not be empty")
        for placeholder in ("{input}", "{output}"):
            if placeholder not in self.command_template:
                raise ConfigurationError(
                    f"command_template is missing the {placeholder} placeholder",
                    details={"command_template": self.command_template}
                )
        # YAML "yes" loads as bool, which is an int subclass
        if isinstance(self.timeout_seconds, bool) or not isinstance(self.timeout_seconds, (int, float)):
            raise ConfigurationError(
                "timeout_seconds must be a number",
                details={"timeout_seconds": self.timeout_seconds}
            )
        if self.timeout_seconds <= 0:
            raise ConfigurationError("timeout_seconds must be positive")

        if isinstance(self.max_file_size, bool) or not isinstance(self.max_file_size, int):
            raise ConfigurationError(
                "max_file_size must be an integer",
                details={"max_file_size": self.max_file_size}
            )
        if self.max_file_size <= 0:
            raise ConfigurationError("max_file_size must be positive")

    @property
    def uploads_dir(self) -> Path:
        return Path(self.web_root) / self.uploads_dirname

    @property
    def outputs_dir(self) -> Path:
        return Path(self.web_root) / self.outputs_dirname

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "BridgeConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {unknown}")
        return cls(**values)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "BridgeConfig":
        """Load configuration from a YAML mapping."""
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                values = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse YAML file: {config_path}") from e

        if not isinstance(values, dict):
            raise ConfigurationError(f"Configuration file must contain a mapping: {config_path}")

        return cls.from_dict(values)

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "BridgeConfig":
        """Build configuration from ``MIDI_BRIDGE_*`` environment variables."""
        environ = os.environ if environ is None else environ
        values: Dict[str, Any] = {}

        for f in fields(cls):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            try:
                if f.name == "timeout_seconds":
                    values[f.name] = float(raw)
                elif f.name == "max_file_size":
                    values[f.name] = int(raw)
                else:
                    values[f.name] = raw
            except ValueError as e:
                raise ConfigurationError(f"Invalid value for {ENV_PREFIX}{f.name.upper()}: {raw!r}") from e

        return cls(**values)


def load_config(path: Optional[Union[str, Path]] = None) -> BridgeConfig:
    """Load configuration from ``path`` if given, otherwise from the environment."""
    if path:
        return BridgeConfig.from_yaml(path)
    return BridgeConfig.from_env()
