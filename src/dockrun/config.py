"""Configuration loading."""

import logging
import os
from pathlib import Path
from typing import Dict, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError
from pydantic import ValidationError

from dockrun.errors import ConfigError
from dockrun.models.config import DockrunConfig
from dockrun.models.run import RunSpec


logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DOCKRUN_CONFIG"
DEFAULT_CONFIG_FILE = "dockrun.yaml"


def default_config_path() -> Path:
    """Config path from ``$DOCKRUN_CONFIG``, else ``./dockrun.yaml``."""
    return Path(os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE))


class ConfigManager:
    """Loads the run specs declared in a YAML file."""

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize configuration manager."""
        self.config_path = Path(config_path) if config_path else default_config_path()
        self.yaml = YAML(typ="safe")
        self.config: Optional[DockrunConfig] = None

    def load(self) -> DockrunConfig:
        """Read and validate the configuration file."""
        logger.info(f"Loading configuration from {self.config_path}")

        if not self.config_path.exists():
            raise ConfigError(f"Config not found: {self.config_path}")

        try:
            data = self._read_yaml(self.config_path)
        except YAMLError as e:
            logger.error(f"Invalid YAML in {self.config_path}: {e}")
            raise ConfigError(f"Invalid YAML in {self.config_path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping at the top of {self.config_path}")

        try:
            self.config = DockrunConfig(**data)
        except ValidationError as e:
            logger.error(f"Invalid config: {e}")
            raise ConfigError(f"Invalid config {self.config_path}: {e}") from e

        logger.debug(f"Loaded {len(self.config.runs)} run specs")
        return self.config

    def _read_yaml(self, file_path: Path):
        """Read and parse YAML file."""
        return self.yaml.load(file_path.read_text())

    @property
    def runs(self) -> Dict[str, RunSpec]:
        """Loaded run specs by name."""
        if self.config is None:
            self.load()
        return self.config.runs

    def get_run_spec(self, name: str) -> RunSpec:
        """Get run specification by name."""
        try:
            return self.runs[name]
        except KeyError:
            raise ConfigError(f"Unknown run: {name}") from None
