"""Creation of the configuration directory and its default files."""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = '{\n  "components": {}\n}'

EXAMPLE_CONFIG = (
    '{\n  "components": {\n    "Window1": {\n      "is_open": true,\n'
    '      "position": [100,100],\n      "size": [300,200],\n'
    '      "slider_float": 0.5,\n      "slider_int": 42,\n'
    '      "checkbox": true,\n      "color": [1.0, 0.0, 0.0, 1.0]\n'
    "    }\n  }\n}"
)


class ConfigurationManager:
    """Makes sure the configuration directory exists with default files."""

    def __init__(self, config_dir: str | os.PathLike[str] = "Configurations") -> None:
        self.config_dir = Path(config_dir)

    def initialize(self) -> bool:
        """Create the directory and default files if missing.

        Returns True when the directory was created, False if it already existed.
        """
        if self.config_dir.exists():
            logger.info("Directory already exists: %s", self.config_dir)
            return False
        self.config_dir.mkdir()
        logger.info("Created directory: %s", self.config_dir)
        self.create_default_configs()
        return True

    def create_default_configs(self) -> None:
        """Write ``default.json`` and ``example.json`` into the directory."""
        (self.config_dir / "default.json").write_text(DEFAULT_CONFIG, encoding="utf-8")
        (self.config_dir / "example.json").write_text(EXAMPLE_CONFIG, encoding="utf-8")
        logger.info("Created default configs.")