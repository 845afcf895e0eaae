"""Configuration loading for the sweeper CLI."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".ttlsweep" / "config.yaml"


@dataclass
class Config:
    """Sweeper configuration.

    Values come from the YAML config file, then environment variables, then
    command line options (applied by the CLI).

    Attributes:
        log_level: Logging level name
        environment: Default Azure cloud name
        exempt_prefixes: Resource ID prefixes that are never deleted
        audit_dir: Directory for YAML audit logs, None disables auditing
        fail_on_group_errors: Resource group deletion failures fail the run
    """

    log_level: str = "INFO"
    environment: Optional[str] = None
    exempt_prefixes: list[str] = field(default_factory=list)
    audit_dir: Optional[str] = None
    fail_on_group_errors: bool = True

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Config":
        """Load configuration.

        Args:
            path: Config file path (default: $TTLSWEEP_CONFIG or ~/.ttlsweep/config.yaml)

        Returns:
            Config instance

        Raises:
            ValueError: If the config file is not a YAML mapping or holds an invalid value
        """
        config_path = Path(path or os.environ.get("TTLSWEEP_CONFIG") or DEFAULT_CONFIG_PATH)

        data: dict[str, Any] = {}
        if config_path.exists():
            with open(config_path, "r") as f:
                loaded = yaml.safe_load(f)
            if loaded is not None and not isinstance(loaded, dict):
                raise ValueError(f"Config file {config_path} must contain a mapping")
            data = loaded or {}
            logger.debug(f"Loaded config from {config_path}")

        fail_on_group_errors = data.get("fail_on_group_errors", True)
        if not isinstance(fail_on_group_errors, bool):
            raise ValueError(f"fail_on_group_errors must be true or false, got {fail_on_group_errors!r}")

        config = cls(
            log_level=str(data.get("log_level", cls.log_level)).upper(),
            environment=data.get("environment"),
            exempt_prefixes=[str(p) for p in data.get("exempt_prefixes") or []],
            audit_dir=data.get("audit_dir"),
            fail_on_group_errors=fail_on_group_errors,
        )
        config._apply_env()
        return config

    def _apply_env(self) -> None:
        if os.environ.get("TTLSWEEP_LOG_LEVEL"):
            self.log_level = os.environ["TTLSWEEP_LOG_LEVEL"].upper()
        if os.environ.get("TTLSWEEP_ENVIRONMENT"):
            self.environment = os.environ["TTLSWEEP_ENVIRONMENT"]
        if os.environ.get("TTLSWEEP_AUDIT_DIR"):
            self.audit_dir = os.environ["TTLSWEEP_AUDIT_DIR"]
        if os.environ.get("TTLSWEEP_EXEMPT_PREFIXES"):
            self.add_prefixes(os.environ["TTLSWEEP_EXEMPT_PREFIXES"].split(","))

    def add_prefixes(self, prefixes: list[str]) -> None:
        """Append prefixes, keeping order and skipping duplicates and blanks."""
        for prefix in prefixes:
            prefix = prefix.strip()
            if prefix and prefix not in self.exempt_prefixes:
                self.exempt_prefixes.append(prefix)
