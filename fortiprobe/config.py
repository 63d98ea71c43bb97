#!/usr/bin/env python3
"""
FortiProbe Configuration Module

Holds process-wide defaults and loads the two JSON configuration files:

    exporter.json - listen address/port, timeouts, TLS default
    targets.json  - per-target API token, TLS setting and probe selection

Example targets.json:

    {
      "https://fw1.example.net": {
        "token": "abcdef0123456789",
        "insecure": false,
        "probes": {"include": [], "exclude": []}
      }
    }
"""
import os
import json
import logging
from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Optional

from .client import normalize_target
from .core.constants import (
    DEFAULT_LISTEN_ADDRESS,
    DEFAULT_LISTEN_PORT,
    DEFAULT_TIMEOUT,
    DEFAULT_TIMEOUT_OFFSET,
)
from .core.exceptions import ConfigFileNotFoundError, ConfigParseError, ConfigValidationError

# Paths to config files
CONFIG_DIR = "/etc/fortiprobe"
EXPORTER_CONFIG_FILE = os.path.join(CONFIG_DIR, "exporter.json")
TARGETS_FILE = os.path.join(CONFIG_DIR, "targets.json")

# Logging settings
LOG_FILE = "/var/log/fortiprobe/fortiprobe.log"
LOG_LEVEL = "INFO"

# Log rotation settings
LOG_MAX_SIZE = 10 * 1024 * 1024  # 10 MB
LOG_BACKUP_COUNT = 5
LOG_COMPRESS = False

logger = logging.getLogger("fortiprobe")


def set_config_dir(config_dir: str):
    """Point all config file paths at a different directory."""
    global CONFIG_DIR, EXPORTER_CONFIG_FILE, TARGETS_FILE

    CONFIG_DIR = os.path.abspath(config_dir)
    EXPORTER_CONFIG_FILE = os.path.join(CONFIG_DIR, "exporter.json")
    TARGETS_FILE = os.path.join(CONFIG_DIR, "targets.json")


def _read_json(file_path: str) -> Optional[Any]:
    """Load a JSON file: None if missing, ConfigParseError if invalid."""
    if not os.path.exists(file_path):
        return None
    try:
        with open(file_path, 'r') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigParseError(file_path, str(e)) from e
    except OSError as e:
        raise ConfigParseError(file_path, str(e)) from e


@dataclass
class ExporterConfig:
    """
    Exporter process configuration.

    Attributes:
        listen_address: Address the HTTP exporter binds to
        listen_port: Port the HTTP exporter binds to
        scrape_timeout: Upper bound in seconds for a single device fetch
        timeout_offset: Seconds subtracted from the scraper's timeout header
        insecure: Default for skipping TLS verification on targets
    """
    listen_address: str = DEFAULT_LISTEN_ADDRESS
    listen_port: int = DEFAULT_LISTEN_PORT
    scrape_timeout: float = DEFAULT_TIMEOUT
    timeout_offset: float = DEFAULT_TIMEOUT_OFFSET
    insecure: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self):
        if not isinstance(self.listen_port, int) or not (1 <= self.listen_port <= 65535):
            raise ConfigValidationError("listen_port", self.listen_port, "must be 1-65535")
        if not isinstance(self.scrape_timeout, (int, float)) or self.scrape_timeout <= 0:
            raise ConfigValidationError("scrape_timeout", self.scrape_timeout, "must be positive")
        if not isinstance(self.timeout_offset, (int, float)) or self.timeout_offset < 0:
            raise ConfigValidationError("timeout_offset", self.timeout_offset, "must not be negative")
        if not isinstance(self.listen_address, str) or not self.listen_address:
            raise ConfigValidationError("listen_address", self.listen_address, "must be a non-empty string")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ExporterConfig':
        """Create from dictionary."""
        # Filter to only known fields
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in known_fields}
        return cls(**filtered)

    def __str__(self) -> str:
        return (
            f"ExporterConfig(listen={self.listen_address}:{self.listen_port}, "
            f"scrape_timeout={self.scrape_timeout}s, insecure={self.insecure})"
        )


@dataclass
class TargetConfig:
    """
    Per-target settings from targets.json.

    Attributes:
        token: REST API token sent as a bearer token
        insecure: Skip TLS certificate verification
        include: Probe names to run (empty means all)
        exclude: Probe names to skip
    """
    token: str = ""
    insecure: bool = False
    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, target: str, data: Any) -> 'TargetConfig':
        if not isinstance(data, dict):
            raise ConfigValidationError(target, data, "target entry must be an object")

        token = data.get("token", "")
        if not isinstance(token, str):
            raise ConfigValidationError(f"{target}.token", "<redacted>", "must be a string")

        insecure = data.get("insecure", False)
        if not isinstance(insecure, bool):
            raise ConfigValidationError(f"{target}.insecure", insecure, "must be true or false")

        probes = data.get("probes")
        if probes is None:
            probes = {}
        if not isinstance(probes, dict):
            raise ConfigValidationError(f"{target}.probes", probes, "must be an object")

        lists = {}
        for key in ("include", "exclude"):
            names = probes.get(key)
            if names is None:
                names = []
            if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
                raise ConfigValidationError(f"{target}.probes.{key}", names, "must be a list of probe names")
            lists[key] = names

        return cls(token=token, insecure=insecure, include=lists["include"], exclude=lists["exclude"])


def load_exporter_config(config_path: Optional[str] = None) -> ExporterConfig:
    """
    Load exporter configuration from file.

    Args:
        config_path: Path to configuration file.
                    If None, uses default path.

    Returns:
        ExporterConfig instance (defaults when the file does not exist)

    Raises:
        ConfigParseError: File is not valid JSON
        ConfigValidationError: File contains invalid values
    """
    config_path = config_path or EXPORTER_CONFIG_FILE

    data = _read_json(config_path)
    if data is None:
        logger.info(f"Exporter config file not found at {config_path}, using defaults")
        return ExporterConfig()
    if not isinstance(data, dict):
        raise ConfigParseError(config_path, "top level must be an object")

    config = ExporterConfig.from_dict(data)
    logger.info(f"Exporter configuration loaded from {config_path}")
    return config


def load_targets(targets_path: Optional[str] = None,
                 required: bool = False) -> Dict[str, TargetConfig]:
    """
    Load per-target settings.

    Args:
        targets_path: Path to targets file. If None, uses default path.
        required: Raise instead of returning no targets when the file is missing

    Returns:
        Mapping of normalized target URL to TargetConfig; empty when the
        file does not exist

    Raises:
        ConfigFileNotFoundError: File is missing and required is set
        ConfigParseError: File is not valid JSON
        ConfigValidationError: A target URL or entry is invalid
    """
    targets_path = targets_path or TARGETS_FILE

    data = _read_json(targets_path)
    if data is None:
        if required:
            raise ConfigFileNotFoundError(targets_path)
        logger.warning(f"Targets file {targets_path} not found, no targets configured")
        return {}
    if not isinstance(data, dict):
        raise ConfigParseError(targets_path, "top level must be an object keyed by target URL")

    targets = {}
    for url, entry in data.items():
        target = normalize_target(url)
        targets[target] = TargetConfig.from_dict(target, entry)

    logger.info(f"Loaded {len(targets)} target(s) from {targets_path}")
    return targets
