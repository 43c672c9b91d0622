"""
Run Configuration

Settings for one bankjob run, loaded from a YAML file or built in code.
"""
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List, Optional, Union

import yaml

from bankjob.common.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class BankjobConfig:
    """
    Configuration for a bankjob run.

    Attributes:
        output_formatters: formatter configurations, each "name" or
            "name:arguments" (e.g. "ofx:statement.ofx", "csv", "stdout")
        log_level: level name or number for the root logger
        log_file: optional JSON log file
        debug: log debug information; implies DEBUG level
    """
    output_formatters: List[str] = field(default_factory=list)
    log_level: Union[str, int] = "WARNING"
    log_file: Optional[str] = None
    debug: bool = False

    @property
    def effective_log_level(self) -> Union[str, int]:
        return logging.DEBUG if self.debug else self.log_level

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "BankjobConfig":
        """Build a config from a dict, ignoring unknown keys."""
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {', '.join(unknown)}", keys=unknown)

        formatters = data.get('output_formatters') or []
        if isinstance(formatters, str):
            formatters = [formatters]
        data['output_formatters'] = [str(f) for f in formatters]

        return cls(**{k: v for k, v in data.items() if k in known})


def load_config(path: Union[str, Path]) -> BankjobConfig:
    """
    Load a BankjobConfig from a YAML file.

    Args:
        path: Path to the YAML configuration file

    Returns:
        BankjobConfig (defaults for a missing or empty file)
    """
    config_path = Path(path)
    if not config_path.exists():
        logger.warning(f"Configuration file not found: {config_path}", path=str(config_path))
        return BankjobConfig()

    with open(config_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if data is not None and not isinstance(data, dict):
        raise ValueError(f"Configuration file {config_path} must contain a mapping")

    logger.debug(f"Loaded configuration: {config_path}")
    return BankjobConfig.from_dict(data)
