"""Centralized logging configuration for DocTree Core.

@public

Logging goes through Prefect's logger hierarchy so that build runs embedded in
Prefect flows show up in the flow's run logs. Configuration is read from a YAML
file when one is provided, otherwise each pipeline component gets a console
logger at its default level.

Usage:
    >>> from doctree_core.logging import get_pipeline_logger
    >>> logger = get_pipeline_logger(__name__)
    >>> logger.info("Nesting 42 entities")

Environment variables:
    DOCTREE_LOGGING_CONFIG: Path to custom logging.yml
    DOCTREE_LOG_LEVEL: Level for the doctree_core logger (INFO, DEBUG, etc.)
"""

import logging.config
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from prefect.logging import get_logger

# Default log levels for the pipeline components; Prefect prefixes each with "prefect."
DEFAULT_LOG_LEVELS = {
    "doctree_core": "INFO",
    "doctree_core.infer": "INFO",
    "doctree_core.hierarchy": "INFO",
    "doctree_core.pipeline": "INFO",
}


class LoggingConfig:
    """Manages logging configuration for the build pipeline.

    @public

    Configuration precedence:
        1. Explicit config_path parameter
        2. DOCTREE_LOGGING_CONFIG environment variable
        3. Per-component defaults from DEFAULT_LOG_LEVELS

    Example:
        >>> config = LoggingConfig()
        >>> config.apply()

    Note:
        Configuration is lazy-loaded and cached after first access.
    """

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or self._get_default_config_path()
        self._config: Optional[Dict[str, Any]] = None

    @staticmethod
    def _get_default_config_path() -> Optional[Path]:
        if env_path := os.environ.get("DOCTREE_LOGGING_CONFIG"):
            return Path(env_path)
        return None

    def load_config(self) -> Dict[str, Any]:
        """Load logging configuration from file or defaults.

        Returns:
            Dictionary in logging.config.dictConfig format.

        Note:
            Configuration is cached after first load. Create a new
            LoggingConfig instance to reload from disk.
        """
        if self._config is None:
            if self.config_path and self.config_path.exists():
                with open(self.config_path, "r") as f:
                    self._config = yaml.safe_load(f)
            else:
                self._config = self._get_default_config()
        assert self._config is not None
        return self._config

    @staticmethod
    def _get_default_config() -> Dict[str, Any]:
        """Get default logging configuration.

        The package logger takes DOCTREE_LOG_LEVEL when set; component loggers
        propagate to it.

        Default format:
            "HH:MM:SS.mmm | LEVEL | logger.name - message"
        """
        loggers: Dict[str, Any] = {
            f"prefect.{name}": {"level": level} for name, level in DEFAULT_LOG_LEVELS.items()
        }
        loggers["prefect.doctree_core"] = {
            "level": os.environ.get("DOCTREE_LOG_LEVEL", DEFAULT_LOG_LEVELS["doctree_core"]),
            "handlers": ["console"],
            "propagate": False,
        }
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": "%(asctime)s.%(msecs)03d | %(levelname)-7s | %(name)s - %(message)s",
                    "datefmt": "%H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "stream": "ext://sys.stderr",
                },
            },
            "loggers": loggers,
            "root": {
                "level": "WARNING",
                "handlers": ["console"],
            },
        }

    def apply(self):
        """Apply the logging configuration to Python's logging system."""
        logging.config.dictConfig(self.load_config())


# Global configuration instance
_logging_config: Optional[LoggingConfig] = None


def setup_logging(config_path: Optional[Path] = None, level: Optional[str] = None):
    """Setup logging for DocTree Core.

    @public

    Args:
        config_path: Optional path to YAML logging configuration file.
        level: Optional log level override applied to every component logger.

    Example:
        >>> setup_logging(level="DEBUG")
    """
    global _logging_config

    _logging_config = LoggingConfig(config_path)
    _logging_config.apply()

    if level:
        for logger_name in DEFAULT_LOG_LEVELS:
            get_logger(logger_name).setLevel(level)


def get_pipeline_logger(name: str):
    """Get a Prefect-integrated logger for DocTree components.

    @public

    Automatically initializes logging if not already configured.

    Args:
        name: Logger name, typically __name__.

    Example:
        >>> logger = get_pipeline_logger(__name__)
        >>> logger.debug("dropped %d unclassifiable entities", 3)
    """
    if _logging_config is None:
        setup_logging()

    return get_logger(name)
