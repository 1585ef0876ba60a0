"""Logging infrastructure for DocTree Core.

@public

Prefect-integrated logging shared by every pipeline stage.

Key components:
    get_pipeline_logger: Factory function for creating pipeline loggers
    setup_logging: Initialize logging configuration from YAML
    LoggingConfig: Configuration class for logging settings

Note:
    Never import Python's logging module directly in pipeline code. Always use
    get_pipeline_logger() for consistent Prefect integration.
"""

from .logging_config import LoggingConfig, get_pipeline_logger, setup_logging

__all__ = [
    "LoggingConfig",
    "setup_logging",
    "get_pipeline_logger",
]
