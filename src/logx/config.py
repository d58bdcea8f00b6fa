"""Environment-driven logger configuration.

Loggers never read the environment on their own. Applications that want
environment control build options from a ``LoggingConfig`` explicitly:

    >>> config = LoggingConfig.from_env()
    >>> config.validate()
    >>> logger = register("worker", config.to_options())
"""

import os
from dataclasses import dataclass
from typing import Optional

from logx.options import (
    Options,
    OptionsFunc,
    new_options,
    with_add_source,
    with_level,
    with_output,
    with_output_file,
)

VALID_LEVELS = ("DEBUG", "INFO", "WARN", "WARNING", "ERROR", "CRITICAL")


@dataclass
class LoggingConfig:
    """Configuration for a module logger."""

    level: str = "INFO"
    add_source: bool = True
    output_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        """Create configuration from environment variables.

        Environment Variables:
            LOGX_LEVEL: Log level - DEBUG, INFO, WARN, ERROR (default: INFO)
            LOGX_ADD_SOURCE: Include call site in records (default: true)
            LOGX_FILE: Log file path (optional, defaults to stdout)
        """
        return cls(
            level=os.getenv("LOGX_LEVEL", "INFO").upper(),
            add_source=os.getenv("LOGX_ADD_SOURCE", "true").lower() == "true",
            output_file=os.getenv("LOGX_FILE"),
        )

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If the level is not a known level name.
        """
        if self.level.upper() not in VALID_LEVELS:
            raise ValueError(
                f"Invalid log level: {self.level}. Must be one of {VALID_LEVELS}"
            )

    def to_options(self, *option_fns: OptionsFunc) -> Options:
        """Build logger options from this configuration.

        The log file, if any, is opened by the logger created with these
        options. Additional option functions are applied after the
        configured values.
        """
        output_fn = (
            with_output_file(self.output_file)
            if self.output_file
            else with_output(None)
        )
        return new_options(
            with_level(self.level),
            with_add_source(self.add_source),
            output_fn,
            *option_fns,
        )

