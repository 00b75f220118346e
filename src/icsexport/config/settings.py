"""Runtime settings for calendar export."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Union

from dotenv import dotenv_values

from icsexport.config.constants import (
    DEFAULT_BATCH_FILENAME,
    ENV_DEFAULT_FILENAME,
    ENV_LOCAL_TIMEZONE,
    ENV_OUTPUT_DIR,
    ENV_SKIP_INVALID,
)

logger = logging.getLogger(__name__)

TRUTHY_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ExportConfig:
    """Settings shared by the builder, delivery helpers and the CLI."""

    # "local" resolves to the system zone; used for naive datetimes
    # and for the calendar date of all-day events
    local_timezone: str = "local"
    output_dir: str = "."
    default_filename: str = DEFAULT_BATCH_FILENAME
    skip_invalid: bool = False

    @classmethod
    def from_env(
        cls,
        env_file: Optional[Union[str, Path]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "ExportConfig":
        """Build settings from a .env file and the process environment.

        Process environment values take precedence over the .env file.

        Args:
            env_file: Optional path to a .env file.
            environ: Environment mapping (default: os.environ).

        Returns:
            A populated ExportConfig.
        """
        values = {}
        if env_file is not None:
            path = Path(env_file)
            if path.exists():
                values.update({k: v for k, v in dotenv_values(path).items() if v is not None})
            else:
                logger.debug("No .env file at %s", path)

        values.update(os.environ if environ is None else environ)

        defaults = cls()
        skip_raw = values.get(ENV_SKIP_INVALID)
        return cls(
            local_timezone=values.get(ENV_LOCAL_TIMEZONE) or defaults.local_timezone,
            output_dir=values.get(ENV_OUTPUT_DIR) or defaults.output_dir,
            default_filename=values.get(ENV_DEFAULT_FILENAME) or defaults.default_filename,
            skip_invalid=(
                skip_raw.strip().lower() in TRUTHY_VALUES
                if skip_raw is not None
                else defaults.skip_invalid
            ),
        )


EXPORT_CONFIG = ExportConfig()
