"""Configuration module for icsexport."""

from icsexport.config.settings import EXPORT_CONFIG, ExportConfig
from icsexport.config.constants import (
    CRLF,
    MAX_LINE_LENGTH,
    ICS_PRODID,
    UID_DOMAIN,
    ICS_MIME_TYPE,
    ICS_EXTENSION,
    DEFAULT_BATCH_FILENAME,
)

__all__ = [
    "EXPORT_CONFIG",
    "ExportConfig",
    "CRLF",
    "MAX_LINE_LENGTH",
    "ICS_PRODID",
    "UID_DOMAIN",
    "ICS_MIME_TYPE",
    "ICS_EXTENSION",
    "DEFAULT_BATCH_FILENAME",
]
