"""Centralized constants for icsexport.

Format constants follow RFC 5545; product identifiers are fixed so that
repeated exports of the same event produce the same UID.
"""

# RFC 5545 line handling
CRLF = "\r\n"
MAX_LINE_LENGTH = 75

# ICS calendar envelope
ICS_VERSION = "2.0"
ICS_PRODID = "-//First Responder Connect//Events//EN"
ICS_CALSCALE = "GREGORIAN"
ICS_METHOD = "PUBLISH"

# Appended to event ids to build globally unique UIDs
UID_DOMAIN = "first-responder-connect"

# Delivery
ICS_MIME_TYPE = "text/calendar; charset=utf-8"
ICS_EXTENSION = ".ics"
ICS_ENCODING = "utf-8"
DEFAULT_BATCH_FILENAME = "events"

# Environment variables read by ExportConfig.from_env()
ENV_PREFIX = "ICS_EXPORT_"
ENV_LOCAL_TIMEZONE = ENV_PREFIX + "LOCAL_TIMEZONE"
ENV_OUTPUT_DIR = ENV_PREFIX + "OUTPUT_DIR"
ENV_DEFAULT_FILENAME = ENV_PREFIX + "DEFAULT_FILENAME"
ENV_SKIP_INVALID = ENV_PREFIX + "SKIP_INVALID"

# Timezone abbreviation to IANA zone mapping
# Maps common (and DST) abbreviations to canonical IANA zones that understand DST
ABBR_TO_TZ = {
    # North America
    "EST": "America/New_York",
    "EDT": "America/New_York",
    "CST": "America/Chicago",
    "CDT": "America/Chicago",
    "MST": "America/Denver",
    "MDT": "America/Denver",
    "PST": "America/Los_Angeles",
    "PDT": "America/Los_Angeles",
    "AKST": "America/Anchorage",
    "AKDT": "America/Anchorage",
    "HST": "Pacific/Honolulu",
    # United Kingdom / Europe
    "GMT": "Europe/London",
    "BST": "Europe/London",
    "CET": "Europe/Paris",
    "CEST": "Europe/Paris",
}
