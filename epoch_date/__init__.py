"""epoch-date.

Converts epoch-millisecond timestamps into calendar dates:
- Conversion in an explicit zone or the process local zone
- Start-of-day inverse for bucketing instants into local days
- Environment configuration parsing and validation
- Structured logging
"""

from .conversion import (
    EPOCH,
    MAX_EPOCH_MILLIS,
    MILLIS_PER_DAY,
    MIN_EPOCH_MILLIS,
    LocalDateConverter,
    epoch_millis_to_local_date,
    local_date_to_epoch_millis,
)
from .diagnostics import DiagnosticConfig, Logger, create_logger
from .environment import (
    AmbientEnv,
    EnvConfigurationError,
    EnvParser,
    EnvParserConfig,
    EnvValidationError,
    LoggingEnv,
    ambient_zone,
    create_env_context,
    create_logger_from_env,
)
from .zones import InvalidTimeZoneError, ZoneLike, resolve_tz_setting, resolve_zone, zone_key

__all__ = [
    # Conversion
    "EPOCH",
    "MILLIS_PER_DAY",
    "MIN_EPOCH_MILLIS",
    "MAX_EPOCH_MILLIS",
    "LocalDateConverter",
    "epoch_millis_to_local_date",
    "local_date_to_epoch_millis",
    # Zones
    "InvalidTimeZoneError",
    "ZoneLike",
    "resolve_tz_setting",
    "resolve_zone",
    "zone_key",
    # Environment
    "AmbientEnv",
    "LoggingEnv",
    "EnvConfigurationError",
    "EnvParser",
    "EnvParserConfig",
    "EnvValidationError",
    "ambient_zone",
    "create_env_context",
    "create_logger_from_env",
    # Diagnostics
    "Logger",
    "DiagnosticConfig",
    "create_logger",
]

__version__ = "0.1.0"
