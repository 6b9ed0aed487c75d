"""
Environment configuration parsing and validation.

Provides:
- Typed parsing of environment variables into Pydantic models
- Resolution of the ambient time zone from ``TZ``
- Logging configuration that falls back to defaults on bad values
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import tzinfo
from typing import Any, TypeVar

from pydantic import BaseModel, Field, ValidationError, field_validator

from .diagnostics import DiagnosticConfig, Logger, LogLevel, LogOutputFormat, create_logger
from .zones import normalize_zone_name, resolve_tz_setting

# ---------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------


class AmbientEnv(BaseModel):
    """The process time-zone setting.

    An unset ``TZ`` leaves the choice to the C library, which reads the host
    configuration (``/etc/localtime`` on Linux).
    """

    TZ: str | None = Field(
        default=None, description="IANA name or POSIX rule string; unset means host local time"
    )

    @field_validator("TZ")
    @classmethod
    def _validate_zone(cls, value: str | None) -> str | None:
        if value is None:
            return None
        name = normalize_zone_name(value)
        if not name:
            return None
        resolve_tz_setting(name)
        return name

    @property
    def zone(self) -> tzinfo | None:
        """tzinfo for IANA names, ``None`` where the C library's local time applies."""
        return None if self.TZ is None else resolve_tz_setting(self.TZ)


class LoggingEnv(BaseModel):
    PROCESS_NAME: str = Field(
        default="epoch-date", min_length=1, description="Service name used in log entries"
    )
    LOG_LEVEL: LogLevel = Field(default="info", description="Minimum log severity")
    LOG_FORMAT: LogOutputFormat = Field(default="human", description="Log output format")

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _normalize_level(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        value = value.strip().lower()
        return "warn" if value == "warning" else value

    @field_validator("LOG_FORMAT", mode="before")
    @classmethod
    def _normalize_format(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value


T = TypeVar("T", bound=BaseModel)

# ---------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------


@dataclass
class EnvValidationError:
    """Validation error for a single environment variable."""

    path: str
    message: str
    value: Any = None

    def __str__(self) -> str:
        val = f" (value={self.value!r})" if self.value is not None else ""
        return f"{self.path}: {self.message}{val}"


class EnvConfigurationError(ValueError):
    """Raised when the environment does not satisfy the schema."""

    def __init__(self, errors: list[EnvValidationError]):
        self.errors = errors
        super().__init__(format_validation_errors(errors))


def format_validation_errors(errors: list[EnvValidationError]) -> str:
    lines = ["Environment configuration validation failed:"]
    for err in errors:
        val_part = f", got {json.dumps(err.value, default=str)}" if err.value is not None else ""
        lines.append(f"  - {err.path}: {err.message}{val_part}")
    return "\n".join(lines)


def convert_pydantic_errors(
    exc: ValidationError, source: Mapping[str, Any]
) -> list[EnvValidationError]:
    results: list[EnvValidationError] = []
    for err in exc.errors():
        path = ".".join(str(x) for x in err["loc"]) or "root"
        value = source.get(err["loc"][0]) if err["loc"] else None
        results.append(EnvValidationError(path, err["msg"], value))
    return results


# ---------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------


@dataclass
class EnvParserConfig:
    source: Mapping[str, str | None] | None = None

    def __post_init__(self):
        if self.source is None:
            self.source = dict(os.environ)


class EnvParser:
    """Validate string environment variables against a Pydantic model."""

    def _read_source(self, source: Mapping[str, str | None], model: type[T]) -> dict[str, str]:
        return {
            name: source[name]
            for name in model.model_fields
            if source.get(name) not in (None, "")
        }

    def parse(self, model: type[T], config: EnvParserConfig | None = None) -> T:
        """Parse the environment into a validated model, raising on failure."""
        config = config or EnvParserConfig()
        values = self._read_source(config.source, model)
        try:
            return model.model_validate(values)
        except ValidationError as e:
            raise EnvConfigurationError(convert_pydantic_errors(e, values)) from e

    def parse_or_default(
        self, model: type[T], config: EnvParserConfig | None = None
    ) -> tuple[T, list[EnvValidationError]]:
        """Parse the environment, replacing invalid variables with their defaults."""
        config = config or EnvParserConfig()
        values = self._read_source(config.source, model)
        try:
            return model.model_validate(values), []
        except ValidationError as e:
            errors = convert_pydantic_errors(e, values)

        invalid = {err.path.split(".")[0] for err in errors}
        valid = {k: v for k, v in values.items() if k not in invalid}
        return model.model_validate(valid), errors


def create_env_context(model: type[T], config: EnvParserConfig | None = None) -> T:
    return EnvParser().parse(model, config)


def _parser_config(source: Mapping[str, str | None] | None) -> EnvParserConfig | None:
    return None if source is None else EnvParserConfig(source=dict(source))


def ambient_zone(source: Mapping[str, str | None] | None = None) -> tzinfo | None:
    """Resolve the process time zone from ``TZ`` at call time.

    ``source`` defaults to ``os.environ``. Returns ``None`` when the C
    library's local time applies: ``TZ`` unset, empty, or a POSIX rule string.
    A ``TZ`` that is neither an IANA name nor a POSIX rule raises
    ``EnvConfigurationError``.
    """
    return create_env_context(AmbientEnv, _parser_config(source)).zone


def create_logger_from_env(
    scope_id: str | None = None, source: Mapping[str, str | None] | None = None
) -> Logger:
    """Create a logger configured from ``LOG_LEVEL`` and ``LOG_FORMAT``.

    Invalid settings fall back to their defaults and are reported as warnings.
    """
    env, errors = EnvParser().parse_or_default(LoggingEnv, _parser_config(source))
    logger = create_logger(
        env.PROCESS_NAME,
        scope_id,
        DiagnosticConfig(minimum_severity=env.LOG_LEVEL, output_format=env.LOG_FORMAT),
    )
    for err in errors:
        logger.warn(
            "Ignoring invalid logging setting",
            {"variable": err.path, "value": err.value, "reason": err.message},
        )
    return logger
