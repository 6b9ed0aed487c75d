"""
Structured logging for epoch-date.

Entries go to stderr so that library diagnostics never mix with a host
program's stdout.
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Literal, Protocol

LogSeverity = Literal["debug", "info", "warn"]
# "error" only raises the threshold; nothing here logs at that level
LogLevel = Literal["debug", "info", "warn", "error"]
LogOutputFormat = Literal["json", "human"]

SEVERITY_LEVELS: dict[LogLevel, int] = {"debug": 0, "info": 1, "warn": 2, "error": 3}

RESET = "\x1b[0m"
COLORS = {"debug": "\x1b[36m", "info": "\x1b[32m", "warn": "\x1b[33m"}


class Logger(Protocol):
    def debug(self, message: str, fields: dict[str, Any] | None = None) -> None: ...
    def info(self, message: str, fields: dict[str, Any] | None = None) -> None: ...
    def warn(self, message: str, fields: dict[str, Any] | None = None) -> None: ...


@dataclass
class LogEntry:
    timestamp: str
    severity: LogSeverity
    message: str
    service_name: str
    scope_id: str | None = None
    fields: dict[str, Any] = field(default_factory=dict)


@dataclass
class DiagnosticConfig:
    minimum_severity: LogLevel = "info"
    output_format: LogOutputFormat = "human"


def format_log_entry(entry: LogEntry, fmt: LogOutputFormat) -> str:
    if fmt == "json":
        data = {
            "timestamp": entry.timestamp,
            "severity": entry.severity,
            "message": entry.message,
            "serviceName": entry.service_name,
            "fields": entry.fields,
        }
        if entry.scope_id:
            data["scopeId"] = entry.scope_id
        return json.dumps(data, default=str)

    color = COLORS[entry.severity]
    scope = f"{entry.service_name}.{entry.scope_id}" if entry.scope_id else entry.service_name
    parts = [f"{color}{entry.severity}{RESET}", f'process="{scope}"', f'msg="{entry.message}"']
    parts.extend(f"{k}={json.dumps(v, default=str)}" for k, v in entry.fields.items())
    return " ".join(parts)


class _Logger:
    def __init__(self, service: str, scope_id: str | None, config: DiagnosticConfig):
        self.service = service
        self.scope_id = scope_id
        self.cfg = config
        self.min_level = SEVERITY_LEVELS[config.minimum_severity]

    def _emit(self, severity: LogSeverity, message: str, fields: dict[str, Any] | None):
        if SEVERITY_LEVELS[severity] < self.min_level:
            return
        entry = LogEntry(
            timestamp=datetime.now(UTC).isoformat(),
            severity=severity,
            message=message,
            service_name=self.service,
            scope_id=self.scope_id,
            fields=fields or {},
        )
        print(format_log_entry(entry, self.cfg.output_format), file=sys.stderr)

    def debug(self, msg: str, fields: dict[str, Any] | None = None):
        self._emit("debug", msg, fields)

    def info(self, msg: str, fields: dict[str, Any] | None = None):
        self._emit("info", msg, fields)

    def warn(self, msg: str, fields: dict[str, Any] | None = None):
        self._emit("warn", msg, fields)


def create_logger(
    service: str, scope_id: str | None = None, cfg: DiagnosticConfig | None = None
) -> Logger:
    return _Logger(service, scope_id, cfg or DiagnosticConfig())
