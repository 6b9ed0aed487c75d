"""Time-zone lookup for explicit zone arguments and the TZ setting."""

from __future__ import annotations

import re
from datetime import UTC, tzinfo
from typing import TypeAlias
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

ZoneLike: TypeAlias = str | tzinfo

# POSIX TZ strings such as "JST-9" or "CET-1CEST,M3.5.0,M10.5.0/3"
_NAME = r"(?:[A-Za-z]{3,}|<[A-Za-z0-9+-]{3,}>)"
_OFFSET = r"[+-]?\d{1,2}(?::\d{2}){0,2}"
_RULE = r"(?:J\d{1,3}|\d{1,3}|M\d{1,2}\.\d\.\d)(?:/[+-]?\d{1,3}(?::\d{2}){0,2})?"
POSIX_TZ_PATTERN = re.compile(rf"^{_NAME}{_OFFSET}(?:{_NAME}(?:{_OFFSET})?(?:,{_RULE},{_RULE})?)?$")


class InvalidTimeZoneError(ValueError):
    """Raised when a zone name does not resolve to a known zone."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Unknown time zone {name!r}: {reason}")


def normalize_zone_name(name: str) -> str:
    # POSIX allows TZ=":Area/City"
    return name.strip().removeprefix(":")


def resolve_zone(zone: ZoneLike) -> tzinfo:
    """Return a tzinfo for a zone name, or the tzinfo itself when one is given.

    Names are looked up in the IANA database through ``zoneinfo``; ``"UTC"``
    resolves to ``datetime.UTC``.
    """
    if isinstance(zone, tzinfo):
        return zone

    name = normalize_zone_name(zone)
    if not name:
        raise InvalidTimeZoneError(zone, "zone name is empty")
    if name.upper() == "UTC":
        return UTC

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise InvalidTimeZoneError(name, str(e) or type(e).__name__) from e


def resolve_tz_setting(value: str) -> tzinfo | None:
    """Resolve a TZ value.

    Returns a tzinfo for IANA names and ``None`` for POSIX rule strings, which
    only the C library's local time can apply.
    """
    try:
        return resolve_zone(value)
    except InvalidTimeZoneError:
        if POSIX_TZ_PATTERN.match(normalize_zone_name(value)):
            return None
        raise


def zone_key(zone: tzinfo | None) -> str:
    if zone is None:
        return "local"
    key = getattr(zone, "key", None)
    return key if key else str(zone)
