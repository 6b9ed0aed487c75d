"""Conversion between epoch milliseconds and calendar dates."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta, tzinfo

from .environment import ambient_zone, create_logger_from_env
from .zones import ZoneLike, resolve_zone, zone_key

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
MILLIS_PER_DAY = 86_400_000

_ONE_MILLI = timedelta(milliseconds=1)

# Instants representable by datetime, expressed in UTC.
MIN_EPOCH_MILLIS = (datetime.min.replace(tzinfo=UTC) - EPOCH) // _ONE_MILLI
MAX_EPOCH_MILLIS = (datetime.max.replace(tzinfo=UTC) - EPOCH) // _ONE_MILLI


def _zone_or_ambient(zone: ZoneLike | None) -> tzinfo | None:
    return ambient_zone() if zone is None else resolve_zone(zone)


def _to_date(millis: int, tz: tzinfo | None) -> date:
    instant = EPOCH + timedelta(milliseconds=millis)
    # tz=None selects the C library's local time
    return instant.astimezone(tz).date()


def _start_of_day(day: date, tz: tzinfo | None) -> int:
    midnight = datetime.combine(day, time.min, tzinfo=tz)
    if tz is None:
        midnight = midnight.astimezone()
    return (midnight - EPOCH) // _ONE_MILLI


def epoch_millis_to_local_date(millis: int, zone: ZoneLike | None = None) -> date:
    """Return the calendar date of an epoch-millisecond instant in a time zone.

    Args:
        millis: Milliseconds since 1970-01-01T00:00:00Z, negative before the epoch.
        zone: Zone name or tzinfo. When omitted the process local zone is read
            at call time: an IANA name in ``TZ`` through ``zoneinfo``, anything
            else through the C library.

    Raises:
        OverflowError: The instant, or its wall time in ``zone``, lies outside
            the range datetime can represent.
    """
    return _to_date(millis, _zone_or_ambient(zone))


def local_date_to_epoch_millis(day: date, zone: ZoneLike | None = None) -> int:
    """Return the epoch milliseconds of the first instant of ``day`` in ``zone``.

    If local midnight falls into a DST gap the first existing instant of the
    day is returned; a repeated midnight resolves to its earlier occurrence.
    """
    return _start_of_day(day, _zone_or_ambient(zone))


@dataclass(frozen=True)
class LocalDateConverter:
    """Epoch-millisecond conversions pinned to one zone.

    A ``zone`` of ``None`` means the C library's local time.
    """

    zone: tzinfo | None

    @classmethod
    def for_zone(cls, zone: ZoneLike) -> LocalDateConverter:
        return cls(resolve_zone(zone))

    @classmethod
    def from_env(cls, source: Mapping[str, str | None] | None = None) -> LocalDateConverter:
        """Resolve ``TZ`` once instead of on every call."""
        converter = cls(ambient_zone(source))
        logger = create_logger_from_env("converter", source)
        logger.debug("Pinned local date converter", {"zone": converter.zone_name})
        return converter

    @property
    def zone_name(self) -> str:
        return zone_key(self.zone)

    def to_local_date(self, millis: int) -> date:
        return _to_date(millis, self.zone)

    def start_of_day_millis(self, day: date) -> int:
        return _start_of_day(day, self.zone)
