"""Date normalisation for heterogeneous upstream timestamps.

Upstream APIs and article pages mix ISO 8601 strings, RFC 2822 strings and
numeric epoch values (seconds or milliseconds).  :func:`parse_date` folds all
of them into a timezone-aware UTC :class:`~datetime.datetime`.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

logger = logging.getLogger(__name__)

#: Numeric epoch values above this threshold are interpreted as milliseconds.
_EPOCH_MILLIS_THRESHOLD: float = 1e11


def _to_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _from_epoch(value: float) -> datetime:
    if abs(value) > _EPOCH_MILLIS_THRESHOLD:
        value = value / 1000
    return datetime.fromtimestamp(value, tz=timezone.utc)


def parse_date(value: str | int | float | datetime | None) -> datetime | None:
    """Parse an upstream timestamp into a timezone-aware UTC datetime.

    Args:
        value: ISO 8601 string (``Z`` suffix allowed), RFC 2822 string,
            epoch seconds or milliseconds (number or numeric string), or an
            existing datetime.  Naive values are assumed to be UTC.

    Returns:
        A UTC :class:`datetime`, or ``None`` when the input is empty or
        cannot be parsed.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return _to_utc(value)
    if isinstance(value, (int, float)):
        try:
            return _from_epoch(float(value))
        except (OverflowError, OSError, ValueError):
            logger.warning("dates: epoch value out of range: %r", value)
            return None

    text = str(value).strip()
    if not text:
        return None

    try:
        return _from_epoch(float(text))
    except ValueError:
        pass
    except (OverflowError, OSError):
        logger.warning("dates: epoch value out of range: %r", text)
        return None

    try:
        return _to_utc(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        pass

    try:
        return _to_utc(parsedate_to_datetime(text))
    except (TypeError, ValueError, IndexError):
        pass

    logger.warning("dates: could not parse date '%s'", text)
    return None
