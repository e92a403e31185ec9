"""Date helpers for backend timestamps and user-facing labels (Spanish UI)."""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Mapping

_MONTHS_SHORT = ("ene", "feb", "mar", "abr", "may", "jun", "jul", "ago", "sep", "oct", "nov", "dic")
_MONTHS_LONG = (
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
)


def coerce_timestamp(value: Any) -> datetime | None:
    """Normalise ISO strings, Firestore ``{_seconds, _nanoseconds}`` maps and datetimes.

    Naive datetimes are assumed to be UTC.
    """

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, Mapping):
        seconds = value.get("_seconds", value.get("seconds"))
        if seconds is None:
            raise ValueError(f"Unsupported timestamp mapping: {dict(value)!r}")
        nanos = value.get("_nanoseconds", value.get("nanoseconds")) or 0
        return datetime.fromtimestamp(int(seconds) + int(nanos) / 1_000_000_000, tz=timezone.utc)
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    raise ValueError(f"Unsupported timestamp value: {value!r}")


def to_firestore_timestamp(moment: datetime) -> dict[str, int]:
    return {"_seconds": int(moment.timestamp()), "_nanoseconds": 0}


def _now() -> datetime:
    return datetime.now(timezone.utc)


def format_short_date(moment: date) -> str:
    """``7 nov 2025``"""

    return f"{moment.day} {_MONTHS_SHORT[moment.month - 1]} {moment.year}"


def format_long_date(moment: date) -> str:
    """``7 de noviembre de 2025``"""

    return f"{moment.day} de {_MONTHS_LONG[moment.month - 1]} de {moment.year}"


def format_month_day(moment: date) -> str:
    return f"{moment.day} {_MONTHS_SHORT[moment.month - 1]}"


def format_input_date(moment: date) -> str:
    return f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"


def _plural(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


def format_relative_date(moment: datetime, *, now: datetime | None = None) -> str:
    """Day-granularity label: ``Hoy``, ``Ayer``, ``Hace 3 días`` ... ``Hace 2 años``."""

    reference = now or _now()
    diff_days = int((reference - moment).total_seconds() // 86400)
    if diff_days <= 0:
        return "Hoy"
    if diff_days == 1:
        return "Ayer"
    if diff_days < 7:
        return f"Hace {diff_days} días"
    if diff_days < 30:
        weeks = diff_days // 7
        return f"Hace {weeks} {_plural(weeks, 'semana', 'semanas')}"
    if diff_days < 365:
        months = diff_days // 30
        return f"Hace {months} {_plural(months, 'mes', 'meses')}"
    years = diff_days // 365
    return f"Hace {years} {_plural(years, 'año', 'años')}"


def format_elapsed_short(moment: datetime, *, now: datetime | None = None) -> str:
    """Compact chat label: ``Ahora``, ``5m``, ``3h``, ``2d`` or ``7 nov``."""

    reference = now or _now()
    seconds = (reference - moment).total_seconds()
    minutes = int(seconds // 60)
    hours = int(seconds // 3600)
    days = int(seconds // 86400)
    if minutes < 1:
        return "Ahora"
    if minutes < 60:
        return f"{minutes}m"
    if hours < 24:
        return f"{hours}h"
    if days < 7:
        return f"{days}d"
    return format_month_day(moment)


def format_elapsed_long(moment: datetime, *, now: datetime | None = None) -> str:
    """Forum label: ``Hace unos minutos``, ``Hace 3h``, ``Hace 2d`` or ``7 nov``."""

    reference = now or _now()
    seconds = (reference - moment).total_seconds()
    hours = int(seconds // 3600)
    days = int(seconds // 86400)
    if hours < 1:
        return "Hace unos minutos"
    if hours < 24:
        return f"Hace {hours}h"
    if days < 7:
        return f"Hace {days}d"
    return format_month_day(moment)


def format_days_ago(days_ago: int) -> str:
    if days_ago == 0:
        return "Hoy"
    if days_ago == 1:
        return "Ayer"
    if days_ago < 7:
        return f"Hace {days_ago} días"
    if days_ago < 30:
        weeks = days_ago // 7
        return f"Hace {weeks} {_plural(weeks, 'semana', 'semanas')}"
    months = days_ago // 30
    return f"Hace {months} {_plural(months, 'mes', 'meses')}"


__all__ = [
    "coerce_timestamp",
    "to_firestore_timestamp",
    "format_short_date",
    "format_long_date",
    "format_month_day",
    "format_input_date",
    "format_relative_date",
    "format_elapsed_short",
    "format_elapsed_long",
    "format_days_ago",
]
