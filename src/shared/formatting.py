"""Display formatting helpers.

Pure functions that render provider values in the configured unit system.
Missing values render as a placeholder instead of failing.
"""

from datetime import datetime, timezone
from typing import Literal
from zoneinfo import ZoneInfo

from src.shared.config.settings import UnitSystem
from src.shared.constants import MISSING_VALUE

DateTimeStyle = Literal["date", "time", "day", "datetime"]

TEMPERATURE_SUFFIXES: dict[UnitSystem, str] = {
    UnitSystem.METRIC: "°C",
    UnitSystem.IMPERIAL: "°F",
    UnitSystem.STANDARD: "K",
}

# strftime patterns for English output; other languages fall back to these
_DATE_PATTERNS: dict[str, str] = {
    "date": "%b {day}, %Y",
    "time": "%I:%M %p",
    "day": "%a, %b {day}",
    "datetime": "%b {day}, %Y, %I:%M %p",
}


def _unit_system(units: UnitSystem | str) -> UnitSystem:
    return units if isinstance(units, UnitSystem) else UnitSystem(units)


def format_temperature(
    value: float | None,
    units: UnitSystem | str = UnitSystem.METRIC,
    decimals: int = 1,
) -> str:
    """Format a temperature with its unit suffix.

    Args:
        value: Temperature in the given unit system
        units: Unit system the value is expressed in
        decimals: Decimal places to keep

    Returns:
        Formatted temperature (e.g., "21.5°C"), or "--" when missing

    Example:
        >>> format_temperature(21.549, units="metric", decimals=1)
        '21.5°C'
    """
    if value is None:
        return MISSING_VALUE

    suffix = TEMPERATURE_SUFFIXES[_unit_system(units)]
    return f"{float(value):.{decimals}f}{suffix}"


def format_wind_speed(value: float | None, units: UnitSystem | str = UnitSystem.METRIC) -> str:
    """Format a wind speed: mph for imperial, m/s otherwise."""
    if value is None:
        return MISSING_VALUE

    if _unit_system(units) is UnitSystem.IMPERIAL:
        return f"{float(value):.1f} mph"
    return f"{float(value):.1f} m/s"


def format_date_time(
    timestamp: int | float | None,
    style: DateTimeStyle = "datetime",
    language: str = "en",
    tz: str = "UTC",
) -> str:
    """Format a unix timestamp for display.

    Args:
        timestamp: Unix timestamp in seconds
        style: One of "date", "time", "day", "datetime"
        language: Language code (output currently follows English conventions)
        tz: IANA timezone to render in

    Returns:
        Formatted string, or "--" when the timestamp is missing
    """
    if not timestamp:
        return MISSING_VALUE

    moment = datetime.fromtimestamp(timestamp, tz=timezone.utc).astimezone(ZoneInfo(tz))
    pattern = _DATE_PATTERNS.get(style, _DATE_PATTERNS["datetime"])
    # %d zero-pads; day numbers are rendered without padding
    return moment.strftime(pattern.replace("{day}", str(moment.day)))
