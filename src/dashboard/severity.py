"""Alert severity classification.

Severity is derived from an ordered keyword table: levels are checked in
declaration order and the first keyword found in the alert's event or
description wins. Alerts matching nothing are moderate.
"""

from collections.abc import Mapping, Sequence

from src.shared.api.response_models import Alert
from src.shared.constants import SEVERITY_KEYWORDS
from src.shared.models.snapshot import AlertSeverity

SeverityTable = Mapping[AlertSeverity, Sequence[str]]

DEFAULT_SEVERITY = AlertSeverity.MODERATE


def build_severity_table(keywords: Mapping[str, Sequence[str]]) -> dict[AlertSeverity, list[str]]:
    """Convert a settings-style table (level name -> keywords) into a SeverityTable.

    Declaration order is preserved.
    """
    return {AlertSeverity(level.lower()): list(words) for level, words in keywords.items()}


DEFAULT_SEVERITY_TABLE: dict[AlertSeverity, list[str]] = build_severity_table(SEVERITY_KEYWORDS)


def classify_severity(alert: Alert, table: SeverityTable | None = None) -> AlertSeverity:
    """Classify an alert by case-insensitive keyword match.

    Args:
        alert: Alert to classify
        table: Ordered severity -> keywords table (defaults to built-in table)

    Returns:
        First matching severity, or MODERATE when nothing matches

    Example:
        >>> classify_severity(Alert(event="Tornado Warning", start=1000, end=2000))
        <AlertSeverity.SEVERE: 'severe'>
    """
    table = DEFAULT_SEVERITY_TABLE if table is None else table
    event = alert.event.lower()
    description = alert.description.lower()

    for severity, keywords in table.items():
        for keyword in keywords:
            needle = keyword.lower()
            if needle in event or needle in description:
                return severity

    return DEFAULT_SEVERITY
