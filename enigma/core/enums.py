"""Core enumerations for the query protocol.

Architecture:
    String enums keep the wire values next to their Python names. Builders
    accept either an enum member or its plain string value, and serialize with
    ``str(member.value)`` so the wire format never depends on enum reprs.

Key Types:
    - Endpoint: Remote capability addressed by a request (meta/data/stats/export)
    - Conjunction: How multiple search/where clauses combine
    - SortDirection: One-character direction marker appended to sort values
    - Operation: Statistic computed by a stats request
"""

from enum import Enum


class Endpoint(str, Enum):
    """Endpoint kind segment of the request address."""

    META = "meta"
    DATA = "data"
    STATS = "stats"
    EXPORT = "export"


class Conjunction(str, Enum):
    """Logical link between multiple search or where parameters."""

    AND = "and"
    OR = "or"


class SortDirection(str, Enum):
    """Direction in which a column or calculation result is sorted."""

    ASC = "+"
    DESC = "-"


class Operation(str, Enum):
    """Calculation a stats request can perform on a selected column.

    Numerical columns accept every operation, date columns accept
    ``MAX``, ``MIN`` and ``FREQUENCY``, all other columns only ``FREQUENCY``.
    Compound operations (``by``) are limited to ``SUM`` and ``AVG``. None of
    this is checked client-side.
    """

    SUM = "sum"
    AVG = "avg"
    STDDEV = "stddev"
    VARIANCE = "variance"
    MAX = "max"
    MIN = "min"
    FREQUENCY = "frequency"


def wire_value(value: str | Enum) -> str:
    """Return the string sent on the wire for an enum member or plain string."""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)
