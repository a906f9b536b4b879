"""Domain value objects for monitored values.

A MetricValue is one observed sample of a variable. GuaranteeData is the
value stream handed to the constraint evaluator for one guarantee term.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

# Names of the variables the adapter knows how to retrieve
EXECUTION_TIME = "execution_time"
AVAILABILITY = "availability"


@dataclass(frozen=True)
class MetricValue:
    """One observed sample of a variable.

    Attributes:
        key: Variable name
        value: Observed value (seconds for execution_time, percent for availability)
        datetime: Time the value was observed
    """

    key: str
    value: Any
    datetime: datetime


# One element per evaluation instance, keyed by variable name
GuaranteeData = list[dict[str, MetricValue]]
