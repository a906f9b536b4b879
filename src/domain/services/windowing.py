"""Windowing policy.

Computes the lower bound of the time range queried for each variable.

Windowed variables (with an aggregation window) always look back a fixed span
from the evaluation time. Incremental variables start where the previous
assessment pass of the guarantee (or of the whole agreement) left off, so
their samples are never counted twice.
"""

from datetime import datetime, timedelta

from src.domain.entities.agreement import Agreement, Guarantee, Variable


class WindowingPolicy:
    """Computes the "from" bound of variable queries."""

    def default_from(self, agreement: Agreement, guarantee: Guarantee) -> datetime:
        """Lower bound for incremental variables of a guarantee.

        Precedence: last execution of the guarantee, last execution of the
        agreement, agreement creation. An agreement never assessed uses its
        creation time.

        Args:
            agreement: Agreement snapshot with its assessment history
            guarantee: Guarantee being evaluated

        Returns:
            Lower bound of the query range
        """
        assessment = agreement.assessment
        if assessment is None:
            return agreement.creation

        for candidate in (
            assessment.last_execution_for(guarantee.name),
            assessment.last_execution,
        ):
            if candidate is not None:
                return candidate
        return agreement.creation

    def compute_from(
        self,
        variable: Variable | None,
        default_from: datetime,
        as_of: datetime,
    ) -> datetime:
        """Lower bound of the query range of a variable.

        Args:
            variable: Variable declaration (None if the agreement does not declare it)
            default_from: Bound computed by default_from()
            as_of: Evaluation time

        Returns:
            as_of - window for windowed variables, default_from otherwise
        """
        if variable is not None and variable.window > 0:
            return as_of - timedelta(seconds=variable.window)
        return default_from
