"""Agreement entity module.

This module defines the Agreement aggregate as seen by the monitoring adapter:
the guarantee terms, the measurable variables they reference, and the
assessment bookkeeping written back by the assessment driver after each pass.
The adapter only ever reads these objects.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from src.domain.entities.timestamps import require_aware

# Guarantee name that applies to every operation not otherwise matched
CATCH_ALL_GUARANTEE = "*"


class AgreementState(str, Enum):
    """Lifecycle states of an agreement."""

    STARTED = "started"  # evaluated on every assessment pass
    STOPPED = "stopped"  # temporarily not evaluated
    TERMINATED = "terminated"


@dataclass
class Party:
    """A provider or client of an agreement."""

    id: str
    name: str


@dataclass
class Guarantee:
    """A named SLA term with its constraint expression.

    Attributes:
        name: Operation the term applies to, or "*" for the catch-all term
        constraint: Constraint expression (opaque to the adapter)
    """

    name: str
    constraint: str = ""

    def __post_init__(self):
        """Validate guarantee invariants."""
        if not self.name:
            raise ValueError("Guarantee name cannot be empty")

    @property
    def is_catch_all(self) -> bool:
        """True if this term matches every operation."""
        return self.name == CATCH_ALL_GUARANTEE


@dataclass
class Aggregation:
    """Aggregation configuration of a variable.

    Attributes:
        window: Length of the trailing retrieval window in seconds
        type: Aggregation function name (informational, e.g. "average")
    """

    window: int = 0
    type: str = ""

    def __post_init__(self):
        """Validate aggregation constraints."""
        if self.window < 0:
            raise ValueError(f"window must be non-negative, got {self.window}")


@dataclass
class Variable:
    """A measurable quantity referenced by guarantee constraints."""

    name: str
    metric: str = ""
    aggregation: Aggregation | None = None

    @property
    def window(self) -> int:
        """Configured aggregation window in seconds (0 if none)."""
        if self.aggregation is None:
            return 0
        return self.aggregation.window


@dataclass
class AssessmentGuarantee:
    """Assessment bookkeeping for a single guarantee term."""

    first_execution: datetime | None = None
    last_execution: datetime | None = None

    def __post_init__(self):
        require_aware(self.first_execution, "AssessmentGuarantee.first_execution")
        require_aware(self.last_execution, "AssessmentGuarantee.last_execution")


@dataclass
class Assessment:
    """Per-agreement assessment bookkeeping.

    Attributes:
        first_execution: Time of the first assessment pass
        last_execution: Time of the most recent assessment pass
        guarantees: Per-guarantee bookkeeping, keyed by guarantee name
    """

    first_execution: datetime | None = None
    last_execution: datetime | None = None
    guarantees: dict[str, AssessmentGuarantee] = field(default_factory=dict)

    def __post_init__(self):
        """Validate domain invariants after initialization."""
        require_aware(self.first_execution, "Assessment.first_execution")
        require_aware(self.last_execution, "Assessment.last_execution")

    def last_execution_for(self, guarantee_name: str) -> datetime | None:
        """Return the last execution time recorded for a guarantee, if any."""
        gt = self.guarantees.get(guarantee_name)
        if gt is None:
            return None
        return gt.last_execution


@dataclass
class AgreementDetails:
    """The terms signed by provider and client.

    Attributes:
        id: Agreement identifier (mirrors Agreement.id)
        name: Agreement name
        creation: Time the agreement was created
        provider: Service provider party
        client: Service client party
        expiration: Optional expiration time
        guarantees: Guarantee terms
        variables: Variables referenced by the guarantee constraints
    """

    id: str
    name: str
    creation: datetime
    provider: Party | None = None
    client: Party | None = None
    expiration: datetime | None = None
    guarantees: list[Guarantee] = field(default_factory=list)
    variables: list[Variable] = field(default_factory=list)

    def __post_init__(self):
        """Validate domain invariants after initialization."""
        require_aware(self.creation, "AgreementDetails.creation")
        require_aware(self.expiration, "AgreementDetails.expiration")

    def get_variable(self, name: str) -> Variable | None:
        """Return the variable with the given name, or None if not declared."""
        for variable in self.variables:
            if variable.name == name:
                return variable
        return None


@dataclass
class Agreement:
    """An SLA agreement between a provider and a client.

    Domain invariants:
    - id must not be empty
    - assessment is None until the first assessment pass
    """

    id: str
    name: str
    details: AgreementDetails
    state: AgreementState = AgreementState.STOPPED
    assessment: Assessment | None = None

    def __post_init__(self):
        """Validate domain invariants after initialization."""
        if not self.id:
            raise ValueError("Agreement id cannot be empty")

    @property
    def creation(self) -> datetime:
        """Creation time of the agreement."""
        return self.details.creation

    def is_started(self) -> bool:
        return self.state == AgreementState.STARTED

    def is_stopped(self) -> bool:
        return self.state == AgreementState.STOPPED

    def is_terminated(self) -> bool:
        return self.state == AgreementState.TERMINATED
